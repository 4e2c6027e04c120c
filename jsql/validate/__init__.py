"""Structural validation of statements before compilation."""
