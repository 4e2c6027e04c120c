"""Execution helpers: run compiled statements on a caller-supplied client."""
