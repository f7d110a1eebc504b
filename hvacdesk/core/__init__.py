"""Shared infrastructure: logging, errors, identifiers."""
