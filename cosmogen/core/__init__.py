"""Core models and errors shared across cosmogen."""
