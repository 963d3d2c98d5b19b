"""API-specific helpers."""
