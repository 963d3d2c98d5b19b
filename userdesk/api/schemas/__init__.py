"""Pydantic models for request validation and response serialization."""
