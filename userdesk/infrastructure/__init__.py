"""Concrete implementations of the contracts defined in the domain layer."""
