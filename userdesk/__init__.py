"""Userdesk - user account management API.

Architecture Overview:
- **API Layer**: FastAPI routes, request validation gate, request handlers
  and the centralized error boundary
- **Core Layer**: Configuration, error taxonomy, logging and tracing
- **Domain Layer**: The user entity and the users service contract
- **Infrastructure Layer**: Users service backends

A request flows through the middleware stack, is validated against the
schema of its operation, runs the handler's semantic checks, and is then
delegated to the users service. Any failure is reported as exactly one
error kind.
"""
