"""Cross-cutting functionality shared by every layer.

- **config**: Settings loaded from the environment
- **context**: Correlation ID storage for the current request
- **exceptions**: Error kinds and their exception classes
- **result**: ``Ok``/``Err`` values returned by validation and handlers
- **error_context**: Redaction of credentials in logs
- **logging**: Loguru setup with console and JSON output
- **observability**: OpenTelemetry tracing
"""
