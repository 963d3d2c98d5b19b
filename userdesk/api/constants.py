"""API-related constants."""

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Request logging
MILLISECONDS_PER_SECOND = 1000
MAX_USER_AGENT_LENGTH = 200

# Security
HSTS_MAX_AGE = 31536000  # 1 year in seconds
