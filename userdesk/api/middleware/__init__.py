"""Middleware and exception handlers applied to every request.

Registration order in ``create_app`` (outermost first on the way in):
1. Security headers
2. Request context (correlation IDs)
3. Request logging
Exception handlers render every error as an ``ErrorResponse``.
"""
