"""Request handlers: semantic checks run after schema validation.

Handlers return ``Ok``/``Err`` values; routes unwrap them.
"""
