# Middleware package init
"""
StackIt Backend - Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assign or accept a correlation ID
    2. Logging: log method, path, status and duration with that ID
    3. GZip / CORS: Starlette-provided
"""
