# Middleware package init
"""
Notes App — Middleware Package
==============================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so the access log line carries it
    2. Logging measures everything below it, including the handler
    3. GZip and CORS are Starlette's own middleware
"""
