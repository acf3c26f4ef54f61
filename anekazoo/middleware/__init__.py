# Middleware package init
"""
Anekazoo Animals API - Middleware Package
==========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Access Log] → [GZip] → [CORS] → Route Handler

    The access log wraps everything else, so the logged duration and status
    cover the full request.
"""
