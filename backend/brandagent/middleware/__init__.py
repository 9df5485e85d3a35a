# Middleware package init
"""
BrandAgent Backend - Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: assign/propagate the correlation ID first so every
       later log line can carry it
    2. Logging: method, path, status, duration with the request ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)
"""
