# Routes package init
"""
BrandAgent Backend - API Routes Package
=========================================

Route Inventory:
    - auth.py:         POST /api/register, POST /api/login
    - submissions.py:  POST /api/submit, GET /api/submissions (admin)
    - users.py:        GET  /api/users (admin)
    - health.py:       GET  /health

Routes stay thin: parse the request, call a service, return a schema.
Errors are raised, never returned; main.py maps them to status codes.
"""
