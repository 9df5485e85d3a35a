# Services package init
"""
BrandAgent Backend - Services Layer
=====================================

Service Inventory:
    - AuthService: register, login, token issue/verify (built per app from Settings)
    - SubmissionService: submit and list opaque JSON payloads
    - UserService: admin listing and demo-account seeding

Services receive the Store explicitly on every call and raise exceptions
from brandagent.exceptions; they know nothing about HTTP.
"""
