"""
MentorConnect Server Package.

This package contains the web server implementation for the MentorConnect
marketplace. It includes the API definition, configuration, request
dependencies and the service layer.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration, constants and database access.
    exception_handlers: Global error handling.
    middleware: Request logging and tracing.
    services: Business logic shared by several routers.
"""
