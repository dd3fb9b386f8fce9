"""
Zense Backend - Route Handlers
===============================

Every router lives under settings.api_prefix (default /api/v1) except
/health. Handlers only bind input, read the caller id and pick the status
code; errors travel as exceptions to the handlers in main.py.
"""

from zense.schemas.common import ErrorResponse

# Shared OpenAPI error documentation for owner-checked write routes
OWNED_WRITE_ERRORS = {
    400: {"description": "Invalid body", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Caller is not the owner", "model": ErrorResponse},
    404: {"description": "Resource not found", "model": ErrorResponse},
}
