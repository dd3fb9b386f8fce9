"""
Zense Backend - Middleware Package
===================================

Middleware Chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Logging] → [Auth] → [GZip] → [CORS] → Route

    1. Rate Limit: reject abusive clients before any work
    2. Request ID: correlation id for logs, error bodies and the response header
    3. Logging:    one access line per request, 401s from Auth included
    4. Auth:       bearer-token check per the route skip policy
    5. CORS:       innermost, so preflight requests are answered before Auth
                   (Auth lets OPTIONS through anyway)
"""
