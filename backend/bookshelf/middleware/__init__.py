# Middleware package init
"""
Bookshelf API — Middleware Package
===================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → [Content Negotiation] → Route

    1. Request ID first: every later log line carries the correlation ID
    2. Logging: records status and duration, including 406/415 rejections
    3. CORS: preflight OPTIONS requests are answered before negotiation
    4. Content Negotiation: rejects non-JSON:API requests under the API
       prefix and stamps the JSON:API Content-Type on the way out

The order is reversed for responses.
"""
