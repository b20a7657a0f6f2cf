# Routes package init
"""
Bookshelf API — Routes Package
===============================

Route Inventory:
    - authors.py: GET/POST   {api_prefix}/authors
                  GET/PATCH/DELETE {api_prefix}/authors/{id}
    - health.py:  GET /health

Routes are thin: they extract path ids and request documents, call the
service, and build the response (status code, Location header).
"""
