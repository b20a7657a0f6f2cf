"""
Bookshelf API — Application Package
====================================

A JSON:API service for the `authors` resource, secured with bearer tokens.

Layering:

    ┌─────────────────────────────────────┐
    │  Middleware (request id, logging,   │  ← cross-cutting, incl. JSON:API
    │  content negotiation)               │    media-type enforcement
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (validate, orchestrate,   │  ← pure logic, no HTTP objects
    │  transform)                         │
    ├─────────────────────────────────────┤
    │  Repositories (AuthorStore)         │  ← rows in, AuthorRecord out
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
