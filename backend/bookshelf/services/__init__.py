# Services package init
"""
Bookshelf API — Services Layer
===============================

Service Inventory:
    - author_validator:   JSON:API document rules for create/update
    - author_transformer: AuthorRecord → JSON:API resource objects
    - AuthorService:      validate → persist → transform orchestration
    - token_service:      developer users and personal access tokens

Services never touch HTTP objects; routes translate their results.
"""
