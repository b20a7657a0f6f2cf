"""
Bookshelf API — JSON:API Document Schemas
==========================================

What:  Pydantic models for the documents the Author endpoints return.
How:   The transformer builds these; routes dump them into JsonApiResponse.
       They also feed the OpenAPI docs through the `responses=` mapping.

Request bodies are deliberately NOT modelled here: incoming documents are
validated by services/author_validator.py so that failures come back as
pointer-addressed JSON:API errors instead of FastAPI's default 422 shape.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Resource Documents
# ══════════════════════════════════════════════════════════════════════════


class AuthorAttributes(BaseModel):
    name: str = Field(description="Author name")
    created_at: str = Field(description="Creation instant, UTC ISO 8601 with microseconds")
    updated_at: str = Field(description="Last update instant, same format as created_at")


class AuthorResourceObject(BaseModel):
    """One author as a JSON:API resource object."""

    id: str = Field(description="Author identifier, always a string")
    type: Literal["authors"] = Field(default="authors")
    attributes: AuthorAttributes


class AuthorDocument(BaseModel):
    """Single-resource document returned by show/create/update."""

    data: AuthorResourceObject


class AuthorCollectionDocument(BaseModel):
    """Collection document returned by list, in creation order."""

    data: List[AuthorResourceObject]


# ══════════════════════════════════════════════════════════════════════════
# Error Documents
# ══════════════════════════════════════════════════════════════════════════


class ErrorSource(BaseModel):
    pointer: str = Field(description="Location of the offending member, e.g. /data/type")


class ErrorObject(BaseModel):
    title: str
    details: str
    source: Optional[ErrorSource] = None


class ErrorDocument(BaseModel):
    """
    Error document returned for 400/401/404/409/422/500.

    Example:
        {
            "errors": [{
                "title": "Validation Error",
                "details": "The selected data.type is invalid.",
                "source": {"pointer": "/data/type"}
            }]
        }
    """

    errors: List[ErrorObject]
