"""
Bookshelf API — Author Route Handlers
======================================

What:  The five JSON:API endpoints for the `authors` resource.
How:   Thin handlers: read the path id / request document, delegate to
       AuthorService, turn the result into a JsonApiResponse.
Who:   Mounted under settings.api_prefix by main.create_app(); every route
       requires a bearer token (router-level `require_principal`).

Route Inventory:
    GET    /authors              authors.index    200 collection
    GET    /authors/{author_id}  authors.show     200 single
    POST   /authors              authors.store    201 single + Location
    PATCH  /authors/{author_id}  authors.update   200 single
    DELETE /authors/{author_id}  authors.destroy  204 empty
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.auth import require_principal
from bookshelf.database import get_db_session
from bookshelf.domain import AuthorStore
from bookshelf.exceptions import MalformedDocumentError
from bookshelf.repositories.author_repository import SQLAlchemyAuthorStore
from bookshelf.responses import JsonApiResponse
from bookshelf.schemas.author import (
    AuthorCollectionDocument,
    AuthorDocument,
    ErrorDocument,
)
from bookshelf.services.author_service import author_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    dependencies=[Depends(require_principal)],
    default_response_class=JsonApiResponse,
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorDocument},
        406: {"description": "Accept header is not application/vnd.api+json"},
    },
)


def get_author_store(db: AsyncSession = Depends(get_db_session)) -> AuthorStore:
    return SQLAlchemyAuthorStore(db)


async def read_document(request: Request) -> Any:
    """
    Parse the request body as JSON.

    An empty body is treated as an empty document so that the validator
    reports the missing members.
    """
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return await request.json()
    except ValueError as e:
        raise MalformedDocumentError(context={"error": str(e)})


@router.get(
    "",
    name="authors.index",
    responses={200: {"description": "All authors", "model": AuthorCollectionDocument}},
    summary="List authors",
)
async def list_authors(store: AuthorStore = Depends(get_author_store)) -> JsonApiResponse:
    document = await author_service.list_authors(store)
    return JsonApiResponse(content=document.model_dump())


@router.get(
    "/{author_id}",
    name="authors.show",
    responses={
        200: {"description": "One author", "model": AuthorDocument},
        404: {"description": "Author not found", "model": ErrorDocument},
    },
    summary="Show an author",
)
async def show_author(
    author_id: str,
    store: AuthorStore = Depends(get_author_store),
) -> JsonApiResponse:
    document = await author_service.show_author(store, author_id)
    return JsonApiResponse(content=document.model_dump())


@router.post(
    "",
    name="authors.store",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Author created", "model": AuthorDocument},
        400: {"description": "Body is not valid JSON", "model": ErrorDocument},
        415: {"description": "Content-Type is not application/vnd.api+json"},
        422: {"description": "Document failed validation", "model": ErrorDocument},
    },
    summary="Create an author",
)
async def create_author(
    request: Request,
    store: AuthorStore = Depends(get_author_store),
) -> JsonApiResponse:
    """
    Create an author from a resource object.

    Example body:
        {"data": {"type": "authors", "attributes": {"name": "Jane Austen"}}}

    The Location header points at the new author's show URL.
    """
    document = await author_service.create_author(store, await read_document(request))
    location = request.url_for("authors.show", author_id=document.data.id)
    return JsonApiResponse(
        status_code=status.HTTP_201_CREATED,
        content=document.model_dump(),
        headers={"Location": str(location)},
    )


@router.patch(
    "/{author_id}",
    name="authors.update",
    responses={
        200: {"description": "Author updated", "model": AuthorDocument},
        400: {"description": "Body is not valid JSON", "model": ErrorDocument},
        404: {"description": "Author not found", "model": ErrorDocument},
        409: {"description": "Body id does not match the URL", "model": ErrorDocument},
        415: {"description": "Content-Type is not application/vnd.api+json"},
        422: {"description": "Document failed validation", "model": ErrorDocument},
    },
    summary="Update an author",
)
async def update_author(
    author_id: str,
    request: Request,
    store: AuthorStore = Depends(get_author_store),
) -> JsonApiResponse:
    """
    Replace an author's name.

    Example body:
        {"data": {"id": "1", "type": "authors", "attributes": {"name": "Mary Shelley"}}}
    """
    document = await author_service.update_author(
        store, author_id, await read_document(request)
    )
    return JsonApiResponse(content=document.model_dump())


@router.delete(
    "/{author_id}",
    name="authors.destroy",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Author not found", "model": ErrorDocument}},
    summary="Delete an author",
)
async def delete_author(
    author_id: str,
    store: AuthorStore = Depends(get_author_store),
) -> Response:
    await author_service.delete_author(store, author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
