"""User Routes: CRUD endpoints over the JSON-file-backed user collection.

Invariants:
    - Routes contain no validation or storage logic (delegate to UserRequestHandler)
    - Failures propagate as MockUsersError to the global error handlers
    - Request bodies arrive as plain JSON objects; unknown fields are kept

Design Decisions:
    - dict body over a Pydantic model: field rules and their messages are part of the
      public contract and live in core/validate_user.py
    - Authorization header is accepted and ignored
    - Plain def endpoints: file writes block, so Starlette runs them in its threadpool
      and the store lock serializes the mutations
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from mock_users.config import Settings, get_settings
from mock_users.core.domain_types import UserId
from mock_users.infrastructure.user_store import JsonFileUserStore, get_user_store
from mock_users.schemas.problem import ProblemDetails, ErrorList
from mock_users.services.user_handler import UserRequestHandler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

_TEXT_404 = {404: {"description": "User not found", "content": {"text/plain": {}}}}
_TEXT_500 = {500: {"description": "Internal Server Error", "content": {"text/plain": {}}}}


def get_user_handler(
    store: JsonFileUserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> UserRequestHandler:
    """FastAPI dependency wiring the handler to the store."""
    return UserRequestHandler(
        store, reject_duplicate_ids=settings.reject_duplicate_ids,
    )


@router.get("")
def list_users(handler: UserRequestHandler = Depends(get_user_handler)):
    """Return every stored user, in insertion order."""
    logger.debug("GET /users request received")
    return handler.list_users()


@router.get("/{user_id}", responses=_TEXT_404)
def get_user(
    user_id: str, handler: UserRequestHandler = Depends(get_user_handler),
):
    return handler.get_user(UserId(user_id))


@router.post(
    "", status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ProblemDetails},
        409: {"model": ProblemDetails},
        **_TEXT_500,
    },
)
def create_user(
    body: dict[str, Any] = Body(...),
    handler: UserRequestHandler = Depends(get_user_handler),
):
    """Create a user. The caller supplies the id."""
    return handler.create_user(body)


@router.put(
    "/{user_id}",
    responses={400: {"model": ErrorList}, **_TEXT_404, **_TEXT_500},
)
def update_user(
    user_id: str,
    body: dict[str, Any] = Body(...),
    handler: UserRequestHandler = Depends(get_user_handler),
):
    """Shallow-merge the body onto the stored user."""
    return handler.update_user(UserId(user_id), body)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
    responses={**_TEXT_404, **_TEXT_500},
)
def delete_user(
    user_id: str, handler: UserRequestHandler = Depends(get_user_handler),
):
    handler.delete_user(UserId(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
