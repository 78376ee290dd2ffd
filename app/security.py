from typing import Optional

from fastapi import Depends, Header, HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from starlette.status import HTTP_403_FORBIDDEN

from app import dependencies as deps
from app.errors import NotAuthenticatedError
from app.schemas.post import Requester
from app.settings import Settings, settings

API_KEY_NAME = "X-Posts-Key"
USER_ID_HEADER = "X-User-Id"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_api_key(
    api_key_header: str = Security(api_key_header),
    current_settings: Settings = Depends(get_settings),
):
    if api_key_header == current_settings.POSTS_API_KEY:
        return api_key_header
    raise HTTPException(
        status_code=HTTP_403_FORBIDDEN,
        detail="Could not validate API key",
    )


def get_current_user(
    requester_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER),
    users_repo=Depends(deps.get_users_repo),
) -> Requester:
    """
    Resolve the requester forwarded by the authenticating gateway.
    The admin flag always comes from the stored user, never the request.
    """
    if not requester_id:
        raise NotAuthenticatedError()
    user = users_repo.get_user(requester_id)
    if not user:
        raise NotAuthenticatedError()
    return Requester(id=user["_id"], isAdmin=bool(user.get("isAdmin", False)))
