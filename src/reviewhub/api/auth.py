"""Authentication dependencies.

The identity provider (or the gateway in front of the app) passes the
authenticated user's id in the ``X-User-Id`` header.
"""

from fastapi import Depends, Header, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviewhub.account.user import User

USER_ID_HEADER = "X-User-Id"


async def optional_user_id(x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER)) -> str | None:
    return x_user_id or None


async def current_user_id(user_id: str | None = Depends(optional_user_id)) -> str:
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id


async def current_user(user_id: str = Depends(current_user_id)) -> User:
    """The authenticated user, who must have been synced at least once."""
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=401, detail="Unauthorized") from exc
