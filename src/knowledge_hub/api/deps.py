"""
API Dependencies

Request-scoped values shared by the collection routers.
"""

from fastapi import Header, HTTPException, status

from knowledge_hub.core.config import OWNER_HEADER


async def get_owner(x_user_id: str | None = Header(default=None)) -> str:
    """
    Identify the collection owner from the ``X-User-Id`` header.

    Authentication happens upstream; the service only scopes rows.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {OWNER_HEADER} header",
        )
    return x_user_id.strip()
