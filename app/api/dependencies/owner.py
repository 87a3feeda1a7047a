from typing import Optional

from fastapi import Header, HTTPException, status


async def get_owner_email(
    user_email: Optional[str] = Header(
        default=None,
        alias="X-User-Email",
        description="Email of the signed-in user, set by the authenticating proxy.",
    ),
) -> str:
    """
    Identify the owning user of role assignments and reports.

    Authentication itself happens upstream; a missing header means the
    request did not come through it.
    """
    owner = (user_email or "").strip()
    if not owner:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return owner
