import hmac
import re
from typing import Optional

import structlog
from fastapi import Header, HTTPException, status

from app.core.config import get_settings

logger = structlog.get_logger(__name__)

_AUTH_PREFIX = re.compile(r"^authorization\s*:\s*", re.IGNORECASE)
_API_KEY = re.compile(r"^api-key\s*:?\s*(.+)$", re.IGNORECASE)


def parse_api_key(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the key from an `Authorization: Api-Key <key>` header value.

    Tolerates a repeated "Authorization:" prefix, a colon after "Api-Key"
    and quotes around the key, which CLI tools and config UIs tend to add.
    """
    if not authorization:
        return None

    value = _AUTH_PREFIX.sub("", authorization.strip())
    match = _API_KEY.match(value)
    if not match:
        return None

    key = match.group(1).strip()
    key = re.sub(r"^[\"']|[\"']$", "", key).strip()
    return key or None


async def verify_agent_api_key(
    authorization: Optional[str] = Header(
        default=None,
        description="Agent credentials in the form `Api-Key <key>`.",
    ),
) -> None:
    """
    Dependency to protect /agent endpoints.

    Rules
    -----
    - AGENT_API_KEY not configured      -> 401 (agent access disabled)
    - header missing or unparseable     -> 401
    - key differs from AGENT_API_KEY    -> 401
    Keys are compared in constant time.
    """
    settings = get_settings()
    expected = (getattr(settings, "AGENT_API_KEY", None) or "").strip()
    provided = parse_api_key(authorization)

    if not expected or not provided:
        logger.info("agent_auth.rejected", key_configured=bool(expected))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    if not hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8")):
        logger.info("agent_auth.rejected", key_configured=True)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
