from fastapi import HTTPException, Request

from orgcal.common.logging_config import get_logger

logger = get_logger(__name__)


def get_user_id_from_request(request: Request) -> str:
    """
    Extract user ID from request headers.

    The scheduling service expects user identity via X-User-Id header.
    """
    user_id_str = request.headers.get("X-User-Id")
    if not user_id_str or not user_id_str.strip():
        logger.warning("Missing X-User-Id header in request", path=request.url.path)
        raise HTTPException(status_code=400, detail="Missing X-User-Id header")
    return user_id_str.strip()
