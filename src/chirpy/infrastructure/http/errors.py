"""Translate typed auth failures into generic HTTP errors."""

from __future__ import annotations

import logging

from fastapi import HTTPException

from chirpy.domain.auth.errors import AuthError, FailureCategory
from chirpy.infrastructure.http.auth_guard import BEARER_SCHEME

logger = logging.getLogger(__name__)

_STATUS_BY_CATEGORY = {
    FailureCategory.UNAUTHORIZED: 401,
    FailureCategory.FORBIDDEN: 403,
    FailureCategory.SERVER_ERROR: 500,
}
_DETAIL_BY_CATEGORY = {
    FailureCategory.UNAUTHORIZED: "unauthorized",
    FailureCategory.FORBIDDEN: "forbidden",
    FailureCategory.SERVER_ERROR: "internal server error",
}


def auth_http_exception(error: AuthError, *, scheme: str = BEARER_SCHEME) -> HTTPException:
    """Build an HTTP error exposing only the failure category, logging the kind.

    401 responses challenge with ``scheme``, the one the route expects.
    """

    category = error.category
    if category is FailureCategory.SERVER_ERROR:
        logger.error("auth_failure kind=%s category=%s", error.kind.value, category.value)
    else:
        logger.info("auth_rejected kind=%s category=%s", error.kind.value, category.value)

    headers = {"WWW-Authenticate": scheme} if category is FailureCategory.UNAUTHORIZED else None
    return HTTPException(
        status_code=_STATUS_BY_CATEGORY[category],
        detail=_DETAIL_BY_CATEGORY[category],
        headers=headers,
    )
