"""
Postboard API: Bearer Authentication Dependency
================================================

What:  FastAPI dependency that turns `Authorization: Bearer <token>` into
       verified token claims.
How:   HTTPBearer(auto_error=False) extracts the credential (and registers the
       bearer security scheme in the OpenAPI document); TokenService.verify()
       checks it.

Status mapping:
    header missing / not a Bearer credential   → UnauthorizedError (401)
    InvalidToken / InvalidSignature / Malformed → ForbiddenError (403)
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from postboard.dependencies import get_token_service
from postboard.exceptions import ForbiddenError, TokenError, UnauthorizedError
from postboard.services.token_service import TokenService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Token from POST /users/auth/login")


def require_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """
    Return the verified claims of the request's bearer token.

    Raises:
        UnauthorizedError: no usable bearer credential
        ForbiddenError:    the token failed verification
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    try:
        return tokens.verify(credentials.credentials)
    except TokenError as e:
        logger.warning("Rejected bearer token: %s: %s", type(e).__name__, e)
        raise ForbiddenError(message="You are not allowed to access this user's data")
