"""
Shared API dependencies.

Reusable FastAPI dependencies for authentication.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from app.core.security import bearer_scheme, verify_token

logger = logging.getLogger(__name__)


def require_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme), ) -> str:
    """Reject requests without the configured bearer token."""
    token = credentials.credentials if credentials else None
    if not verify_token(token):
        logger.warning("Rejected request with missing or invalid token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing token",
                            headers={ "WWW-Authenticate": "Bearer" }, )
    return token
