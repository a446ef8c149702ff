"""
Static bearer token authentication.

Every API client shares the token configured in ``API_TOKEN``.
"""

import secrets
from typing import Optional

from fastapi.security import HTTPBearer

from app.core.config import settings

bearer_scheme = HTTPBearer(auto_error=False, description="Static API token")


def verify_token(token: Optional[str]) -> bool:
    """Constant-time comparison against the configured token."""
    if not token:
        return False
    return secrets.compare_digest(token.encode("utf-8"), settings.API_TOKEN.encode("utf-8"))
