"""
Shared-secret authentication for the mint endpoint.

Security model:
- Callers send the secret in the `x-api-secret` header (no query param support)
- If MINT_API_SECRET is not set, every request is rejected
- Comparison is constant-time
"""

import hmac
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader

from .config import Settings, get_settings
from .errors import UnauthorizedError


api_secret_header = APIKeyHeader(name="x-api-secret", auto_error=False)


async def verify_api_secret(
    api_secret: Optional[str] = Depends(api_secret_header),
    settings: Settings = Depends(get_settings),
) -> bool:
    """
    Verify the x-api-secret header.

    Returns:
        True if authentication passes

    Raises:
        UnauthorizedError: 401 if the header is missing, wrong, or no secret is configured
    """
    expected = settings.mint_api_secret
    if not expected or not api_secret:
        raise UnauthorizedError()

    if not hmac.compare_digest(api_secret.encode("utf-8"), expected.encode("utf-8")):
        raise UnauthorizedError()

    return True
