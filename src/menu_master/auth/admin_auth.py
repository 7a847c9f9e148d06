"""API key guard for the admin endpoints.

Operator sign-in lives in front of this service; the admin routes only check
that the caller presents one of the configured keys in the X-API-Key header.
"""

import secrets

from fastapi import HTTPException


class AdminKeyValidator:
    """Constant-time check of admin API keys against the configured set."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator with the accepted keys.

        Args:
            api_keys: Accepted API key strings

        Raises:
            ValueError: If no non-empty key is given
        """
        keys = [key for key in api_keys if key]
        if not keys:
            raise ValueError("At least one admin API key must be provided")

        self.api_keys = tuple(keys)

    def validate(self, api_key: str) -> bool:
        """Check an API key.

        Args:
            api_key: The presented key

        Returns:
            bool: True if it matches one of the accepted keys
        """
        matched = False
        for key in self.api_keys:
            matched |= secrets.compare_digest(api_key.encode(), key.encode())
        return matched


def require_admin_key(x_api_key: str | None, validator: AdminKeyValidator) -> str:
    """Validate the X-API-Key header value for an admin request.

    Args:
        x_api_key: Header value, None when absent
        validator: Validator holding the accepted keys

    Returns:
        str: The validated key

    Raises:
        HTTPException: 401 if the key is missing or not accepted
    """
    if not x_api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    if not validator.validate(x_api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")

    return x_api_key
