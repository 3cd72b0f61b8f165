"""Pre-flight checks shown on the login page and run by ``bluemoon doctor``.

No Streamlit widgets here; uses the API client for backend checks.
"""
from typing import List

import httpx

from bluemoon.config import settings


def validate_api_url() -> List[str]:
    """Validate the configured backend URL."""
    errors = []
    try:
        url = httpx.URL(settings.API_URL)
    except httpx.InvalidURL as e:
        errors.append(f"BLUEMOON_API_URL is not a valid URL: {e}")
        return errors
    if url.scheme not in ("http", "https") or not url.host:
        errors.append(f"BLUEMOON_API_URL must be an http(s) URL, got {settings.API_URL!r}")
    return errors


def validate_backend_connection() -> List[str]:
    """Validate that the backend is reachable."""
    errors = []
    try:
        from bluemoon.ui.api_client import BlueMoonClient
        client = BlueMoonClient()
        try:
            client.health()
        finally:
            client.close()
    except Exception as e:
        errors.append(f"Backend connection failed: {e}")
    return errors


def run_all_checks() -> List[str]:
    """Run all validation checks."""
    errors = []
    errors.extend(validate_api_url())
    if not errors:
        errors.extend(validate_backend_connection())
    return errors
