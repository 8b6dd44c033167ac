from __future__ import annotations

"""HTTP POST over ``requests``.

Kept deliberately small: one call, caller-owned session and timeout, no
retries. Network failures propagate as ``requests`` exceptions.
"""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


def post_json(
    url: str,
    *,
    headers: Dict[str, str],
    body: Dict[str, Any],
    params: Optional[Dict[str, str]] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> requests.Response:
    """POST ``body`` as JSON and return the raw response, whatever its status."""
    http = session if session is not None else requests
    # query params may carry credentials, so only the bare URL is logged
    logger.debug("POST %s", url.partition("?")[0])
    resp = http.post(url, json=body, headers=headers, params=params or None, timeout=timeout)
    logger.debug("POST %s -> %s", url.partition("?")[0], resp.status_code)
    return resp


__all__ = ["post_json"]
