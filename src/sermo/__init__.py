from __future__ import annotations

"""Minimal multi-provider chat client.

Build an :class:`LlmProfile` and call ``send_single`` to get a reply, or
``send_single_json`` to pull any value out of the raw response.
"""

import logging

from .errors import (
    ConfigurationError,
    HttpStatusError,
    PathNotFoundError,
    ResponseParseError,
    SchemaError,
    SermoError,
)
from .extract import extract_json, extract_json_flexible, extract_path, extract_reply
from .profile import LlmProfile
from .providers import LlmProvider
from .settings import RuntimeSettings, load_profile

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "LlmProfile",
    "LlmProvider",
    "RuntimeSettings",
    "load_profile",
    "extract_path",
    "extract_reply",
    "extract_json",
    "extract_json_flexible",
    "SermoError",
    "ConfigurationError",
    "HttpStatusError",
    "ResponseParseError",
    "SchemaError",
    "PathNotFoundError",
]
