from __future__ import annotations

"""Per-provider request construction.

Most vendors speak the OpenAI chat-completions schema, so ``_openai_body`` is
the canonical builder and only Ollama, Anthropic and Google get their own
branch. Optional sampling parameters are left out of the body when the
profile does not set them, so each provider applies its own default.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List

from .errors import ConfigurationError
from .providers import LlmProvider

if TYPE_CHECKING:
    from .profile import LlmProfile

ANTHROPIC_VERSION = "2023-06-01"


@dataclass(frozen=True)
class PreparedRequest:
    """Everything the transport needs for one POST."""

    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)


def build_request(profile: "LlmProfile", message: str) -> PreparedRequest:
    if profile.provider.requires_api_key and not profile.api_key.strip():
        raise ConfigurationError(
            f"Missing API key for {profile.provider.display_name}",
            provider=profile.provider.value,
        )
    builder = _BUILDERS.get(profile.provider, _openai_request)
    return builder(profile, message)


def _user_messages(message: str) -> List[Dict[str, str]]:
    return [{"role": "user", "content": message}]


def _openai_body(profile: "LlmProfile", message: str) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "model": profile.model_name,
        "messages": _user_messages(message),
    }
    if profile.temperature is not None:
        body["temperature"] = profile.temperature
    if profile.max_tokens is not None:
        body["max_tokens"] = profile.max_tokens
    return body


def _openai_request(profile: "LlmProfile", message: str) -> PreparedRequest:
    headers = {}
    # Custom endpoints may be unauthenticated
    if profile.api_key.strip():
        headers["Authorization"] = f"Bearer {profile.api_key}"
    return PreparedRequest(
        url=profile.resolved_url(),
        headers=headers,
        body=_openai_body(profile, message),
    )


def _ollama_request(profile: "LlmProfile", message: str) -> PreparedRequest:
    body: Dict[str, Any] = {
        "model": profile.model_name,
        "messages": _user_messages(message),
        "stream": False,
    }
    options: Dict[str, Any] = {}
    if profile.temperature is not None:
        options["temperature"] = profile.temperature
    if profile.max_tokens is not None:
        options["num_predict"] = profile.max_tokens
    if options:
        body["options"] = options
    return PreparedRequest(url=profile.resolved_url(), body=body)


def _anthropic_request(profile: "LlmProfile", message: str) -> PreparedRequest:
    headers = {
        "x-api-key": profile.api_key,
        "anthropic-version": ANTHROPIC_VERSION,
    }
    body: Dict[str, Any] = {"model": profile.model_name}
    if profile.max_tokens is not None:
        body["max_tokens"] = profile.max_tokens
    body["messages"] = _user_messages(message)
    if profile.temperature is not None:
        body["temperature"] = profile.temperature
    return PreparedRequest(url=profile.resolved_url(), headers=headers, body=body)


def _google_request(profile: "LlmProfile", message: str) -> PreparedRequest:
    body: Dict[str, Any] = {"contents": [{"parts": [{"text": message}]}]}
    generation: Dict[str, Any] = {}
    if profile.temperature is not None:
        generation["temperature"] = profile.temperature
    if profile.max_tokens is not None:
        generation["maxOutputTokens"] = profile.max_tokens
    if generation:
        body["generationConfig"] = generation

    url = profile.resolved_url()
    params = {}
    # legacy ``?key=~api_key~`` templates already carry the credential
    if "key=" not in url.partition("?")[2]:
        params["key"] = profile.api_key
    return PreparedRequest(url=url, body=body, params=params)


_BUILDERS: Dict[LlmProvider, Callable[["LlmProfile", str], PreparedRequest]] = {
    LlmProvider.OLLAMA: _ollama_request,
    LlmProvider.ANTHROPIC: _anthropic_request,
    LlmProvider.GOOGLE: _google_request,
}

__all__ = ["ANTHROPIC_VERSION", "PreparedRequest", "build_request"]
