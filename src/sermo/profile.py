from __future__ import annotations

"""The profile a caller builds once and sends messages through."""

import logging
from typing import Any, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from .dispatch import build_request
from .errors import HttpStatusError, ResponseParseError
from .extract import JsonPath, extract_path, extract_reply
from .providers import LlmProvider
from .transport import post_json

logger = logging.getLogger(__name__)


class LlmProfile(BaseModel):
    """Provider selection plus call parameters for one-shot chat requests.

    Profiles are frozen: share one across threads, or derive a variant with
    ``profile.model_copy(update={...})``. ``temperature`` and ``max_tokens``
    left as ``None`` are not sent, so the provider default applies. An empty
    ``api_url`` means the provider's default endpoint. The URL is not checked
    against ``provider``.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    provider: LlmProvider = LlmProvider.OLLAMA
    api_key: str = Field(default="", repr=False)
    model_name: str = ""
    temperature: Optional[float] = None
    max_tokens: Optional[PositiveInt] = None
    api_url: str = ""

    @classmethod
    def from_str(
        cls,
        provider_slug: str,
        model_name: str,
        api_key: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> "LlmProfile":
        return cls(
            provider=LlmProvider.from_str(provider_slug),
            api_key=api_key,
            model_name=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def resolved_url(self) -> str:
        """Endpoint with ``~model~`` / ``~api_key~`` placeholders filled in."""
        url = self.api_url or self.provider.default_url
        return url.replace("~model~", self.model_name).replace("~api_key~", self.api_key)

    def send_single(
        self,
        message: str,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> str:
        """Send ``message`` as a single user turn and return the reply text."""
        data = self._send(message, session=session, timeout=timeout)
        return extract_reply(self.provider, data)

    def send_single_json(
        self,
        message: str,
        path: str | JsonPath,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Send ``message`` and return the response value found at ``path``.

        ``path`` is a sequence of keys and list indices, e.g.
        ``["choices", 0, "finish_reason"]``, or the dotted form
        ``"choices[0].finish_reason"``.
        """
        data = self._send(message, session=session, timeout=timeout)
        return extract_path(data, path)

    def _send(self, message: str, *, session: requests.Session | None, timeout: float | None) -> Any:
        req = build_request(self, message)
        logger.debug("[send] provider=%s model=%s", self.provider.value, self.model_name)
        resp = post_json(
            req.url,
            headers=req.headers,
            body=req.body,
            params=req.params,
            session=session,
            timeout=timeout,
        )
        if not 200 <= resp.status_code < 300:
            raise HttpStatusError(
                resp.status_code,
                resp.text,
                provider=self.provider.value,
                model=self.model_name,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise ResponseParseError(
                f"Response is not valid JSON: {exc}",
                body=resp.text,
                provider=self.provider.value,
                model=self.model_name,
            ) from exc


__all__ = ["LlmProfile"]
