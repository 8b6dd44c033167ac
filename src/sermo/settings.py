from __future__ import annotations

"""Profile configuration from environment variables and ``.env`` files."""

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

from dotenv import load_dotenv

from .errors import ConfigurationError
from .profile import LlmProfile
from .providers import LlmProvider

ENV_PREFIX = "SERMO_"

# Conventional per-vendor variables consulted when SERMO_API_KEY is unset
PROVIDER_KEY_VARS: Dict[LlmProvider, str] = {
    LlmProvider.OPENAI: "OPENAI_API_KEY",
    LlmProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LlmProvider.GOOGLE: "GOOGLE_API_KEY",
    LlmProvider.XAI: "XAI_API_KEY",
    LlmProvider.MISTRAL: "MISTRAL_API_KEY",
    LlmProvider.DEEPSEEK: "DEEPSEEK_API_KEY",
    LlmProvider.GROQ: "GROQ_API_KEY",
    LlmProvider.TOGETHER: "TOGETHER_API_KEY",
}


@dataclass
class RuntimeSettings:
    """Profile parameters as read from the environment."""

    provider: LlmProvider = LlmProvider.OLLAMA
    model: str = ""
    api_key: str = ""
    api_url: str = ""
    temperature: float | None = None
    max_tokens: int | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        dotenv_path: str | None = ".env",
    ) -> "RuntimeSettings":
        """Read ``SERMO_*`` variables.

        When ``environ`` is omitted, ``dotenv_path`` is loaded first without
        overriding variables already set, then ``os.environ`` is used.
        """
        if environ is None:
            if dotenv_path:
                load_dotenv(dotenv_path, override=False)
            environ = os.environ

        provider = LlmProvider.from_str(environ.get(f"{ENV_PREFIX}PROVIDER", "").strip() or "ollama")
        api_key = environ.get(f"{ENV_PREFIX}API_KEY", "")
        if not api_key and provider in PROVIDER_KEY_VARS:
            api_key = environ.get(PROVIDER_KEY_VARS[provider], "")

        return cls(
            provider=provider,
            model=environ.get(f"{ENV_PREFIX}MODEL", ""),
            api_key=api_key,
            api_url=environ.get(f"{ENV_PREFIX}API_URL", ""),
            temperature=_parse_number(environ, "TEMPERATURE", float),
            max_tokens=_parse_number(environ, "MAX_TOKENS", int),
        )

    def to_profile(self) -> LlmProfile:
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ConfigurationError("max_tokens must be positive", max_tokens=self.max_tokens)
        return LlmProfile(
            provider=self.provider,
            api_key=self.api_key,
            model_name=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            api_url=self.api_url,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("api_key")
        data["provider"] = self.provider.value
        return data


def _parse_number(environ: Mapping[str, str], name: str, kind: type) -> Any:
    raw = environ.get(f"{ENV_PREFIX}{name}", "").strip()
    if not raw:
        return None
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid {ENV_PREFIX}{name}: {raw!r}") from exc


def load_profile(environ: Mapping[str, str] | None = None, dotenv_path: str | None = ".env") -> LlmProfile:
    """Shortcut for ``RuntimeSettings.from_env(...).to_profile()``."""
    return RuntimeSettings.from_env(environ, dotenv_path).to_profile()


__all__ = ["ENV_PREFIX", "PROVIDER_KEY_VARS", "RuntimeSettings", "load_profile"]
