from __future__ import annotations

"""The closed set of supported LLM providers.

Each member knows its display name, its default completion endpoint and
whether it needs an API key. Request building and reply extraction branch on
these members in :mod:`sermo.dispatch` and :mod:`sermo.extract`.
"""

from enum import Enum
from typing import Dict


class LlmProvider(str, Enum):
    OLLAMA = "ollama"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    XAI = "xai"
    MISTRAL = "mistral"
    DEEPSEEK = "deepseek"
    GROQ = "groq"
    TOGETHER = "together"
    CUSTOM = "custom"

    @classmethod
    def from_str(cls, slug: str) -> "LlmProvider":
        """Map a slug to a provider; anything unrecognised is ``CUSTOM``."""
        try:
            return cls(slug.strip().lower())
        except ValueError:
            return cls.CUSTOM

    @classmethod
    def from_index(cls, value: int) -> "LlmProvider":
        members = list(cls)
        if 0 <= value < len(members) - 1:
            return members[value]
        return cls.CUSTOM

    @classmethod
    def options(cls) -> Dict[str, str]:
        """Numbered menu of the hosted providers, ``{"1": "OpenAI", ...}``."""
        return {str(i): cls.from_index(i).display_name for i in range(1, 9)}

    @property
    def slug(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def default_url(self) -> str:
        return _COMPLETION_URLS[self]

    @property
    def requires_api_key(self) -> bool:
        return self not in (LlmProvider.OLLAMA, LlmProvider.CUSTOM)

    @property
    def is_openai_compatible(self) -> bool:
        return self not in (LlmProvider.OLLAMA, LlmProvider.ANTHROPIC, LlmProvider.GOOGLE)

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES: Dict[LlmProvider, str] = {
    LlmProvider.OLLAMA: "Ollama",
    LlmProvider.OPENAI: "OpenAI",
    LlmProvider.ANTHROPIC: "Anthropic",
    LlmProvider.GOOGLE: "Google Gemini",
    LlmProvider.XAI: "X.ai",
    LlmProvider.MISTRAL: "Mistral",
    LlmProvider.DEEPSEEK: "Deepseek",
    LlmProvider.GROQ: "Groq",
    LlmProvider.TOGETHER: "TogetherAI",
    LlmProvider.CUSTOM: "Other",
}

# ``~model~`` and ``~api_key~`` are substituted by LlmProfile.resolved_url().
_COMPLETION_URLS: Dict[LlmProvider, str] = {
    LlmProvider.OLLAMA: "http://localhost:11434/api/chat",
    LlmProvider.OPENAI: "https://api.openai.com/v1/chat/completions",
    LlmProvider.ANTHROPIC: "https://api.anthropic.com/v1/messages",
    LlmProvider.GOOGLE: "https://generativelanguage.googleapis.com/v1beta/models/~model~:generateContent",
    LlmProvider.XAI: "https://api.x.ai/v1/chat/completions",
    LlmProvider.MISTRAL: "https://api.mistral.ai/v1/chat/completions",
    LlmProvider.DEEPSEEK: "https://api.deepseek.com/v1/chat/completions",
    LlmProvider.GROQ: "https://api.groq.com/openai/v1/chat/completions",
    LlmProvider.TOGETHER: "https://api.together.xyz/v1/chat/completions",
    LlmProvider.CUSTOM: "http://localhost:8000/v1/chat/completions",
}

__all__ = ["LlmProvider"]
