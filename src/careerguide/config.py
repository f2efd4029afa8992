"""Provider settings read from the environment.

Environment Variables:
- AI_PROVIDER: groq, openrouter or openai (default: groq)
- AI_MODEL: model identifier (default: llama-3.3-70b-versatile)
- AI_ENDPOINT: base URL override for the provider
- GROQ_API_KEY, OPENROUTER_API_KEY, OPENAI_API_KEY: provider credentials
- AI_API_KEY: credential for any other provider (used with AI_ENDPOINT)
- AI_TIMEOUT: request timeout in seconds (default: 25)
- AI_TEMPERATURE: sampling temperature (default: 0.7)
- AI_MAX_TOKENS: completion token limit (default: 1000)
- LOG_LEVEL: logging level name (default: INFO)

A ``.env`` file in the working directory is loaded first when present.
"""

import logging
import os
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models import CompletionOptions

DEFAULT_PROVIDER = "groq"
DEFAULT_MODEL = "llama-3.3-70b-versatile"

PROVIDER_ENDPOINTS: Dict[str, str] = {
    "groq": "https://api.groq.com/openai/v1",
    "openrouter": "https://openrouter.ai/api/v1",
    "openai": "https://api.openai.com/v1",
}

API_KEY_VARS: Dict[str, str] = {
    "groq": "GROQ_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "openai": "OPENAI_API_KEY",
}
GENERIC_API_KEY_VAR = "AI_API_KEY"

AVAILABLE_MODELS: Dict[str, Tuple[str, ...]] = {
    "groq": (
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
        "mixtral-8x7b-32768",
        "gemma2-9b-it",
    ),
    "openrouter": (
        "google/gemini-2.0-flash-exp:free",
        "mistralai/mistral-small-3.1-24b-instruct:free",
        "meta-llama/llama-4-scout:free",
    ),
    "openai": ("gpt-4o-mini", "gpt-4o"),
}


class Settings(BaseModel):
    """Completion provider configuration."""

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    endpoint: Optional[str] = None
    api_keys: Dict[str, str] = Field(default_factory=dict)
    timeout: float = 25.0
    temperature: float = 0.7
    max_tokens: int = 1000
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True
    ) -> "Settings":
        """Build settings from environment variables.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Source of variables. Defaults to ``os.environ``.
        dotenv : bool, default=True
            Load a ``.env`` file into ``os.environ`` first. Ignored when
            ``environ`` is given.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        api_keys = {
            provider: environ[var].strip()
            for provider, var in API_KEY_VARS.items()
            if environ.get(var, "").strip()
        }
        provider = environ.get("AI_PROVIDER", DEFAULT_PROVIDER).strip().lower()
        generic_key = environ.get(GENERIC_API_KEY_VAR, "").strip()
        if provider not in API_KEY_VARS and generic_key:
            api_keys[provider] = generic_key

        return cls(
            provider=provider,
            model=environ.get("AI_MODEL", DEFAULT_MODEL),
            endpoint=environ.get("AI_ENDPOINT") or None,
            api_keys=api_keys,
            timeout=float(environ.get("AI_TIMEOUT", 25.0)),
            temperature=float(environ.get("AI_TEMPERATURE", 0.7)),
            max_tokens=int(environ.get("AI_MAX_TOKENS", 1000)),
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def api_key(self) -> str:
        """Credential for the active provider, or an empty string."""
        return self.api_keys.get(self.provider, "")

    @property
    def base_url(self) -> str:
        """Explicit endpoint if set, else the provider's known endpoint."""
        return self.endpoint or PROVIDER_ENDPOINTS.get(self.provider, "")

    def completion_options(self) -> CompletionOptions:
        return CompletionOptions(
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the application process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
