from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"
SUPPORTED_PROVIDERS = {"anthropic", "openai", "ollama", "mock"}


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes"}


def _env_origins(value: Optional[str]) -> Tuple[str, ...]:
    if not value or not value.strip():
        return ("*",)
    return tuple(o.strip() for o in value.split(",") if o.strip())


@dataclass(frozen=True)
class Settings:
    """Process configuration, built once and handed to the components that need it."""

    llm_provider: str = "anthropic"
    llm_max_tokens: int = 1024
    llm_timeout_s: float = 30.0

    anthropic_api_key: str = ""
    anthropic_model: str = DEFAULT_ANTHROPIC_MODEL
    anthropic_base_url: str = "https://api.anthropic.com/v1"

    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"

    ollama_model: str = "llama3.1"
    ollama_base_url: str = "http://localhost:11434"

    default_timezone: str = "UTC"
    expose_suggestion_source: bool = False
    cors_allow_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))

    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.llm_provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported LLM provider {self.llm_provider!r}; "
                f"expected one of {sorted(SUPPORTED_PROVIDERS)}"
            )
        if self.llm_max_tokens <= 0:
            raise ValueError("llm_max_tokens must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        # CLAUDE_API_KEY is the name the client app's .env files already use.
        anthropic_key = env.get("CLAUDE_API_KEY") or env.get("ANTHROPIC_API_KEY") or ""

        return cls(
            llm_provider=env.get("SPARK_LLM_PROVIDER", "anthropic").strip().lower(),
            llm_max_tokens=int(env.get("LLM_MAX_TOKENS", "1024")),
            llm_timeout_s=float(env.get("LLM_TIMEOUT_S", "30")),
            anthropic_api_key=anthropic_key.strip(),
            anthropic_model=env.get("ANTHROPIC_MODEL", DEFAULT_ANTHROPIC_MODEL).strip(),
            anthropic_base_url=env.get(
                "ANTHROPIC_BASE_URL", "https://api.anthropic.com/v1"
            ).strip().rstrip("/"),
            openai_api_key=env.get("OPENAI_API_KEY", "").strip(),
            openai_model=env.get("OPENAI_MODEL", "gpt-4o-mini").strip(),
            openai_base_url=env.get(
                "OPENAI_BASE_URL", "https://api.openai.com/v1"
            ).strip().rstrip("/"),
            ollama_model=env.get("OLLAMA_MODEL", "llama3.1").strip(),
            ollama_base_url=env.get(
                "OLLAMA_BASE_URL", "http://localhost:11434"
            ).strip().rstrip("/"),
            default_timezone=env.get("SPARK_DEFAULT_TIMEZONE", "UTC").strip() or "UTC",
            expose_suggestion_source=_env_bool(
                env.get("SPARK_EXPOSE_SUGGESTION_SOURCE"), False
            ),
            cors_allow_origins=_env_origins(env.get("CORS_ALLOW_ORIGINS")),
            host=env.get("HOST", "0.0.0.0").strip(),
            port=int(env.get("PORT", "3001")),
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper(),
        )

    @property
    def active_api_key(self) -> str:
        """API key of the selected provider ('' for providers that need none)."""
        if self.llm_provider == "anthropic":
            return self.anthropic_api_key
        if self.llm_provider == "openai":
            return self.openai_api_key
        return ""
