from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TRANSLATE_MODEL = "gemini-2.5-flash-preview-05-20"
DEFAULT_SPEECH_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_PORT = 3000
# Seconds per upstream call; TTS responses can take minutes
DEFAULT_UPSTREAM_TIMEOUT = 300.0

API_KEY_ENV = "GEMINI_API_KEY"


@dataclass
class RelayConfig:
    """
    Process-wide settings, built once at startup and handed to create_app().
    Nothing here is mutated while serving requests.
    """
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    translate_model: str = DEFAULT_TRANSLATE_MODEL
    speech_model: str = DEFAULT_SPEECH_MODEL
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    prompt_style: str = "faithful"
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    upstream_timeout: Optional[float] = DEFAULT_UPSTREAM_TIMEOUT  # None → no client timeout

    # When the key is missing at startup, look it up again on every request
    reload_missing_key: bool = True

    @property
    def translate_url(self) -> str:
        return self._model_url(self.translate_model)

    @property
    def speech_url(self) -> str:
        return self._model_url(self.speech_model)

    def _model_url(self, model: str) -> str:
        return f"{self.base_url.rstrip('/')}/models/{model}:generateContent"

    def current_api_key(self) -> Optional[str]:
        """Key to use for this request, or None if the server has none."""
        if self.api_key:
            return self.api_key
        if self.reload_missing_key:
            return os.getenv(API_KEY_ENV) or None
        return None


def _parse_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or raw.strip() == "":
        return DEFAULT_UPSTREAM_TIMEOUT
    value = float(raw)
    if value <= 0:
        raise ValueError(f"UPSTREAM_TIMEOUT must be positive, got {raw!r}")
    return value


def _env(name: str, default: str) -> str:
    """Value of $name, with blank values treated like unset ones."""
    value = os.getenv(name, "").strip()
    return value or default


def load_config(dotenv: bool = True) -> RelayConfig:
    """Build a RelayConfig from the environment (and .env, if present)."""
    # Import here so an unknown style fails at startup, not on first request
    from utility.prompt_manager import PromptManager

    if dotenv:
        load_dotenv()

    prompt_style = _env("TRANSLATION_PROMPT_STYLE", PromptManager.DEFAULT_STYLE).lower()
    PromptManager.check_style(prompt_style)

    return RelayConfig(
        api_key=os.getenv(API_KEY_ENV) or None,
        base_url=_env("GEMINI_BASE_URL", DEFAULT_BASE_URL),
        translate_model=_env("GEMINI_TRANSLATE_MODEL", DEFAULT_TRANSLATE_MODEL),
        speech_model=_env("GEMINI_TTS_MODEL", DEFAULT_SPEECH_MODEL),
        allowed_origins=_parse_origins(os.getenv("ALLOWED_ORIGINS")),
        prompt_style=prompt_style,
        host=_env("HOST", "0.0.0.0"),
        port=int(_env("PORT", str(DEFAULT_PORT))),
        upstream_timeout=_parse_timeout(os.getenv("UPSTREAM_TIMEOUT")),
    )
