from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from utility.config import RelayConfig
from utility.dto import SpeechRequest, TranslateRequest
from utility.errors import ConfigurationError, InternalError, InvalidRequest, RelayError, UpstreamError
from utility.gemini_client import GeminiClient, first_candidate_text
from utility.prompt_manager import PromptManager

logger = logging.getLogger(__name__)

TRANSLATE_FIELDS_MESSAGE = "Text, source language, and target language are required."
SPEECH_FIELDS_MESSAGE = "Text and speaker are required."
TRANSLATION_FAILED_MESSAGE = "Translation failed."

RequestT = TypeVar("RequestT", bound=BaseModel)


class RelayService:
    """
    The two relay operations. Each call checks the API key, validates the
    body, then makes at most one upstream request.
    """

    def __init__(self, config: RelayConfig, client: Optional[GeminiClient] = None):
        self.config = config
        self.client = client or GeminiClient(config)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _require_api_key(self) -> str:
        api_key = self.config.current_api_key()
        if not api_key:
            raise ConfigurationError()
        return api_key

    @staticmethod
    def _parse(model: Type[RequestT], body: Any, message: str) -> RequestT:
        if not isinstance(body, dict):
            raise InvalidRequest(message)
        try:
            return model.model_validate(body)
        except ValidationError as e:
            # Wrong types (e.g. a number for text) count as missing
            logger.info("Rejected %s: %s", model.__name__, e.errors(include_url=False))
            raise InvalidRequest(message) from e

    @staticmethod
    def _json_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise InternalError() from e

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def translate(self, body: Any) -> str:
        api_key = self._require_api_key()

        req = self._parse(TranslateRequest, body, TRANSLATE_FIELDS_MESSAGE)
        if not req.is_complete():
            raise InvalidRequest(TRANSLATE_FIELDS_MESSAGE)

        if req.source_lang == req.target_lang:
            return req.text

        try:
            prompt = PromptManager.build_translation_prompt(
                req.text, req.source_lang, req.target_lang, style=self.config.prompt_style
            )
            response = await self.client.generate_text(PromptManager.build_contents(prompt), api_key)
            data = self._json_body(response)
        except RelayError:
            logger.exception("Translate: upstream body was not JSON")
            raise
        except Exception as e:
            logger.exception("Translate: request to Gemini failed")
            raise InternalError() from e

        translated = first_candidate_text(data)
        if not response.is_success or translated is None:
            logger.error("Gemini translate error (HTTP %s): %s", response.status_code, data)
            raise UpstreamError(TRANSLATION_FAILED_MESSAGE)

        return translated.strip()

    async def generate_speech(self, body: Any) -> bytes:
        """Return the raw upstream JSON bytes on success."""
        api_key = self._require_api_key()

        req = self._parse(SpeechRequest, body, SPEECH_FIELDS_MESSAGE)
        if not req.is_complete():
            raise InvalidRequest(SPEECH_FIELDS_MESSAGE)

        try:
            response = await self.client.generate_speech(req.text, req.speaker, api_key)
        except Exception as e:
            logger.exception("Speech: request to Gemini failed")
            raise InternalError() from e

        if not response.is_success:
            # Error pages from Google's front end are often HTML
            try:
                data = response.json()
            except ValueError:
                data = response.text
            logger.error("Gemini speech error (HTTP %s): %s", response.status_code, data)
            raise UpstreamError(_upstream_message(data), status_code=response.status_code)

        try:
            self._json_body(response)
        except RelayError:
            logger.exception("Speech: upstream body was not JSON")
            raise

        return response.content


def _upstream_message(data: Any) -> Optional[str]:
    """error.message from a Gemini error body, if there is one."""
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
    return None
