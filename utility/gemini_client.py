import logging
import time
from typing import Any, Dict, Optional

import httpx

from utility.config import RelayConfig

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Async wrapper around Gemini's `models/{model}:generateContent` endpoint.
    One short-lived httpx.AsyncClient per call; the API key travels as the
    `key` query parameter.
    """

    def __init__(self, config: RelayConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport  # tests inject httpx.MockTransport here
        self.headers = {"Content-Type": "application/json"}

    async def generate_content(self, url: str, payload: Dict[str, Any], api_key: str) -> httpx.Response:
        """
        POST a generateContent payload and return the fully read response.
        Non-2xx statuses are returned, not raised; transport errors propagate.
        """
        start = time.perf_counter()
        async with httpx.AsyncClient(transport=self.transport, timeout=self.config.upstream_timeout) as client:
            response = await client.post(url, params={"key": api_key}, headers=self.headers, json=payload)
            await response.aread()

        latency_ms = (time.perf_counter() - start) * 1000
        logger.debug("POST %s -> %s in %.1f ms", url, response.status_code, latency_ms)
        return response

    async def generate_text(self, contents: list, api_key: str) -> httpx.Response:
        return await self.generate_content(self.config.translate_url, {"contents": contents}, api_key)

    async def generate_speech(self, text: str, voice_name: str, api_key: str) -> httpx.Response:
        payload = build_speech_payload(self.config.speech_model, text, voice_name)
        return await self.generate_content(self.config.speech_url, payload, api_key)


def build_speech_payload(model: str, text: str, voice_name: str) -> Dict[str, Any]:
    return {
        "model": model,
        "contents": [{"parts": [{"text": text}]}],
        "generationConfig": {
            "responseModalities": ["AUDIO"],
            "speechConfig": {
                "voiceConfig": {
                    "prebuiltVoiceConfig": {"voiceName": voice_name}
                }
            },
        },
    }


def first_candidate_text(body: Any) -> Optional[str]:
    """candidates[0].content.parts[0].text, or None if any step is missing."""
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None
