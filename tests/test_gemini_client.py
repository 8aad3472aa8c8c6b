import json

import httpx
import pytest

from utility.config import RelayConfig
from utility.gemini_client import GeminiClient, build_speech_payload, first_candidate_text


@pytest.mark.asyncio
async def test_generate_text_posts_contents_with_key():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Hallo"}]}}]})

    client = GeminiClient(RelayConfig(api_key="k"), transport=httpx.MockTransport(handler))
    contents = [{"parts": [{"text": "translate me"}]}]

    response = await client.generate_text(contents, "k")

    assert response.status_code == 200
    assert first_candidate_text(response.json()) == "Hallo"
    assert seen[0].url.params["key"] == "k"
    assert seen[0].headers["content-type"] == "application/json"
    assert json.loads(seen[0].content) == {"contents": contents}


@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised():
    client = GeminiClient(
        RelayConfig(api_key="k"),
        transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"error": {"message": "boom"}})),
    )

    response = await client.generate_speech("hi", "Kore", "k")

    assert response.status_code == 500
    assert response.json()["error"]["message"] == "boom"


def test_speech_payload_uses_voice_name():
    payload = build_speech_payload("tts-model", "hello", "Charon")
    assert payload["model"] == "tts-model"
    assert payload["generationConfig"]["responseModalities"] == ["AUDIO"]
    assert payload["generationConfig"]["speechConfig"]["voiceConfig"]["prebuiltVoiceConfig"] == {"voiceName": "Charon"}


@pytest.mark.parametrize("body,expected", [
    ({"candidates": [{"content": {"parts": [{"text": " x "}]}}]}, " x "),
    ({"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]}, None),
    ({"candidates": [{"content": {"parts": [{"text": 3}]}}]}, None),
    ([], None),
    (None, None),
])
def test_first_candidate_text(body, expected):
    assert first_candidate_text(body) == expected
