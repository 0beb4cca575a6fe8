import asyncio

import pytest
import requests

from alertnet.core.settings import Settings
from alertnet.models.report import DisasterType
from alertnet.services.ai_plugin import (
    AIAssistanceUnavailableError,
    AIProviderRegistry,
    GeminiAIProvider,
    MockAIProvider,
    match_disaster_type,
)
from alertnet.services.ai_plugin.gemini_provider import strip_json_fence


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}")

    def json(self):
        return {"candidates": [{"content": {"parts": [{"text": self.text}]}}]}


def test_registry_uses_mock_without_key():
    registry = AIProviderRegistry(Settings(GEMINI_API_KEY=None))
    assert isinstance(registry.provider, MockAIProvider)

    suggestion = asyncio.run(registry.analyze("Water rising in the street"))
    assert suggestion.summary == "AI analysis is currently unavailable. Ensure API key is configured."
    assert suggestion.suggested_type == "N/A"
    assert asyncio.run(registry.generate_safety_tip(DisasterType.FLOOD)) == (
        "Prioritize safety and follow guidance from local authorities."
    )


def test_registry_respects_ai_disabled():
    registry = AIProviderRegistry(Settings(AI_ENABLED=False, GEMINI_API_KEY="key"))
    assert isinstance(registry.provider, MockAIProvider)


def test_registry_picks_gemini_with_key():
    registry = AIProviderRegistry(Settings(GEMINI_API_KEY="key", GEMINI_MODEL="gemini-test"))
    assert isinstance(registry.provider, GeminiAIProvider)
    assert registry.provider.get_model_info()["name"] == "gemini-test"


def test_gemini_analyze_parses_fenced_json(monkeypatch):
    captured = {}

    def fake_post(url, headers, json, timeout):
        captured["url"] = url
        captured["payload"] = json
        return FakeResponse(
            '```json\n{"summary": "Flooding on main road", "suggestedType": "flood", '
            '"safetyTip": "Move to higher ground."}\n```'
        )

    monkeypatch.setattr("alertnet.services.ai_plugin.gemini_provider.requests.post", fake_post)
    provider = GeminiAIProvider(api_key="key", model="gemini-test")

    suggestion = asyncio.run(provider.analyze("Water everywhere", image_bytes=b"\xff\xd8jpeg"))

    assert suggestion.summary == "Flooding on main road"
    assert suggestion.suggested_type == "flood"
    assert suggestion.safety_tip == "Move to higher ground."
    assert captured["url"].endswith("/gemini-test:generateContent")
    assert captured["payload"]["generationConfig"] == {"responseMimeType": "application/json"}
    assert captured["payload"]["contents"][0]["parts"][1]["inline_data"]["mime_type"] == "image/jpeg"


def test_gemini_analyze_failure_raises(monkeypatch):
    monkeypatch.setattr(
        "alertnet.services.ai_plugin.gemini_provider.requests.post",
        lambda *a, **kw: FakeResponse("not json at all"),
    )
    provider = GeminiAIProvider(api_key="key")
    with pytest.raises(AIAssistanceUnavailableError, match="Failed to get analysis from AI."):
        asyncio.run(provider.analyze("Water everywhere"))


def test_gemini_safety_tip_falls_back(monkeypatch):
    monkeypatch.setattr(
        "alertnet.services.ai_plugin.gemini_provider.requests.post",
        lambda *a, **kw: FakeResponse("", status_code=500),
    )
    provider = GeminiAIProvider(api_key="key")
    tip = asyncio.run(provider.safety_tip(DisasterType.EARTHQUAKE))
    assert tip == "Could not generate safety tip. Stay alert and follow official advice."


def test_strip_json_fence():
    assert strip_json_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_json_fence('  {"a": 1} ') == '{"a": 1}'


def test_match_disaster_type():
    assert match_disaster_type("flood") == DisasterType.FLOOD
    assert match_disaster_type(" Other ") == DisasterType.OTHER
    assert match_disaster_type("Tsunami") is None
    assert match_disaster_type("") is None
    assert match_disaster_type(None) is None
