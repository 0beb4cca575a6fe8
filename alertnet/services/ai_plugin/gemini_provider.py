"""
Gemini AI Provider - Real LLM integration.

Calls the Google Gemini generateContent REST endpoint.
Analysis failures surface as AIAssistanceUnavailableError; safety tips
fall back to a generic tip instead of failing.
"""

from alertnet.services.ai_plugin.base import (
    AIAssistanceUnavailableError,
    AIProvider,
    AISuggestion,
    FALLBACK_SAFETY_TIP,
)
from alertnet.models.report import DisasterType
from typing import Any, Dict, List, Optional
import asyncio
import base64
import json
import logging
import re

import requests

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def strip_json_fence(text: str) -> str:
    """Models sometimes wrap JSON in a ```json fence even in JSON mode."""
    text = text.strip()
    match = _FENCE_RE.match(text)
    if match and match.group(2):
        return match.group(2).strip()
    return text


class GeminiAIProvider(AIProvider):
    """
    Google Gemini API provider for report assistance.

    Requires GEMINI_API_KEY in environment variables.
    """

    MODEL_VERSION = "v1beta"
    API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(self, api_key: Optional[str], model: str = "gemini-2.5-flash", timeout_seconds: float = 10.0):
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.enabled = bool(self.api_key and self.api_key.strip())

        if self.enabled:
            logger.info(f"✅ Gemini AI Provider initialized: {self.model}")
        else:
            logger.info(f"⚠️ Gemini AI Provider disabled: No API key configured")

    def is_enabled(self) -> bool:
        return self.enabled

    def get_model_info(self) -> Dict[str, str]:
        return {
            "name": self.model,
            "version": self.MODEL_VERSION
        }

    async def analyze(self, description: str, image_bytes: Optional[bytes] = None) -> AISuggestion:
        parts: List[Dict[str, Any]] = [{"text": self._build_analysis_prompt(description)}]
        if image_bytes:
            parts.append({
                "inline_data": {
                    "mime_type": "image/jpeg",
                    "data": base64.b64encode(image_bytes).decode("ascii"),
                }
            })

        try:
            text = await self._generate(parts, json_mode=True)
            parsed = json.loads(strip_json_fence(text))
            return AISuggestion.model_validate(parsed)
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}")
            raise AIAssistanceUnavailableError() from e

    async def safety_tip(self, disaster_type: DisasterType) -> str:
        prompt = f'Provide a single, concise safety tip (max 25 words) for a "{disaster_type.value}" disaster.'
        try:
            text = await self._generate([{"text": prompt}])
            return text.strip() or FALLBACK_SAFETY_TIP
        except Exception as e:
            logger.warning(f"⚠️ Error generating safety tip: {e}")
            return FALLBACK_SAFETY_TIP

    def _build_analysis_prompt(self, description: str) -> str:
        return f"""Analyze the following disaster report description. Provide:
1. A concise summary of the situation (max 30 words).
2. A suggested disaster type (e.g., Flood, Fire, Earthquake, Landslide, Other).
3. One brief, actionable safety tip relevant to the described situation (max 20 words).

Format the response as a JSON object with keys "summary", "suggestedType", and "safetyTip".
Description: "{description}\""""

    async def _generate(self, parts: List[Dict[str, Any]], json_mode: bool = False) -> str:
        payload: Dict[str, Any] = {"contents": [{"parts": parts}]}
        if json_mode:
            payload["generationConfig"] = {"responseMimeType": "application/json"}
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._call_gemini_api, payload)

    def _call_gemini_api(self, payload: Dict[str, Any]) -> str:
        """Blocking HTTP call; runs in the default executor."""
        resp = requests.post(
            f"{self.API_BASE_URL}/{self.model}:generateContent",
            headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
            json=payload,
            timeout=self.timeout_seconds,
        )
        resp.raise_for_status()
        data = resp.json()
        candidates = data.get("candidates") or []
        if not candidates:
            raise ValueError("Gemini returned no candidates")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)
