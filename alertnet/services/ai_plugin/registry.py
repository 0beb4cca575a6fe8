"""
AI Provider Registry.

Selects the AI provider from configuration and normalizes suggestions.
"""

from alertnet.services.ai_plugin.base import AIProvider, AISuggestion, FALLBACK_SAFETY_TIP
from alertnet.services.ai_plugin.gemini_provider import GeminiAIProvider
from alertnet.services.ai_plugin.mock_provider import MockAIProvider
from alertnet.models.report import DisasterType
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def match_disaster_type(suggested: Optional[str]) -> Optional[DisasterType]:
    """
    Map a free-text suggestion onto a known disaster type (case-insensitive).

    Unknown suggestions return None and are logged, except "Other" which maps
    to OTHER.
    """
    if not suggested or not suggested.strip():
        return None
    needle = suggested.strip().lower()
    for disaster_type in DisasterType:
        if disaster_type.value.lower() == needle:
            return disaster_type
    logger.warning(f'AI suggested type "{suggested}" not in predefined list.')
    return None


class AIProviderRegistry:
    """
    Picks Gemini when AI is enabled and a key is configured, the mock
    placeholder otherwise.
    """

    def __init__(self, app_settings):
        self.provider: AIProvider = self._select_provider(app_settings)

    def _select_provider(self, app_settings) -> AIProvider:
        if not getattr(app_settings, "AI_ENABLED", True):
            logger.info("⚠️ AI is disabled globally (AI_ENABLED=false), using mock provider only")
            return MockAIProvider()

        gemini_provider = GeminiAIProvider(
            api_key=getattr(app_settings, "GEMINI_API_KEY", None),
            model=getattr(app_settings, "GEMINI_MODEL", "gemini-2.5-flash"),
            timeout_seconds=getattr(app_settings, "AI_TIMEOUT_SECONDS", 10.0),
        )
        if gemini_provider.is_enabled():
            logger.info("✅ Gemini AI Provider registered")
            return gemini_provider

        logger.info("✅ Mock AI Provider registered (fallback)")
        return MockAIProvider()

    async def analyze(self, description: str, image_bytes: Optional[bytes] = None) -> AISuggestion:
        """Raises AIAssistanceUnavailableError when the provider fails."""
        logger.info(f"AI analysis using {self.provider.get_model_info()['name']}")
        return await self.provider.analyze(description, image_bytes)

    async def generate_safety_tip(self, disaster_type: DisasterType) -> str:
        """Never raises."""
        try:
            return await self.provider.safety_tip(disaster_type)
        except Exception as e:
            logger.warning(f"Safety tip provider failed: {e}")
            return FALLBACK_SAFETY_TIP
