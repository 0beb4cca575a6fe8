"""
Mock AI Provider - Fallback provider when AI is disabled or no key is set.

Returns canned, clearly labelled placeholder assistance.
Always available and never fails.
"""

from alertnet.services.ai_plugin.base import AIProvider, AISuggestion, NO_KEY_SAFETY_TIP
from alertnet.models.report import DisasterType
from typing import Dict, Optional
import asyncio
import logging

logger = logging.getLogger(__name__)


class MockAIProvider(AIProvider):
    """
    Placeholder provider used when:
    - AI is disabled in config
    - No API key is available
    """

    MODEL_NAME = "mock-placeholder"
    MODEL_VERSION = "1.0.0"

    def __init__(self, latency_seconds: float = 0.0):
        self.latency_seconds = latency_seconds
        logger.info(f"✅ Mock AI Provider initialized: {self.MODEL_NAME}")

    def is_enabled(self) -> bool:
        """Mock provider is always enabled (fallback)."""
        return True

    def get_model_info(self) -> Dict[str, str]:
        return {
            "name": self.MODEL_NAME,
            "version": self.MODEL_VERSION
        }

    async def analyze(self, description: str, image_bytes: Optional[bytes] = None) -> AISuggestion:
        await asyncio.sleep(self.latency_seconds)
        return AISuggestion(
            summary="AI analysis is currently unavailable. Ensure API key is configured.",
            suggested_type="N/A",
            safety_tip="Stay informed through official channels and prioritize your safety.",
        )

    async def safety_tip(self, disaster_type: DisasterType) -> str:
        await asyncio.sleep(self.latency_seconds)
        return NO_KEY_SAFETY_TIP
