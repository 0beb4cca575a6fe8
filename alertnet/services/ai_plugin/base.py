"""
AI Provider Base Interface.

Defines the contract for report-assistance providers.
All AI providers must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import logging

from pydantic import BaseModel, Field

from alertnet.core.messages import translate
from alertnet.models.report import DisasterType

logger = logging.getLogger(__name__)

NO_KEY_SAFETY_TIP = "Prioritize safety and follow guidance from local authorities."
FALLBACK_SAFETY_TIP = "Could not generate safety tip. Stay alert and follow official advice."


class AISuggestion(BaseModel):
    """
    Assistance returned for a report draft.

    Every field is optional: providers fill what they could produce.
    """
    summary: Optional[str] = Field(None, description="Situation summary (max 30 words)")
    suggested_type: Optional[str] = Field(None, alias="suggestedType", description="Free-text disaster type")
    safety_tip: Optional[str] = Field(None, alias="safetyTip", description="Actionable tip (max 20 words)")

    class Config:
        populate_by_name = True


class AIAssistanceUnavailableError(Exception):
    """The provider could not produce an analysis."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or translate("errorGemini"))


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    analyze() raises AIAssistanceUnavailableError on failure so the caller
    can tell the user; safety_tip() must never raise.
    """

    @abstractmethod
    def is_enabled(self) -> bool:
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, str]:
        """Dict with 'name' and 'version' keys."""
        pass

    @abstractmethod
    async def analyze(self, description: str, image_bytes: Optional[bytes] = None) -> AISuggestion:
        pass

    @abstractmethod
    async def safety_tip(self, disaster_type: DisasterType) -> str:
        pass
