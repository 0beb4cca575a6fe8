"""
AI Plug-in Architecture.

Optional report assistance (summary, suggested type, safety tip).
Fails gracefully and never blocks report submission.
"""

from alertnet.services.ai_plugin.base import AIAssistanceUnavailableError, AIProvider, AISuggestion
from alertnet.services.ai_plugin.gemini_provider import GeminiAIProvider
from alertnet.services.ai_plugin.mock_provider import MockAIProvider
from alertnet.services.ai_plugin.registry import AIProviderRegistry, match_disaster_type

__all__ = [
    "AIAssistanceUnavailableError",
    "AIProvider",
    "AISuggestion",
    "AIProviderRegistry",
    "GeminiAIProvider",
    "MockAIProvider",
    "match_disaster_type",
]
