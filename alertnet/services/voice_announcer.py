"""
Voice Announcer

Speech synthesis happens on the client device. The engine only decides
what should be spoken and records it; clients poll
GET /notifications/announcements.
"""

import asyncio
import logging
from collections import deque
from typing import Deque, Dict, List

logger = logging.getLogger(__name__)


class VoiceAnnouncer:

    def __init__(self, enabled: bool = True, language: str = "en", history_size: int = 20):
        self.enabled = enabled
        self.language = language
        self._spoken: Deque[Dict[str, str]] = deque(maxlen=history_size)

    @property
    def spoken(self) -> List[Dict[str, str]]:
        return list(self._spoken)

    async def announce(self, text: str) -> bool:
        """Queue an announcement. Returns False when announcements are disabled."""
        if not self.enabled:
            logger.debug(f"Voice announcements disabled, skipped: {text}")
            return False
        await asyncio.sleep(0)
        self._spoken.append({"text": text, "language": self.language})
        logger.info(f"🔊 [{self.language}] {text}")
        return True
