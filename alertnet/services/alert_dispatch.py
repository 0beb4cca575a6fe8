"""
Administrative SMS Alert Simulator

SIMULATED SMS alert generation for new disaster reports.
No actual sending, credentials, or carrier gateway.

The message body is built exactly as a real gateway would receive it and
is written to the log so operators can see what would have gone out.
"""

import asyncio
import logging
from collections import deque
from typing import Deque, Dict, List

from alertnet.models.report import Report

logger = logging.getLogger(__name__)


def format_report_location(report: Report) -> str:
    if report.location_text:
        return report.location_text
    if report.location is not None:
        return f"Lat/Lng: {report.location.lat:.4f}, {report.location.lng:.4f}"
    return "Unknown Location"


def short_report_id(report_id: str) -> str:
    """Compact id fragment that fits an SMS line ("report-1717...-abc" -> millis digits)."""
    return report_id[7:13]


def generate_sms_alert(report: Report, recipient: str) -> str:
    """
    Build the simulated SMS text for a newly committed report.

    This is a SIMULATION - no messages are sent.
    """
    return (
        f"SIMULATED SMS to {recipient}:\n"
        f"New HaitiAlertNet Report:\n"
        f"Type: {report.type.value}\n"
        f"Location: {format_report_location(report)}\n"
        f"Desc: {report.description[:100]}...\n"
        f"ID: {short_report_id(report.id)}"
    )


class SimulatedSmsDispatcher:
    """
    Stands in for an SMS gateway.

    Keeps the most recent generated messages so the admin alerts feed can
    show what would have been delivered.
    """

    def __init__(self, history_size: int = 20):
        self._sent: Deque[Dict[str, str]] = deque(maxlen=history_size)

    @property
    def sent(self) -> List[Dict[str, str]]:
        return list(self._sent)

    async def dispatch(self, report: Report, recipient: str) -> str:
        body = generate_sms_alert(report, recipient)
        # Yield once so dispatch is never synchronous with the commit
        await asyncio.sleep(0)
        self._sent.append({"recipient": recipient, "report_id": report.id, "body": body})
        logger.info(f"📨 {body}")
        return body
