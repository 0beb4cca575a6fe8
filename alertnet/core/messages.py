"""
User-facing message templates (English).

Full translation lookup lives with the frontend; the engine only needs the
handful of strings it emits in notifications, zone names and alerts.
Unknown keys fall back to the key itself.
"""

from typing import Dict

MESSAGES: Dict[str, str] = {
    "submittingReport": "Submitting report for processing...",
    "reportSubmittedMapSuccess": "Report submitted! It will appear on the map and admin panel shortly.",
    "reportSubmissionFailed": "Report could not be submitted. Please try again.",
    "reportSubmittedVoiceConfirmation": "Your report has been submitted and is being processed.",
    "adminSmsDispatched": "Administrative alert SMS to {phoneNumber} dispatched for report {reportId}.",
    "adminSmsSimulatedSuffix": " (Simulated - no message was sent. Real SMS requires a delivery backend.)",
    "userReportedZoneName": "Reported {type} Area",
    "userReportedZoneDescription": "This zone was automatically generated from a user report regarding a {type} event.",
    "verified": "Verified",
    "severity": "Severity",
    "gpsError": "Could not get GPS location.",
    "fillRequiredFields": "Please fill in disaster type, description, and region/city.",
    "errorGemini": "Failed to get analysis from AI.",
}


def translate(key: str, **substitutions: str) -> str:
    template = MESSAGES.get(key, key)
    for name, value in substitutions.items():
        template = template.replace("{" + name + "}", str(value))
    return template
