"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from alertnet.services.app_state import AppState, get_app_state


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check(state: AppState = Depends(get_app_state)):
    """
    Basic health check endpoint.
    Returns 200 if service is running, with a small summary of the store.
    """
    return {
        "status": "healthy",
        "service": state.settings.APP_NAME,
        "version": state.settings.APP_VERSION,
        "busy": state.busy,
        "ai_provider": state.ai.provider.get_model_info()["name"],
        "counts": {
            "reports": len(state.store.reports),
            "resources": len(state.store.resources),
            "zones": len(state.store.zones),
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
