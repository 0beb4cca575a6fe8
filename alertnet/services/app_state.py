"""
Application State - one explicitly owned object per running app.

Built at startup, closed at shutdown, handed to routes through the
get_app_state dependency. Owns the domain store and every service that
reads or writes it, plus the small bits of shared UI state (busy flag,
map filter, display preferences).
"""

import logging
from typing import Iterable, Optional

from fastapi import Request

from alertnet.config.reference_data import HAITI_CENTER, HAITI_INITIAL_ZOOM, seed_news
from alertnet.models.base import DisplayPreferences, FilterState, VisibleSubset
from alertnet.services.ai_plugin import AIProviderRegistry
from alertnet.services.alert_dispatch import SimulatedSmsDispatcher
from alertnet.services.domain_store import Clock, DomainStore, EntityKind, utcnow
from alertnet.services.filter_engine import compute_visible
from alertnet.services.geo_position import GeoPositionSource, build_position_provider
from alertnet.services.location_lock import LocationLock
from alertnet.services.map_reconciler import ALL_KINDS, MapReconciler
from alertnet.services.news_feed import NewsFeed
from alertnet.services.notification_center import NotificationCenter
from alertnet.services.rendering_surface import InMemoryRenderingSurface
from alertnet.services.submission_pipeline import ReportSubmissionPipeline
from alertnet.services.voice_announcer import VoiceAnnouncer

logger = logging.getLogger(__name__)


class AppState:

    def __init__(self, app_settings, clock: Optional[Clock] = None):
        self.settings = app_settings
        self.clock: Clock = clock or utcnow
        self.busy = False
        self.filter_state = FilterState()
        self.display = DisplayPreferences()

        self.store = DomainStore.seeded(self.clock, zone_radius=app_settings.DEFAULT_USER_REPORT_ZONE_RADIUS)
        self.notifications = NotificationCenter(
            dismiss_seconds=app_settings.NOTIFICATION_DISMISS_SECONDS,
            history_size=app_settings.NOTIFICATION_HISTORY_SIZE,
        )

        self.surface = InMemoryRenderingSurface(HAITI_CENTER, HAITI_INITIAL_ZOOM)
        self.reconciler = MapReconciler(
            self.surface,
            is_derived_zone=self.store.is_derived_zone,
            clock=self.clock,
            recent_window_seconds=app_settings.RECENT_ENTITY_WINDOW_SECONDS,
            arrival_animation_ms=app_settings.ARRIVAL_ANIMATION_MS,
        )
        self.reconciler.apply_contrast(self.display.contrast_mode)
        self.refresh_map()
        self._unsubscribe = self.store.subscribe(self.refresh_map)

        self.position_source = GeoPositionSource(build_position_provider(app_settings))
        self.location_lock = LocationLock(self.position_source, self.reconciler, self.notifications, self.set_busy)

        self.dispatcher = SimulatedSmsDispatcher(history_size=app_settings.ALERT_HISTORY_SIZE)
        self.announcer = VoiceAnnouncer(
            enabled=app_settings.VOICE_ANNOUNCEMENTS_ENABLED,
            language=app_settings.LANGUAGE,
            history_size=app_settings.ALERT_HISTORY_SIZE,
        )
        self.pipeline = ReportSubmissionPipeline(
            self.store,
            self.notifications,
            self.set_busy,
            self.dispatcher,
            self.announcer,
            recipient=app_settings.ADMIN_ALERT_RECIPIENT,
            delay_seconds=app_settings.SUBMISSION_DELAY_SECONDS,
        )

        self.ai = AIProviderRegistry(app_settings)
        self.news = NewsFeed(seed_news(self.clock()), clock=self.clock)

    def set_busy(self, busy: bool) -> None:
        self.busy = busy

    def visible(self) -> VisibleSubset:
        return compute_visible(self.store, self.filter_state.active_filter, self.filter_state.search_term)

    def refresh_map(self, kinds: Iterable[EntityKind] = ALL_KINDS) -> None:
        self.reconciler.reconcile(self.visible(), kinds)

    def set_filter(self, filter_state: FilterState) -> VisibleSubset:
        self.filter_state = filter_state
        self.refresh_map()
        return self.visible()

    def set_contrast_mode(self, enabled: bool) -> DisplayPreferences:
        if enabled != self.display.contrast_mode:
            self.display = DisplayPreferences(contrast_mode=enabled)
            self.reconciler.apply_contrast(enabled)
            # Styles depend on the contrast flag, so every primitive is redrawn
            self.refresh_map()
        return self.display

    def start(self) -> None:
        """Start background work. Must be called from the running event loop."""
        self.news.start(self.settings.NEWS_REFRESH_SECONDS)
        logger.info(f"✅ {self.settings.APP_NAME} state ready")

    def close(self) -> None:
        self._unsubscribe()
        self.news.close()
        self.pipeline.close()
        self.reconciler.close()
        self.notifications.close()
        logger.info(f"{self.settings.APP_NAME} state closed")


def get_app_state(request: Request) -> AppState:
    """FastAPI dependency resolving the app-wide state."""
    return request.app.state.alert_state
