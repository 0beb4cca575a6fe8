"""
Domain Store - authoritative in-memory collections.

Holds reports, relief resources and hazard zones for the running process.
There is no database: the store is seeded from reference data at startup
and lost at shutdown.

DESIGN PRINCIPLES:
- Reports are never deleted; only their status changes
- Derived zones are tied to their report through an explicit
  report_id -> zone_id relation, at most one zone per report
- Operations are total: unknown ids are ignored, never raised
- Listeners are notified only after a mutation is fully applied
"""

import logging
import random
import string
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from alertnet.config.reference_data import (
    default_image_for,
    resolve_region,
    seed_reports,
    seed_resources,
    seed_zones,
)
from alertnet.core.messages import translate
from alertnet.models.geo import CircleArea
from alertnet.models.report import DisasterType, Report, ReportCreate, ReportStatus
from alertnet.models.resource import Resource
from alertnet.models.zone import HazardZone, Severity

logger = logging.getLogger(__name__)

DERIVED_ZONE_PREFIX = "zone-from-"
DEFAULT_SUBMITTER = "User"


class EntityKind(str, Enum):
    REPORTS = "reports"
    RESOURCES = "resources"
    ZONES = "zones"


StoreListener = Callable[[FrozenSet[EntityKind]], None]
Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def derived_zone_id(report_id: str) -> str:
    return f"{DERIVED_ZONE_PREFIX}{report_id}"


def derived_zone_name(disaster_type: DisasterType) -> str:
    return translate("userReportedZoneName", type=disaster_type.value)


class DomainStore:

    def __init__(
        self,
        reports: Optional[List[Report]] = None,
        resources: Optional[List[Resource]] = None,
        zones: Optional[List[HazardZone]] = None,
        clock: Optional[Clock] = None,
        zone_radius: float = 500.0,
    ):
        self._reports: List[Report] = list(reports or [])
        self._resources: List[Resource] = list(resources or [])
        self._zones: List[HazardZone] = list(zones or [])
        self._derived_zones: Dict[str, str] = {}
        self._listeners: List[StoreListener] = []
        self._clock: Clock = clock or utcnow
        self.zone_radius = zone_radius

    @classmethod
    def seeded(cls, clock: Optional[Clock] = None, zone_radius: float = 500.0) -> "DomainStore":
        """Build a store pre-loaded with the reference reports, resources and zones."""
        now = (clock or utcnow)()
        store = cls(
            reports=seed_reports(now),
            resources=seed_resources(now),
            zones=seed_zones(now),
            clock=clock,
            zone_radius=zone_radius,
        )
        logger.info(
            f"Domain store seeded: {len(store._reports)} reports, "
            f"{len(store._resources)} resources, {len(store._zones)} zones"
        )
        return store

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def reports(self) -> List[Report]:
        """Reports, most recent first."""
        return list(self._reports)

    @property
    def resources(self) -> List[Resource]:
        return list(self._resources)

    @property
    def zones(self) -> List[HazardZone]:
        return list(self._zones)

    def get_report(self, report_id: str) -> Optional[Report]:
        index = self._report_index(report_id)
        return self._reports[index] if index is not None else None

    def get_zone(self, zone_id: str) -> Optional[HazardZone]:
        index = self._zone_index(zone_id)
        return self._zones[index] if index is not None else None

    def get_resource(self, resource_id: str) -> Optional[Resource]:
        for resource in self._resources:
            if resource.id == resource_id:
                return resource
        return None

    def derived_zone_id_for(self, report_id: str) -> Optional[str]:
        return self._derived_zones.get(report_id)

    def is_derived_zone(self, zone_id: str) -> bool:
        return zone_id in self._derived_zones.values()

    def snapshot(self) -> Dict:
        """Plain-data copy of the whole store (used for comparisons and debugging)."""
        return {
            "reports": [r.model_dump() for r in self._reports],
            "resources": [r.model_dump() for r in self._resources],
            "zones": [z.model_dump() for z in self._zones],
            "derived_zones": dict(self._derived_zones),
        }

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_report(self, data: ReportCreate) -> Report:
        """
        Commit a new submission.

        Assigns id, timestamp, status NEW and the submitter label, fills in
        the type's default photo and the region coordinate when missing, then
        prepends the report. A resolvable coordinate also yields a derived
        MEDIUM zone, prepended to the zones.
        """
        now = self._clock()
        location = data.location
        if location is None and data.location_text:
            location = resolve_region(data.location_text)

        report = Report(
            id=self._new_report_id(now),
            type=data.type,
            description=data.description,
            location=location,
            location_text=data.location_text,
            photo_url=data.photo_url or default_image_for(data.type),
            contact=data.contact,
            timestamp=now,
            status=ReportStatus.NEW,
            submitter=DEFAULT_SUBMITTER,
        )
        self._reports.insert(0, report)
        changed = {EntityKind.REPORTS}

        if location is not None:
            zone = HazardZone(
                id=derived_zone_id(report.id),
                name=derived_zone_name(report.type),
                type=report.type,
                area=CircleArea(center=location, radius=self.zone_radius),
                severity=Severity.MEDIUM,
                last_updated=now,
                description=translate("userReportedZoneDescription", type=report.type.value),
            )
            self._zones.insert(0, zone)
            self._derived_zones[report.id] = zone.id
            changed.add(EntityKind.ZONES)
            logger.info(f"Derived zone {zone.id} created at ({location.lat}, {location.lng})")
        else:
            logger.info(f"Report {report.id} has no resolvable location, no zone derived")

        self._check_derived_zones()
        logger.info(f"✅ Report {report.id} committed ({report.type.value})")
        self._notify(changed)
        return report

    def update_report_status(self, report_id: str, status: ReportStatus) -> None:
        """
        Operator status change.

        DUPLICATE deletes the report's derived zone, VERIFIED escalates it to
        HIGH and marks its name as verified; any other status leaves the zone
        alone. Setting the status a report already has changes nothing.
        """
        index = self._report_index(report_id)
        if index is None:
            logger.debug(f"Status update ignored, unknown report {report_id}")
            return

        report = self._reports[index]
        if report.status == status:
            return

        original_type = report.type
        self._reports[index] = report.model_copy(update={"status": status})
        changed = {EntityKind.REPORTS}

        zone_id = self._derived_zones.get(report_id)
        zone_index = self._zone_index(zone_id) if zone_id else None
        if zone_index is not None:
            if status == ReportStatus.DUPLICATE:
                del self._zones[zone_index]
                del self._derived_zones[report_id]
                changed.add(EntityKind.ZONES)
                logger.info(f"Derived zone {zone_id} removed (report marked duplicate)")
            elif status == ReportStatus.VERIFIED:
                zone = self._zones[zone_index]
                self._zones[zone_index] = zone.model_copy(update={
                    "severity": Severity.HIGH,
                    "name": f"{derived_zone_name(original_type)} ({translate('verified')})",
                    "last_updated": self._clock(),
                })
                changed.add(EntityKind.ZONES)
                logger.info(f"Derived zone {zone_id} escalated to High (report verified)")

        self._check_derived_zones()
        logger.info(f"✅ Report {report_id} status: {report.status.value} → {status.value}")
        self._notify(changed)

    def escalate_zone_severity(self, zone_id: str, severity: Severity) -> None:
        """Administrative severity change for any zone. Unknown ids are ignored."""
        index = self._zone_index(zone_id)
        if index is None:
            logger.debug(f"Severity update ignored, unknown zone {zone_id}")
            return
        zone = self._zones[index]
        if zone.severity == severity:
            return
        self._zones[index] = zone.model_copy(update={"severity": severity, "last_updated": self._clock()})
        logger.info(f"Zone {zone_id} severity: {zone.severity.value} → {severity.value}")
        self._notify({EntityKind.ZONES})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_report_id(self, now: datetime) -> str:
        alphabet = string.digits + string.ascii_lowercase
        while True:
            suffix = "".join(random.choices(alphabet, k=5))
            candidate = f"report-{int(now.timestamp() * 1000)}-{suffix}"
            if self._report_index(candidate) is None:
                return candidate

    def _report_index(self, report_id: str) -> Optional[int]:
        for i, report in enumerate(self._reports):
            if report.id == report_id:
                return i
        return None

    def _zone_index(self, zone_id: str) -> Optional[int]:
        for i, zone in enumerate(self._zones):
            if zone.id == zone_id:
                return i
        return None

    def _check_derived_zones(self) -> bool:
        """Each derived zone must exist exactly once. Violations are logged, listeners still run."""
        zone_ids = [z.id for z in self._zones]
        consistent = True
        for report_id, zone_id in self._derived_zones.items():
            count = zone_ids.count(zone_id)
            if count != 1:
                logger.error(f"Derived zone {zone_id} for report {report_id} found {count} times, expected once")
                consistent = False
        return consistent

    def _notify(self, changed) -> None:
        kinds = frozenset(changed)
        for listener in list(self._listeners):
            try:
                listener(kinds)
            except Exception as e:
                logger.error(f"Store listener failed for {sorted(k.value for k in kinds)}: {e}", exc_info=True)
