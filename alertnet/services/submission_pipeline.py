"""
Report Submission Pipeline.

Each submission walks Idle -> Submitting -> Committed (or Failed):
1. info notification + busy flag on
2. simulated processing delay
3. report committed to the domain store
4. busy flag off + success notification
5. best-effort voice confirmation and administrative SMS alert

DESIGN PRINCIPLES:
- Validation runs synchronously, before anything is scheduled
- Submissions are independent; there is no queue and no cancellation
- The busy flag is shared, the last submission to finish clears it
- Side channels run as detached tasks; their failures are logged only
- A commit failure marks the record Failed; only the newest records are kept
"""

import asyncio
import logging
import uuid
from collections import OrderedDict
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional, Set

from pydantic import BaseModel

from alertnet.core.messages import translate
from alertnet.models.base import NotificationType
from alertnet.models.report import Report, ReportCreate
from alertnet.services.alert_dispatch import SimulatedSmsDispatcher
from alertnet.services.domain_store import DomainStore, utcnow
from alertnet.services.notification_center import NotificationCenter
from alertnet.services.voice_announcer import VoiceAnnouncer

logger = logging.getLogger(__name__)


class SubmissionValidationError(ValueError):
    """Required submission fields are missing. The pipeline was not started."""


class SubmissionState(str, Enum):
    IDLE = "Idle"
    SUBMITTING = "Submitting"
    COMMITTED = "Committed"
    FAILED = "Failed"


class Submission(BaseModel):
    id: str
    state: SubmissionState = SubmissionState.IDLE
    report_id: Optional[str] = None
    created_at: datetime
    committed_at: Optional[datetime] = None
    error: Optional[str] = None


class ReportSubmissionPipeline:

    def __init__(
        self,
        store: DomainStore,
        notifications: NotificationCenter,
        set_busy: Callable[[bool], None],
        dispatcher: SimulatedSmsDispatcher,
        announcer: VoiceAnnouncer,
        recipient: str,
        delay_seconds: float = 10.0,
        max_submissions: int = 200,
    ):
        self.store = store
        self.notifications = notifications
        self.dispatcher = dispatcher
        self.announcer = announcer
        self.recipient = recipient
        self.delay_seconds = delay_seconds
        self._set_busy = set_busy
        self.max_submissions = max_submissions
        self._submissions: Dict[str, Submission] = OrderedDict()
        self._tasks: Set[asyncio.Task] = set()

    def validate(self, data: ReportCreate) -> None:
        """
        Form-level checks on top of model validation: type, description and
        region label are all required.
        """
        missing = []
        if data.type is None:
            missing.append("type")
        if not (data.description or "").strip():
            missing.append("description")
        if not (data.location_text or "").strip():
            missing.append("location_text")
        if missing:
            raise SubmissionValidationError(f"{translate('fillRequiredFields')} Missing: {', '.join(missing)}")

    def get_submission(self, submission_id: str) -> Optional[Submission]:
        return self._submissions.get(submission_id)

    def start(self, data: ReportCreate) -> Submission:
        """Validate and schedule a submission on the running loop. Returns immediately."""
        submission = self._new_submission(data)
        self._spawn(self._run(submission, data), f"submission-{submission.id}")
        return submission

    async def submit(self, data: ReportCreate) -> Report:
        """Validate and run a submission to completion."""
        submission = self._new_submission(data)
        return await self._run(submission, data)

    async def _run(self, submission: Submission, data: ReportCreate) -> Report:
        submission.state = SubmissionState.SUBMITTING
        self.notifications.show(translate("submittingReport"), NotificationType.INFO)
        self._set_busy(True)

        await asyncio.sleep(self.delay_seconds)

        try:
            report = self.store.add_report(data)
        except Exception as e:
            submission.state = SubmissionState.FAILED
            submission.error = str(e)
            self.notifications.show(translate("reportSubmissionFailed"), NotificationType.ERROR)
            logger.error(f"Submission {submission.id} failed to commit: {e}", exc_info=True)
            raise
        finally:
            self._set_busy(False)

        submission.state = SubmissionState.COMMITTED
        submission.report_id = report.id
        submission.committed_at = utcnow()
        self.notifications.show(translate("reportSubmittedMapSuccess"), NotificationType.SUCCESS)
        logger.info(f"✅ Submission {submission.id} committed as {report.id}")

        self._spawn(self.announcer.announce(translate("reportSubmittedVoiceConfirmation")), "voice-confirmation")
        self._spawn(self._alert_admin(report), f"admin-alert-{report.id}")
        return report

    async def _alert_admin(self, report: Report) -> None:
        try:
            await self.dispatcher.dispatch(report, self.recipient)
        finally:
            self.notifications.show(
                translate("adminSmsDispatched", phoneNumber=self.recipient, reportId=report.id)
                + translate("adminSmsSimulatedSuffix"),
                NotificationType.INFO,
            )

    def _new_submission(self, data: ReportCreate) -> Submission:
        self.validate(data)
        submission = Submission(id=uuid.uuid4().hex, created_at=utcnow())
        self._submissions[submission.id] = submission
        while len(self._submissions) > self.max_submissions:
            self._submissions.popitem(last=False)
        return submission

    def _spawn(self, coro, name: str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"⚠️ Background task {task.get_name()} failed: {error}", exc_info=error)

    async def drain(self) -> None:
        """Wait for every in-flight submission and side channel to settle."""
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                # let queued done-callbacks run
                await asyncio.sleep(0)
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
