"""Client-side record of the jobs the user has applied to.

Ids only ever enter the set from a successful apply call or from the
"my applications" endpoint. Nothing removes them within a session.
"""

import logging

from src.api.jobs import JobService
from src.core.errors import ApiError, SessionError
from src.core.schemas import ApplicationRecord, ApplicationRequest

logger = logging.getLogger(__name__)


class ApplicationTracker:
    """Gates the Apply / Already Applied state of job cards."""

    def __init__(self, jobs: JobService) -> None:
        self._jobs = jobs
        self._applied: set[str] = set()
        self._pending: set[str] = set()
        self.records: dict[str, ApplicationRecord] = {}

    @property
    def applied_ids(self) -> frozenset[str]:
        return frozenset(self._applied)

    def is_applied(self, job_id: int | str) -> bool:
        return str(job_id) in self._applied

    async def sync(self) -> SessionError | None:
        """Merge the backend's list of my applications into the set."""
        try:
            records = await self._jobs.get_my_applications()
        except ApiError as e:
            logger.info("Could not fetch applied jobs: %s", e.message)
            return SessionError.from_exception(e)
        for record in records:
            if record.job_id:
                self._applied.add(record.job_id)
                self.records.setdefault(record.job_id, record)
        logger.debug("Tracking %d applied jobs", len(self._applied))
        return None

    async def apply(self, job_id: int | str, application: ApplicationRequest) -> SessionError | None:
        """Submit an application unless one exists or is already being sent."""
        key = str(job_id)
        if key in self._applied or key in self._pending:
            logger.debug("Job %s already applied or pending, ignoring", key)
            return None

        self._pending.add(key)
        try:
            record = await self._jobs.apply(job_id, application)
        except ApiError as e:
            logger.warning("Application to job %s failed: %s", key, e.message)
            return SessionError.from_exception(e)
        finally:
            self._pending.discard(key)

        self._applied.add(key)
        self.records[key] = record
        return None
