import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from phoenix.config import AppSettings, get_settings
from phoenix.utils.time_utils import get_timezone

logger = logging.getLogger(__name__)


class PrefetchScheduler:
    """Prefetches the day's payload into the cache shortly after local midnight."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or get_settings()
        self.scheduler = AsyncIOScheduler(timezone=get_timezone(self.settings.timezone))
        self._job_in_progress = False

    async def run_prefetch_job(self):
        """Build today's payload once so the first visitor hits a warm cache."""
        if self._job_in_progress:
            logger.warning("Prefetch already in progress, skipping scheduled run")
            return

        # Imported lazily so the scheduler module does not pull in the API layer
        from phoenix.api.dependencies import (
            get_api_football,
            get_cache_service,
            get_prediction_service,
            get_squad_service,
            get_statistics_service,
        )
        from phoenix.application.use_cases.use_cases import GetTodayPredictionsUseCase

        try:
            self._job_in_progress = True
            use_case = GetTodayPredictionsUseCase(
                api_football=get_api_football(),
                cache=get_cache_service(),
                tz_name=self.settings.timezone,
                prediction_service=get_prediction_service(),
                statistics_service=get_statistics_service(),
                squad_service=get_squad_service(),
            )
            payload = await use_case.execute()
            if payload.get("error"):
                logger.warning(f"Prefetch finished with fallback payload: {payload['error']}")
            else:
                logger.info(f"Prefetch complete for {payload.get('serverDate')}")
        finally:
            self._job_in_progress = False

    def start(self, run_immediate: bool = True):
        """Start the scheduler (daily at 00:05 service time)."""
        self.scheduler.add_job(
            self.run_prefetch_job,
            CronTrigger(hour=0, minute=5),
            id="daily_prefetch",
            replace_existing=True,
        )
        if run_immediate:
            self.scheduler.add_job(self.run_prefetch_job, id="startup_prefetch")
        self.scheduler.start()
        logger.info(f"Prefetch scheduler started ({self.settings.timezone})")

    def shutdown(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)


_scheduler: Optional[PrefetchScheduler] = None


def get_scheduler() -> PrefetchScheduler:
    """Get the process-wide scheduler instance."""
    global _scheduler
    if _scheduler is None:
        _scheduler = PrefetchScheduler()
    return _scheduler
