"""
Unit Tests for the prefetch scheduler
"""

import asyncio
from unittest.mock import patch

from phoenix.config import AppSettings
from phoenix.infrastructure.cache.cache_service import DailyCache
from phoenix.scheduler import PrefetchScheduler
from phoenix.utils.time_utils import get_today_str


class TestPrefetchJob:
    def test_prefetch_warms_cache(self, strong_vs_weak_source):
        settings = AppSettings(api_football_key="key", timezone="Africa/Casablanca")
        cache = DailyCache()

        with patch("phoenix.api.dependencies.get_api_football", return_value=strong_vs_weak_source), \
             patch("phoenix.api.dependencies.get_cache_service", return_value=cache):
            asyncio.run(PrefetchScheduler(settings).run_prefetch_job())

        assert cache.get_today(get_today_str(settings.timezone)) is not None
        assert strong_vs_weak_source.calls["get_daily_fixtures"] == 1

    def test_overlapping_run_is_skipped(self, strong_vs_weak_source):
        scheduler = PrefetchScheduler(AppSettings(api_football_key="key"))
        scheduler._job_in_progress = True

        with patch("phoenix.api.dependencies.get_api_football", return_value=strong_vs_weak_source):
            asyncio.run(scheduler.run_prefetch_job())

        assert strong_vs_weak_source.calls["get_daily_fixtures"] == 0
