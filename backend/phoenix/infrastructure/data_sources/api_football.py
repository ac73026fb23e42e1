"""
API-Football Data Source

This module integrates with API-Football (api-football.com) for the day's
fixtures, team form, injuries and league top scorers.

API Documentation: https://www.api-football.com/documentation-v3
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from phoenix.domain.exceptions import DataSourceNotConfiguredError, UpstreamFetchError


logger = logging.getLogger(__name__)


@dataclass
class APIFootballConfig:
    """Configuration for API-Football."""
    api_key: Optional[str] = None
    base_url: str = "https://v3.football.api-sports.io"
    timeout: float = 30
    timezone: Optional[str] = None
    transport: Optional[httpx.AsyncBaseTransport] = None

    def __post_init__(self):
        # Try to get API key from environment if not provided
        if self.api_key is None:
            self.api_key = os.getenv("API_FOOTBALL_KEY")


class APIFootballSource:
    """
    Data source for API-Football.

    Every call returns the upstream `response` list as raw JSON dicts.
    Failures are raised, not swallowed: the caller decides how to degrade.
    No retries and no rate-limit handling.
    """

    def __init__(self, config: Optional[APIFootballConfig] = None):
        """Initialize the data source."""
        self.config = config or APIFootballConfig()
        self._request_count = 0

    @property
    def is_configured(self) -> bool:
        """Check if API key is configured."""
        return bool(self.config.api_key)

    @property
    def request_count(self) -> int:
        return self._request_count

    async def _make_request(
        self,
        endpoint: str,
        params: Optional[dict] = None,
    ) -> list:
        """
        Make authenticated request to API-Football.

        Args:
            endpoint: API endpoint (e.g., "/fixtures")
            params: Query parameters

        Returns:
            The `response` list of the JSON body (empty list if absent)

        Raises:
            DataSourceNotConfiguredError: no API key
            UpstreamFetchError: network error, non-2xx status or API errors
        """
        if not self.is_configured:
            raise DataSourceNotConfiguredError("API-Football not configured (no API key)")

        url = f"{self.config.base_url}{endpoint}"
        headers = {
            "x-apisports-key": self.config.api_key,
        }

        try:
            async with httpx.AsyncClient(transport=self.config.transport) as client:
                response = await client.get(
                    url,
                    headers=headers,
                    params=params,
                    timeout=self.config.timeout,
                )
                self._request_count += 1
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"API-Football HTTP error on {endpoint}: {e}")
            raise UpstreamFetchError(
                f"API-Football returned {e.response.status_code} for {endpoint}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"API-Football request error on {endpoint}: {e}")
            raise UpstreamFetchError(f"API-Football request failed for {endpoint}: {e}") from e
        except ValueError as e:
            logger.error(f"API-Football returned invalid JSON on {endpoint}: {e}")
            raise UpstreamFetchError(f"API-Football returned invalid JSON for {endpoint}") from e

        if not isinstance(data, dict):
            raise UpstreamFetchError(f"API-Football returned an unexpected body for {endpoint}")

        # API-Football reports plan/key problems with HTTP 200 and an `errors` field
        if data.get("errors"):
            logger.error(f"API-Football error: {data['errors']}")
            raise UpstreamFetchError(f"API-Football error for {endpoint}: {data['errors']}")

        return data.get("response") or []

    async def get_daily_fixtures(self, date_str: str) -> list[dict]:
        """
        Get all fixtures for a calendar date globally.

        Args:
            date_str: Date in "YYYY-MM-DD" format

        Returns:
            Raw fixture dicts
        """
        params = {"date": date_str}
        if self.config.timezone:
            params["timezone"] = self.config.timezone

        fixtures = await self._make_request("/fixtures", params)
        logger.info(f"API-Football: {len(fixtures)} fixtures on {date_str}")
        return fixtures

    async def get_team_last_fixtures(self, team_id: str, last: int = 10) -> list[dict]:
        """Get a team's most recent fixtures."""
        return await self._make_request("/fixtures", {
            "team": team_id,
            "last": last,
        })

    async def get_fixture_injuries(self, fixture_id: str) -> list[dict]:
        """Get injured/suspended players reported for a fixture (both teams)."""
        return await self._make_request("/injuries", {"fixture": fixture_id})

    async def get_top_scorers(self, league_id: str, season: Optional[int]) -> list[dict]:
        """
        Get the league's top scorer list.

        Without a season the provider cannot answer, so an empty list is returned.
        """
        if not league_id or season is None:
            return []
        return await self._make_request("/players/topscorers", {
            "league": league_id,
            "season": season,
        })
