"""
Matches API Routes

GET /today always answers 200: upstream failures are reported through the
`error` field of a placeholder payload, never as an HTTP error status.
"""
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse

from phoenix.application.dtos.dtos import (
    ErrorResponseDTO,
    FlatMatchDTO,
    TeamStatsDTO,
    TodayResponseDTO,
)
from phoenix.application.use_cases.use_cases import (
    GetTeamStatsUseCase,
    GetTodayPredictionsUseCase,
    flatten_matches,
)
from phoenix.api.dependencies import get_team_stats_use_case, get_today_use_case
from phoenix.domain.constants import ERROR_BACKEND_FETCH_FAILED
from phoenix.domain.exceptions import DataSourceNotConfiguredError, UpstreamFetchError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/today",
    response_model=None,
    responses={200: {"model": TodayResponseDTO}},
    tags=["Matches"],
    summary="Today's matches with predictions",
    description="All fixtures of the current day (service timezone) grouped by league, "
                "each with last-10 form, squad status and prediction. Cached for a day.",
)
async def get_today(
    q: Optional[str] = Query(None, description="Filter on team or league name (case-insensitive)"),
    use_case: GetTodayPredictionsUseCase = Depends(get_today_use_case),
) -> JSONResponse:
    payload = await use_case.execute(search=q)
    return JSONResponse(content=payload)


@router.get(
    "/matches/today",
    response_model=List[FlatMatchDTO],
    response_model_by_alias=True,
    tags=["Matches"],
    summary="Today's matches as a flat list",
)
async def get_matches_today(
    use_case: GetTodayPredictionsUseCase = Depends(get_today_use_case),
) -> List[FlatMatchDTO]:
    payload = await use_case.execute()
    return flatten_matches(payload)


@router.get(
    "/team/{team_id}/stats",
    response_model=TeamStatsDTO,
    response_model_by_alias=True,
    responses={
        502: {"model": ErrorResponseDTO, "description": "Upstream provider failure"},
        503: {"model": ErrorResponseDTO, "description": "No API key configured"},
    },
    tags=["Teams"],
    summary="Team totals over the last 10 fixtures",
)
async def get_team_stats(
    team_id: str = Path(..., description="Upstream team identifier"),
    use_case: GetTeamStatsUseCase = Depends(get_team_stats_use_case),
):
    try:
        return await use_case.execute(team_id)
    except DataSourceNotConfiguredError as e:
        return JSONResponse(
            status_code=503,
            content=ErrorResponseDTO(error="not_configured", message=str(e)).model_dump(),
        )
    except UpstreamFetchError as e:
        logger.error(f"Error fetching team stats for {team_id}: {e}")
        return JSONResponse(
            status_code=502,
            content=ErrorResponseDTO(
                error=ERROR_BACKEND_FETCH_FAILED,
                message="Failed to fetch team stats",
                details={"team_id": team_id, "status_code": e.status_code},
            ).model_dump(),
        )
