#!/usr/bin/env python3
"""
Prediction Runner Script

Runs the daily pipeline (fetch -> group -> enrich -> predict) for a date and
prints the predictions. With --warm the payload is also written to the
daily cache (useful with Redis configured, so the API starts warm).
"""
import sys
import os
import asyncio
import argparse
import json
import logging
from datetime import datetime

# Add parent directory to path to import the phoenix package
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from phoenix.api.dependencies import get_api_football, get_cache_service
from phoenix.application.use_cases.use_cases import GetTodayPredictionsUseCase, filter_payload
from phoenix.config import get_settings
from phoenix.utils.time_utils import get_current_time, get_timezone

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def parse_date(value: str):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def run_time(tz_name: str, day=None) -> datetime:
    """Current wall clock, moved onto `day` when one is requested."""
    now = get_current_time(tz_name)
    if day is None:
        return now
    return get_timezone(tz_name).localize(datetime.combine(day, now.time()))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Print football predictions for a day")
    parser.add_argument("--date", type=parse_date, help="Date in YYYY-MM-DD format (default: today in APP_TIMEZONE)")
    parser.add_argument("--search", help="Only matches whose team or league name contains this")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON payload")
    parser.add_argument("--warm", action="store_true", help="Store the payload in the daily cache")
    return parser.parse_args(argv)


def print_payload(payload: dict):
    for league in payload.get("leagues", []):
        print(f"\n{league['name']} ({league['country']})")
        for match in league.get("matches", []):
            p = match.get("prediction") or {}
            outcome = p.get("outcomeProbabilities") or {}
            print(
                f"  {match['time']}  {match['homeTeam']['name']} vs {match['awayTeam']['name']}"
                f"  ->  {p.get('predictedScoreline', '-')}"
                f"  [{outcome.get('home', '-')}/{outcome.get('draw', '-')}/{outcome.get('away', '-')}]"
                f"  {p.get('confidence', '')}"
            )


async def main(argv=None):
    args = parse_args(argv)
    settings = get_settings()

    api_football = get_api_football()
    if not api_football.is_configured:
        logger.error("API_FOOTBALL_KEY is not set. Exiting.")
        return 1

    now = run_time(settings.timezone, args.date)
    date_str = now.strftime("%Y-%m-%d")

    cache = get_cache_service()
    use_case = GetTodayPredictionsUseCase(api_football=api_football, cache=cache, tz_name=settings.timezone)

    logger.info(f"Running predictions for {date_str}")
    payload = (await use_case.build_payload(date_str, now)).to_payload()
    logger.info(f"Upstream requests: {api_football.request_count}")

    if args.warm:
        cache.set_today(date_str, payload)
        logger.info(f"Cached payload under {cache.today_key(date_str)}")

    payload = filter_payload(payload, args.search)
    if args.json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_payload(payload)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
