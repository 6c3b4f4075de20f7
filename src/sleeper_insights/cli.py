"""Command-line interface for the Sleeper league dashboard."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .analyzer.api import build_text_generator
from .analyzer.cache import AnalysisCache
from .analyzer.models import AnalysisResult
from .analyzer.orchestrator import AnalysisOrchestrator
from .config import Settings, load_settings
from .dashboard import Dashboard
from .errors import ConfigurationError, DashboardError
from .report import render_analysis, render_matchups, render_roster, render_standings
from .sleeper import MAX_WEEK, MIN_WEEK, SleeperClient

logger = logging.getLogger(__name__)


def _week(value: str) -> int:
    week = int(value)
    if not MIN_WEEK <= week <= MAX_WEEK:
        raise argparse.ArgumentTypeError(
            f"week must be between {MIN_WEEK} and {MAX_WEEK}"
        )
    return week


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sleeper-insights",
        description="Sleeper fantasy league standings, matchups and rosters with AI insights",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Read configuration from this .env file (default: ./.env)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_output_flags(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--refresh",
            action="store_true",
            help="Ignore any cached analysis and ask the model again",
        )
        sub.add_argument(
            "--json",
            action="store_true",
            help="Print JSON instead of markdown",
        )

    standings_parser = subparsers.add_parser(
        "standings", help="League standings with an AI league overview"
    )
    add_output_flags(standings_parser)

    matchups_parser = subparsers.add_parser(
        "matchups", help="Weekly matchups with AI analysis"
    )
    matchups_parser.add_argument(
        "--week", type=_week, required=True, help=f"Week number ({MIN_WEEK}-{MAX_WEEK})"
    )
    matchups_parser.add_argument(
        "--detail",
        type=int,
        default=None,
        metavar="MATCHUP_ID",
        help="Analyze a single matchup in depth (always refreshes)",
    )
    add_output_flags(matchups_parser)

    team_parser = subparsers.add_parser(
        "team", help="Roster breakdown and AI analysis for one team"
    )
    team_parser.add_argument("name", help="Team or owner name (substring match)")
    add_output_flags(team_parser)

    cache_parser = subparsers.add_parser("cache", help="Manage the analysis cache")
    cache_parser.add_argument("action", choices=["clear"], help="Cache action")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _analysis_payload(result: AnalysisResult) -> dict[str, Any]:
    return result.to_wire()


async def _standings(dashboard: Dashboard, args: argparse.Namespace) -> None:
    overview = await dashboard.league_overview(force_refresh=args.refresh)
    if args.json:
        _print_json(
            {
                "league": overview.league.model_dump(mode="json"),
                "standings": [asdict(row) for row in overview.standings],
                "analysis": _analysis_payload(overview.analysis),
            }
        )
        return
    print(render_standings(overview.league, overview.standings))
    print()
    print(render_analysis(overview.analysis, "League Overview"))


async def _matchups(dashboard: Dashboard, args: argparse.Namespace) -> None:
    if args.detail is not None:
        # A detail view always asks the model again.
        detail = await dashboard.matchup_detail(args.week, args.detail)
        if args.json:
            _print_json(
                {
                    "week": detail.week,
                    "matchup": asdict(detail.summary),
                    "analysis": _analysis_payload(detail.analysis),
                }
            )
            return
        print(render_matchups(detail.week, [detail.summary]))
        print()
        print(render_analysis(detail.analysis, detail.label))
        return

    week = await dashboard.week_matchups(args.week, force_refresh=args.refresh)
    if args.json:
        _print_json(
            {
                "week": week.week,
                "matchups": [asdict(item) for item in week.matchups],
                "analysis": _analysis_payload(week.analysis),
            }
        )
        return
    print(render_matchups(week.week, week.matchups))
    print()
    print(render_analysis(week.analysis, f"Week {week.week} Analysis"))


async def _team(dashboard: Dashboard, args: argparse.Namespace) -> None:
    detail = await dashboard.team_detail(args.name, force_refresh=args.refresh)
    if args.json:
        _print_json(
            {
                "roster": asdict(detail.roster),
                "analysis": _analysis_payload(detail.analysis),
            }
        )
        return
    print(render_roster(detail.roster))
    print()
    print(render_analysis(detail.analysis, detail.label))


_HANDLERS: dict[str, Callable[[Dashboard, argparse.Namespace], Awaitable[None]]] = {
    "standings": _standings,
    "matchups": _matchups,
    "team": _team,
}


async def _run_dashboard(settings: Settings, args: argparse.Namespace) -> None:
    cache = AnalysisCache(settings.cache_dir)
    async with (
        SleeperClient(
            settings.league_id,
            draft_id=settings.draft_id,
            timeout=settings.request_timeout,
        ) as sleeper,
        build_text_generator(settings) as generator,
    ):
        orchestrator = AnalysisOrchestrator(
            generator, cache, league_notes=settings.league_notes
        )
        await _HANDLERS[args.command](Dashboard(sleeper, orchestrator), args)
        logger.debug("Analysis source: %s", orchestrator.last_source)


def _run_cache(settings: Settings, args: argparse.Namespace) -> int:
    if args.action == "clear":
        removed = AnalysisCache(settings.cache_dir).clear()
        print(f"Removed {removed} cached analyses from {settings.cache_dir}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = load_settings(env_file=args.env_file)
        if args.command == "cache":
            return _run_cache(settings, args)
        if args.command not in _HANDLERS:
            parser.error(f"Unknown command {args.command}")
        if not settings.ai_api_key:
            logger.warning(
                "No %s API key configured; AI analysis will use fallback content",
                settings.ai_provider,
            )
        asyncio.run(_run_dashboard(settings, args))
    except (ConfigurationError, DashboardError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - entry point
    raise SystemExit(main())
