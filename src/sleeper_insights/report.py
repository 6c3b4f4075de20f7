"""Markdown rendering for dashboard views and AI analysis."""

from __future__ import annotations

from collections.abc import Sequence

from .analyzer.models import AnalysisResult
from .types import League
from .views import MatchupSummary, RosterLine, RosterView, StandingRow


def render_analysis(result: AnalysisResult, title: str = "AI Analysis") -> str:
    """Summary, insight and recommendation bullets, then ``Confidence: n/10``."""
    lines = [f"## {title}\n", result.summary, "", "### Key Insights\n"]
    lines.extend(f"- {insight}" for insight in result.key_insights)
    lines.append("\n### Recommendations\n")
    lines.extend(f"- {rec}" for rec in result.recommendations)
    lines.append(f"\n*Confidence: {result.confidence}/10*")
    return "\n".join(lines)


def render_standings(league: League | None, rows: Sequence[StandingRow]) -> str:
    """League heading followed by a rank/team/points table."""
    heading = f"# {league.name} ({league.season})" if league else "# Standings"
    lines = [heading, ""]
    if league:
        lines.append(f"*{league.total_rosters} teams - status: {league.status}*\n")
    if not rows:
        lines.append("No rosters found.")
        return "\n".join(lines)

    lines.append("| Rank | Team | Points |")
    lines.append("|------|------|--------|")
    for row in rows:
        lines.append(f"| {row.rank} | {row.team_name} | {row.total_points:.1f} |")
    return "\n".join(lines)


def render_matchups(week: int, summaries: Sequence[MatchupSummary]) -> str:
    """One bullet per pairing with both scores and the current leader."""
    lines = [f"# Week {week} Matchups", ""]
    if not summaries:
        lines.append("No matchups scheduled.")
        return "\n".join(lines)

    for item in summaries:
        lines.append(
            f"- **#{item.matchup_id}** {item.team1} ({item.team1_points:.1f}) vs "
            f"{item.team2} ({item.team2_points:.1f}) - {item.leader} leads"
        )
    return "\n".join(lines)


def _render_line(line: RosterLine) -> str:
    injury = f" [{line.injury_status}]" if line.injury_status else ""
    return (
        f"- {line.name} ({line.position}, {line.team}){injury}: "
        f"{line.points:.1f} pts"
    )


def render_roster(view: RosterView) -> str:
    """Team heading, total points, then starter and bench lines."""
    lines = [f"# {view.team_name}", "", f"*Total points: {view.total_points:.1f}*", ""]
    lines.append("### Starters\n")
    lines.extend(_render_line(line) for line in view.starters)
    if not view.starters:
        lines.append("- none")
    lines.append("\n### Bench\n")
    lines.extend(_render_line(line) for line in view.bench)
    if not view.bench:
        lines.append("- none")
    return "\n".join(lines)


__all__ = [
    "render_analysis",
    "render_matchups",
    "render_roster",
    "render_standings",
]
