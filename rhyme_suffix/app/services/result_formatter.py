"""Result formatting helpers for suffix searches."""

from __future__ import annotations

from typing import List, Sequence

from .search_service import SearchResult

NO_MATCHES_MESSAGE = (
    "No matches found (or the site changed its markup / is blocking automation)."
)


def format_union(words: Sequence[str]) -> str:
    """Render the union as the single comma-separated output line."""

    return ", ".join(words)


def format_no_matches() -> str:
    return NO_MATCHES_MESSAGE


def format_markdown(result: SearchResult) -> str:
    """Render per-suffix rankings and the union for the web UI."""

    if not result.outcomes:
        return "Enter at least one suffix to search for rhymes."

    lines: List[str] = []
    for outcome in result.outcomes:
        lines.append(f"#### -{outcome.suffix}")
        if outcome.failed:
            lines.append(f"_Query failed: {outcome.error}_")
        elif not outcome.ranked:
            lines.append("_No matches._")
        else:
            if outcome.carrier and outcome.carrier != outcome.suffix:
                lines.append(f"_Searched as `{outcome.carrier}`_")
            lines.append(", ".join(f"`{word}`" for word in outcome.ranked))
        lines.append("")

    lines.append("### Combined")
    lines.append(format_union(result.union) if result.has_matches else NO_MATCHES_MESSAGE)
    return "\n".join(lines)


__all__ = ["NO_MATCHES_MESSAGE", "format_union", "format_no_matches", "format_markdown"]
