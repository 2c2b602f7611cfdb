"""Helpers for presenting ranked matches."""

from typing import Dict, List, Sequence

from .models import MatchScore


def build_match_payload(score: MatchScore) -> Dict:
    """Build a JSON-ready dict for one ranked match.

    Returns:
        Dict with keys:
        - title: Service title
        - description: Service description
        - score: Total points (0..100)
        - label: "<score>% match"
        - breakdown: Component points
        - skills: Sorted candidate skills
    """
    candidate = score.candidate
    return {
        "title": candidate.title,
        "description": candidate.description,
        "score": score.total,
        "label": score.percent_label,
        "breakdown": score.breakdown.to_dict(),
        "skills": sorted(candidate.skill_set),
    }


def format_match_summary(scores: Sequence[MatchScore]) -> str:
    """Render ranked matches as a plain-text "Top Matches" list."""
    if not scores:
        return "Top Matches\n  (no matching services)"

    lines: List[str] = ["Top Matches"]
    for position, score in enumerate(scores, start=1):
        lines.append(f"  {position}. {score.candidate.title} - {score.percent_label}")
        if score.candidate.description:
            lines.append(f"     {score.candidate.description}")
    return "\n".join(lines)
