"""Weighted scoring of service candidates against job requirements.

The score is a deterministic sum of four independently bounded components:

- skill (0..60): share of the required skills the candidate lists
- experience (20/10/5): same tier, at or below the required tier, above it
- budget (15/5): candidate rate range fully inside the job budget or not
- remote (5/0): remote requested and offered

Scoring and ranking do no I/O; the same inputs always give the same output.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from freelance_hub.logging import get_logger

from .models import JobRequirements, MatchScore, ScoreBreakdown, ServiceCandidate

logger = get_logger(__name__, component="matching")

SKILL_WEIGHT = 60
EXPERIENCE_EXACT = 20
EXPERIENCE_AT_OR_BELOW = 10
EXPERIENCE_ABOVE = 5
BUDGET_FIT = 15
BUDGET_MISS = 5
REMOTE_FIT = 5
MAX_TOTAL = 100
DEFAULT_TOP_K = 3


class MatchingEngine:
    """Scores and ranks service candidates for a job."""

    def __init__(self, logger_instance: logging.LoggerAdapter = None):
        self.logger = logger_instance or logger

    def score(self, requirements: JobRequirements, candidate: ServiceCandidate) -> MatchScore:
        """Score one candidate.

        Args:
            requirements: What the job asks for
            candidate: Service offering to evaluate

        Returns:
            MatchScore with total in [0, 100] and its breakdown
        """
        breakdown = ScoreBreakdown(
            skill=self._skill_points(requirements, candidate),
            experience=self._experience_points(requirements, candidate),
            budget=self._budget_points(requirements, candidate),
            remote=REMOTE_FIT if requirements.remote and candidate.remote_capable else 0,
        )
        total = min(
            MAX_TOTAL,
            breakdown.skill + breakdown.experience + breakdown.budget + breakdown.remote,
        )
        return MatchScore(candidate=candidate, total=total, breakdown=breakdown)

    def rank(
        self,
        requirements: JobRequirements,
        candidates: Sequence[ServiceCandidate],
        top_k: int = DEFAULT_TOP_K,
    ) -> List[MatchScore]:
        """Score every candidate and return the best top_k, highest first.

        Candidates with equal totals keep their input order.

        Raises:
            ValueError: If top_k is negative
        """
        if top_k < 0:
            raise ValueError(f"top_k must be >= 0, got {top_k}")

        scores = [self.score(requirements, candidate) for candidate in candidates]
        # sorted() is stable, so ties keep input order
        ranked = sorted(scores, key=lambda s: s.total, reverse=True)[:top_k]

        self.logger.debug(
            f"Ranked {len(scores)} candidates",
            extra={
                "event": "matching.ranked",
                "candidates": len(scores),
                "returned": len(ranked),
                "top_total": ranked[0].total if ranked else None,
            },
        )
        return ranked

    @staticmethod
    def _skill_points(requirements: JobRequirements, candidate: ServiceCandidate) -> int:
        overlap = len(requirements.skill_set & candidate.skill_set)
        share = Decimal(overlap) / Decimal(max(1, len(requirements.skill_set)))
        points = (share * SKILL_WEIGHT).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return min(SKILL_WEIGHT, int(points))

    @staticmethod
    def _experience_points(requirements: JobRequirements, candidate: ServiceCandidate) -> int:
        if candidate.experience_level == requirements.experience_level:
            return EXPERIENCE_EXACT
        if candidate.experience_level.rank <= requirements.experience_level.rank:
            return EXPERIENCE_AT_OR_BELOW
        return EXPERIENCE_ABOVE

    @staticmethod
    def _budget_points(requirements: JobRequirements, candidate: ServiceCandidate) -> int:
        if candidate.rate_range.within(requirements.budget_min, requirements.budget_max):
            return BUDGET_FIT
        return BUDGET_MISS
