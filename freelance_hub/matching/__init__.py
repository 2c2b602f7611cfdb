"""Candidate matching for job postings.

This module provides:
- JobRequirements / ServiceCandidate: scoring inputs
- MatchScore / ScoreBreakdown: computed scores
- MatchingEngine: weighted scoring and stable top-k ranking
- Catalog loading and helpers for rendering ranked matches
"""

from .catalog import DEFAULT_CATALOG, load_catalog, parse_catalog
from .engine import MatchingEngine
from .models import JobRequirements, MatchScore, RateRange, ScoreBreakdown, ServiceCandidate
from .utils import build_match_payload, format_match_summary

__all__ = [
    "MatchingEngine",
    "JobRequirements",
    "ServiceCandidate",
    "RateRange",
    "MatchScore",
    "ScoreBreakdown",
    "DEFAULT_CATALOG",
    "load_catalog",
    "parse_catalog",
    "build_match_payload",
    "format_match_summary",
]
