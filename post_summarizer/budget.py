"""
Length/model preference resolver.

Turns a coarse caller preference (concise | balanced | detailed) and the input
length into concrete character and sentence-count budgets for the summarizer.
"""
from __future__ import annotations
import math
from typing import Optional, Tuple
from .datatypes import SummaryBudget

MIN_SUMMARY_LENGTH = 30
MAX_SUMMARY_LENGTH = 560
DEFAULT_PREFERENCE = "balanced"

# preference -> (max_ratio, min_ratio)
LENGTH_PREFERENCES = {
    "concise":  (0.24, 0.50),
    "balanced": (0.35, 0.65),
    "detailed": (0.55, 0.80),
}

# preference -> (min sentences, max sentences)
SENTENCE_COUNTS = {
    "concise":  (2, 4),
    "balanced": (3, 5),
    "detailed": (4, 6),
}

def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

def _to_number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number

def _clamp(value, lo: int, hi: int) -> int:
    number = _to_number(value)
    if number is None:
        return lo
    return int(min(hi, max(lo, number)))

def resolve_length_preference(value) -> str:
    if not value:
        return DEFAULT_PREFERENCE
    s = str(value).strip().lower()
    return s if s in LENGTH_PREFERENCES else DEFAULT_PREFERENCE

def infer_length_preference(input_length: int, requested=None) -> str:
    """Pick a preference for callers that did not ask for one: short posts get detail, long ones get trimmed."""
    if requested:
        return resolve_length_preference(requested)
    if input_length <= 600:
        return "detailed"
    if input_length >= 1500:
        return "concise"
    return DEFAULT_PREFERENCE

def sentence_range(preference) -> Tuple[int, int]:
    return SENTENCE_COUNTS[resolve_length_preference(preference)]

def build_summary_budget(input_length: int,
                         preference: Optional[str] = None,
                         min_length=None,
                         max_length=None) -> SummaryBudget:
    """
    Resolve a SummaryBudget.

    Explicit min/max overrides bypass the ratio estimate but are still clamped
    to [MIN_SUMMARY_LENGTH, MAX_SUMMARY_LENGTH]. The result always satisfies
    max_length >= min_length + 5.
    """
    key = resolve_length_preference(preference)
    max_ratio, min_ratio = LENGTH_PREFERENCES[key]

    estimated_max = _clamp(_round_half_up(max(0, input_length or 0) * max_ratio),
                           MIN_SUMMARY_LENGTH, MAX_SUMMARY_LENGTH)
    max_len = _clamp(estimated_max if max_length is None else max_length,
                     MIN_SUMMARY_LENGTH, MAX_SUMMARY_LENGTH)

    default_min = _round_half_up(max_len * min_ratio)
    min_len = _clamp(default_min if min_length is None else min_length,
                     MIN_SUMMARY_LENGTH, max(MIN_SUMMARY_LENGTH, max_len - 10))
    final_max = max(min_len + 5, max_len)

    lo, hi = SENTENCE_COUNTS[key]
    return SummaryBudget(min_length=min_len, max_length=final_max,
                         sentence_count_min=lo, sentence_count_max=hi, preference=key)
