from __future__ import annotations
from typing import Dict
from collections import Counter
import math
from .datatypes import Document, SummaryBudget, TermStats

MIN_AVG_SENTENCE_CHARS = 85

def _compute_frequencies(doc: Document):
    freq: Counter = Counter()
    sentence_counts: Counter = Counter()
    for s in doc.sentences:
        freq.update(s.tokens)
        sentence_counts.update(set(s.tokens))
    return dict(freq), dict(sentence_counts)

def _compute_isf(sentence_counts: Dict[str, int], n: int) -> Dict[str, float]:
    """
    Inverse sentence frequency, each sentence is one 'document':
      isf(t) = ln(1 + N / (1 + SF(t)))
    A single sentence has nothing to contrast against, so no weights are produced
    and callers fall back to 1.0.
    """
    if n <= 1:
        return {}
    return {t: math.log(1.0 + n / (1.0 + c)) for t, c in sentence_counts.items()}

def compute_term_stats(doc: Document) -> TermStats:
    n = len(doc.sentences)
    freq, sentence_counts = _compute_frequencies(doc)
    weights = _compute_isf(sentence_counts, n)
    avg_tokens = sum(len(s.tokens) for s in doc.sentences) / n if n else 0.0
    avg_chars = sum(len(s.text) for s in doc.sentences) / n if n else 0.0
    return TermStats(frequency=freq, sentence_counts=sentence_counts, weights=weights,
                     avg_tokens=avg_tokens, avg_chars=avg_chars)

def desired_sentence_count(doc: Document, stats: TermStats, budget: SummaryBudget) -> int:
    # one extra sentence over the raw estimate favours coverage at the margin
    n = len(doc.sentences)
    avg = stats.avg_chars or budget.max_length
    estimate = math.ceil(budget.max_length / max(avg, MIN_AVG_SENTENCE_CHARS))
    target = min(budget.sentence_count_max, (estimate or budget.sentence_count_min) + 1)
    return min(n, max(budget.sentence_count_min, target))
