from __future__ import annotations
from typing import List, Optional, Tuple
from .datatypes import ScoredSentence, SummaryBudget
from .preprocessing import preprocess_text, normalize_whitespace
from .features import compute_term_stats, desired_sentence_count
from .scoring import score_sentences, rank_sentences
from .selection import select_sentences
from .budget import build_summary_budget

ELLIPSIS = "\u2026"

def truncate_summary(s: str, max_length: int) -> str:
    """Hard cut: keep max_length - 1 characters and mark the cut with an ellipsis."""
    if len(s) <= max_length:
        return s
    return s[:max(0, max_length - 1)].rstrip() + ELLIPSIS

def truncate_at_word_boundary(s: str, max_length: int) -> str:
    if len(s) <= max_length:
        return s.strip()
    clipped = s[:max(0, max_length)]
    i = clipped.rfind(" ")
    return (clipped if i <= 0 else clipped[:i]).strip()

class _Pieces:
    """Summary parts keyed by sentence position; a clipped sentence keeps its own position."""

    def __init__(self):
        self.parts: List[Tuple[int, str]] = []

    def __bool__(self):
        return bool(self.parts)

    def __len__(self):
        return len(self.text())

    def used(self, index: int) -> bool:
        return any(i == index for i, _ in self.parts)

    def add(self, index: int, text: str) -> None:
        self.parts.append((index, text))

    def text(self) -> str:
        return " ".join(t for _, t in sorted(self.parts))

def _place(pieces: _Pieces, e: ScoredSentence, max_length: int) -> bool:
    """Add `e` whole or clipped at a word boundary; False once nothing more fits."""
    sep = 1 if pieces else 0
    avail = max_length - len(pieces) - sep
    if avail <= 0:
        return False
    if len(e.sentence) <= avail:
        pieces.add(e.index, e.sentence)
        return True
    t = truncate_at_word_boundary(e.sentence, avail)
    if t:
        pieces.add(e.index, t)
    return False

def _assemble(selected: List[ScoredSentence], max_length: int) -> _Pieces:
    pieces = _Pieces()
    for e in selected:
        if not _place(pieces, e, max_length):
            break
    return pieces

def _backfill_min_length(pieces: _Pieces, ranked: List[ScoredSentence], budget: SummaryBudget) -> None:
    for e in ranked:
        if pieces.used(e.index) or e.sentence in pieces.text():
            continue
        if not _place(pieces, e, budget.max_length):
            break
        if len(pieces) >= budget.min_length:
            break

def generate_summary(selected: List[ScoredSentence],
                     ranked: List[ScoredSentence],
                     budget: SummaryBudget,
                     source_text: str) -> str:
    normalized = normalize_whitespace(source_text)
    pieces = _assemble(selected, budget.max_length)
    if not pieces:
        return truncate_summary(normalized, budget.max_length)

    if len(pieces) < budget.min_length:
        _backfill_min_length(pieces, ranked, budget)
    summary = pieces.text()

    if len(summary) < budget.min_length:
        # sparse input: pad from the source unless it is already all there
        padding = normalized[:budget.max_length]
        if padding and padding not in summary:
            summary = truncate_summary(f"{summary} {padding}".strip(), budget.max_length)
    return truncate_summary(summary.strip(), budget.max_length)

def summarize(text: str, budget: SummaryBudget) -> str:
    """
    Extractive summary of `text` within `budget`.

    Never raises for string input: empty text gives "", text without usable
    structure degrades to a truncated prefix of the normalised input.
    """
    if not text or not text.strip():
        return ""
    doc = preprocess_text(text)
    if not doc.sentences:
        return truncate_summary(normalize_whitespace(text), budget.max_length)

    stats = compute_term_stats(doc)
    desired = desired_sentence_count(doc, stats, budget)
    ranked = rank_sentences(score_sentences(doc, stats))
    selected = select_sentences(ranked, doc.paragraph_count, desired, budget.sentence_count_min)
    return generate_summary(selected, ranked, budget, text)

def summarize_text(text: str,
                   min_length: Optional[int] = None,
                   max_length: Optional[int] = None,
                   length_preference: Optional[str] = None) -> str:
    budget = build_summary_budget(len(text or ""), length_preference,
                                  min_length=min_length, max_length=max_length)
    return summarize(text, budget)
