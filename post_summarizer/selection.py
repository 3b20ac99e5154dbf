from __future__ import annotations
from typing import List, Set
from .datatypes import ScoredSentence

def _cover_paragraphs(ranked: List[ScoredSentence], paragraph_count: int,
                      picked: Set[int], selected: List[ScoredSentence]) -> None:
    for p in range(paragraph_count):
        if any(e.paragraph == p for e in selected):
            continue
        best = next((e for e in ranked if e.paragraph == p), None)
        if best is not None and best.index not in picked:
            picked.add(best.index)
            selected.append(best)

def select_sentences(ranked: List[ScoredSentence],
                     paragraph_count: int,
                     desired: int,
                     min_count: int) -> List[ScoredSentence]:
    """
    Choose the sentences for a summary, returned in reading order.

    Every paragraph contributes its best sentence first, then the ranking fills
    up to `desired`, then up to `min_count` if the quota was still short.
    """
    picked: Set[int] = set()
    selected: List[ScoredSentence] = []

    _cover_paragraphs(ranked, paragraph_count, picked, selected)

    for e in ranked:
        if len(picked) >= desired:
            break
        if e.index not in picked:
            picked.add(e.index)
            selected.append(e)

    for e in ranked:
        if len(picked) >= min_count:
            break
        if e.index not in picked:
            picked.add(e.index)
            selected.append(e)

    return sorted(selected, key=lambda e: e.index)
