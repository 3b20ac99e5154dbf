from __future__ import annotations
from typing import List
from .datatypes import Document, ScoredSentence, TermStats

RARE_WEIGHT = 1.5
RARE_BOOST = 0.6
MAX_LENGTH_PENALTY = 0.35

def _sentence_score(i: int, tokens: List[str], n: int, stats: TermStats) -> float:
    count = len(tokens)
    base = sum(stats.frequency.get(t, 0) for t in tokens)
    weighted = 0.0
    for t in tokens:
        w = stats.weights.get(t, 1.0)
        weighted += w + (w * RARE_BOOST if w > RARE_WEIGHT else 0.0)
    norm = (base * 0.6 + weighted * 1.4) / count
    diversity = 1 + (len(set(tokens)) / count) * 0.1

    avg = stats.avg_tokens
    length_penalty = 1 - min(MAX_LENGTH_PENALTY, abs(count - avg) / max(avg, 1)) if avg else 1.0

    # SP(Si): lead sentences get up to +10%, the closing sentence +5%
    position = 1 + max(0.0, 0.1 - i / n) + (0.05 if i == n - 1 else 0.0)
    return norm * diversity * length_penalty * position

def score_sentences(doc: Document, stats: TermStats) -> List[ScoredSentence]:
    n = len(doc.sentences)
    max_freq = max(stats.frequency.values(), default=0)
    scored: List[ScoredSentence] = []
    for s in doc.sentences:
        score = 0.0
        if s.tokens and max_freq > 0:
            score = _sentence_score(s.idx, s.tokens, n, stats)
        scored.append(ScoredSentence(sentence=s.text, index=s.idx, paragraph=s.paragraph, score=score))
    return scored

def rank_sentences(scored: List[ScoredSentence]) -> List[ScoredSentence]:
    """Best first, ties by reading order. All-zero scores keep reading order."""
    if all(e.score == 0 for e in scored):
        return list(scored)
    return sorted(scored, key=lambda e: (-e.score, e.index))
