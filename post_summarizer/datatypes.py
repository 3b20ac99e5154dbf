from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Optional

@dataclass
class Sentence:
    idx: int
    text: str
    paragraph: int = 0
    tokens: List[str] = field(default_factory=list)

@dataclass
class Document:
    raw_text: str
    sentences: List[Sentence]

    @property
    def paragraph_count(self) -> int:
        if not self.sentences:
            return 0
        return max(s.paragraph for s in self.sentences) + 1

@dataclass
class TermStats:
    frequency: Dict[str, int]
    sentence_counts: Dict[str, int]
    weights: Dict[str, float]  # rarity (idf) per token; empty for single-sentence docs
    avg_tokens: float
    avg_chars: float

@dataclass(frozen=True)
class ScoredSentence:
    sentence: str
    index: int
    paragraph: int
    score: float

@dataclass(frozen=True)
class SummaryBudget:
    min_length: int
    max_length: int
    sentence_count_min: int
    sentence_count_max: int
    preference: str = "balanced"

@dataclass
class SummaryResult:
    summary: str
    model: str
    budget: SummaryBudget
    quality: str = "fast"
    fallback: bool = False
    fallback_reason: Optional[str] = None
