"""Post-processing and sanity checks for summaries produced by a language model."""
from __future__ import annotations
import re
from collections import Counter
from typing import List

from .preprocessing import RE_SENTENCE

MIN_UNIQUE_TOKEN_COUNT = 6
MIN_TOTAL_TOKEN_COUNT = 12

RE_CONTROL       = re.compile(r"[\x00-\x1f]+")
RE_MULTI_SPACE   = re.compile(r"\s{2,}")
RE_REPEAT_PUNCT  = re.compile(r"([!?.,;:])\1+")
RE_SPACE_PUNCT   = re.compile(r"\s+([,.;:!?])")
RE_NON_ALNUM     = re.compile(r"[^a-z0-9]+")
RE_SENTENCE_END  = re.compile(r"(?<=[.!?])\s+")

def clean_summary_text(text: str) -> str:
    """Tidy punctuation and drop sentences that repeat an earlier one."""
    if not text:
        return ""
    t = str(text).replace("\ufffd", "")
    t = RE_CONTROL.sub(" ", t)
    t = RE_MULTI_SPACE.sub(" ", t)
    t = RE_REPEAT_PUNCT.sub(r"\1", t)
    t = re.sub(r"\.{2,}", ".", t)
    t = re.sub(r",+", ",", t)
    t = RE_SPACE_PUNCT.sub(r"\1", t)

    seen = set()
    kept: List[str] = []
    for s in RE_SENTENCE.findall(t) or [t]:
        trimmed = s.strip()
        if not trimmed:
            continue
        key = RE_NON_ALNUM.sub(" ", trimmed.lower()).strip()
        if not key or key in seen:
            continue
        seen.add(key)
        kept.append(trimmed)
    return RE_MULTI_SPACE.sub(" ", " ".join(kept)).strip()

def _has_repeating_bigrams(tokens: List[str]) -> bool:
    if len(tokens) < 4:
        return False
    counts = Counter(zip(tokens, tokens[1:]))
    return any(c >= 3 for c in counts.values())

def _has_word_stutter(tokens: List[str]) -> bool:
    run = 1
    for prev, cur in zip(tokens, tokens[1:]):
        run = run + 1 if cur == prev else 1
        if run >= 3:
            return True
    return False

def looks_degenerate(text: str, source_length: int = 0) -> bool:
    """
    Heuristics for model output that should not be shown: too short for a long
    source, too little vocabulary, looping bigrams, stuttering words or a
    clipped final sentence.
    """
    trimmed = clean_summary_text(text)
    tokens = trimmed.lower().split()
    unique = set(tokens)

    if source_length > 600 and len(tokens) < MIN_TOTAL_TOKEN_COUNT:
        return True
    if len(tokens) >= MIN_TOTAL_TOKEN_COUNT and len(unique) < MIN_UNIQUE_TOKEN_COUNT:
        return True
    if _has_repeating_bigrams(tokens) or _has_word_stutter(tokens):
        return True

    sentences = [s for s in RE_SENTENCE_END.split(trimmed) if s]
    last = sentences[-1] if sentences else ""
    if source_length > 400 and len(last.strip()) < 20:
        return True
    return False
