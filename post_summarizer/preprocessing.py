from __future__ import annotations
import re
from typing import List, Tuple
from .datatypes import Document, Sentence


RE_WHITESPACE   = re.compile(r"\s+")
RE_PARAGRAPH    = re.compile(r"\n\s*\n")                  # blank line between paragraphs
RE_SENTENCE     = re.compile(r"[^.!?]+[.!?]?")            # text up to and including terminal punctuation
RE_LIST_MARKER  = re.compile(r"[0-9]+\s*[.)-]?")          # "1." / "2)" / "3-" on its own
RE_LEAD_MARKER  = re.compile(r"^[0-9]+\s*[.)-]?\s*")
RE_CONTINUATION = re.compile("^[\"'\u201c\u201d)]")  # closing quote/paren continues previous thought
RE_CONTROL      = re.compile(r"[\x00-\x1f]+")
RE_PUNCT_RUN    = re.compile(r"([!?.,;:])\1{2,}")

_WORD_RE = re.compile(r"[a-z0-9']+")

STOPWORDS = frozenset({
    'a','an','and','are','as','at','be','but','by','for','from','had','has','have','he','her','his',
    'in','is','it','its','of','on','she','that','the','their','there','they','this','to','was',
    'were','will','with','you'
})

def normalize_whitespace(value) -> str:
    return RE_WHITESPACE.sub(" ", str(value or "")).strip()

def sanitize_input_text(value: str) -> str:
    """
    Clean user supplied text before summarizing.

    Drops replacement/control characters, straightens curly quotes and squashes
    runs of repeated punctuation. Whitespace is collapsed inside each paragraph,
    blank-line paragraph breaks are kept so coverage still sees the structure.
    """
    if not value:
        return ""
    text = str(value).replace("\ufffd", "").replace("\r", "")
    paragraphs = []
    for segment in RE_PARAGRAPH.split(text):
        segment = RE_CONTROL.sub(" ", segment)
        segment = segment.replace("\u201c", '"').replace("\u201d", '"')
        segment = segment.replace("\u2018", "'").replace("\u2019", "'")
        segment = RE_PUNCT_RUN.sub(r"\1\1", segment)
        segment = normalize_whitespace(segment)
        if segment:
            paragraphs.append(segment)
    return "\n\n".join(paragraphs)

def split_sentences(text: str) -> List[str]:
    normalized = normalize_whitespace(text)
    pieces = RE_SENTENCE.findall(normalized)
    if not pieces:
        return [normalized] if normalized else []

    out: List[str] = []
    pending = ""
    for piece in pieces:
        s = piece.strip()
        if not s:
            continue
        if RE_LIST_MARKER.fullmatch(s):
            # a bare list marker belongs to the sentence that follows it
            pending = f"{pending} {s}" if pending else s
            continue

        combined = f"{pending} {s}".strip() if pending else s
        pending = ""
        combined = RE_LEAD_MARKER.sub("", combined, count=1)

        if out and RE_CONTINUATION.match(combined):
            out[-1] = f"{out[-1]} {combined}".strip()
            continue
        out.append(combined)
    if pending:
        out.append(pending)
    return [s for s in out if s]

def split_paragraph_sentences(text: str) -> List[Tuple[str, int]]:
    """Return (sentence, paragraph index) pairs in reading order."""
    segments = [s.strip() for s in RE_PARAGRAPH.split(str(text or ""))]
    segments = [s for s in segments if s]
    if not segments:
        return [(s, 0) for s in split_sentences(text)]
    pairs: List[Tuple[str, int]] = []
    for paragraph, segment in enumerate(segments):
        pairs.extend((s, paragraph) for s in split_sentences(segment))
    return pairs

def tokenize(text: str) -> List[str]:
    toks = _WORD_RE.findall(normalize_whitespace(text).lower())
    return [t for t in toks if t not in STOPWORDS]

def preprocess_text(text: str) -> Document:
    sentences = []
    for i, (s, paragraph) in enumerate(split_paragraph_sentences(text)):
        sentences.append(Sentence(idx=i, text=s, paragraph=paragraph, tokens=tokenize(s)))
    return Document(raw_text=text or "", sentences=sentences)
