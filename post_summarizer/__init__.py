from .datatypes import Sentence, Document, TermStats, ScoredSentence, SummaryBudget, SummaryResult
from .preprocessing import preprocess_text, sanitize_input_text, split_sentences, split_paragraph_sentences, tokenize
from .budget import build_summary_budget, resolve_length_preference, infer_length_preference, sentence_range
from .features import compute_term_stats, desired_sentence_count
from .scoring import score_sentences, rank_sentences
from .selection import select_sentences
from .summarize import summarize, summarize_text, generate_summary, truncate_summary
from .cleanup import clean_summary_text, looks_degenerate
