"""
Summary request handling: try the configured language models first and fall
back to the extractive summarizer when they are disabled, fail or produce
unusable output.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from . import config
from .budget import build_summary_budget, infer_length_preference
from .cleanup import clean_summary_text
from .datatypes import SummaryResult
from .preprocessing import sanitize_input_text
from .summarize import summarize
from .transformer import ModelAttempt, ModelSummarizer

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "extractive-fallback"


class SummaryError(Exception):
    pass


class InvalidSummaryRequest(SummaryError):
    pass


class SummaryGenerationError(SummaryError):
    def __init__(self, message: str, details: str = "unknown"):
        super().__init__(message)
        self.details = details


def _option(options: Dict[str, Any], *names: str):
    for name in names:
        if options.get(name) is not None:
            return options[name]
    return None


class SummaryService:
    def __init__(self,
                 model: Optional[ModelSummarizer] = None,
                 max_input_length: int = config.MAX_INPUT_LENGTH,
                 fast_model: str = config.FAST_MODEL,
                 best_model: str = config.BEST_MODEL,
                 fast_candidates: Optional[List[str]] = None):
        self.model = model or ModelSummarizer()
        self.max_input_length = max_input_length
        self.fast_model = fast_model
        self.best_model = best_model
        self.fast_candidates = fast_candidates or list(config.FAST_MODEL_CANDIDATES)
        self._error_logged = False
        # a forced disable was already announced at startup
        self._fallback_logged = self.model.state.forced

    def candidates(self, quality: str, explicit_model: Optional[str]) -> List[str]:
        if quality == "best":
            return [explicit_model or self.best_model]
        return [explicit_model] if explicit_model else list(self.fast_candidates)

    def summarize_description(self, text, options: Optional[Dict[str, Any]] = None) -> SummaryResult:
        options = options or {}
        raw = text.strip() if isinstance(text, str) else ""
        if not raw:
            raise InvalidSummaryRequest("Description text is required.")
        if len(raw) > self.max_input_length:
            raise InvalidSummaryRequest(
                f"Description is too long to summarize. Limit input to {self.max_input_length} characters.")

        content = sanitize_input_text(raw)
        if not content:
            raise InvalidSummaryRequest("Description text is required.")

        quality = str(options.get("quality") or "").lower()
        explicit_model = options.get("model") if isinstance(options.get("model"), str) and options.get("model") else None
        requested = _option(options, "lengthPreference", "length_preference", "preference", "style")
        budget = build_summary_budget(
            len(content),
            infer_length_preference(len(content), requested),
            min_length=_option(options, "min_length", "minLength"),
            max_length=_option(options, "max_length", "maxLength"),
        )

        last: Optional[ModelAttempt] = None
        for model_id in self.candidates(quality, explicit_model):
            last = self.model.attempt(content, budget, model_id)
            if last.summary:
                return SummaryResult(summary=clean_summary_text(last.summary), model=last.model,
                                     budget=budget, quality=quality or "fast")
            if last.degenerate or last.transient:
                continue
            break

        if last is not None and last.degenerate:
            logger.warning("transformer output flagged as degenerate, falling back to extractive summarizer")
        if last is not None and last.error is not None and not self._error_logged:
            logger.error("transformer error, enabling extractive fallback: %s", last.error)
            self._error_logged = True
        if not self._fallback_logged:
            logger.warning("using extractive fallback summarizer")
            self._fallback_logged = True

        summary = clean_summary_text(summarize(content, budget))
        if not summary:
            details = str(last.error) if last is not None and last.error is not None else "unknown"
            raise SummaryGenerationError("Failed to generate summary.", details=details)
        reason = "transformer-unavailable" if last is not None and last.error is not None else "transformer-disabled"
        return SummaryResult(summary=summary, model=FALLBACK_MODEL, budget=budget,
                             quality=quality or "fast", fallback=True, fallback_reason=reason)
