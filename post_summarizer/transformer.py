"""
Optional abstractive summarizer backed by a Hugging Face `transformers` pipeline.

The model path can be switched off by configuration (forced) or switches itself
off after a hard failure, in which case it is retried once the cooldown has
passed. Pipelines are created lazily and cached per model id.
"""
from __future__ import annotations

import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from . import config
from .cleanup import looks_degenerate
from .datatypes import SummaryBudget

logger = logging.getLogger(__name__)

DISABLED_MODES = {"extractive", "fallback", "disabled", "disable", "off", "none"}
RE_TRANSIENT = re.compile(r"unauthorized|401|403|enotfound|econn|connection|network|timed out|timeout|fetch", re.I)


def load_pipeline(model_id: str):
    from transformers import pipeline
    return pipeline("summarization", model=model_id)


class DegenerateSummary(Exception):
    pass


@dataclass
class TransformerState:
    disabled: bool = False
    forced: bool = False
    reason: str = ""
    last_error: Optional[BaseException] = None
    disabled_at: Optional[float] = None


@dataclass
class ModelAttempt:
    summary: Optional[str] = None
    model: Optional[str] = None
    error: Optional[BaseException] = None
    skipped: bool = False
    degenerate: bool = False
    transient: bool = False


class ModelSummarizer:
    def __init__(self,
                 loader: Callable[[str], Any] = load_pipeline,
                 mode: str = config.SUMMARIZER_MODE,
                 transformers_disabled: bool = config.TRANSFORMERS_DISABLED,
                 retry_delay: float = config.TRANSFORMER_RETRY_DELAY,
                 default_model: str = config.DEFAULT_MODEL,
                 clock: Callable[[], float] = time.monotonic):
        self._loader = loader
        self._retry_delay = retry_delay
        self._clock = clock
        self._lock = threading.Lock()
        self._pipelines: Dict[str, Any] = {}
        self.default_model = default_model
        self.state = TransformerState()

        if mode and mode in DISABLED_MODES:
            self.state = TransformerState(disabled=True, forced=True, reason=f"disabled via SUMMARIZER_MODE={mode}")
        if transformers_disabled:
            self.state = TransformerState(disabled=True, forced=True,
                                          reason="disabled via SUMMARIZER_TRANSFORMERS_DISABLED")
        if self.state.forced:
            logger.info("transformers disabled: %s", self.state.reason)

    @property
    def disabled(self) -> bool:
        with self._lock:
            self._maybe_reenable()
            return self.state.disabled

    def _maybe_reenable(self) -> None:
        st = self.state
        if not st.disabled or st.forced or st.disabled_at is None:
            return
        if self._clock() - st.disabled_at >= self._retry_delay:
            self.state = TransformerState()
            self._pipelines.clear()
            logger.info("retrying transformer pipeline after cooldown")

    def disable(self, reason: str, error: Optional[BaseException] = None) -> None:
        with self._lock:
            if self.state.forced:
                return
            self.state.disabled = True
            self.state.reason = reason
            self.state.last_error = error
            self.state.disabled_at = self._clock()
            self._pipelines.clear()

    def get_pipeline(self, model_id: Optional[str] = None):
        model_id = model_id or self.default_model
        with self._lock:
            if model_id in self._pipelines:
                return self._pipelines[model_id]
        summarizer = self._loader(model_id)
        with self._lock:
            self._pipelines[model_id] = summarizer
        return summarizer

    def attempt(self, content: str, budget: SummaryBudget, model_id: Optional[str] = None) -> ModelAttempt:
        if self.disabled:
            return ModelAttempt(skipped=True)
        model_id = model_id or self.default_model
        try:
            summarizer = self.get_pipeline(model_id)
            if not callable(summarizer):
                raise TypeError("Summarizer pipeline did not return a callable instance.")
            is_pegasus = "pegasus" in model_id.lower()
            result = summarizer(
                content,
                min_length=budget.min_length,
                max_length=budget.max_length,
                num_beams=4 if is_pegasus else 6,
                length_penalty=1.0 if is_pegasus else 1.05,
                no_repeat_ngram_size=3,
                early_stopping=True,
                do_sample=False,
            )
            text = result[0].get("summary_text", "") if isinstance(result, list) and result else ""
            if not text:
                raise ValueError("Summarizer returned no content.")
            if looks_degenerate(text, len(content)):
                return ModelAttempt(model=model_id, error=DegenerateSummary("degenerate-summary"), degenerate=True)
            return ModelAttempt(summary=text.strip(), model=model_id)
        except Exception as exc:
            transient = bool(RE_TRANSIENT.search(str(exc)))
            if not transient:
                self.disable("transformer-unavailable", exc)
            logger.debug("model %s failed (transient=%s): %s", model_id, transient, exc)
            return ModelAttempt(error=exc, transient=transient)
