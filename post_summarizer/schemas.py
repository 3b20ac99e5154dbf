from typing import Any, Dict, Optional

from pydantic import BaseModel

from .datatypes import SummaryBudget, SummaryResult


class SummaryRequest(BaseModel):
    text: Any = None
    options: Optional[Dict[str, Any]] = None


class BudgetOut(BaseModel):
    min_length: int
    max_length: int
    length_preference: str
    sentence_count_min: int
    sentence_count_max: int

    @classmethod
    def from_budget(cls, budget: SummaryBudget) -> "BudgetOut":
        return cls(
            min_length=budget.min_length,
            max_length=budget.max_length,
            length_preference=budget.preference,
            sentence_count_min=budget.sentence_count_min,
            sentence_count_max=budget.sentence_count_max,
        )


class SummaryOut(BaseModel):
    summary: str
    model: str
    options: BudgetOut
    quality: str = "fast"
    fallback: Optional[bool] = None
    fallback_reason: Optional[str] = None

    @classmethod
    def from_result(cls, result: SummaryResult) -> "SummaryOut":
        return cls(
            summary=result.summary,
            model=result.model,
            options=BudgetOut.from_budget(result.budget),
            quality=result.quality,
            fallback=True if result.fallback else None,
            fallback_reason=result.fallback_reason,
        )


class ErrorOut(BaseModel):
    error: str
    details: Optional[str] = None
