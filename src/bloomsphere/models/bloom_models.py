"""
Pydantic models for Bloom's taxonomy categories and score data.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class BloomCategory(str, Enum):
    """Cognitive level of a question. Declaration order is significant."""
    REMEMBERING = "Remembering"
    UNDERSTANDING = "Understanding"
    APPLYING = "Applying"
    ANALYZING = "Analyzing"
    EVALUATING = "Evaluating"
    CREATING = "Creating"

    @property
    def description(self) -> str:
        return CATEGORY_DESCRIPTIONS[self]


BLOOM_CATEGORIES = tuple(BloomCategory)

CATEGORY_DESCRIPTIONS = {
    BloomCategory.REMEMBERING: "Recalling facts and basic concepts.",
    BloomCategory.UNDERSTANDING: "Explaining ideas or concepts.",
    BloomCategory.APPLYING: "Using information in new situations.",
    BloomCategory.ANALYZING: "Drawing connections among ideas.",
    BloomCategory.EVALUATING: "Justifying a stand or decision.",
    BloomCategory.CREATING: "Producing new or original work.",
}

BloomWeights = Dict[BloomCategory, float]


def zero_vector() -> BloomWeights:
    """Return a vector with every category set to zero."""
    return {category: 0.0 for category in BLOOM_CATEGORIES}


def vector_total(vector: BloomWeights) -> float:
    """Sum of all category entries of a vector."""
    return sum(vector.get(category, 0) for category in BLOOM_CATEGORIES)


def _complete_vector(vector: BloomWeights) -> BloomWeights:
    missing = [c.value for c in BLOOM_CATEGORIES if c not in vector]
    if missing:
        raise ValueError(f"Missing Bloom categories: {', '.join(missing)}")
    return {category: vector[category] for category in BLOOM_CATEGORIES}


class DetailedScoreItem(BaseModel):
    """Per-question Bloom score vector returned by the scoring service."""
    question: str = Field(description="The scored question text")
    score: Dict[BloomCategory, float] = Field(
        description="Non-negative score for each of the six categories")
    question_type: Optional[str] = Field(
        default=None,
        description="Question kind reported by the service, if any")
    options: Optional[List[str]] = Field(
        default=None,
        description="Answer options reported by the service, if any")

    @model_validator(mode="after")
    def _check_score(self) -> "DetailedScoreItem":
        self.score = _complete_vector(self.score)
        negative = [c.value for c, v in self.score.items() if v < 0]
        if negative:
            raise ValueError(f"Negative scores for: {', '.join(negative)}")
        return self


class ScoreData(BaseModel):
    """Aggregated scoring result for a paper."""
    total_score: Dict[BloomCategory, float] = Field(
        description="Per-category sum over all detailed scores")
    detailed_scores: List[DetailedScoreItem] = Field(
        default_factory=list,
        description="Scores for each question, in service order")
    total_questions: int = Field(
        ge=0,
        description="Number of scored questions")

    @model_validator(mode="after")
    def _check_totals(self) -> "ScoreData":
        self.total_score = _complete_vector(self.total_score)
        return self
