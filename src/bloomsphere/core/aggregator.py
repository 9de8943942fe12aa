"""
Reduce per-question Bloom score vectors into totals and percentage bars.
"""
from typing import Dict, List, NamedTuple, Optional, Sequence

from src.bloomsphere import config
from src.bloomsphere.models.bloom_models import (
    BLOOM_CATEGORIES,
    BloomCategory,
    BloomWeights,
    DetailedScoreItem,
    ScoreData,
    vector_total,
    zero_vector,
)


class BarSegment(NamedTuple):
    """One visible segment of a stacked percentage bar."""
    category: BloomCategory
    percentage: float
    label: Optional[str]

    @property
    def tooltip(self) -> str:
        return f"{self.category.value}: {self.percentage:.1f}%"


class QuestionSummary(NamedTuple):
    index: int
    question: str
    dominant_category: BloomCategory
    segments: List[BarSegment]


class ScoreSummary(NamedTuple):
    overall: List[BarSegment]
    questions: List[QuestionSummary]


def aggregate(items: Sequence[DetailedScoreItem]) -> ScoreData:
    """
    Sum a sequence of detailed scores per category.

    Args:
        items: Detailed score items in service order

    Returns:
        ScoreData whose total for each category is the sum over all items
    """
    total = zero_vector()
    for item in items:
        for category in BLOOM_CATEGORIES:
            total[category] += item.score[category]

    return ScoreData(
        total_score=total,
        detailed_scores=list(items),
        total_questions=len(items),
    )


def dominant_category(vector: BloomWeights) -> BloomCategory:
    """Category with the highest value; the earliest category wins ties."""
    best = BLOOM_CATEGORIES[0]
    for category in BLOOM_CATEGORIES[1:]:
        if vector[category] > vector[best]:
            best = category
    return best


def percentage(
    vector: BloomWeights,
    basis: Optional[float] = None
) -> Dict[BloomCategory, float]:
    """
    Express each category as a percentage of a basis.

    Args:
        vector: Category values
        basis: Shared scale. Defaults to the vector's own sum, or 1 when that sum is 0.

    Returns:
        Mapping of category to percentage, in category order
    """
    if basis is None:
        basis = vector_total(vector) or 1
    if basis == 0:
        return zero_vector()
    return {category: vector[category] / basis * 100 for category in BLOOM_CATEGORIES}


def stacked_bar(
    vector: BloomWeights,
    basis: Optional[float] = None
) -> List[BarSegment]:
    """Visible segments of a stacked bar; near-zero categories are omitted."""
    segments = []
    for category, pct in percentage(vector, basis).items():
        if pct < config.MIN_VISIBLE_PERCENTAGE:
            continue
        label = f"{pct:.0f}%" if pct > config.MIN_LABELLED_PERCENTAGE else None
        segments.append(BarSegment(category, pct, label))
    return segments


def summarize(score_data: ScoreData) -> ScoreSummary:
    """Build the overall bar and one bar per question for display."""
    questions = [
        QuestionSummary(
            index=i,
            question=item.question,
            dominant_category=dominant_category(item.score),
            segments=stacked_bar(item.score),
        )
        for i, item in enumerate(score_data.detailed_scores)
    ]
    return ScoreSummary(overall=stacked_bar(score_data.total_score), questions=questions)
