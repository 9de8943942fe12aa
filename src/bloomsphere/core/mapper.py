"""
Map raw service payloads into local question and score records.

Generated items arrive as a tagged union keyed on ``question_type``. Items
whose tag is unknown, or whose payload does not match their tag, are
dropped individually so that one malformed item cannot fail a whole batch.
"""
import logging
from typing import Any, Iterable, List, NamedTuple

from pydantic import ValidationError

from src.bloomsphere.core.aggregator import aggregate
from src.bloomsphere.models.api_models import (
    TextItem,
    TrueFalseItem,
    generated_item_adapter,
    score_list_adapter,
)
from src.bloomsphere.models.bloom_models import BloomCategory, DetailedScoreItem, ScoreData
from src.bloomsphere.models.question_models import GeneratedQuestion, QuestionType

logger = logging.getLogger(__name__)


class MappingResult(NamedTuple):
    questions: List[GeneratedQuestion]
    dropped: int


def map_generated_item(index: int, item: Any) -> GeneratedQuestion:
    """
    Convert one tagged service item into a pending GeneratedQuestion.

    Raises:
        ValidationError: If the tag is unknown or the payload does not match it
    """
    parsed = generated_item_adapter.validate_python(item)

    if isinstance(parsed, TextItem):
        return GeneratedQuestion(
            id=index,
            text=parsed.questioninfo,
            question_type=QuestionType.TEXT,
        )
    if isinstance(parsed, TrueFalseItem):
        return GeneratedQuestion(
            id=index,
            text=parsed.questioninfo.question,
            question_type=QuestionType.TRUE_FALSE,
            answer=parsed.questioninfo.answer,
        )
    return GeneratedQuestion(
        id=index,
        text=parsed.questioninfo.question,
        question_type=QuestionType.MCQ,
        options=list(parsed.questioninfo.options),
        answer=parsed.questioninfo.answer,
    )


def map_generated_questions(items: Iterable[Any]) -> MappingResult:
    """
    Convert a Generate response into questions.

    Each question's id is its index in the response, so ids keep gaps where
    items were dropped.

    Args:
        items: Raw list decoded from the Generate response

    Returns:
        MappingResult with the mapped questions and the number of dropped items
    """
    questions = []
    dropped = 0

    for index, item in enumerate(items):
        try:
            questions.append(map_generated_item(index, item))
        except ValidationError as e:
            dropped += 1
            logger.debug("Dropping item %d: %s", index, e)

    if dropped:
        logger.warning("Dropped %d unrecognized question item(s)", dropped)

    return MappingResult(questions, dropped)


def map_score_items(items: Any) -> List[DetailedScoreItem]:
    """
    Convert a Score response into detailed score items, preserving order.

    Raises:
        ValidationError: If the response does not match the score schema
    """
    scores = score_list_adapter.validate_python(items)
    return [
        DetailedScoreItem(
            question=s.question,
            score={
                BloomCategory.REMEMBERING: s.remembering,
                BloomCategory.UNDERSTANDING: s.understanding,
                BloomCategory.APPLYING: s.applying,
                BloomCategory.ANALYZING: s.analyzing,
                BloomCategory.EVALUATING: s.evaluating,
                BloomCategory.CREATING: s.creating,
            },
            question_type=s.question_type,
            options=s.option,
        )
        for s in scores
    ]


def build_score_data(items: Any) -> ScoreData:
    """Map a Score response and aggregate it into ScoreData."""
    return aggregate(map_score_items(items))
