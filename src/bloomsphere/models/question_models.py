"""
Pydantic models for generated questions under review.
"""
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, model_validator


class QuestionStatus(str, Enum):
    """Review state of a generated question."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DISCARDED = "discarded"


class QuestionType(str, Enum):
    """Question kind, using the service's wire values."""
    TEXT = "text"
    TRUE_FALSE = "TrueFalse"
    MCQ = "MCQ"


class GeneratedQuestion(BaseModel):
    """A single generated question and its review status."""
    id: int = Field(
        ge=0,
        description="Position of the question in the service response")
    text: str = Field(description="The question text")
    status: QuestionStatus = Field(
        default=QuestionStatus.PENDING,
        description="Review status: pending, accepted or discarded")
    question_type: QuestionType = Field(
        description="Kind of question: text, TrueFalse or MCQ")
    options: Optional[List[str]] = Field(
        default=None,
        description="Ordered answer options (MCQ only)")
    answer: Optional[Union[bool, str]] = Field(
        default=None,
        description="Boolean for TrueFalse, option text for MCQ, absent for text")

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "GeneratedQuestion":
        is_mcq = self.question_type == QuestionType.MCQ
        if is_mcq != (self.options is not None):
            raise ValueError("options must be present exactly for MCQ questions")

        if self.question_type == QuestionType.TEXT:
            if self.answer is not None:
                raise ValueError("text questions carry no answer")
        elif self.question_type == QuestionType.TRUE_FALSE:
            if not isinstance(self.answer, bool):
                raise ValueError("TrueFalse questions need a boolean answer")
        elif not isinstance(self.answer, str):
            raise ValueError("MCQ questions need a string answer")
        return self

    def with_status(self, status: QuestionStatus) -> "GeneratedQuestion":
        """Return a copy of this question with a new review status."""
        return self.model_copy(update={"status": status})
