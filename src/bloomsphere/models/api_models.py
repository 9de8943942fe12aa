"""
Pydantic models for the remote scoring/generation service wire format.
"""
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


# ============================================================================
# REQUEST MODELS
# ============================================================================

class FilePayload(BaseModel):
    """Base64-encoded file as sent to the service."""
    model_config = ConfigDict(populate_by_name=True)

    filename: str = Field(description="Original file name")
    content: str = Field(description="Base64 file content without data-URL prefix")
    mime_type: str = Field(alias="mimeType", description="MIME type of the file")


class NumQuestions(BaseModel):
    """Requested number of questions per kind."""
    model_config = ConfigDict(populate_by_name=True)

    text: int = Field(default=0, ge=0, description="Number of plain text questions")
    true_false: int = Field(
        default=0, ge=0, alias="trueFalse",
        description="Number of True/False questions")
    mcq: int = Field(default=0, ge=0, description="Number of multiple-choice questions")

    def total(self) -> int:
        return self.text + self.true_false + self.mcq


class GenerationConfig(BaseModel):
    """Generation settings sent alongside the source document."""
    model_config = ConfigDict(populate_by_name=True)

    user_input: str = Field(
        default="", alias="userInput",
        description="Optional free-text query or context")
    question_length: Literal["Short", "Medium", "Long"] = Field(
        default="Medium", alias="questionLength",
        description="Length of text questions")
    num_questions: NumQuestions = Field(
        alias="numQuestions",
        description="Requested counts per question kind")
    bloom_weights: Dict[str, float] = Field(
        alias="bloomWeights",
        description="Literal Bloom category weights, unnormalized")


class ScoreRequest(BaseModel):
    """Body of the Score request."""
    file: Optional[FilePayload] = None
    questions: Optional[str] = None

    @model_validator(mode="after")
    def _require_input(self) -> "ScoreRequest":
        if self.file is None and self.questions is None:
            raise ValueError("Either a file or question text is required")
        return self


class GenerateRequest(BaseModel):
    """Body of the Generate request."""
    file: FilePayload
    config: GenerationConfig


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class TrueFalseInfo(BaseModel):
    question: str
    answer: bool


class MCQInfo(BaseModel):
    question: str
    options: List[str]
    answer: str


class TextItem(BaseModel):
    """Plain question: the payload is the bare question string."""
    question_type: Literal["text"]
    questioninfo: str


class TrueFalseItem(BaseModel):
    question_type: Literal["TrueFalse"]
    questioninfo: TrueFalseInfo


class MCQItem(BaseModel):
    question_type: Literal["MCQ"]
    questioninfo: MCQInfo


ApiGeneratedQuestionItem = Annotated[
    Union[TextItem, TrueFalseItem, MCQItem],
    Field(discriminator="question_type"),
]

generated_item_adapter = TypeAdapter(ApiGeneratedQuestionItem)


class ApiQuestionScore(BaseModel):
    """One scored question as returned by the Score endpoint."""
    question: str
    question_type: Optional[str] = None
    option: Optional[List[str]] = None
    remembering: float = Field(ge=0)
    understanding: float = Field(ge=0)
    applying: float = Field(ge=0)
    analyzing: float = Field(ge=0)
    evaluating: float = Field(ge=0)
    creating: float = Field(ge=0)


score_list_adapter = TypeAdapter(List[ApiQuestionScore])
