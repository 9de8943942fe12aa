"""
Data models for BloomSphere question generation and scoring.
"""

from src.bloomsphere.models.bloom_models import (
    BloomCategory,
    BLOOM_CATEGORIES,
    BloomWeights,
    DetailedScoreItem,
    ScoreData,
    zero_vector,
)
from src.bloomsphere.models.question_models import (
    GeneratedQuestion,
    QuestionStatus,
    QuestionType,
)
from src.bloomsphere.models.api_models import (
    FilePayload,
    GenerationConfig,
    NumQuestions,
    ScoreRequest,
    GenerateRequest,
    ApiQuestionScore,
)

__all__ = [
    "BloomCategory",
    "BLOOM_CATEGORIES",
    "BloomWeights",
    "DetailedScoreItem",
    "ScoreData",
    "zero_vector",
    "GeneratedQuestion",
    "QuestionStatus",
    "QuestionType",
    "FilePayload",
    "GenerationConfig",
    "NumQuestions",
    "ScoreRequest",
    "GenerateRequest",
    "ApiQuestionScore",
]
