"""
Four-stage question generation workflow: Upload, Configure, Weights, Review.

WorkflowController owns every piece of generation state: the selected
file, the generation settings, the request lifecycle and the generated
question set under review. Presentation code reads its properties and
calls its methods; nothing else mutates the state.

Only one Generate request may be outstanding. Each request takes a fresh
token, and a response is applied only if its token is still the latest
one, so a response arriving after reset() or after a newer request is
ignored.
"""
import asyncio
import logging
from enum import Enum, IntEnum
from pathlib import Path
from typing import List, Optional, Union

from src.bloomsphere import config
from src.bloomsphere.core.client import BloomSphereClient
from src.bloomsphere.core.exporter import ExportEngine
from src.bloomsphere.core.file_encoder import encode_file_async, validate_file
from src.bloomsphere.core.mapper import map_generated_questions
from src.bloomsphere.core.weights import WeightsEngine
from src.bloomsphere.exceptions import (
    FileValidationError,
    GenerationInProgressError,
    ServiceError,
    WorkflowError,
)
from src.bloomsphere.models.api_models import GenerateRequest, GenerationConfig, NumQuestions
from src.bloomsphere.models.question_models import GeneratedQuestion, QuestionStatus

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    UPLOAD = 1
    CONFIGURE = 2
    WEIGHTS = 3
    REVIEW = 4


class GenerationStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


class ReviewFilter(str, Enum):
    ALL = "all"
    TEXT = "text"
    TRUE_FALSE = "TrueFalse"
    MCQ = "MCQ"


QUESTION_KINDS = ("text", "trueFalse", "mcq")


class WorkflowController:
    """State machine driving question generation and review."""

    def __init__(
        self,
        client: Optional[BloomSphereClient] = None,
        weights: Optional[WeightsEngine] = None,
        export_engine: Optional[ExportEngine] = None
    ):
        """
        Initialize the workflow at the Upload stage.

        Args:
            client: Remote service client. Defaults to a BloomSphereClient built from config.
            weights: Initial Bloom weights. Defaults to config.DEFAULT_WEIGHTS.
            export_engine: Renderer for the accepted questions.
        """
        self.client = client or BloomSphereClient()
        self.weights = weights or WeightsEngine()
        self.export_engine = export_engine or ExportEngine()

        self.stage = Stage.UPLOAD
        self.file: Optional[Path] = None
        self.file_error: Optional[str] = None

        self.user_input = ""
        self.question_length = config.DEFAULT_QUESTION_LENGTH
        self.num_questions = NumQuestions.model_validate(config.DEFAULT_NUM_QUESTIONS)

        self.generation_status = GenerationStatus.IDLE
        self.error: Optional[str] = None
        self.dropped_count = 0
        self.review_filter = ReviewFilter.ALL

        self._questions: List[GeneratedQuestion] = []
        self._request_token = 0

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def select_file(self, path: Union[str, Path]):
        """
        Select the source document, replacing any previous selection.

        Raises:
            FileValidationError: If the file is not an acceptable PDF; the selection is cleared
        """
        try:
            validate_file(
                path,
                config.GENERATION_MIME_TYPES,
                config.GENERATION_FILE_DESCRIPTION,
            )
        except FileValidationError as e:
            self.file = None
            self.file_error = str(e)
            raise

        self.file = Path(path)
        self.file_error = None

    def clear_file(self):
        self.file = None
        self.file_error = None

    def set_num_questions(self, kind: str, value: int):
        """Set the requested count for 'text', 'trueFalse' or 'mcq' questions."""
        if kind not in QUESTION_KINDS:
            raise ValueError(f"Unknown question kind '{kind}'")
        counts = self.num_questions.model_dump(by_alias=True)
        counts[kind] = value
        self.num_questions = NumQuestions.model_validate(counts)

    def set_question_length(self, length: str):
        if length not in config.QUESTION_LENGTHS:
            raise ValueError(
                f"Question length must be one of: {', '.join(config.QUESTION_LENGTHS)}")
        self.question_length = length

    def set_review_filter(self, review_filter: Union[ReviewFilter, str]):
        self.review_filter = ReviewFilter(review_filter)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def total_num_questions(self) -> int:
        return self.num_questions.total()

    @property
    def total_weight(self) -> float:
        return self.weights.total()

    @property
    def is_loading(self) -> bool:
        return self.generation_status == GenerationStatus.LOADING

    @property
    def can_generate(self) -> bool:
        return (
            self.file is not None
            and self.total_num_questions > 0
            and not self.weights.is_blocked()
            and not self.is_loading
        )

    @property
    def can_advance(self) -> bool:
        if self.stage == Stage.UPLOAD:
            return self.file is not None
        if self.stage == Stage.CONFIGURE:
            return self.total_num_questions > 0
        if self.stage == Stage.WEIGHTS:
            return self.can_generate
        return False

    @property
    def questions(self) -> List[GeneratedQuestion]:
        return list(self._questions)

    @property
    def filtered_questions(self) -> List[GeneratedQuestion]:
        if self.review_filter == ReviewFilter.ALL:
            return list(self._questions)
        return [q for q in self._questions if q.question_type.value == self.review_filter.value]

    @property
    def accepted_questions(self) -> List[GeneratedQuestion]:
        return [q for q in self._questions if q.status == QuestionStatus.ACCEPTED]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def advance(self) -> bool:
        """
        Move to the next stage if the current stage's guard holds.

        From the Weights stage this runs generation, which moves to Review on
        success. A failed guard is a no-op; from the Weights stage the reason is
        left in `error`.

        Returns:
            True if the stage changed
        """
        if self.stage == Stage.WEIGHTS:
            if self.is_loading:
                return False
            try:
                return await self.generate()
            except WorkflowError:
                return False

        if not self.can_advance:
            return False

        self.stage = Stage(self.stage + 1)
        return True

    def retreat(self):
        """Go back one stage. Later-stage data is kept."""
        self.stage = Stage(max(Stage.UPLOAD, self.stage - 1))

    def reset(self):
        """Start over: back to Upload with no file, questions or status."""
        self._request_token += 1
        self.stage = Stage.UPLOAD
        self.file = None
        self.file_error = None
        self._questions = []
        self.dropped_count = 0
        self.generation_status = GenerationStatus.IDLE
        self.error = None

    def set_status(self, question_id: int, status: Union[QuestionStatus, str]):
        """Mark one question accepted, discarded or pending. Unknown ids are ignored."""
        status = QuestionStatus(status)
        self._questions = [
            q.with_status(status) if q.id == question_id else q
            for q in self._questions
        ]

    def build_config(self) -> GenerationConfig:
        return GenerationConfig(
            user_input=self.user_input,
            question_length=self.question_length,
            num_questions=self.num_questions,
            bloom_weights=self.weights.as_payload(),
        )

    async def generate(self) -> bool:
        """
        Request questions for the selected file and current settings.

        Valid from the Weights stage and, as a regeneration, from Review. On
        success the question set is replaced (fresh ids, all pending) and the
        workflow moves to Review. On failure the status becomes error and the
        stage and previous questions are left as they were.

        Returns:
            True if new questions were applied

        Raises:
            GenerationInProgressError: If a request is already outstanding
            WorkflowError: If called before the Weights stage, with no file
                selected, with no questions requested or with all weights at zero
        """
        if self.is_loading:
            raise GenerationInProgressError("A generation request is already in progress.")

        problem = None
        if self.stage not in (Stage.WEIGHTS, Stage.REVIEW):
            problem = "Questions can only be generated from the Weights or Review stage."
        elif self.file is None:
            problem = "Please upload a file to generate questions from."
        elif self.total_num_questions == 0:
            problem = "Please select at least one question to generate."
        elif self.weights.is_blocked():
            problem = "Please give at least one Bloom category a non-zero weight."
        if problem:
            self.error = problem
            raise WorkflowError(problem)

        self._request_token += 1
        token = self._request_token
        self.generation_status = GenerationStatus.LOADING
        self.error = None
        logger.info("Generating %d question(s) from %s", self.total_num_questions, self.file.name)

        try:
            encoded = await encode_file_async(
                self.file,
                config.GENERATION_MIME_TYPES,
                config.GENERATION_FILE_DESCRIPTION,
            )
            request = GenerateRequest(file=encoded.to_payload(), config=self.build_config())
            items = await self.client.generate(request)
        except (ServiceError, FileValidationError) as e:
            if token != self._request_token:
                logger.info("Ignoring failure of superseded request %d", token)
                return False
            logger.error("Generation failed: %s", e)
            self.generation_status = GenerationStatus.ERROR
            self.error = f"Failed to generate questions: {e}"
            return False
        except asyncio.CancelledError:
            if token == self._request_token:
                self.generation_status = GenerationStatus.IDLE
            raise
        except Exception as e:
            if token == self._request_token:
                logger.exception("Unexpected error during generation")
                self.generation_status = GenerationStatus.ERROR
                self.error = f"Failed to generate questions: {e}"
            raise

        if token != self._request_token:
            logger.info("Ignoring response of superseded request %d", token)
            return False

        result = map_generated_questions(items)
        self._questions = result.questions
        self.dropped_count = result.dropped
        self.generation_status = GenerationStatus.SUCCESS
        self.stage = Stage.REVIEW
        logger.info("Received %d question(s)", len(result.questions))
        return True

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_text(self) -> Optional[str]:
        """Plain-text export of the accepted questions, or None if none are accepted."""
        accepted = self.accepted_questions
        if not accepted:
            return None
        return self.export_engine.render_text(accepted)

    def export_pdf(self, output_file: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """Write the PDF export of the accepted questions, or return None if none are accepted."""
        accepted = self.accepted_questions
        if not accepted:
            return None
        return self.export_engine.save_pdf(accepted, output_file)

    def save_text(self, output_file: Optional[Union[str, Path]] = None) -> Optional[Path]:
        accepted = self.accepted_questions
        if not accepted:
            return None
        return self.export_engine.save_text(accepted, output_file)
