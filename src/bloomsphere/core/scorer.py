"""
Paper scoring: send a document or pasted questions to the Score endpoint
and keep the aggregated result.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from src.bloomsphere import config
from src.bloomsphere.core.aggregator import ScoreSummary, summarize
from src.bloomsphere.core.client import BloomSphereClient
from src.bloomsphere.core.file_encoder import encode_file_async, validate_file
from src.bloomsphere.core.mapper import build_score_data
from src.bloomsphere.core.workflow import GenerationStatus
from src.bloomsphere.exceptions import (
    FileValidationError,
    GenerationInProgressError,
    ServiceError,
    WorkflowError,
)
from src.bloomsphere.models.api_models import ScoreRequest
from src.bloomsphere.models.bloom_models import ScoreData

logger = logging.getLogger(__name__)


class PaperScorer:
    """Own the scoring request lifecycle and the latest ScoreData."""

    def __init__(self, client: Optional[BloomSphereClient] = None):
        self.client = client or BloomSphereClient()
        self.file: Optional[Path] = None
        self.file_error: Optional[str] = None
        self.question_text = ""
        self.status = GenerationStatus.IDLE
        self.error: Optional[str] = None
        self.score_data: Optional[ScoreData] = None
        self._request_token = 0

    def select_file(self, path: Union[str, Path]):
        """
        Select a PDF, PNG or JPEG to score.

        Raises:
            FileValidationError: If the file is not acceptable; the selection is cleared
        """
        try:
            validate_file(path, config.SCORING_MIME_TYPES, config.SCORING_FILE_DESCRIPTION)
        except FileValidationError as e:
            self.file = None
            self.file_error = str(e)
            raise
        self.file = Path(path)
        self.file_error = None

    def clear_file(self):
        self.file = None
        self.file_error = None

    @property
    def is_loading(self) -> bool:
        return self.status == GenerationStatus.LOADING

    @property
    def can_submit(self) -> bool:
        return (self.file is not None or bool(self.question_text)) and not self.is_loading

    @property
    def summary(self) -> Optional[ScoreSummary]:
        if self.score_data is None:
            return None
        return summarize(self.score_data)

    def reset(self):
        self._request_token += 1
        self.clear_file()
        self.question_text = ""
        self.status = GenerationStatus.IDLE
        self.error = None
        self.score_data = None

    async def submit(self) -> bool:
        """
        Score the selected file and/or pasted questions.

        Returns:
            True if new score data was applied

        Raises:
            GenerationInProgressError: If a scoring request is already outstanding
            WorkflowError: If neither a file nor question text is provided
        """
        if self.is_loading:
            raise GenerationInProgressError("A scoring request is already in progress.")
        if self.file is None and not self.question_text:
            self.error = "Please upload a file or paste questions."
            raise WorkflowError(self.error)

        self._request_token += 1
        token = self._request_token
        self.status = GenerationStatus.LOADING
        self.error = None

        try:
            payload = None
            if self.file is not None:
                encoded = await encode_file_async(
                    self.file,
                    config.SCORING_MIME_TYPES,
                    config.SCORING_FILE_DESCRIPTION,
                )
                payload = encoded.to_payload()
            request = ScoreRequest(file=payload, questions=self.question_text or None)
            items = await self.client.score(request)
            score_data = build_score_data(items)
        except (ServiceError, FileValidationError, ValidationError) as e:
            if token != self._request_token:
                return False
            logger.error("Scoring failed: %s", e)
            self.status = GenerationStatus.ERROR
            self.error = f"Failed to score paper: {e}"
            return False
        except asyncio.CancelledError:
            if token == self._request_token:
                self.status = GenerationStatus.IDLE
            raise
        except Exception as e:
            if token == self._request_token:
                logger.exception("Unexpected error during scoring")
                self.status = GenerationStatus.ERROR
                self.error = f"Failed to score paper: {e}"
            raise

        if token != self._request_token:
            logger.info("Ignoring response of superseded scoring request %d", token)
            return False

        self.score_data = score_data
        self.status = GenerationStatus.SUCCESS
        logger.info("Scored %d question(s)", score_data.total_questions)
        return True
