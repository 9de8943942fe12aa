"""
HTTP client for the remote BloomSphere scoring/generation service.

The service exposes two JSON endpoints:
- Score: rates each question of a paper against the six Bloom categories
- Generate: writes new questions from a source document

This client only issues requests and decodes JSON. It performs no retries
and no mapping; see core.mapper for turning responses into local records.
"""
import logging
import os
from typing import Any, List, Optional

import httpx

from src.bloomsphere import config
from src.bloomsphere.exceptions import ServiceError
from src.bloomsphere.models.api_models import GenerateRequest, ScoreRequest
from src.bloomsphere.utils.env_loader import load_env

logger = logging.getLogger(__name__)


class BloomSphereClient:
    """Issue Score and Generate requests against the remote service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            base_url: Service root URL. If not provided, uses the BLOOMSPHERE_API_URL
                environment variable or config.API_BASE_URL.
            timeout: Request timeout in seconds. If not provided, uses BLOOMSPHERE_TIMEOUT
                or config.REQUEST_TIMEOUT_SECONDS.
            transport: Optional httpx transport, mainly for tests.
        """
        load_env()

        self.base_url = (
            base_url
            or os.environ.get(config.API_URL_ENV_VAR)
            or config.API_BASE_URL
        ).rstrip("/")
        self.timeout = timeout or float(
            os.environ.get(config.TIMEOUT_ENV_VAR, config.REQUEST_TIMEOUT_SECONDS))
        self.transport = transport

    async def score(self, request: ScoreRequest) -> List[Any]:
        """
        Score a paper or pasted questions.

        Args:
            request: Score request body (file and/or question text)

        Returns:
            Raw list of per-question score objects
        """
        return await self._post(config.SCORE_ENDPOINT, request.model_dump(by_alias=True))

    async def generate(self, request: GenerateRequest) -> List[Any]:
        """
        Generate questions from a source document.

        Args:
            request: Generate request body (file and generation config)

        Returns:
            Raw list of tagged question items
        """
        return await self._post(config.GENERATE_ENDPOINT, request.model_dump(by_alias=True))

    async def _post(self, endpoint: str, payload: dict) -> List[Any]:
        url = f"{self.base_url}{endpoint}"
        logger.info("POST %s", url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise ServiceError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            detail = response.text or f"Request failed: {response.reason_phrase}"
            logger.warning("Service returned %s for %s", response.status_code, url)
            raise ServiceError(detail, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceError("Unexpected response format", status_code=response.status_code) from e

        if not isinstance(data, list):
            raise ServiceError("Unexpected response format", status_code=response.status_code)

        logger.info("Received %d item(s) from %s", len(data), endpoint)
        return data
