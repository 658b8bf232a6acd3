"""
JobDeck - API client for the AI endpoints.

Thin async wrapper that posts JSON to the two AI endpoints and returns the
decoded reply. Failures raise APIClientError carrying the server's
``details`` message; displaying it is left to the caller.

Usage:
    async with JobDeckClient() as client:
        job = await client.parse_job_description(posting_text)
        result = await client.generate_application(resume, job)
"""
from typing import Any, Dict, Optional, Union
import logging

import httpx

from .config import settings
from .schemas import MasterResume

logger = logging.getLogger("jobdeck.client")


class APIClientError(Exception):
    """Raised when an API call returns a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class JobDeckClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def __aenter__(self) -> "JobDeckClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, payload: Dict[str, Any], fallback_message: str) -> Any:
        response = await self._client.post(
            path,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=None,
        )

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            details = body.get("details") if isinstance(body, dict) else None
            logger.warning(f"POST {path} failed with status {response.status_code}")
            raise APIClientError(details or fallback_message, status_code=response.status_code)

        return response.json()

    async def parse_job_description(self, job_description: str) -> Any:
        return await self._post(
            "/parse-job-description",
            {"jobDescription": job_description},
            "Failed to parse job description",
        )

    async def generate_application(
        self,
        master_resume: Union[MasterResume, Dict[str, Any]],
        job_description: Dict[str, Any]
    ) -> Any:
        if isinstance(master_resume, MasterResume):
            master_resume = master_resume.model_dump(mode="json")
        return await self._post(
            "/generate-application",
            {"masterResume": master_resume, "jobDescription": job_description},
            "Failed to generate application",
        )
