"""
JobDeck - AI Service (Gemini Integration)

Abstraction layer for generative model calls using the Google Gen AI SDK.

Setup:
1. Create an API key at https://aistudio.google.com/apikey
2. Export it: GEMINI_API_KEY=...
3. Optionally choose a model: JOBDECK_GEMINI_MODEL=gemini-2.0-flash

This service provides:
- Job description parsing into structured fields
- Tailored resume and cover letter generation
- Code-fence stripping and JSON decoding of model replies

Model replies are returned exactly as decoded; callers must tolerate
unexpected shapes.
"""
from typing import Any, Optional
import asyncio
import json
import logging
import re

from google import genai

from ..config import settings
from ..schemas import JobDescriptionBrief, MasterResume

logger = logging.getLogger("jobdeck.ai")

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


class AIServiceError(Exception):
    """Custom exception for AI service errors."""
    pass


def strip_code_fences(text: str) -> str:
    """Remove ```json and ``` markers anywhere in the text, then trim."""
    return _FENCE.sub("", _JSON_FENCE.sub("", text or "")).strip()


def parse_model_json(text: str) -> Any:
    """
    Decode a model reply as JSON after stripping code fences.

    Raises:
        AIServiceError: If the remaining text is not valid JSON
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Model returned non-JSON output ({len(cleaned)} chars): {e}")
        raise AIServiceError(f"Model returned invalid JSON: {e}")


class AIService:
    """
    AI Service for Gemini text generation.

    The SDK client is created on first use so the application can start
    without an API key; calls made without one fail with AIServiceError.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client: Any = None):
        """Initialize AI service with settings."""
        self.api_key = api_key if api_key is not None else settings.ai.gemini_api_key
        self.model = model or settings.ai.gemini_model
        self.enabled = settings.ai.ai_enabled
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self.enabled and (self._client is not None or bool(self.api_key))

    def _get_client(self):
        if self._client is None:
            if not self.enabled:
                raise AIServiceError("AI features are disabled")
            if not self.api_key:
                raise AIServiceError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def _generate(self, prompt: str) -> str:
        """
        Internal method to call the Gemini generate_content API.

        The SDK call blocks, so it runs in a worker thread. There is no
        timeout: the request waits for the model to answer.

        Raises:
            AIServiceError: If generation fails
        """
        client = self._get_client()

        try:
            logger.debug(f"Generating with model {self.model}")
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.model,
                contents=prompt,
            )
            result = response.text or ""
        except Exception as e:
            logger.error(f"AI generation failed: {e}")
            raise AIServiceError(f"AI generation failed: {str(e)}")

        logger.debug(f"Generated {len(result)} characters")
        return result

    async def parse_job_description(self, job_description: str) -> Any:
        """
        Extract structured fields from a job posting.

        Returns:
            Decoded JSON, normally a dict with company, position, location,
            salary_range, required_skills, preferred_skills and keywords
        """
        from .ai_prompts import JOB_DESCRIPTION_PARSE_PROMPT

        prompt = JOB_DESCRIPTION_PARSE_PROMPT.format(job_description=job_description)
        return parse_model_json(await self._generate(prompt))

    async def generate_application(self, master_resume: MasterResume, job: JobDescriptionBrief) -> Any:
        """
        Produce a tailored resume and cover letter.

        Returns:
            Decoded JSON, normally {"tailored_resume": {...}, "cover_letter": "..."}
        """
        from .ai_prompts import APPLICATION_GENERATION_PROMPT

        prompt = APPLICATION_GENERATION_PROMPT.format(
            master_resume=json.dumps(master_resume.model_dump(mode="json"), indent=2),
            company=job.company,
            position=job.position,
            required_skills=", ".join(job.required_skills or []),
            keywords=", ".join(job.keywords or []),
        )
        return parse_model_json(await self._generate(prompt))


# Global service instance for convenience
ai_service = AIService()


def get_ai_service() -> AIService:
    """FastAPI dependency returning the shared AI service."""
    return ai_service
