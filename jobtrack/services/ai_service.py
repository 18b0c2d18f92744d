"""
JobTrack - AI Service (OpenAI-compatible chat completions)

Thin client for summarizing job descriptions with a hosted language model.

Setup:
1. Get an API key from your provider (OpenAI or any compatible endpoint)
2. Set JOBTRACK_OPENAI_API_KEY (or OPENAI_API_KEY)
3. Optionally point JOBTRACK_OPENAI_BASE_URL at a compatible server

Every failure is raised as AIServiceError. Callers decide how to fall back;
see JobAnalyzer for the keyword-based fallback.
"""
from typing import Any, Dict, List, Optional
import json
import logging
import re

import httpx

from ..config import settings
from ..errors import AIServiceError
from ..schemas import AnalysisResult
from .ai_prompts import get_prompt

logger = logging.getLogger("jobtrack.ai")

MAX_SUGGESTED_SKILLS = 3


class AIService:
    """
    AI Service for job description analysis.

    Configured from settings by default; every setting can be overridden
    per instance, and an httpx transport can be injected for testing.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        enabled: Optional[bool] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize AI service with settings."""
        self.api_key = api_key if api_key is not None else settings.ai.openai_api_key
        self.base_url = (base_url or settings.ai.openai_base_url).rstrip("/")
        self.model = model or settings.ai.openai_model
        self.enabled = settings.ai.ai_enabled if enabled is None else enabled
        self.temperature = settings.ai.ai_temperature
        self.max_tokens = settings.ai.ai_max_tokens
        self.timeout = timeout or settings.ai.ai_timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """True when AI is enabled and a credential is present."""
        return bool(self.enabled and self.api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _chat(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Internal method to call the chat completions API.

        Returns:
            Content of the first choice

        Raises:
            AIServiceError: If the call fails for any reason
        """
        if not self.api_key:
            raise AIServiceError("AI API key not configured")

        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        request_body: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": self.temperature if temperature is None else temperature,
        }

        try:
            async with self._client() as client:
                logger.debug(f"Requesting completion from model {self.model}")
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=request_body,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )

                if response.status_code != 200:
                    logger.error(f"AI provider error: {response.text[:500]}")
                    raise AIServiceError(f"AI provider returned status {response.status_code}")

                data = response.json()
                content = (data.get("choices") or [{}])[0].get("message", {}).get("content")
                if not content:
                    raise AIServiceError("No response content from AI provider")
                return content.strip()

        except httpx.TimeoutException:
            logger.error("AI request timed out")
            raise AIServiceError("AI request timed out")
        except httpx.HTTPError as e:
            logger.error(f"AI request failed: {e}")
            raise AIServiceError(f"AI request failed: {e}")
        except AIServiceError:
            raise
        except Exception as e:
            logger.error(f"AI request failed: {e}")
            raise AIServiceError(f"AI request failed: {str(e)}")

    async def analyze_job_description(self, job_description: str) -> AnalysisResult:
        """
        Summarize a job description and suggest resume skills.

        Args:
            job_description: Full job posting text

        Returns:
            AnalysisResult with summary and up to 3 skills

        Raises:
            AIServiceError: If the call fails or the reply is unusable
        """
        try:
            prompt = get_prompt("job_summary").format(job_description=job_description)
        except (KeyError, IndexError, ValueError) as e:
            raise AIServiceError(f"Prompt template could not be formatted: {e}")
        response = await self._chat(prompt, system_prompt=get_prompt("job_analysis_system"))
        return self._parse_analysis(response)

    def _parse_analysis(self, response: str) -> AnalysisResult:
        """Parse the JSON object from the model reply."""
        json_match = re.search(r'\{[\s\S]*\}', response)
        if not json_match:
            raise AIServiceError("AI reply did not contain a JSON object")

        try:
            analysis = json.loads(json_match.group())
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse job analysis JSON: {e}")
            raise AIServiceError("AI reply was not valid JSON")

        summary = analysis.get("summary") if isinstance(analysis, dict) else None
        skills = analysis.get("suggestedSkills") if isinstance(analysis, dict) else None

        if not isinstance(summary, str) or not summary.strip():
            raise AIServiceError("AI reply is missing a summary")
        if not isinstance(skills, list) or not skills or not all(isinstance(s, str) for s in skills):
            raise AIServiceError("AI reply is missing suggested skills")

        return AnalysisResult(
            summary=summary.strip(),
            suggested_skills=[s.strip() for s in skills[:MAX_SUGGESTED_SKILLS]],
        )


# Global service instance for convenience
ai_service = AIService()
