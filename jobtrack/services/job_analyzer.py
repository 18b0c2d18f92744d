"""
JobTrack - Job description analysis.

Two stages:
- keyword_analysis: pure, deterministic rules that always produce a result
- AIService.analyze_job_description: the network call, used only when a
  credential is configured

JobAnalyzer picks between them. Provider failures are logged and replaced
by the keyword result; they never reach the caller.

Callers are expected to enforce the minimum description length
(see validation.validate_job_description) before calling analyze().
"""
import logging
from typing import List, Tuple

from ..errors import AIServiceError
from ..schemas import AnalysisResult
from .ai_service import AIService, ai_service

logger = logging.getLogger("jobtrack.analyzer")

# Checked in order, first match wins
KEYWORD_RULES: List[Tuple[Tuple[str, ...], List[str]]] = [
    (("react", "javascript"), ["React", "JavaScript", "Frontend Development"]),
    (("python", "django"), ["Python", "Django", "Backend Development"]),
    (("data", "analytics"), ["Data Analysis", "SQL", "Python"]),
    (("marketing", "social media"), ["Digital Marketing", "Social Media", "Content Creation"]),
]

DEFAULT_SKILLS = ["Communication", "Problem Solving", "Teamwork"]

FALLBACK_SUMMARY = (
    "This position requires a skilled professional with experience in the specified domain. "
    "The role involves collaborative work and requires strong technical and interpersonal skills."
)


def keyword_analysis(job_description: str) -> AnalysisResult:
    """Rule-based analysis. The summary is a fixed template."""
    text = job_description.lower()
    skills = DEFAULT_SKILLS
    for keywords, rule_skills in KEYWORD_RULES:
        if any(keyword in text for keyword in keywords):
            skills = rule_skills
            break
    return AnalysisResult(summary=FALLBACK_SUMMARY, suggested_skills=list(skills))


class JobAnalyzer:
    """Selects AI or keyword analysis for a job description."""

    def __init__(self, service: AIService):
        self.ai_service = service

    async def analyze(self, job_description: str) -> AnalysisResult:
        if not self.ai_service.is_configured:
            logger.info("No AI credential configured, using keyword analysis")
            return keyword_analysis(job_description)

        try:
            result = await self.ai_service.analyze_job_description(job_description)
            logger.info("Job description analyzed with AI")
            return result
        except AIServiceError as e:
            logger.warning(f"AI job analysis failed, falling back to keyword-based: {e}")
            return keyword_analysis(job_description)


job_analyzer = JobAnalyzer(ai_service)


def get_job_analyzer() -> JobAnalyzer:
    """FastAPI dependency returning the configured analyzer."""
    return job_analyzer
