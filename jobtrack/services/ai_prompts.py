"""
JobTrack - AI Prompt Templates

Prompt templates for job description analysis.

Written for OpenAI-compatible chat models (gpt-3.5-turbo and newer).
Templates can be replaced at runtime through /api/ai/prompts for prompt
engineering; changes last until the process restarts.
"""

# -----------------------------------------------------------------------------
# System Prompt
# -----------------------------------------------------------------------------
JOB_ANALYSIS_SYSTEM_PROMPT = (
    "You are a helpful assistant that analyzes job descriptions. "
    "Always respond with valid JSON in the exact format requested."
)


# -----------------------------------------------------------------------------
# Job Summary Prompt
# -----------------------------------------------------------------------------
JOB_SUMMARY_PROMPT = """Analyze the following job description and provide:
1. A brief 2-3 sentence summary of the job
2. The top 3 most important skills a candidate should highlight in their resume for this position

Job Description:
{job_description}

Please respond in the following JSON format:
{{
  "summary": "Brief job summary here",
  "suggestedSkills": ["skill1", "skill2", "skill3"]
}}"""


# Registry used by the prompt inspection endpoints
ALL_PROMPTS = {
    "job_analysis_system": JOB_ANALYSIS_SYSTEM_PROMPT,
    "job_summary": JOB_SUMMARY_PROMPT,
}

# Placeholders each formatted template must accept
PROMPT_VARIABLES = {
    "job_summary": ("job_description",),
}


def get_prompt(name: str) -> str:
    """Get a prompt template by name."""
    return ALL_PROMPTS[name]


def set_prompt(name: str, template: str) -> None:
    """Override a prompt template at runtime."""
    if name not in ALL_PROMPTS:
        raise KeyError(name)
    ALL_PROMPTS[name] = template


def check_template(name: str, template: str) -> None:
    """
    Dry-run a template with empty values for its placeholders.

    Raises:
        ValueError: if the template cannot be formatted
    """
    variables = PROMPT_VARIABLES.get(name)
    if variables is None:
        return
    try:
        template.format(**{var: "" for var in variables})
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(f"Template cannot be formatted: {e!r}") from e
