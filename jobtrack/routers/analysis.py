"""
JobTrack - Job description analysis and AI endpoints.

The analysis endpoint always answers with a summary and skills: when the AI
provider is unavailable or fails, the keyword rules answer instead.
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import Dict
import logging

from ..schemas import APIResponse, AnalysisRequest, AnalysisResult
from ..services.ai_prompts import ALL_PROMPTS, check_template, set_prompt
from ..services.job_analyzer import JobAnalyzer, get_job_analyzer
from ..validation import validate_job_description

router = APIRouter()
logger = logging.getLogger("jobtrack.analysis")


@router.post("/analyze-job", response_model=APIResponse[AnalysisResult])
async def analyze_job(
    request: AnalysisRequest,
    analyzer: JobAnalyzer = Depends(get_job_analyzer)
):
    """Summarize a job description and suggest three resume skills."""
    description = validate_job_description(request.job_description)
    result = await analyzer.analyze(description)
    return {"success": True, "data": result}


@router.get("/ai/status")
async def ai_status(analyzer: JobAnalyzer = Depends(get_job_analyzer)):
    """Report whether AI analysis is configured and which model it uses."""
    service = analyzer.ai_service
    return {
        "success": True,
        "data": {
            "enabled": service.enabled,
            "configured": service.is_configured,
            "model": service.model,
        }
    }


@router.get("/ai/prompts")
async def get_all_prompts():
    """Get all AI prompt templates for viewing and prompt engineering."""
    return {
        "success": True,
        "data": {
            name: {
                "template": template,
                "characterCount": len(template),
            }
            for name, template in ALL_PROMPTS.items()
        }
    }


@router.get("/ai/prompts/{prompt_name}")
async def get_prompt(prompt_name: str):
    """Get a specific AI prompt template by name."""
    if prompt_name not in ALL_PROMPTS:
        raise HTTPException(
            status_code=404,
            detail=f"Prompt '{prompt_name}' not found. Available: {list(ALL_PROMPTS.keys())}"
        )
    return {
        "success": True,
        "data": {
            "name": prompt_name,
            "template": ALL_PROMPTS[prompt_name],
            "characterCount": len(ALL_PROMPTS[prompt_name])
        }
    }


@router.put("/ai/prompts/{prompt_name}")
async def update_prompt(prompt_name: str, data: Dict[str, str]):
    """
    Update an AI prompt template at runtime.

    Send {"template": "your new prompt..."}. The job_summary template must keep
    its {job_description} placeholder; literal braces are written as {{ }}.
    Changes persist until the app restarts.
    """
    if prompt_name not in ALL_PROMPTS:
        raise HTTPException(
            status_code=404,
            detail=f"Prompt '{prompt_name}' not found. Available: {list(ALL_PROMPTS.keys())}"
        )
    template = data.get("template")
    if not template:
        raise HTTPException(status_code=400, detail="'template' field is required")
    try:
        check_template(prompt_name, template)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    set_prompt(prompt_name, template)
    logger.info(f"Prompt '{prompt_name}' updated")
    return {
        "success": True,
        "data": {
            "name": prompt_name,
            "characterCount": len(template),
        }
    }
