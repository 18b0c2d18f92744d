import json

import httpx
import pytest

from jobtrack.errors import AIServiceError
from jobtrack.services.ai_prompts import ALL_PROMPTS
from jobtrack.services.ai_service import AIService
from jobtrack.services.job_analyzer import (
    DEFAULT_SKILLS,
    FALLBACK_SUMMARY,
    JobAnalyzer,
    keyword_analysis,
)


@pytest.mark.parametrize("text, skills", [
    ("Strong React and JavaScript experience required", ["React", "JavaScript", "Frontend Development"]),
    ("We use PYTHON everywhere", ["Python", "Django", "Backend Development"]),
    ("Own our analytics dashboards", ["Data Analysis", "SQL", "Python"]),
    ("Run Social Media campaigns", ["Digital Marketing", "Social Media", "Content Creation"]),
    ("Drive a forklift safely", DEFAULT_SKILLS),
])
def test_keyword_rules(text, skills):
    result = keyword_analysis(text)
    assert result.suggested_skills == skills
    assert result.summary == FALLBACK_SUMMARY


def test_first_matching_rule_wins():
    result = keyword_analysis("Python backend feeding a React frontend with data")
    assert result.suggested_skills == ["React", "JavaScript", "Frontend Development"]


@pytest.mark.asyncio
async def test_no_credential_skips_network():
    def handler(request):
        raise AssertionError("network must not be called")

    service = AIService(api_key="", transport=httpx.MockTransport(handler))
    analyzer = JobAnalyzer(service)

    result = await analyzer.analyze("React and JavaScript experience required for this frontend role")
    assert result.suggested_skills == ["React", "JavaScript", "Frontend Development"]


@pytest.mark.asyncio
async def test_provider_error_falls_back(failing_transport):
    analyzer = JobAnalyzer(AIService(api_key="sk-test", enabled=True, transport=failing_transport))

    result = await analyzer.analyze("Marketing lead for social media growth across all of our channels")
    assert result.summary
    assert result.suggested_skills == ["Digital Marketing", "Social Media", "Content Creation"]


@pytest.mark.asyncio
async def test_provider_reply_is_used(chat_transport):
    reply = json.dumps({
        "summary": "Build APIs. Mentor engineers.",
        "suggestedSkills": ["Go", "Kubernetes", "gRPC", "Extra"],
    })
    service = AIService(api_key="sk-test", enabled=True, transport=chat_transport(reply))

    result = await JobAnalyzer(service).analyze("x" * 60)
    assert result.summary == "Build APIs. Mentor engineers."
    assert result.suggested_skills == ["Go", "Kubernetes", "gRPC"]


@pytest.mark.asyncio
async def test_reply_wrapped_in_code_fence_is_parsed(chat_transport):
    reply = '```json\n{"summary": "A role.", "suggestedSkills": ["A", "B", "C"]}\n```'
    service = AIService(api_key="sk-test", enabled=True, transport=chat_transport(reply))

    result = await service.analyze_job_description("x" * 60)
    assert result.suggested_skills == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_malformed_reply_raises_service_error(chat_transport):
    service = AIService(api_key="sk-test", enabled=True, transport=chat_transport("I cannot help"))
    with pytest.raises(AIServiceError):
        await service.analyze_job_description("x" * 60)


@pytest.mark.asyncio
async def test_error_status_raises_service_error(chat_transport):
    service = AIService(api_key="sk-test", enabled=True, transport=chat_transport("{}", status_code=401))
    with pytest.raises(AIServiceError):
        await service.analyze_job_description("x" * 60)


@pytest.mark.asyncio
async def test_malformed_reply_falls_back(chat_transport):
    reply = json.dumps({"summary": "", "suggestedSkills": []})
    service = AIService(api_key="sk-test", enabled=True, transport=chat_transport(reply))

    result = await JobAnalyzer(service).analyze("Django services for a python shop, remote friendly team")
    assert result.suggested_skills == ["Python", "Django", "Backend Development"]


@pytest.mark.asyncio
async def test_request_carries_key_and_description():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        content = json.dumps({"summary": "S.", "suggestedSkills": ["A", "B", "C"]})
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    service = AIService(
        api_key="sk-test", base_url="https://llm.example.com/v1/", model="test-model",
        enabled=True, transport=httpx.MockTransport(handler),
    )
    await service.analyze_job_description("Unique description marker " + "x" * 40)

    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["messages"][0]["role"] == "system"
    assert "Unique description marker" in seen["body"]["messages"][1]["content"]


def test_disabled_service_is_not_configured():
    assert AIService(api_key="sk-test", enabled=False).is_configured is False
    assert AIService(api_key="sk-test", enabled=True).is_configured is True


@pytest.mark.asyncio
async def test_unformattable_template_falls_back(chat_transport, monkeypatch):
    monkeypatch.setitem(ALL_PROMPTS, "job_summary", "Summarize {job_description} as {")
    reply = json.dumps({"summary": "S.", "suggestedSkills": ["A", "B", "C"]})
    service = AIService(api_key="sk-test", enabled=True, transport=chat_transport(reply))

    with pytest.raises(AIServiceError):
        await service.analyze_job_description("x" * 60)

    result = await JobAnalyzer(service).analyze("Django services for a python shop, remote friendly team")
    assert result.suggested_skills == ["Python", "Django", "Backend Development"]
