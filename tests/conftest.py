import httpx
import pytest
from fastapi.testclient import TestClient

from jobtrack.main import app
from jobtrack.services.ai_service import AIService
from jobtrack.services.job_analyzer import JobAnalyzer, get_job_analyzer
from jobtrack.storage import JobStore, get_job_store


@pytest.fixture
def store(tmp_path):
    return JobStore(tmp_path / "data" / "jobs.json")


@pytest.fixture
def job_fields():
    return {
        "job_title": "Frontend Engineer",
        "company_name": "Acme",
        "application_link": "https://acme.example.com/jobs/1",
        "status": "Applied",
        "job_description": "Build React and JavaScript interfaces for our dashboard product.",
    }


@pytest.fixture
def offline_analyzer():
    return JobAnalyzer(AIService(api_key="", enabled=True))


@pytest.fixture
def failing_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.MockTransport(handler)


@pytest.fixture
def chat_transport():
    """Factory for a transport answering every request with one chat completion."""
    def make(content, status_code=200):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status_code,
                json={"choices": [{"message": {"role": "assistant", "content": content}}]},
            )
        return httpx.MockTransport(handler)
    return make


@pytest.fixture
def client(store, offline_analyzer):
    app.dependency_overrides[get_job_store] = lambda: store
    app.dependency_overrides[get_job_analyzer] = lambda: offline_analyzer
    yield TestClient(app)
    app.dependency_overrides.clear()
