"""
JobTrack - Pydantic schemas for stored records and API payloads.

Python attributes are snake_case; JSON (both the API and the jobs document)
uses camelCase aliases.
"""
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar
from enum import Enum


class JobStatus(str, Enum):
    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    REJECTED = "Rejected"
    OFFER = "Offer"


JOB_STATUSES = [s.value for s in JobStatus]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


# --- Analysis Schemas ---

class AnalysisResult(CamelModel):
    summary: str
    suggested_skills: List[str]


class AIAnalysis(AnalysisResult):
    analyzed_at: datetime


class AnalysisRequest(CamelModel):
    # Left untyped so the boundary check can report its own message
    job_description: Optional[Any] = None


class AttachAnalysisRequest(CamelModel):
    job_description: Optional[Any] = None


# --- Job Schemas ---

class JobRecord(CamelModel):
    id: str
    job_title: str
    company_name: str
    application_link: str
    status: JobStatus
    date_added: datetime
    job_description: Optional[str] = None
    ai_analysis: Optional[AIAnalysis] = None

    @field_validator("date_added")
    @classmethod
    def assume_utc(cls, v):
        # Naive timestamps are taken as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class JobCreate(CamelModel):
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    application_link: Optional[str] = None
    status: Optional[str] = None
    job_description: Optional[str] = None


class JobUpdate(CamelModel):
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    application_link: Optional[str] = None
    status: Optional[str] = None
    job_description: Optional[str] = None
    ai_analysis: Optional[AIAnalysis] = None


class JobStats(CamelModel):
    total: int
    by_status: Dict[str, int]


# --- Response envelope ---

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = Field(None, description="Present only when success is false")
