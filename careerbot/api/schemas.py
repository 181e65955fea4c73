"""API request/response schemas."""

from typing import Any

from pydantic import BaseModel, Field

from careerbot.models import (
    ConversationTurn,
    JobRecord,
    JobStatistics,
    ProfileRecord,
    UserProfile,
)
from careerbot.utils.profile_insights import ProfileInsights


# Envelope
class ApiResponse(BaseModel):
    success: bool
    data: Any | None = None
    error: str | None = None


# LinkedIn profile schemas
class LinkedInScrapeRequest(BaseModel):
    linkedin_url: str = Field(min_length=1, max_length=500)


class LinkedInScrapeData(BaseModel):
    profile: ProfileRecord
    insights: ProfileInsights
    summary: str


class ProfileInsightsRequest(BaseModel):
    profile: ProfileRecord


# Job scraping schemas
class JobScrapeRequest(BaseModel):
    keywords: str = Field(min_length=1, max_length=200)
    location: str = Field(default="United States", max_length=200)
    count: int = Field(default=50, ge=1, le=1000)


class JobScrapeData(BaseModel):
    jobs: list[JobRecord]
    total_jobs: int
    placeholder: bool
    indexed: bool


# Statistics schemas
class JobStatisticsRequest(BaseModel):
    keywords: str = Field(default="software engineer", min_length=1, max_length=200)
    location: str = Field(default="United States", max_length=200)
    count: int = Field(default=50, ge=1, le=1000)


class JobStatisticsData(BaseModel):
    statistics: JobStatistics
    message: str = ""


# Question answering schemas
class SearchJobsRequest(BaseModel):
    query: str = Field(min_length=1, max_length=1000)
    user_profile: UserProfile | None = None
    chat_history: list[ConversationTurn] = Field(default_factory=list, max_length=100)
    use_vector_search: bool = False


class SearchJobsData(BaseModel):
    jobs: list[JobRecord]
    ai_response: str
    total_hits: int
    used_job_data: bool
    search_query: str | None = None


class SimpleSearchData(BaseModel):
    jobs: list[JobRecord]
    total_hits: int
