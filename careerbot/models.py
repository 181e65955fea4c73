"""
Data models for profiles, jobs and conversations.

Scraped payloads are loosely typed; the ``*_from_scrape`` functions map them
onto fixed shapes with every field defaulted explicitly.
"""

import re
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# Caps applied once when a profile is captured
MAX_EXPERIENCES = 5
MAX_EDUCATIONS = 3
MAX_SKILLS = 15
MAX_CERTIFICATES = 5
MAX_AWARDS = 3

_TAG_RE = re.compile(r"<[^>]+>")


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _str(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return default


def _float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in (_str(item) for item in value) if v]


def _dict_list(value: Any, cap: int | None = None) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    items = [item for item in value if isinstance(item, dict)]
    return items[:cap] if cap is not None else items


# Job postings
class JobRecord(BaseModel):
    """One job posting as stored in the index."""

    id: str = ""
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    salary: str = ""
    job_type: str = ""
    experience_level: str = ""
    posted_date: str = ""
    url: str = ""
    company_size: str = ""
    industry: str = ""
    requirements: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    scraped_at: str = Field(default_factory=utc_now_iso)
    keywords: list[str] = Field(default_factory=list)
    vector: list[float] | None = None
    is_placeholder: bool = False
    score: float | None = None

    def to_index_document(self) -> dict[str, Any]:
        """Index document shape (camelCase keys, no search-time fields)."""
        doc: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "description": self.description,
            "salary": self.salary,
            "jobType": self.job_type,
            "experienceLevel": self.experience_level,
            "postedDate": self.posted_date,
            "url": self.url,
            "companySize": self.company_size,
            "industry": self.industry,
            "requirements": self.requirements,
            "benefits": self.benefits,
            "scrapedAt": self.scraped_at,
            "keywords": self.keywords,
            "text": f"{self.title} {self.company} {self.description}".strip(),
        }
        if self.vector:
            doc["vector"] = self.vector
        return doc


def job_from_scrape(raw: dict[str, Any], keywords: str = "", default_location: str = "") -> JobRecord:
    """Map one raw job-scraper item onto a JobRecord."""
    description = _str(raw.get("descriptionText"))
    if not description:
        description = _TAG_RE.sub(" ", _str(raw.get("descriptionHtml"))).strip()

    salary = _str(raw.get("salary"))
    if not salary:
        salary = " - ".join(_str_list(raw.get("salaryInfo")))

    employees = raw.get("companyEmployeesCount")
    company_size = _str(employees) if _int(employees) > 0 else ""

    return JobRecord(
        id=_str(raw.get("id")),
        title=_str(raw.get("title")),
        company=_str(raw.get("companyName")),
        location=_str(raw.get("location")) or default_location,
        description=description,
        salary=salary,
        job_type=_str(raw.get("employmentType")),
        experience_level=_str(raw.get("seniorityLevel")),
        posted_date=_str(raw.get("postedAt")),
        url=_str(raw.get("link")),
        company_size=company_size,
        industry=_str(raw.get("industries")),
        requirements=[],
        benefits=_str_list(raw.get("benefits")),
        scraped_at=utc_now_iso(),
        keywords=[keywords.lower()] if keywords else [],
    )


def job_from_hit(hit: dict[str, Any]) -> JobRecord:
    """Map an Elasticsearch search hit onto a JobRecord."""
    source = hit.get("_source") or {}
    vector = source.get("vector")
    job = JobRecord(
        id=_str(source.get("id")) or _str(hit.get("_id")),
        title=_str(source.get("title")),
        company=_str(source.get("company")),
        location=_str(source.get("location")),
        description=_str(source.get("description")),
        salary=_str(source.get("salary")),
        job_type=_str(source.get("jobType")),
        experience_level=_str(source.get("experienceLevel")),
        posted_date=_str(source.get("postedDate")),
        url=_str(source.get("url")),
        company_size=_str(source.get("companySize")),
        industry=_str(source.get("industry")),
        requirements=_str_list(source.get("requirements")),
        benefits=_str_list(source.get("benefits")),
        scraped_at=_str(source.get("scrapedAt")),
        keywords=_str_list(source.get("keywords")),
        vector=[_float(v) for v in vector] if isinstance(vector, list) else None,
    )
    if isinstance(hit.get("_score"), (int, float)):
        job.score = float(hit["_score"])
    return job


# LinkedIn profiles
class ProfileRecord(BaseModel):
    """A scraped LinkedIn profile, truncated at capture time."""

    linkedin_url: str = ""
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    headline: str = ""
    connections: int = 0
    followers: int = 0
    email: str = ""
    mobile_number: str | None = None

    job_title: str = ""
    company_name: str = ""
    company_industry: str = ""
    company_website: str = ""
    company_linkedin: str = ""
    company_founded_in: int = 0
    company_size: str = ""
    current_job_duration: str = ""
    current_job_duration_in_yrs: float = 0.0

    top_skills_by_endorsements: str = ""
    address_country_only: str = ""
    address_with_country: str = ""
    address_without_country: str = ""
    profile_pic: str = ""
    profile_pic_high_quality: str = ""
    about: str = ""
    public_identifier: str = ""

    experiences: list[dict[str, Any]] = Field(default_factory=list)
    educations: list[dict[str, Any]] = Field(default_factory=list)
    skills: list[dict[str, Any]] = Field(default_factory=list)
    certificates: list[dict[str, Any]] = Field(default_factory=list)
    awards: list[dict[str, Any]] = Field(default_factory=list)
    interests: list[dict[str, Any]] = Field(default_factory=list)

    scraped_at: str = Field(default_factory=utc_now_iso)


def profile_from_scrape(raw: dict[str, Any], url: str) -> ProfileRecord:
    """Map one raw profile-scraper item onto a ProfileRecord."""
    mobile = raw.get("mobileNumber")
    return ProfileRecord(
        linkedin_url=url,
        first_name=_str(raw.get("firstName")),
        last_name=_str(raw.get("lastName")),
        full_name=_str(raw.get("fullName")),
        headline=_str(raw.get("headline")),
        connections=_int(raw.get("connections")),
        followers=_int(raw.get("followers")),
        email=_str(raw.get("email")),
        mobile_number=_str(mobile) or None,
        job_title=_str(raw.get("jobTitle")),
        company_name=_str(raw.get("companyName")),
        company_industry=_str(raw.get("companyIndustry")),
        company_website=_str(raw.get("companyWebsite")),
        company_linkedin=_str(raw.get("companyLinkedin")),
        company_founded_in=_int(raw.get("companyFoundedIn")),
        company_size=_str(raw.get("companySize")),
        current_job_duration=_str(raw.get("currentJobDuration")),
        current_job_duration_in_yrs=_float(raw.get("currentJobDurationInYrs")),
        top_skills_by_endorsements=_str(raw.get("topSkillsByEndorsements")),
        address_country_only=_str(raw.get("addressCountryOnly")),
        address_with_country=_str(raw.get("addressWithCountry")),
        address_without_country=_str(raw.get("addressWithoutCountry")),
        profile_pic=_str(raw.get("profilePic")),
        profile_pic_high_quality=_str(raw.get("profilePicHighQuality")),
        about=_str(raw.get("about")),
        public_identifier=_str(raw.get("publicIdentifier")),
        experiences=_dict_list(raw.get("experiences"), MAX_EXPERIENCES),
        educations=_dict_list(raw.get("educations"), MAX_EDUCATIONS),
        skills=_dict_list(raw.get("skills"), MAX_SKILLS),
        certificates=_dict_list(raw.get("licenseAndCertificates"), MAX_CERTIFICATES),
        awards=_dict_list(raw.get("volunteerAndAwards"), MAX_AWARDS),
        interests=_dict_list(raw.get("interests")),
        scraped_at=utc_now_iso(),
    )


# Session data
class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime | None = None


class UserProfile(BaseModel):
    """Onboarding answers held for the session."""

    position: str
    experience_level: Literal["junior", "middle", "senior"]
    linkedin_url: str = ""
    linkedin_data: ProfileRecord | None = None


# Pipeline results
class FacetBucket(BaseModel):
    key: str
    count: int


class JobStatistics(BaseModel):
    total_jobs: int = 0
    by_company: list[FacetBucket] = Field(default_factory=list)
    by_location: list[FacetBucket] = Field(default_factory=list)
    by_industry: list[FacetBucket] = Field(default_factory=list)
    by_experience_level: list[FacetBucket] = Field(default_factory=list)


class CoachAnswer(BaseModel):
    answer: str
    jobs: list[JobRecord] = Field(default_factory=list)
    used_job_data: bool = False
    search_query: str | None = None


class IngestionResult(BaseModel):
    statistics: JobStatistics | None = None
    jobs: list[JobRecord] = Field(default_factory=list)
    scraped: int = 0
    indexed: bool = False
    placeholder: bool = False
    message: str = ""
