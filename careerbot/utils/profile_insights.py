"""
Career insights derived from a scraped LinkedIn profile.
"""

from typing import Any

from pydantic import BaseModel, Field

from careerbot.models import ProfileRecord

LEADERSHIP_WORDS = ("lead", "manager", "director", "head")

# Below MAX_SKILLS, the number of skills kept when a profile is captured
DIVERSE_SKILLS_THRESHOLD = 10


class ProfileInsights(BaseModel):
    experience_level: str = ""
    key_skills: list[str] = Field(default_factory=list)
    career_progression: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    industry_expertise: str = ""
    leadership_experience: bool = False
    certifications: list[str] = Field(default_factory=list)


def _title(item: dict[str, Any]) -> str:
    value = item.get("title")
    return value if isinstance(value, str) else ""


def _role_title(experience: dict[str, Any]) -> str:
    """Role title; grouped entries keep it in the first sub-component."""
    subs = experience.get("subComponents")
    if experience.get("breakdown") and isinstance(subs, list) and subs and isinstance(subs[0], dict):
        return _title(subs[0])
    return _title(experience)


def _describe_role(experience: dict[str, Any]) -> str:
    subs = experience.get("subComponents")
    if experience.get("breakdown") and isinstance(subs, list) and subs and isinstance(subs[0], dict):
        return f"{_title(subs[0])} at {_title(experience)}"
    return _title(experience)


def level_from_years(years: float) -> str:
    if years <= 2:
        return "junior"
    if years <= 5:
        return "middle"
    return "senior"


def estimate_years(experiences: list[dict[str, Any]]) -> int:
    # Rough: two years per listed role
    return min(len(experiences) * 2, 15)


def analyze_profile(profile: ProfileRecord) -> ProfileInsights:
    insights = ProfileInsights()

    if profile.current_job_duration_in_yrs:
        insights.experience_level = level_from_years(profile.current_job_duration_in_yrs)
    elif profile.experiences:
        insights.experience_level = level_from_years(estimate_years(profile.experiences))

    insights.key_skills = [t for t in (_title(s) for s in profile.skills[:10]) if t]
    insights.career_progression = [d for d in (_describe_role(e) for e in profile.experiences[:3]) if d]
    insights.leadership_experience = any(
        word in _role_title(e).lower() for e in profile.experiences for word in LEADERSHIP_WORDS
    )
    insights.certifications = [t for t in (_title(c) for c in profile.certificates) if t]
    insights.industry_expertise = profile.company_industry

    if len(profile.about) > 100:
        insights.strengths.append("Strong professional summary with detailed experience")
    if profile.connections > 500:
        insights.strengths.append("Strong professional network")
    if len(profile.skills) > DIVERSE_SKILLS_THRESHOLD:
        insights.strengths.append("Diverse and comprehensive skill set")
    if insights.leadership_experience:
        insights.strengths.append("Demonstrated leadership experience")
    if insights.certifications:
        insights.strengths.append("Professional certifications and continuous learning")

    if len(profile.skills) < 10:
        insights.recommendations.append("Consider adding more skills to showcase your expertise")
    if len(profile.about) < 200:
        insights.recommendations.append("Enhance your profile summary with more detailed professional background")
    if len(profile.experiences) < 3:
        insights.recommendations.append("Consider adding more detailed work experience descriptions")
    if not insights.leadership_experience and insights.experience_level == "senior":
        insights.recommendations.append("Highlight any leadership or mentoring experience you have")

    return insights


def format_profile_for_chat(profile: ProfileRecord) -> str:
    """Markdown summary of the profile for the chat window."""
    lines = ["**LinkedIn Profile Analysis**", ""]

    if profile.full_name:
        lines.append(f"**Name:** {profile.full_name}")
    if profile.headline:
        lines.append(f"**Headline:** {profile.headline}")
    if profile.job_title and profile.company_name:
        lines.append(f"**Current Role:** {profile.job_title} at {profile.company_name}")
    if profile.company_industry:
        lines.append(f"**Industry:** {profile.company_industry}")

    if profile.experiences:
        lines += ["", "**Recent Experience:**"]
        lines += [f"{i}. {_describe_role(e)}" for i, e in enumerate(profile.experiences[:3], start=1)]

    skill_names = [t for t in (_title(s) for s in profile.skills[:8]) if t]
    if skill_names:
        lines += ["", f"**Key Skills:** {', '.join(skill_names)}"]

    if profile.educations:
        education = profile.educations[0]
        degree = education.get("subtitle") if isinstance(education.get("subtitle"), str) else ""
        school = _title(education)
        lines += ["", f"**Education:** {degree} from {school}" if degree else f"**Education:** {school}"]

    if profile.connections:
        lines += ["", f"**Network:** {profile.connections} connections"]

    return "\n".join(lines) + "\n"


def career_insights(profile: ProfileRecord) -> str:
    """Markdown career-coaching notes built from analyze_profile()."""
    analysis = analyze_profile(profile)
    lines = ["**Career Insights Based on Your Profile**", ""]

    if analysis.experience_level:
        lines.append(f"**Experience Level:** {analysis.experience_level.capitalize()}")
    if analysis.industry_expertise:
        lines.append(f"**Industry Focus:** {analysis.industry_expertise}")
    if analysis.leadership_experience:
        lines.append("**Leadership Experience:** Demonstrated")

    sections = [
        ("Your Top Skills", analysis.key_skills[:8]),
        ("Certifications", analysis.certifications[:5]),
        ("Career Progression", analysis.career_progression),
    ]
    for heading, items in sections:
        if items:
            lines += ["", f"**{heading}:**"]
            lines += [f"{i}. {item}" for i, item in enumerate(items, start=1)]

    if analysis.strengths:
        lines += ["", "**Profile Strengths:**"]
        lines += [f"- {s}" for s in analysis.strengths]
    if analysis.recommendations:
        lines += ["", "**Recommendations for Improvement:**"]
        lines += [f"- {r}" for r in analysis.recommendations]

    return "\n".join(lines) + "\n"
