"""
Prompt builders for the career coach.

Every user-supplied value is sanitized before it is interpolated.
"""

from collections.abc import Sequence

from careerbot.models import ConversationTurn, JobRecord, UserProfile
from careerbot.utils.sanitize import sanitize_input

ASSISTANT_NAME = "CareerBot"

MAX_PROMPT_JOBS = 8
JOB_DESCRIPTION_CHARS = 150
HISTORY_TURNS = 6
TURN_CHARS = 200
ABOUT_CHARS = 300


def truncate(text: str, limit: int) -> str:
    """Cut text to at most `limit` chars, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)] + "..."


def profile_context(profile: UserProfile | None, include_linkedin: bool = True, include_about: bool = False) -> str:
    if profile is None:
        return ""

    lines = [
        "User Profile:",
        f"- Position: {sanitize_input(profile.position)}",
        f"- Experience Level: {sanitize_input(profile.experience_level)}",
    ]

    linkedin = profile.linkedin_data
    if include_linkedin and linkedin is not None:
        lines += [
            f"- LinkedIn Profile: {sanitize_input(linkedin.full_name) or 'Available'}",
            f"- Current Role: {sanitize_input(linkedin.job_title) or 'N/A'}",
            f"- Company: {sanitize_input(linkedin.company_name) or 'N/A'}",
            f"- Industry: {sanitize_input(linkedin.company_industry) or 'N/A'}",
        ]
        if include_about:
            lines.append(f"- About: {truncate(sanitize_input(linkedin.about), ABOUT_CHARS)}")

    return "\n".join(lines)


def job_snippets(jobs: Sequence[JobRecord]) -> str:
    if not jobs:
        return ""

    entries = []
    for i, job in enumerate(jobs[:MAX_PROMPT_JOBS], start=1):
        entries.append(
            f"{i}. {job.title or 'N/A'} at {job.company or 'N/A'}\n"
            f"   Location: {job.location or 'N/A'}\n"
            f"   Type: {job.job_type or 'N/A'}\n"
            f"   Experience: {job.experience_level or 'N/A'}\n"
            f"   Salary: {job.salary or 'Not specified'}\n"
            f"   Description: {truncate(job.description, JOB_DESCRIPTION_CHARS)}"
        )
    return f"Current Job Market Data ({len(jobs)} recent jobs found):\n" + "\n\n".join(entries)


def render_history(history: Sequence[ConversationTurn]) -> list[str]:
    """Last HISTORY_TURNS turns, one line each, content capped at TURN_CHARS."""
    lines = []
    for turn in list(history)[-HISTORY_TURNS:]:
        speaker = "User" if turn.role == "user" else "Assistant"
        lines.append(f"{speaker}: {truncate(sanitize_input(turn.content), TURN_CHARS)}")
    return lines


def decision_prompt(question: str, profile: UserProfile | None) -> str:
    return f"""You are {ASSISTANT_NAME}, an expert career coach. Decide if the user's question requires current job market data from our database.

{profile_context(profile)}

User Question: {sanitize_input(question)}

Questions that typically NEED job market data:
- "What are the top skills for [position]?"
- "What companies are hiring for [role]?"
- "What's the salary range for [position]?"
- "What are the job requirements for [role]?"
- "What are the trending technologies in [field]?"
- "What locations have the most [position] jobs?"
- "What are the current job opportunities for [role]?"

Questions that typically DON'T need job market data:
- "How do I prepare for interviews?"
- "What should I include in my resume?"
- "How do I network effectively?"
- "How do I negotiate salary?"
- "What are soft skills for career success?"

Respond with ONLY "YES" if you need job market data, or "NO" if you don't need it."""


def query_prompt(question: str, profile: UserProfile | None) -> str:
    return f"""You are {ASSISTANT_NAME}. Based on the user's question, create an effective search query for our job database.

{profile_context(profile, include_linkedin=False)}

User Question: {sanitize_input(question)}

The query should:
1. Include key terms from the user's question
2. Be optimized for job titles, companies, skills, and descriptions
3. Be 2-5 words maximum
4. Focus on the most important keywords

Examples:
- "What are the top skills for data scientists?" -> "data scientist skills"
- "What companies hire software engineers?" -> "software engineer companies"
- "What's the salary for product managers?" -> "product manager salary"

Respond with ONLY the search query, nothing else."""


def compose_prompt(
    question: str,
    profile: UserProfile | None,
    jobs: Sequence[JobRecord],
    history: Sequence[ConversationTurn],
) -> str:
    sections = [
        f"You are {ASSISTANT_NAME}, an expert career coach and AI assistant. "
        "Provide a comprehensive, personalized response based on the user's question and available data."
    ]

    context = profile_context(profile, include_about=True)
    if context:
        sections.append(context)

    snippets = job_snippets(jobs)
    if snippets:
        sections.append(snippets)

    turns = render_history(history)
    if turns:
        sections.append("Recent Conversation History:\n" + "\n".join(turns))

    sections.append(f"User Question: {sanitize_input(question)}")
    sections.append(
        """Instructions:
1. Directly address the user's question
2. Use specific data from the job market when relevant
3. Provide actionable, personalized career advice
4. Consider the user's profile and experience level
5. Be encouraging, professional, and conversational
6. If no relevant job data is available, provide general career guidance
7. Reference previous conversation context when relevant

Format your response as a natural conversation with the user."""
    )
    return "\n\n".join(sections)
