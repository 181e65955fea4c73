"""
Agents for the career coach.

- intent: Decides whether a question needs job-market data
- orchestrator: Answers questions, optionally grounded in indexed jobs
- ingestion: Scrapes jobs into the index
"""

from careerbot.agents.ingestion import JobIngestion
from careerbot.agents.orchestrator import CareerCoach

__all__ = ["CareerCoach", "JobIngestion"]
