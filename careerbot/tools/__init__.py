"""
Tools for the career coach.

- apify: LinkedIn profile and job scraping via Apify actors
- elasticsearch: Job index search, bulk load and statistics
- gemini: Prompt completion via the Gemini API
"""

from careerbot.tools.apify import ApifyScraper
from careerbot.tools.elasticsearch import JobIndex
from careerbot.tools.gemini import GeminiClient

__all__ = ["ApifyScraper", "JobIndex", "GeminiClient"]
