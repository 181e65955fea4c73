"""
Apify scraper tool for LinkedIn profiles and job postings.

Each scrape first tries the synchronous run-and-return endpoint, then falls
back to starting an async run and polling it.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from careerbot.config import Settings
from careerbot.errors import ScrapeConfigurationError, ScrapeServiceError, ScrapeTimeoutError
from careerbot.models import JobRecord, ProfileRecord, job_from_scrape, profile_from_scrape, utc_now_iso
from careerbot.utils.polling import PollExhausted, PollFailed, Poller, PollPolicy
from careerbot.utils.sanitize import sanitize_input, sanitize_url

logger = logging.getLogger(__name__)

MIN_JOB_BATCH = 100  # smallest count the jobs actor accepts
DEFAULT_JOB_LOCATION = "United States"
PROFILE_ACTOR_TIMEOUT_MS = 60000

LINKEDIN_JOBS_SEARCH_URL = "https://www.linkedin.com/jobs/search/"


def placeholder_jobs(keywords: str) -> list[JobRecord]:
    """Demo postings returned when both scrape phases fail."""
    now = utc_now_iso()
    demo = [
        ("demo-1", f"Senior {keywords}", "Google", "Mountain View, CA",
         f"We're looking for an experienced {keywords} to join our team...",
         "$120,000 - $180,000", "Senior level", "https://careers.google.com", "Technology",
         ["5+ years experience", "Strong technical skills", "Leadership experience"],
         ["Health insurance", "401k matching", "Flexible work"]),
        ("demo-2", f"{keywords} Engineer", "Microsoft", "Seattle, WA",
         f"Join our team as a {keywords} Engineer...",
         "$110,000 - $160,000", "Mid-Senior level", "https://careers.microsoft.com", "Technology",
         ["3+ years experience", "Bachelor degree", "Problem solving"],
         ["Health insurance", "Stock options", "Remote work"]),
        ("demo-3", f"Lead {keywords}", "Amazon", "Austin, TX",
         f"Lead {keywords} position with growth opportunities...",
         "$130,000 - $200,000", "Senior level", "https://amazon.jobs", "E-commerce",
         ["7+ years experience", "Masters degree preferred", "Team leadership"],
         ["Health insurance", "Stock options", "Career development"]),
    ]
    return [
        JobRecord(
            id=job_id,
            title=title,
            company=company,
            location=location,
            description=description,
            salary=salary,
            job_type="Full-time",
            experience_level=level,
            posted_date=now,
            url=url,
            company_size="10,001+ employees",
            industry=industry,
            requirements=requirements,
            benefits=benefits,
            scraped_at=now,
            keywords=[keywords.lower()],
            is_placeholder=True,
        )
        for job_id, title, company, location, description, salary, level, url, industry, requirements, benefits in demo
    ]


def build_jobs_search_url(keywords: str, location: str) -> str:
    return (
        f"{LINKEDIN_JOBS_SEARCH_URL}?keywords={quote(keywords.strip(), safe='')}"
        f"&location={quote(location, safe='')}"
    )


class ApifyScraper:
    """Scrapes LinkedIn through configured Apify actors."""

    def __init__(
        self,
        config: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep=asyncio.sleep,
    ):
        self.config = config
        self._transport = transport
        self._sleep = sleep

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.apify_base_url,
            timeout=timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )

    def _require(self, actor_id: str, actor_env: str) -> str:
        if not self.config.apify_api_token or not actor_id:
            raise ScrapeConfigurationError(f"APIFY_API_TOKEN or {actor_env} not set")
        # Apify expects "user~actor" in paths
        return actor_id.replace("/", "~")

    async def _run_sync(self, actor: str, actor_input: dict, timeout: float) -> list[dict[str, Any]]:
        """One request: the actor runs and returns its dataset items."""
        async with self._client(timeout) as client:
            response = await client.post(
                f"/acts/{actor}/run-sync-get-dataset-items",
                params={"token": self.config.apify_api_token},
                json=actor_input,
            )
            response.raise_for_status()
            items = response.json()
        return [item for item in items if isinstance(item, dict)] if isinstance(items, list) else []

    async def _run_async(self, actor: str, actor_input: dict, max_attempts: int, label: str) -> list[dict[str, Any]]:
        """Start a run and poll its dataset until items show up."""
        params = {"token": self.config.apify_api_token}

        async with self._client(self.config.search_timeout) as client:
            try:
                response = await client.post(f"/acts/{actor}/runs", params=params, json=actor_input)
                if response.status_code >= 400:
                    logger.error(f"[{label}] Apify run failed to start: {response.status_code} {response.text[:200]}")
                    raise ScrapeServiceError(f"Failed to start scraping run: {response.status_code}")
                run_id = (response.json().get("data") or {}).get("id")
            except (httpx.HTTPError, ValueError, AttributeError) as e:
                raise ScrapeServiceError(f"Failed to start scraping run: {e}") from e
            if not run_id:
                raise ScrapeServiceError("Scraping run started without an id")

            logger.info(f"[{label}] Apify run started with ID: {run_id}")

            async def fetch_items():
                resp = await client.get(f"/acts/{actor}/runs/{run_id}/dataset/items", params=params)
                if resp.status_code >= 400:
                    return []
                items = resp.json()
                return [item for item in items if isinstance(item, dict)] if isinstance(items, list) else []

            async def fetch_status():
                resp = await client.get(f"/acts/{actor}/runs/{run_id}", params=params)
                if resp.status_code >= 400:
                    return None
                data = resp.json()
                return (data.get("data") or {}).get("status") if isinstance(data, dict) else None

            poller = Poller(
                fetch_result=fetch_items,
                is_done=lambda items: len(items) > 0,
                policy=PollPolicy(interval=self.config.poll_interval, max_attempts=max_attempts),
                fetch_status=fetch_status,
                is_failed=lambda status: status == "FAILED",
                sleep=self._sleep,
                retry_on=(httpx.HTTPError, ValueError),
                label=label,
            )
            try:
                return await poller.run()
            except PollFailed as e:
                logger.error(f"[{label}] Apify run {run_id} reported {e.status}")
                raise ScrapeServiceError(f"Scraping run {run_id} failed") from e
            except PollExhausted as e:
                raise ScrapeTimeoutError(f"Scraping run {run_id} timed out after {e.attempts} attempts") from e

    async def scrape_profile(self, url: str) -> ProfileRecord:
        """
        Scrape a single LinkedIn profile.

        Raises:
            ValueError: URL empty or not http(s)
            ScrapeServiceError: credentials missing or the run failed
            ScrapeTimeoutError: no result within the polling budget
        """
        clean_url = sanitize_url(url)
        if not clean_url:
            raise ValueError("LinkedIn URL is required")

        actor = self._require(self.config.linkedin_scraper_actor_id, "LINKEDIN_SCRAPER_ACTOR_ID")
        actor_input = {
            "profileUrls": [clean_url],
            "maxConcurrency": 1,
            "maxRetries": 2,
            "timeout": PROFILE_ACTOR_TIMEOUT_MS,
        }

        logger.info(f"Scraping LinkedIn profile: {clean_url}")
        try:
            items = await self._run_sync(actor, actor_input, self.config.profile_sync_timeout)
            if items:
                profile = profile_from_scrape(items[0], clean_url)
                logger.info(f"Sync scrape succeeded for profile: {profile.full_name}")
                return profile
            logger.info("Sync profile scrape returned no items, falling back to async")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Sync profile scrape failed, falling back to async: {e}")

        items = await self._run_async(actor, actor_input, self.config.profile_poll_attempts, "profile")
        profile = profile_from_scrape(items[0], clean_url)
        logger.info(f"Async scrape succeeded for profile: {profile.full_name}")
        return profile

    async def scrape_jobs(
        self,
        keywords: str,
        location: str = DEFAULT_JOB_LOCATION,
        count: int = 50,
    ) -> list[JobRecord]:
        """
        Scrape LinkedIn job postings for a keyword search.

        Falls back to placeholder_jobs() (is_placeholder=True) when both the
        sync call and the async run come back empty or failed.

        Raises:
            ValueError: keywords blank after sanitization
            ScrapeConfigurationError: token or actor id missing
        """
        clean_keywords = sanitize_input(keywords)
        if not clean_keywords:
            raise ValueError("Job keywords are required")
        clean_location = sanitize_input(location) or DEFAULT_JOB_LOCATION

        actor = self._require(self.config.apify_actor_id, "APIFY_ACTOR_ID")
        actor_input = {
            "urls": [build_jobs_search_url(clean_keywords, clean_location)],
            "scrapeCompany": True,
            "count": max(count, MIN_JOB_BATCH),
        }

        logger.info(f"Scraping LinkedIn jobs for: {clean_keywords} ({clean_location})")
        items: list[dict[str, Any]] = []
        try:
            items = await self._run_sync(actor, actor_input, self.config.jobs_sync_timeout)
            if not items:
                logger.info("Sync jobs scrape returned no items, falling back to async")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Sync jobs scrape failed, falling back to async: {e}")

        if not items:
            try:
                items = await self._run_async(actor, actor_input, self.config.jobs_poll_attempts, "jobs")
            except (ScrapeServiceError, ScrapeTimeoutError) as e:
                logger.error(f"Jobs scrape exhausted, returning placeholder data: {e}")
                return placeholder_jobs(clean_keywords)

        jobs = [job_from_scrape(item, clean_keywords, clean_location) for item in items]
        logger.info(f"Scraped {len(jobs)} job postings")
        return jobs
