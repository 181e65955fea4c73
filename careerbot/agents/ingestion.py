"""
Job ingestion: scrape postings, index them, report index statistics.
"""

import logging
from typing import Protocol

from careerbot.errors import IndexWriteError, SearchUnavailableError
from careerbot.models import IngestionResult, JobRecord, JobStatistics

logger = logging.getLogger(__name__)


class JobScraper(Protocol):
    async def scrape_jobs(self, keywords: str, location: str = ..., count: int = ...) -> list[JobRecord]: ...


class JobStore(Protocol):
    async def ensure_mapping(self) -> None: ...

    async def embed(self, texts: list[str]) -> list[list[float]]: ...

    async def bulk_index(self, records: list[JobRecord]) -> None: ...

    async def aggregate_statistics(self) -> JobStatistics: ...


class JobIngestion:
    """Populates the job index from a fresh scrape."""

    def __init__(self, scraper: JobScraper, index: JobStore, embed_jobs: bool = False):
        self.scraper = scraper
        self.index = index
        self.embed_jobs = embed_jobs

    async def _ensure_mapping(self) -> None:
        # Re-issued on every call; the mapping PUT is idempotent
        try:
            await self.index.ensure_mapping()
        except (IndexWriteError, SearchUnavailableError) as e:
            logger.error(f"Elasticsearch mapping setup failed, continuing: {e}")

    async def _attach_vectors(self, jobs: list[JobRecord]) -> None:
        texts = [f"{j.title} {j.company} {j.description}".strip() for j in jobs]
        try:
            vectors = await self.index.embed(texts)
        except SearchUnavailableError as e:
            logger.error(f"Embedding failed, indexing without vectors: {e}")
            return
        for job, vector in zip(jobs, vectors):
            job.vector = vector

    async def scrape_and_index(
        self, keywords: str, location: str = "United States", count: int = 50
    ) -> IngestionResult:
        """
        Scrape jobs, attach embeddings when enabled, and bulk-write them.

        Placeholder jobs are never written. Index write failures are logged
        and swallowed. The result carries no statistics.
        """
        await self._ensure_mapping()

        jobs = await self.scraper.scrape_jobs(keywords, location, count)
        placeholder = bool(jobs) and all(j.is_placeholder for j in jobs)

        indexed = False
        if jobs and not placeholder:
            if self.embed_jobs:
                await self._attach_vectors(jobs)
            try:
                await self.index.bulk_index(jobs)
                indexed = True
            except (IndexWriteError, SearchUnavailableError) as e:
                logger.error(f"Failed to save jobs to Elasticsearch: {e}")

        if placeholder:
            message = "Live scraping is unavailable; returning demo job data."
        elif indexed:
            message = f"Successfully collected and stored {len(jobs)} job postings in the database."
        else:
            message = "Data collection is in progress."

        return IngestionResult(
            jobs=jobs,
            scraped=len(jobs),
            indexed=indexed,
            placeholder=placeholder,
            message=message,
        )

    async def collect(self, keywords: str, location: str = "United States", count: int = 50) -> IngestionResult:
        """
        scrape_and_index(), then the index statistics.

        The statistics are read after the write attempt either way.
        """
        result = await self.scrape_and_index(keywords, location, count)
        result.statistics = await self.index.aggregate_statistics()
        if not result.indexed:
            result.message += " Current statistics retrieved."
        return result

    async def statistics(self) -> JobStatistics:
        await self._ensure_mapping()
        return await self.index.aggregate_statistics()
