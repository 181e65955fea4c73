"""Shared test helpers: settings, fake services and an httpx mock transport."""

import json

import httpx

from careerbot.config import Settings
from careerbot.errors import SearchUnavailableError
from careerbot.models import JobRecord, JobStatistics


def make_settings(**overrides) -> Settings:
    """Fully configured settings pointing at fake hosts, no .env lookup."""
    values = {
        "apify_api_token": "apify-token",
        "apify_actor_id": "jobs-actor",
        "linkedin_scraper_actor_id": "someone/profile-actor",
        "apify_base_url": "https://apify.test/v2",
        "elasticsearch_url": "https://es.test",
        "elasticsearch_api_key": "es-key",
        "elasticsearch_index_name": "jobs-test",
        "gemini_api_key": "gemini-key",
        "gemini_api_url": "https://llm.test/v1/generate",
        "poll_interval": 0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def empty_settings(**overrides) -> Settings:
    """Settings with every credential blank."""
    values = {
        "apify_api_token": "",
        "apify_actor_id": "",
        "linkedin_scraper_actor_id": "",
        "apify_base_url": "https://apify.test/v2",
        "elasticsearch_url": "",
        "elasticsearch_api_key": "",
        "gemini_api_key": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class Recorder:
    """MockTransport handler that answers from a route table and records requests."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        handler = self.routes.get(key)
        if handler is None:
            return httpx.Response(404, json={"error": f"no route for {key}"})
        if callable(handler):
            return handler(request)
        return handler

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


def json_body(request: httpx.Request):
    return json.loads(request.content)


class Sleeper:
    """Stand-in for asyncio.sleep that records the requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


class FakeLLM:
    """Returns canned replies in order and keeps the prompts it saw."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeScraper:
    def __init__(self, jobs=None, profile=None, error: Exception | None = None):
        self.jobs = jobs if jobs is not None else []
        self.profile = profile
        self.error = error
        self.calls = []

    async def scrape_profile(self, url):
        if self.error:
            raise self.error
        return self.profile.model_copy(update={"linkedin_url": url})

    async def scrape_jobs(self, keywords, location="United States", count=50):
        self.calls.append((keywords, location, count))
        return list(self.jobs)


class FakeIndex:
    def __init__(self, jobs=None, error: Exception | None = None):
        self.jobs = jobs or []
        self.error = error
        self.queries: list[str] = []
        self.vector_queries: list[str] = []
        self.bulk_batches: list[list[JobRecord]] = []
        self.mapping_calls = 0
        self.bulk_error: Exception | None = None
        self.statistics = JobStatistics(total_jobs=len(self.jobs))

    async def text_search(self, query: str) -> list[JobRecord]:
        self.queries.append(query)
        if self.error:
            raise self.error
        return list(self.jobs)

    async def vector_search(self, query: str, num_candidates: int = 100) -> list[JobRecord]:
        self.vector_queries.append(query)
        raise SearchUnavailableError("no embedding model")

    async def ensure_mapping(self) -> None:
        self.mapping_calls += 1

    async def embed(self, texts: list[str]) -> list[list[float]]:
        return [[0.1, 0.2, 0.3] for _ in texts]

    async def bulk_index(self, records: list[JobRecord]) -> None:
        if self.bulk_error:
            raise self.bulk_error
        self.bulk_batches.append(list(records))

    async def aggregate_statistics(self) -> JobStatistics:
        return self.statistics


def make_job(i: int, **overrides) -> JobRecord:
    fields = {
        "id": f"job-{i}",
        "title": f"Data Scientist {i}",
        "company": f"Company {i}",
        "location": "Remote",
        "description": "Build models. " * 40,
        "salary": "$100k",
        "job_type": "Full-time",
        "experience_level": "Mid-Senior level",
    }
    fields.update(overrides)
    return JobRecord(**fields)
