"""
Elasticsearch tool for the job index.

Lexical and vector search, bulk loading, embeddings via the cluster's
deployed text-embedding model, and facet statistics.
"""

import json
import logging
from typing import Any

import httpx

from careerbot.config import Settings
from careerbot.errors import IndexWriteError, SearchConfigurationError, SearchUnavailableError
from careerbot.models import FacetBucket, JobRecord, JobStatistics, job_from_hit

logger = logging.getLogger(__name__)

TEXT_SEARCH_SIZE = 50
FACET_SIZE = 10
TEXT_SEARCH_FIELDS = ["title^2", "company^1.5", "description", "industry", "location", "text"]

FACETS = {
    "by_company": "company.keyword",
    "by_location": "location.keyword",
    "by_industry": "industry.keyword",
    "by_experience_level": "experienceLevel",
}


def _text_with_keyword() -> dict:
    return {"type": "text", "analyzer": "standard", "fields": {"keyword": {"type": "keyword"}}}


def index_mapping(dims: int) -> dict:
    """Field mapping for the job index."""
    return {
        "properties": {
            "vector": {"type": "dense_vector", "dims": dims},
            "text": {"type": "text"},
            "id": {"type": "keyword"},
            "title": _text_with_keyword(),
            "company": _text_with_keyword(),
            "location": _text_with_keyword(),
            "industry": _text_with_keyword(),
            "description": {"type": "text", "analyzer": "standard"},
            "salary": {"type": "keyword"},
            "jobType": {"type": "keyword"},
            "experienceLevel": {"type": "keyword"},
            "postedDate": {
                "type": "date",
                "format": "strict_date_optional_time||epoch_millis",
                "ignore_malformed": True,
            },
            "url": {"type": "keyword"},
            "companySize": {"type": "keyword"},
            "requirements": {"type": "keyword"},
            "benefits": {"type": "keyword"},
            "scrapedAt": {"type": "date"},
            "keywords": {"type": "keyword"},
        }
    }


class JobIndex:
    """Client for the job postings index."""

    def __init__(self, config: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self.index = config.elasticsearch_index_name
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        if not self.config.elasticsearch_url or not self.config.elasticsearch_api_key:
            raise SearchConfigurationError("ELASTICSEARCH_URL or ELASTICSEARCH_API_KEY not set")
        return httpx.AsyncClient(
            base_url=self.config.elasticsearch_url,
            timeout=self.config.search_timeout,
            transport=self._transport,
            headers={
                "Authorization": f"ApiKey {self.config.elasticsearch_api_key}",
                "Content-Type": "application/json",
            },
        )

    async def _send(self, method: str, path: str, error_cls=SearchUnavailableError, **kwargs) -> httpx.Response:
        async with self._client() as client:
            try:
                return await client.request(method, path, **kwargs)
            except httpx.HTTPError as e:
                logger.error(f"Elasticsearch {method} {path} unreachable: {e}")
                raise error_cls(f"Elasticsearch unreachable: {e}") from e

    @staticmethod
    def _parse(response: httpx.Response, error_cls) -> dict:
        if response.status_code >= 400:
            request = response.request
            logger.error(
                f"Elasticsearch {request.method} {request.url.path} failed: "
                f"{response.status_code} - {response.text[:300]}"
            )
            raise error_cls(f"Elasticsearch request failed: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise error_cls("Elasticsearch returned a non-JSON body") from e

    async def _request(self, method: str, path: str, error_cls=SearchUnavailableError, **kwargs) -> dict:
        """Send one request; non-OK and transport errors become error_cls."""
        response = await self._send(method, path, error_cls, **kwargs)
        return self._parse(response, error_cls)

    @staticmethod
    def _hits(response: dict) -> list[JobRecord]:
        hits = (response.get("hits") or {}).get("hits") or []
        return [job_from_hit(hit) for hit in hits if isinstance(hit, dict)]

    async def ensure_mapping(self) -> None:
        """
        Declare the index mapping. Safe to repeat on an existing index;
        a missing index is created with the mapping in place.
        """
        mapping = index_mapping(self.config.elasticsearch_embedding_dims)
        response = await self._send("PUT", f"/{self.index}/_mapping", IndexWriteError, json=mapping)
        if response.status_code == 404:
            logger.info(f"Elasticsearch index {self.index} not found, creating it")
            await self._request("PUT", f"/{self.index}", error_cls=IndexWriteError, json={"mappings": mapping})
        else:
            self._parse(response, IndexWriteError)
        logger.info(f"Elasticsearch mapping ensured for {self.index}")

    async def text_search(self, query: str) -> list[JobRecord]:
        """Fuzzy multi-field search, newest first."""
        if query and query.strip():
            es_query: dict[str, Any] = {
                "multi_match": {
                    "query": query,
                    "fields": TEXT_SEARCH_FIELDS,
                    "type": "best_fields",
                    "fuzziness": "AUTO",
                }
            }
        else:
            es_query = {"match_all": {}}

        body = {
            "query": es_query,
            "size": TEXT_SEARCH_SIZE,
            "sort": [{"scrapedAt": {"order": "desc"}}],
        }
        response = await self._request("POST", f"/{self.index}/_search", json=body)
        jobs = self._hits(response)
        logger.info(f"Text search '{query}' returned {len(jobs)} jobs")
        return jobs

    async def vector_search(self, query: str, num_candidates: int = 100) -> list[JobRecord]:
        """kNN search; the cluster encodes the query with the embedding model."""
        model_id = self.config.elasticsearch_embedding_model_id
        if not model_id:
            raise SearchConfigurationError("ELASTICSEARCH_EMBEDDING_MODEL_ID not set")

        body = {
            "retriever": {
                "standard": {
                    "query": {
                        "knn": {
                            "field": "vector",
                            "num_candidates": num_candidates,
                            "query_vector_builder": {
                                "text_embedding": {"model_id": model_id, "model_text": query}
                            },
                        }
                    }
                }
            },
            "size": num_candidates,
        }
        response = await self._request("POST", f"/{self.index}/_search", json=body)
        return self._hits(response)[:num_candidates]

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Encode texts with the same model vector_search uses for queries."""
        model_id = self.config.elasticsearch_embedding_model_id
        if not model_id:
            raise SearchConfigurationError("ELASTICSEARCH_EMBEDDING_MODEL_ID not set")
        if not texts:
            return []

        response = await self._request(
            "POST",
            f"/_ml/trained_models/{model_id}/_infer",
            json={"docs": [{"text_field": t} for t in texts]},
        )
        results = response.get("inference_results") or []
        vectors = [r.get("predicted_value") for r in results if isinstance(r, dict)]
        if len(vectors) != len(texts) or not all(isinstance(v, list) for v in vectors):
            raise SearchUnavailableError("Embedding model returned an unexpected shape")
        return vectors

    async def index_job(self, record: JobRecord) -> None:
        """Insert a single document."""
        await self._request(
            "POST", f"/{self.index}/_doc", error_cls=IndexWriteError, json=record.to_index_document()
        )
        logger.info(f"Job saved to Elasticsearch: {record.title}")

    async def bulk_index(self, records: list[JobRecord]) -> None:
        """Write all records in one _bulk request (action line + document per record)."""
        if not records:
            return

        lines = []
        for record in records:
            lines.append(json.dumps({"index": {"_index": self.index}}))
            lines.append(json.dumps(record.to_index_document()))
        body = "\n".join(lines) + "\n"

        response = await self._request(
            "POST",
            "/_bulk",
            error_cls=IndexWriteError,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/x-ndjson"},
        )
        if response.get("errors"):
            failed = [
                item for item in response.get("items", [])
                if isinstance(item, dict) and (item.get("index") or {}).get("error")
            ]
            raise IndexWriteError(f"Bulk index reported {len(failed)} failed documents")

        logger.info(f"Bulk saved {len(records)} jobs to Elasticsearch")

    async def aggregate_statistics(self) -> JobStatistics:
        """Totals plus top-10 facets across the whole index."""
        aggs: dict[str, Any] = {"total_jobs": {"value_count": {"field": "id"}}}
        for name, field in FACETS.items():
            aggs[name] = {"terms": {"field": field, "size": FACET_SIZE}}

        response = await self._request("POST", f"/{self.index}/_search", json={"size": 0, "aggs": aggs})
        aggregations = response.get("aggregations") or {}

        def buckets(name: str) -> list[FacetBucket]:
            raw = (aggregations.get(name) or {}).get("buckets") or []
            return [
                FacetBucket(key=str(b.get("key", "")), count=int(b.get("doc_count", 0)))
                for b in raw
                if isinstance(b, dict)
            ]

        return JobStatistics(
            total_jobs=int((aggregations.get("total_jobs") or {}).get("value") or 0),
            by_company=buckets("by_company"),
            by_location=buckets("by_location"),
            by_industry=buckets("by_industry"),
            by_experience_level=buckets("by_experience_level"),
        )
