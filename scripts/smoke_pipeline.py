"""
Live smoke run against the configured services.

Usage:
    python scripts/smoke_pipeline.py "data scientist"

Steps:
1. Index statistics (Elasticsearch reachable, mapping in place)
2. Job ingestion for the given keywords (Apify -> Elasticsearch)
3. One coach question that needs job data
"""

import asyncio
import sys
import time

from dotenv import load_dotenv

load_dotenv()

from careerbot.api.deps import build_services  # noqa: E402
from careerbot.config import Settings  # noqa: E402
from careerbot.errors import CareerBotError  # noqa: E402
from careerbot.models import UserProfile  # noqa: E402


def check_statistics(services) -> bool:
    print("\n[1/3] Index statistics")
    print("-" * 40)
    try:
        stats = asyncio.run(services.ingestion.statistics())
    except CareerBotError as e:
        print(f"FAIL: {e}")
        return False
    print(f"OK: {stats.total_jobs} jobs indexed")
    for bucket in stats.by_company[:5]:
        print(f"    {bucket.key}: {bucket.count}")
    return True


def check_ingestion(services, keywords: str) -> bool:
    print(f"\n[2/3] Ingestion for '{keywords}' (can take several minutes)")
    print("-" * 40)
    t0 = time.time()
    try:
        result = asyncio.run(services.ingestion.collect(keywords))
    except CareerBotError as e:
        print(f"FAIL: {e}")
        return False
    print(f"  Finished in {time.time() - t0:.1f}s")
    print(f"  {result.message}")
    if result.placeholder:
        print("WARN: scraper fell back to demo data")
        return False
    print(f"OK: scraped {result.scraped}, indexed={result.indexed}")
    return result.indexed


def check_coach(services, keywords: str) -> bool:
    print("\n[3/3] Coach question")
    print("-" * 40)
    profile = UserProfile(position=keywords, experience_level="middle")
    question = f"What are the top skills for {keywords} roles right now?"
    result = asyncio.run(services.coach.answer(question, profile))
    print(f"  Used job data: {result.used_job_data} (query: {result.search_query})")
    print(f"  Jobs retrieved: {len(result.jobs)}")
    print(f"  Answer preview: {result.answer[:300]}...")
    return bool(result.answer) and result.used_job_data


def main():
    keywords = sys.argv[1] if len(sys.argv) > 1 else "software engineer"
    config = Settings()

    missing = config.missing_credentials()
    if missing:
        print(f"Missing environment variables: {', '.join(missing)}")
        return 1

    services = build_services(config)
    results = {
        "statistics": check_statistics(services),
        "ingestion": check_ingestion(services, keywords),
        "coach": check_coach(services, keywords),
    }

    print(f"\n{'=' * 40}")
    for name, ok in results.items():
        print(f"  {name:<12} {'PASS' if ok else 'FAIL'}")
    print(f"{'=' * 40}")
    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
