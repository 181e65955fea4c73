"""
Career Coach - CLI Entry Point.

Interactive chat against the same pipeline the API uses.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from careerbot.agents.orchestrator import HISTORY_WINDOW  # noqa: E402
from careerbot.api.deps import build_services  # noqa: E402
from careerbot.config import Settings  # noqa: E402
from careerbot.errors import CareerBotError  # noqa: E402
from careerbot.models import ConversationTurn, UserProfile  # noqa: E402
from careerbot.utils.profile_insights import career_insights, format_profile_for_chat  # noqa: E402

LEVELS = ("junior", "middle", "senior")


def ask_profile() -> UserProfile:
    """Onboarding: target position and experience band."""
    position = ""
    while not position:
        position = input("Target position: ").strip()

    level = ""
    while level not in LEVELS:
        level = input(f"Experience level ({'/'.join(LEVELS)}): ").strip().lower()

    return UserProfile(position=position, experience_level=level)


def print_stats(stats) -> None:
    print(f"Total jobs indexed: {stats.total_jobs}")
    for label, buckets in (
        ("Companies", stats.by_company),
        ("Locations", stats.by_location),
        ("Industries", stats.by_industry),
        ("Levels", stats.by_experience_level),
    ):
        if buckets:
            print(f"  {label}: " + ", ".join(f"{b.key} ({b.count})" for b in buckets))


def main():
    """Run the career coach CLI."""
    print("Career Coach")
    print("=" * 40)

    config = Settings()
    logging.basicConfig(level=config.log_level)

    missing = config.missing_credentials()
    if missing:
        print(f"Warning: missing {', '.join(missing)} - some commands will fail")

    services = build_services(config)
    profile = ask_profile()
    history: list[ConversationTurn] = []

    print("Commands: /quit, /profile <linkedin-url>, /jobs <keywords>, /stats")
    print("-" * 40)

    while True:
        try:
            user_input = input("You: ").strip()
            if not user_input:
                continue

            if user_input.lower() == "/quit":
                break

            if user_input.startswith("/profile "):
                url = user_input[9:].strip()
                print("Scraping LinkedIn profile (this can take a couple of minutes)...")
                try:
                    linkedin = asyncio.run(services.scraper.scrape_profile(url))
                except (CareerBotError, ValueError) as e:
                    print(f"Error: {e}")
                    continue
                profile = profile.model_copy(update={"linkedin_url": url, "linkedin_data": linkedin})
                print(format_profile_for_chat(linkedin))
                print(career_insights(linkedin))
                continue

            if user_input.startswith("/jobs "):
                keywords = user_input[6:].strip()
                print(f"Collecting jobs for '{keywords}'...")
                try:
                    result = asyncio.run(services.ingestion.collect(keywords))
                except (CareerBotError, ValueError) as e:
                    print(f"Error: {e}")
                    continue
                print(result.message)
                print_stats(result.statistics)
                continue

            if user_input == "/stats":
                try:
                    print_stats(asyncio.run(services.ingestion.statistics()))
                except CareerBotError as e:
                    print(f"Error: {e}")
                continue

            result = asyncio.run(services.coach.answer(user_input, profile, history))
            history.append(ConversationTurn(role="user", content=user_input))
            history.append(ConversationTurn(role="assistant", content=result.answer))
            history = history[-HISTORY_WINDOW:]

            if result.jobs:
                print(f"\n[{len(result.jobs)} jobs found for '{result.search_query}']")
            print(f"\nCoach: {result.answer}\n")

        except (KeyboardInterrupt, EOFError):
            break

    print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
