"""FastAPI dependencies: the service adapters and pipelines."""

from dataclasses import dataclass

from fastapi import Request

from careerbot.agents.ingestion import JobIngestion
from careerbot.agents.intent import build_intent_classifier
from careerbot.agents.orchestrator import CareerCoach
from careerbot.config import Settings, settings
from careerbot.errors import ConfigurationError
from careerbot.tools.apify import ApifyScraper
from careerbot.tools.elasticsearch import JobIndex
from careerbot.tools.gemini import GeminiClient


@dataclass
class Services:
    """Everything a request handler needs, built once at startup."""

    config: Settings
    scraper: ApifyScraper
    index: JobIndex
    llm: GeminiClient
    coach: CareerCoach
    ingestion: JobIngestion

    def require(self, *env_names: str) -> None:
        """Raise ConfigurationError if any of the named settings is empty."""
        missing = [name for name in env_names if not getattr(self.config, name.lower(), "")]
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")


def build_services(config: Settings) -> Services:
    scraper = ApifyScraper(config)
    index = JobIndex(config)
    llm = GeminiClient(config)
    coach = CareerCoach(llm, index, classifier=build_intent_classifier(config, llm))
    ingestion = JobIngestion(scraper, index, embed_jobs=bool(config.elasticsearch_embedding_model_id))
    return Services(config=config, scraper=scraper, index=index, llm=llm, coach=coach, ingestion=ingestion)


def get_services(request: Request) -> Services:
    """FastAPI dependency for the app's services."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        services = build_services(settings)
        request.app.state.services = services
    return services
