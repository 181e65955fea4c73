"""Exception types raised by the service adapters and pipelines."""


class CareerBotError(Exception):
    """Base class for errors surfaced by this package."""


class ConfigurationError(CareerBotError, ValueError):
    """A required credential or endpoint is not configured."""


class ScrapeServiceError(CareerBotError):
    """The scraping service refused the run or reported it as FAILED."""


class ScrapeConfigurationError(ScrapeServiceError, ConfigurationError):
    """Scraper token or actor id missing."""


class ScrapeTimeoutError(CareerBotError):
    """No scrape result arrived within the polling budget."""


class SearchUnavailableError(CareerBotError):
    """The search service is unreachable or answered non-OK."""


class IndexWriteError(CareerBotError):
    """A write to the job index failed."""


class LLMServiceError(CareerBotError):
    """The completion service failed or returned a non-OK response."""


class LLMConfigurationError(LLMServiceError, ConfigurationError):
    """LLM key or endpoint missing."""


class SearchConfigurationError(SearchUnavailableError, ConfigurationError):
    """Elasticsearch URL, API key or embedding model missing."""
