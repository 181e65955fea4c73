"""
Configuration management for the career coach backend.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Scraper (Apify)
    apify_api_token: str = ""
    apify_actor_id: str = ""
    linkedin_scraper_actor_id: str = ""
    apify_base_url: str = "https://api.apify.com/v2"

    # Search (Elasticsearch)
    elasticsearch_url: str = ""
    elasticsearch_api_key: str = ""
    elasticsearch_index_name: str = "linkedin-jobs-webhook"
    elasticsearch_embedding_model_id: str = ""
    elasticsearch_embedding_dims: int = 384

    # LLM (Gemini)
    gemini_api_key: str = ""
    gemini_api_url: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    )

    # Agent settings
    intent_classifier: str = "model"  # model/keyword
    search_timeout: float = 30.0
    llm_timeout: float = 60.0

    # Scraper polling
    profile_sync_timeout: float = 90.0
    jobs_sync_timeout: float = 300.0
    poll_interval: float = 5.0
    profile_poll_attempts: int = 20
    jobs_poll_attempts: int = 24

    # API
    cors_origins: str = "http://localhost:3000"
    rate_limit_enabled: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars
        frozen = True

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def missing_credentials(self) -> list[str]:
        """Names of required env vars that are not set."""
        required = {
            "APIFY_API_TOKEN": self.apify_api_token,
            "APIFY_ACTOR_ID": self.apify_actor_id,
            "LINKEDIN_SCRAPER_ACTOR_ID": self.linkedin_scraper_actor_id,
            "ELASTICSEARCH_URL": self.elasticsearch_url,
            "ELASTICSEARCH_API_KEY": self.elasticsearch_api_key,
            "GEMINI_API_KEY": self.gemini_api_key,
        }
        return [name for name, value in required.items() if not value]


settings = Settings()
