from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # App
    environment: str = "development"
    log_level: str = "INFO"
    public_base_url: str = "http://localhost:3000/"

    # Anthropic
    anthropic_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"
    claude_search_model: str = "claude-haiku-4-5-20251001"
    claude_max_tokens: int = 8192

    # Web search grounding
    web_search_enabled: bool = True
    web_search_max_uses: int = 6

    # Scraping (best effort)
    scrape_timeout_seconds: float = 10.0
    scrape_user_agent: str = "Mozilla/5.0 (compatible; ImporterIntel/0.1)"
    max_scraped_leads_in_prompt: int = 15

    # Similar importers
    similar_importer_count: str = "3-4"

    # Persistence
    data_dir: str = "./data"
    subscriptions_key: str = "importerIntel-subscriptions"
    notifications_key: str = "importerIntel-notifications"

    # Sentry (optional)
    sentry_dsn: str = ""


settings = Settings()
