from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Explain My Card"
    debug: bool = False

    scryfall_api_url: str = "https://api.scryfall.com"
    user_agent: str = "ExplainMyCard/1.0"
    lookup_timeout: float = 10.0

    # Optional AI explanations. Off unless explicitly enabled AND a key is set.
    ai_enabled: bool = False
    anthropic_api_key: str = ""
    ai_model: str = "claude-sonnet-4-20250514"
    ai_max_tokens: int = 1024
    ai_temperature: float = 0.4

    # Show the curated entry instead of the synthesized documents when one exists
    prefer_manual_explanations: bool = False


settings = Settings()


# Number of "Example play" bullets kept from the candidate list
EXAMPLE_PLAY_LIMIT = 3

# Mana value boundaries for speed classification
EARLY_MAX_MANA_VALUE = 2
LATE_MIN_MANA_VALUE = 6
ENGINE_LATE_MIN_MANA_VALUE = 5
