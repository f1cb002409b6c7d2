from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKWRIGHT_")

    app_name: str = "deckwright"
    debug: bool = False

    # Name similarity must be strictly greater than this to accept a fuzzy match
    fuzzy_match_threshold: float = 0.8

    # Queries shorter than this never trigger the fuzzy fallback
    fuzzy_min_query_length: int = 3

    # How many candidates to request from the lookup for fuzzy resolution
    fuzzy_candidate_limit: int = 20

    # Concurrent lookups per batch when resolving an imported decklist
    resolve_batch_size: int = 5


settings = Settings()


# =============================================================================
# CONSTRUCTION RULE CONSTANTS
# =============================================================================

# Sideboard cap for constructed formats that allow one
DEFAULT_SIDEBOARD_SIZE = 15

# Color symbols in WUBRG order, plus the bucket for cards with no colors
COLOR_SYMBOLS = ("W", "U", "B", "R", "G")
COLORLESS = "Colorless"
