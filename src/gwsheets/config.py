"""
Settings for connecting to a spreadsheet.

Read from the environment, or a .env file in the working directory:

    SPREADSHEET_ID  the ID from the spreadsheet URL
    KEY_PATH        service account key or OAuth client secrets json
    TOKEN_CACHE     where an OAuth token is kept between runs
    SCOPES          json list of scope labels or URLs, defaults to ["sheets"]
"""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_TOKEN_CACHE = Path.home() / "gwsheets_tokens.json"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    spreadsheet_id: str | None = None
    key_path: Path | None = None
    token_cache: Path = DEFAULT_TOKEN_CACHE
    scopes: list[str] = ["sheets"]

def load_settings(**overrides) -> Settings:
    """
    Load settings, with any non-None keyword taking precedence over the
    environment.  Both spreadsheet_id and key_path have to end up set.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        settings = Settings(**values)
    except ValueError as e:
        # ValidationError and the settings parse errors are both ValueErrors
        raise ConfigurationError(f"invalid settings: {e}") from e
    missing = [name.upper() for name in ("spreadsheet_id", "key_path")
               if not getattr(settings, name)]
    if missing:
        raise ConfigurationError(f"missing settings: {', '.join(missing)}")
    return settings
