"""Importer configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class ImporterConfig(BaseSettings):
    """Settings read from ``AISIS_*`` environment variables or a .env file."""

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Parser
    lane_probe_limit: int = Field(
        default=20,
        description="Highest ordinal position probed when placing a course lane",
    )

    # Calendar export
    timezone: str = Field(
        default="Asia/Manila",
        description="Timezone for exported calendar events",
    )
    calendar_name: str = Field(
        default="AISIS Schedule",
        description="Calendar name written to exported .ics files",
    )

    model_config = {
        "env_prefix": "AISIS_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


_config: ImporterConfig | None = None


def get_config() -> ImporterConfig:
    """Get the importer configuration singleton."""
    global _config
    if _config is None:
        _config = ImporterConfig()
    return _config
