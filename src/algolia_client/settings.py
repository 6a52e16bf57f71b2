from pydantic_settings import BaseSettings
from pydantic import Field
import logging

from .models import Credentials


class Settings(BaseSettings):
    application_id: str = Field(alias="ALGOLIA_APPLICATION_ID")
    api_key: str = Field(alias="ALGOLIA_API_KEY")
    search_api_key: str = Field(alias="ALGOLIA_SEARCH_API_KEY")
    connect_timeout: float = Field(default=2.0, alias="ALGOLIA_CONNECT_TIMEOUT")  # seconds, first attempt
    read_timeout: float = Field(default=30.0, alias="ALGOLIA_READ_TIMEOUT")  # seconds, first attempt
    task_poll_interval: float = Field(default=1.0, alias="ALGOLIA_TASK_POLL_INTERVAL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"

    def apply_side_effects(self):
        # Strip stray whitespace/newlines that sneak in from copy-pasted secrets
        for name in ("application_id", "api_key", "search_api_key"):
            value = getattr(self, name)
            if value != value.strip():
                setattr(self, name, value.strip())
                logging.warning("Stripped surrounding whitespace from %s", name)
            if not getattr(self, name):
                raise ValueError(f"Algolia setting '{name}' must not be empty")
        if self.connect_timeout <= 0 or self.read_timeout <= 0:
            raise ValueError("Algolia timeouts must be positive")
        if self.task_poll_interval < 0:
            raise ValueError("ALGOLIA_TASK_POLL_INTERVAL must not be negative")
        return self

    def credentials(self) -> Credentials:
        return Credentials(
            application_id=self.application_id,
            api_key=self.api_key,
            search_api_key=self.search_api_key,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings().apply_side_effects()  # type: ignore
    return _settings
