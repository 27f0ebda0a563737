from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from .events import parse_graph_event


class Settings(BaseSettings):  # type: ignore[misc]
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    GRAPHRX_LOG_LEVEL: str = "INFO"
    GRAPHRX_LOG_JSON: bool = False
    # Event kinds whose listeners GraphRx leaves detached at construction
    GRAPHRX_DISABLED_EVENTS: list[str] = []

    def model_post_init(self, __context: Any) -> None:  # noqa: D401
        """Validate settings after initialization."""
        for kind in self.GRAPHRX_DISABLED_EVENTS:
            parse_graph_event(kind)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Return a cached :class:`Settings` instance."""
    return Settings()


settings = load_settings()
