from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(RuntimeError):
    """Configuration-related error."""
    pass


# ─────────────────────────────────────────────────────────────
# Section configs
# ─────────────────────────────────────────────────────────────


class LoggingSettings(BaseModel):
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "WARNING"
    format: str = (
        "%(asctime)-20s %(name)-40s "
        "%(levelname)-8s: %(message)s"
    )


class MatrixSettings(BaseModel):
    default_capacity: int = Field(
        16,
        ge=1,
        description="Capacity used when an AdjacencyMatrixGraph is built without one.",
    )


class RenderSettings(BaseModel):
    """
    Formatting of the human-readable listings produced by ``to_string``.

    Only affects rendering; stored weights are never rounded.
    """

    list_precision: int = Field(
        2, ge=0, description="Decimals shown for weights in adjacency-list listings."
    )
    matrix_precision: int = Field(
        1, ge=0, description="Decimals shown for weights in adjacency-matrix tables."
    )
    absent_marker: str = Field(
        "null", description="Cell text for an absent weighted relation."
    )


# ─────────────────────────────────────────────────────────────
# Top-level settings
# ─────────────────────────────────────────────────────────────


class GraphSettings(BaseSettings):
    """
    Process-wide configuration for adjgraph.

    Precedence (highest → lowest):

    1. Init kwargs (tests/overrides)
    2. Environment variables
    3. .env and .env.local
    4. Defaults in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="ADJGRAPH_",  # ADJGRAPH_LOGGING__LEVEL, ADJGRAPH_MATRIX__DEFAULT_CAPACITY, ...
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = LoggingSettings()
    matrix: MatrixSettings = MatrixSettings()  # type: ignore[call-arg]
    render: RenderSettings = RenderSettings()  # type: ignore[call-arg]


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> GraphSettings:
    """
    Cached accessor for process-wide settings.

    `overrides` are init kwargs → highest precedence (handy in tests).
    """
    try:
        return GraphSettings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid adjgraph settings: {exc}") from exc
