"""Engine configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Tunable thresholds for the Carrier Intelligence Engine.

    Every field can be overridden with a ``CARRIER_INTEL_`` prefixed
    environment variable, e.g. ``CARRIER_INTEL_MATCH_THRESHOLD=0.4``.
    """

    match_threshold: float = Field(default=0.35, ge=0, le=1)
    max_high_priority_items: int = Field(default=5, ge=0)
    update_max_attempts: int = Field(default=3, ge=1)
    seed_catalog: bool = True

    model_config = SettingsConfigDict(env_prefix="CARRIER_INTEL_", extra="ignore")
