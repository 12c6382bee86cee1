from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from .chaos.policy import FaultPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ------------------------------------------------------------------
    # Fault injection
    # ------------------------------------------------------------------
    # Zero disables each knob.
    chaos_latency_ms: int = Field(0, ge=0)      # base delay per request
    chaos_jitter_ms: int = Field(0, ge=0)       # 0..jitter added to the base delay
    chaos_error_rate: float = Field(0.0, ge=0.0, le=1.0)  # 0.02 = 2% errors

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    def fault_policy(self) -> FaultPolicy:
        """Build the startup fault policy from the chaos knobs."""
        return FaultPolicy(
            base_delay_ms=self.chaos_latency_ms,
            jitter_ms=self.chaos_jitter_ms,
            error_rate=self.chaos_error_rate,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
