from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.services.reproduction_validator import ReproductionRules


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    # CORS
    cors_allow_origins: str = "*"
    # Reproduction rules (days)
    gestation_min_days: int = 140
    gestation_max_days: int = 160
    ultrasound_min_days: int = 20
    weaning_min_days: int = 30
    expected_gestation_days: int = 150  # Ladoum average
    awaiting_confirmation_days: int = 20
    # Pedigree walks (generations)
    pedigree_max_depth: int = 6
    pedigree_cycle_check_depth: int = 12

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("gestation_max_days")
    @classmethod
    def ensure_gestation_window(cls, value: int, info) -> int:
        minimum = info.data.get("gestation_min_days")
        if minimum is not None and value < minimum:
            raise ValueError("gestation_max_days must not be lower than gestation_min_days")
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        if isinstance(self.cors_allow_origins, str):
            return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]
        return self.cors_allow_origins

    def reproduction_rules(self) -> ReproductionRules:
        return ReproductionRules(
            gestation_min_days=self.gestation_min_days,
            gestation_max_days=self.gestation_max_days,
            ultrasound_min_days=self.ultrasound_min_days,
            weaning_min_days=self.weaning_min_days,
            expected_gestation_days=self.expected_gestation_days,
            awaiting_confirmation_days=self.awaiting_confirmation_days,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
