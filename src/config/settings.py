# src/config/settings.py
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.dashboard.settings import DashboardSettings
from src.journal.settings import JournalSettings


class SystemConfig(BaseModel):
    name: str = "TradePulse Analytics"
    version: str = "1.0.0"
    timezone: Optional[str] = None


class StorageEnv(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TRADEPULSE_")

    data_dir: Optional[str] = None


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls(**data)
        return settings.with_env_overrides()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load from YAML if the file exists, otherwise use defaults."""
        if Path(path).exists():
            return cls.from_yaml(path)
        return cls().with_env_overrides()

    def with_env_overrides(self) -> "Settings":
        env = StorageEnv()
        if env.data_dir:
            journal = self.journal.model_copy(update={"data_dir": env.data_dir})
            return self.model_copy(update={"journal": journal})
        return self
