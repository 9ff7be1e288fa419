"""Configuration loading and validation."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

from pergroup.queries import QuerySpec


class ProfileConfig(BaseModel):
    """A named set of query settings, with an optional data file."""

    data_path: Path | None = None
    query: QuerySpec = QuerySpec()

    @field_validator("data_path", mode="before")
    @classmethod
    def expand_path(cls, v: str | None) -> Path | None:
        """Expand environment variables and ~ in path."""
        if v is None or v == "":
            return None
        expanded = os.path.expandvars(os.path.expanduser(str(v)))
        return Path(expanded)


def load_profile_config(config_path: Path, profile: str = "default") -> ProfileConfig:
    """Load the settings for one profile from a YAML config file."""
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if profile not in data:
        raise ValueError(f"Profile '{profile}' not found in config. Available: {list(data.keys())}")

    return ProfileConfig(**(data[profile] or {}))
