from __future__ import annotations

import os
from functools import cache
from pathlib import Path
from typing import ClassVar

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


TRUTHY = frozenset({"1", "true", "yes", "on"})


class SignalSettings(BaseModel):
    """Which signals the bridge traps besides SIGINT."""

    trap_termination: bool = Field(default=False)


class LoggingSettings(BaseModel):

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, alias="json")

    model_config = ConfigDict(populate_by_name=True)


class BridgeConfig(BaseSettings):
    """
    Bridge settings.

    Source of truth:
      1) YAML file (structured config)
      2) Flat CTRLC_* env overrides, merged explicitly in from_yaml().
    """

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="",  # no automatic prefixing
        extra="ignore",
        case_sensitive=False,
    )

    signals: SignalSettings = Field(default_factory=SignalSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # ---------- YAML loader with explicit env merge ----------
    @classmethod
    def from_yaml(cls, path: Path | None = None) -> BridgeConfig:
        """
        Load config from YAML, then overlay flat env values.
        Search order if path is not provided:
          $CTRLC_CONFIG
          ./ctrlc.yaml
        """
        candidates: list[Path] = []
        if path is not None:
            candidates.append(path)
        else:
            env_path = os.getenv("CTRLC_CONFIG")
            if env_path:
                candidates.append(Path(env_path))
            candidates.append(Path("ctrlc.yaml"))

        raw: dict[str, object] = {}
        for p in candidates:
            if p.exists():
                loaded = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
                if not isinstance(loaded, dict):
                    raise ValueError(f"YAML at {p} must define a mapping at the root")
                raw = loaded
                break

        cfg = cls.model_validate(raw)

        trap_raw = _get_env("CTRLC_TRAP_TERMINATION")
        if trap_raw is not None:
            cfg.signals.trap_termination = trap_raw.strip().lower() in TRUTHY

        level = _get_env("CTRLC_LOG_LEVEL")
        if level is not None:
            cfg.logging.level = level.strip().upper()

        json_raw = _get_env("CTRLC_LOG_JSON")
        if json_raw is not None:
            cfg.logging.json_output = json_raw.strip().lower() in TRUTHY

        return cfg


def _get_env(*names: str) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v != "":
            return v
    return None


@cache
def get_settings() -> BridgeConfig:
    return BridgeConfig.from_yaml()


__all__ = [
    "BridgeConfig",
    "LoggingSettings",
    "SignalSettings",
    "get_settings",
]
