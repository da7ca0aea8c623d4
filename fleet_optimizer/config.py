"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``FLEET_OPTIMIZER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI, the dashboard, and the assistant client all receive an ``AppConfig``
instance. The simulation core itself takes plain arguments and never reads
configuration.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class SimulationConfig(BaseModel):
    """Fleet simulation defaults."""

    model_config = ConfigDict(frozen=True)

    default_profile: str = "ecommerce"


class RecommendationConfig(BaseModel):
    """Recommendation engine limits."""

    model_config = ConfigDict(frozen=True)

    limit: int = 10
    chat_context_limit: int = 5

    @field_validator("limit", "chat_context_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Recommendation limits must be >= 1, got {v}.")
        return v


class ReportingConfig(BaseModel):
    """Filesystem locations for exported reports."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"


class ChatConfig(BaseModel):
    """OpenAI-compatible chat completion endpoint used by the assistant."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://space.ai-builders.com/backend/v1"
    model: str = "grok-4-fast"
    max_tokens: int = 500
    temperature: float = 0.7
    timeout_seconds: float = 60.0
    api_key_env: str = "AI_BUILDER_TOKEN"

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"temperature must be in [0.0, 2.0], got {v}.")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/fleet_optimizer.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    simulation: SimulationConfig = SimulationConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    reporting: ReportingConfig = ReportingConfig()
    chat: ChatConfig = ChatConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply FLEET_OPTIMIZER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply FLEET_OPTIMIZER_* env vars to the raw config dict.

    Supported overrides:
      FLEET_OPTIMIZER_PROFILE     → raw["simulation"]["default_profile"]
      FLEET_OPTIMIZER_LOG_LEVEL   → raw["logging"]["level"]
      FLEET_OPTIMIZER_CHAT_MODEL  → raw["chat"]["model"]
      FLEET_OPTIMIZER_DEBUG       → raw["debug"]
    """
    if profile := os.environ.get("FLEET_OPTIMIZER_PROFILE"):
        raw.setdefault("simulation", {})["default_profile"] = profile

    if log_level := os.environ.get("FLEET_OPTIMIZER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if chat_model := os.environ.get("FLEET_OPTIMIZER_CHAT_MODEL"):
        raw.setdefault("chat", {})["model"] = chat_model

    if debug := os.environ.get("FLEET_OPTIMIZER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        simulation=SimulationConfig(**raw.get("simulation", {})),
        recommendations=RecommendationConfig(**raw.get("recommendations", {})),
        reporting=ReportingConfig(**raw.get("reporting", {})),
        chat=ChatConfig(**raw.get("chat", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
