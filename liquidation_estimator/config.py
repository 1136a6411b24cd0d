"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .constants import MAX_DECIMALS

logger = logging.getLogger(__name__)

PRICE_PROVIDERS = ("snapshot", "pyth")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EstimatorConfig:
    quote_decimals: int = 8


@dataclass(frozen=True)
class SnapshotConfig:
    path: str = ""


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = "https://hermes.pyth.network/v2/updates/price/latest"
    feeds: dict[str, str] = field(default_factory=dict)
    timeout: int = 30


@dataclass(frozen=True)
class PriceOracleConfig:
    provider: str = "snapshot"
    pyth: PythConfig = field(default_factory=PythConfig)


@dataclass(frozen=True)
class AppConfig:
    estimator: EstimatorConfig = field(default_factory=EstimatorConfig)
    snapshot: SnapshotConfig = field(default_factory=SnapshotConfig)
    price_oracle: PriceOracleConfig = field(default_factory=PriceOracleConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML -> dataclass builders
# ---------------------------------------------------------------------------


def _build_estimator(raw: dict[str, Any]) -> EstimatorConfig:
    return EstimatorConfig(quote_decimals=int(raw.get("quote_decimals", 8)))


def _build_snapshot(raw: dict[str, Any], base_dir: Path) -> SnapshotConfig:
    path = str(raw.get("path", ""))
    if path and not Path(path).is_absolute():
        path = str(base_dir / path)
    return SnapshotConfig(path=path)


def _build_price_oracle(raw: dict[str, Any]) -> PriceOracleConfig:
    pyth_raw = raw.get("pyth", {})
    return PriceOracleConfig(
        provider=raw.get("provider", "snapshot"),
        pyth=PythConfig(
            hermes_url=pyth_raw.get("hermes_url", PythConfig.hermes_url),
            feeds=dict(pyth_raw.get("feeds", {})),
            timeout=int(pyth_raw.get("timeout", 30)),
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root. Relative snapshot paths resolve against the
            directory holding the config file.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        estimator=_build_estimator(raw.get("estimator", {})),
        snapshot=_build_snapshot(raw.get("snapshot", {}), config_path.parent),
        price_oracle=_build_price_oracle(raw.get("price_oracle", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not 0 <= cfg.estimator.quote_decimals <= MAX_DECIMALS:
        raise ValueError(
            f"quote_decimals must be within 0..{MAX_DECIMALS}, "
            f"got {cfg.estimator.quote_decimals}"
        )

    if not cfg.snapshot.path:
        raise ValueError("A snapshot path must be configured")

    provider = cfg.price_oracle.provider
    if provider not in PRICE_PROVIDERS:
        raise ValueError(f"Unknown price oracle provider '{provider}'")
    if provider == "pyth" and not cfg.price_oracle.pyth.feeds:
        raise ValueError("Pyth price oracle requires at least one feed")
