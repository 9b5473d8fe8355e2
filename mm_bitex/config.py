from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml

from .settings import BITEX_PRICE_STEP, DEFAULT_ASSET
from .types import TickerConfig

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"


@dataclass(frozen=True)
class BotConfig:
    api_key: str
    api_version: str
    use_dev_server: bool = False
    tickers: List[TickerConfig] = field(default_factory=list)
    log_level: str = "INFO"
    timeout_s: Optional[float] = None
    reference_asset: str = DEFAULT_ASSET
    price_step: float = BITEX_PRICE_STEP
    cancel_all_open_orders: bool = False

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "BotConfig":
        if not isinstance(raw, Mapping):
            raise ValueError("config root must be a mapping")

        api_key = raw.get("apiKey") or os.getenv("BITEX_API_KEY", "")
        if not api_key:
            raise ValueError("Bitex API key missing (config apiKey or BITEX_API_KEY env).")
        api_version = raw.get("apiVersion")
        if api_version in (None, ""):
            raise ValueError("config requires 'apiVersion'")

        tickers_raw = raw.get("tickers") or []
        if not isinstance(tickers_raw, list):
            raise ValueError("config 'tickers' must be a list")

        try:
            timeout_raw = raw.get("timeoutS")
            timeout_s = float(timeout_raw) if timeout_raw is not None else None
            price_step = float(raw.get("priceStep", BITEX_PRICE_STEP))
        except (TypeError, ValueError) as exc:
            raise ValueError("config timeoutS/priceStep must be numbers") from exc

        return cls(
            api_key=str(api_key),
            api_version=str(api_version),
            use_dev_server=bool(raw.get("useDevServer", False)),
            tickers=[TickerConfig.from_dict(t) for t in tickers_raw],
            log_level=str(raw.get("logLevel", "INFO")),
            timeout_s=timeout_s,
            reference_asset=str(raw.get("referenceAsset", DEFAULT_ASSET)),
            price_step=price_step,
            cancel_all_open_orders=bool(raw.get("cancelAllOpenOrders", False)),
        )


def load_config(default_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """
    Load the JSON (or YAML) config, optionally overridden by CONFIG_PATH env var.

    `.yaml`/`.yml` files go through yaml.safe_load, anything else is JSON.
    Exits with status 1 when the file does not exist or does not parse.
    """
    path = Path(os.getenv("CONFIG_PATH", default_path))
    if not path.exists():
        print(f"\nInput file name {path} doesn't exist")
        raise SystemExit(1)
    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                raw = yaml.safe_load(f) or {}
            else:
                raw = json.load(f)
    except (ValueError, yaml.YAMLError) as exc:
        log.error("Config file %s is not valid: %s", path, exc)
        print(f"\nConfig file {path} is not valid: {exc}")
        raise SystemExit(1) from exc
    if not isinstance(raw, dict):
        print(f"\nConfig file {path} must hold an object at the top level")
        raise SystemExit(1)
    return raw


def load_bot_config(default_path: str = DEFAULT_CONFIG_PATH) -> BotConfig:
    return BotConfig.from_dict(load_config(default_path))
