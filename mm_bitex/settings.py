from __future__ import annotations

import os
from typing import Optional


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_str(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


PROD_HOST = "bitex.la"
SANDBOX_HOST = "sandbox.bitex.la"

# Overrides the prod/sandbox host selection when set, e.g. http://localhost:8080
BITEX_BASE_URL = _env_str("BITEX_BASE_URL")
BITEX_TIMEOUT_S = _env_float("BITEX_TIMEOUT_S", 30.0)
BITEX_PRICE_STEP = _env_float("BITEX_PRICE_STEP", 0.01)

DEFAULT_ASSET = "btc"
PRICE_DECIMALS = 8
