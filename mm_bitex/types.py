from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class TickerConfig:
    id: str                   # orderbook code, e.g. "btc_usd"
    btc_order_amount: float   # max amount offered per sell order

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "TickerConfig":
        if not isinstance(raw, Mapping):
            raise ValueError(f"ticker entry must be a mapping, got {type(raw).__name__}")
        ticker_id = raw.get("id")
        if not isinstance(ticker_id, str) or not ticker_id:
            raise ValueError("ticker entry requires a non-empty 'id'")
        amount = raw.get("btcOrderAmount", raw.get("orderAmount"))
        try:
            amount = float(amount)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"ticker {ticker_id}: btcOrderAmount must be a number") from exc
        return cls(id=ticker_id, btc_order_amount=amount)


@dataclass(frozen=True)
class AskQuote:
    id: str
    ask: float


@dataclass(frozen=True)
class OpenOrder:
    id: str
    orderbook_code: str
    price: float
    raw: Optional[Mapping[str, Any]] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class TickParams:
    api_key: str
    api_version: str
    use_dev_server: bool
    order_amount: float
    minimum_price: float
    currency_from: str
    currency_to: str
    allow_take: bool = False

    @property
    def ticker_id(self) -> str:
        return f"{self.currency_from}_{self.currency_to}"

    def as_raw_requests(self) -> Dict[str, Any]:
        """Parameters echoed back in every tick result; the API key is masked."""
        raw = asdict(self)
        raw["api_key"] = _mask(self.api_key)
        return raw


@dataclass
class RunResult:
    """Outcome of a single-ticker tick.

    `status` is "success" or "error". Success carries the placed order
    (`record_id`, `raw_responses`); error carries `description` and, when an
    exception caused it, `error`.
    """

    status: str
    raw_requests: Dict[str, Any]
    description: Optional[str] = None
    error: Optional[BaseException] = None
    record_id: Optional[str] = None
    raw_responses: Any = None

    @classmethod
    def success(cls, raw_requests: Dict[str, Any], placed: Mapping[str, Any]) -> "RunResult":
        return cls(
            status="success",
            raw_requests=raw_requests,
            record_id=placed.get("id"),
            raw_responses=placed,
        )

    @classmethod
    def failure(
        cls,
        raw_requests: Dict[str, Any],
        description: str,
        error: Optional[BaseException] = None,
    ) -> "RunResult":
        return cls(status="error", raw_requests=raw_requests, description=description, error=error)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"status": self.status, "raw_requests": dict(self.raw_requests)}
        if self.ok:
            out["raw_responses"] = self.raw_responses
            out["record_id"] = self.record_id
            return out
        out["description"] = self.description
        if self.error is not None:
            out["error"] = {"type": type(self.error).__name__, "message": str(self.error)}
        return out


def _mask(secret: str) -> str:
    if not secret:
        return ""
    if len(secret) <= 8:
        return "***"
    return f"{secret[:4]}***{secret[-4:]}"
