# tests/_fakes.py

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mm_bitex.errors import TransportError
from mm_bitex.exchange import ExchangeClient
from mm_bitex.types import AskQuote, OpenOrder


class FakeExchange(ExchangeClient):
    """In-memory exchange recording every call in order.

    `fail` maps an operation name (or "cancel_order:<id>") to the exception
    it should raise.
    """

    def __init__(
        self,
        balances: List[float],
        asks: List[AskQuote],
        orders: Optional[List[OpenOrder]] = None,
        fail: Optional[Dict[str, Exception]] = None,
    ):
        self._balances = list(balances)
        self.asks = list(asks)
        self.orders = list(orders or [])
        self.fail = dict(fail or {})
        self.calls: List[tuple] = []
        self.placed: List[Dict[str, Any]] = []
        self.cancelled: List[str] = []

    def _maybe_fail(self, key: str) -> None:
        if key in self.fail:
            raise self.fail[key]

    async def get_balance(self, asset: str) -> float:
        self.calls.append(("get_balance", asset))
        self._maybe_fail("get_balance")
        if len(self._balances) > 1:
            return self._balances.pop(0)
        return self._balances[0]

    async def get_lowest_asks(self, asset: str) -> List[AskQuote]:
        self.calls.append(("get_lowest_asks", asset))
        self._maybe_fail("get_lowest_asks")
        return list(self.asks)

    async def get_open_orders(self) -> List[OpenOrder]:
        self.calls.append(("get_open_orders",))
        self._maybe_fail("get_open_orders")
        return list(self.orders)

    async def cancel_order(self, order_id: str) -> str:
        self.calls.append(("cancel_order", order_id))
        self._maybe_fail(f"cancel_order:{order_id}")
        self.cancelled.append(order_id)
        return ""

    async def place_sell_order(self, pair: str, amount: float, price: float) -> Dict[str, Any]:
        self.calls.append(("place_sell_order", pair, amount, price))
        self._maybe_fail("place_sell_order")
        record = {
            "id": str(100 + len(self.placed)),
            "type": "asks",
            "attributes": {"orderbook_code": pair, "amount": amount, "price": price},
        }
        self.placed.append(record)
        return record

    def op_names(self) -> List[str]:
        return [c[0] for c in self.calls]


def order(order_id: str, pair: str = "btc_usd", price: float = 7100.0) -> OpenOrder:
    return OpenOrder(id=order_id, orderbook_code=pair, price=price)


def boom(message: str = "connection reset") -> TransportError:
    return TransportError(message)
