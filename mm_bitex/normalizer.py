from __future__ import annotations

from typing import Any, Dict, List, Mapping

from mm_bitex.errors import NotFoundError, ParseError
from mm_bitex.types import AskQuote, OpenOrder


def _data(payload: Any, kind: type) -> Any:
    if not isinstance(payload, Mapping):
        raise ParseError(f"response must be a JSON object, got {type(payload).__name__}")
    if "data" not in payload:
        raise ParseError("response missing 'data'")
    data = payload["data"]
    if not isinstance(data, kind):
        raise ParseError(f"response 'data' must be a {kind.__name__}, got {type(data).__name__}")
    return data


def _attributes(item: Any) -> Mapping[str, Any]:
    if not isinstance(item, Mapping):
        raise ParseError(f"resource must be an object, got {type(item).__name__}")
    attrs = item.get("attributes")
    if not isinstance(attrs, Mapping):
        raise ParseError(f"resource {item.get('id')!r} missing 'attributes'")
    return attrs


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool):
        raise ParseError(f"{what} must be numeric, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"{what} must be numeric, got {value!r}") from exc


def parse_balance(payload: Any, asset: str) -> float:
    """Available amount of `asset` from a /api/coin_wallets response."""
    for item in _data(payload, list):
        attrs = _attributes(item)
        if attrs.get("currency") == asset:
            return _number(attrs.get("available"), f"{asset} available balance")
    raise NotFoundError(f"no wallet entry for {asset}")


def parse_lowest_asks(payload: Any, asset: str) -> List[AskQuote]:
    """Pairs quoted against `asset` with a live market, in response order.

    An ask of zero (or null) means the pair has no market and is dropped.
    """
    prefix = f"{asset}_"
    quotes: List[AskQuote] = []
    for item in _data(payload, list):
        if not isinstance(item, Mapping):
            raise ParseError(f"ticker must be an object, got {type(item).__name__}")
        pair = item.get("id")
        if not isinstance(pair, str) or not pair.startswith(prefix):
            continue
        raw_ask = _attributes(item).get("ask")
        if raw_ask is None:
            continue
        ask = _number(raw_ask, f"{pair} ask")
        if ask == 0:
            continue
        quotes.append(AskQuote(id=pair, ask=ask))
    return quotes


def parse_open_orders(payload: Any) -> List[OpenOrder]:
    orders: List[OpenOrder] = []
    for item in _data(payload, list):
        attrs = _attributes(item)
        order_id = item.get("id")
        if order_id is None:
            raise ParseError("open order missing 'id'")
        code = attrs.get("orderbook_code")
        if not isinstance(code, str):
            raise ParseError(f"open order {order_id} missing 'orderbook_code'")
        orders.append(
            OpenOrder(
                id=str(order_id),
                orderbook_code=code,
                price=_number(attrs.get("price"), f"order {order_id} price"),
                raw=item,
            )
        )
    return orders


def parse_placed_order(payload: Any) -> Dict[str, Any]:
    data = _data(payload, dict)
    if data.get("id") is None:
        raise ParseError("placed order missing 'id'")
    return data
