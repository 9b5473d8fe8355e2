from .settings import PRICE_DECIMALS


def _clean(price: float) -> float:
    # 7005.00 - 0.01 -> 7004.99 instead of 7004.990000000001
    return round(price, PRICE_DECIMALS)


def undercut_price(ask: float, price_step: float = 0.01) -> float:
    return _clean(ask - price_step)


def sell_price(
    ask: float,
    *,
    minimum_price: float = 0.0,
    allow_take: bool = False,
    price_step: float = 0.01,
) -> float:
    """Rest one step under the best ask, or sit on it when taking is allowed.

    Never below `minimum_price`.
    """
    target = _clean(ask) if allow_take else undercut_price(ask, price_step)
    return max(target, minimum_price)


def sell_amount(balance: float, order_amount: float) -> float:
    return min(balance, order_amount)


def is_at_target_price(order_price: float, ask: float, price_step: float = 0.01) -> bool:
    """True when an order already rests at the undercut price for `ask`."""
    return abs(order_price - undercut_price(ask, price_step)) < price_step / 2
