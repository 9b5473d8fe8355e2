from __future__ import annotations

import logging
from typing import Iterable, List

from .errors import BitexError
from .exchange import ExchangeClient
from .pricing import is_at_target_price, sell_amount, undercut_price
from .settings import BITEX_PRICE_STEP, DEFAULT_ASSET
from .types import AskQuote, OpenOrder, TickerConfig

log = logging.getLogger(__name__)


def stale_orders(
    orders: Iterable[OpenOrder],
    quote: AskQuote,
    *,
    price_step: float = BITEX_PRICE_STEP,
    cancel_all: bool = False,
) -> List[OpenOrder]:
    """Orders on the quote's pair that are not resting at the undercut price."""
    return [
        o
        for o in orders
        if o.orderbook_code == quote.id
        and (cancel_all or not is_at_target_price(o.price, quote.ask, price_step))
    ]


async def rebalance_tickers(
    client: ExchangeClient,
    tickers: Iterable[TickerConfig],
    *,
    asset: str = DEFAULT_ASSET,
    price_step: float = BITEX_PRICE_STEP,
    cancel_all_open_orders: bool = False,
) -> bool:
    """Requote every ticker in order: cancel stale asks, then place one fresh ask.

    Balance, asks and open orders are fetched once for the whole run. The
    balance is only re-read after a ticker cancelled something, so an order
    placed for an earlier ticker does not reduce the balance a later ticker
    sees.

    Returns False if the run was aborted or any ticker hit an exchange error.
    """
    try:
        balance = await client.get_balance(asset)
        log.info("Available balance in %s: %s", asset.upper(), balance)

        asks = await client.get_lowest_asks(asset)
        log.info(
            "Lowest sell order price (%s/XXX):\n%s",
            asset.upper(),
            "\n".join(f"{q.id}: {q.ask}" for q in asks),
        )

        open_orders = await client.get_open_orders()
    except BitexError:
        log.exception("Rebalance aborted: could not load account/market state")
        return False

    quotes = {q.id: q for q in asks}
    ok = True
    for ticker in tickers:
        log.info("Ticker %s", ticker.id)
        quote = quotes.get(ticker.id)
        if quote is None:
            log.info("No lowest ask for %s, skipping", ticker.id)
            continue
        try:
            balance = await _requote_ticker(
                client,
                ticker,
                quote,
                open_orders,
                balance,
                asset=asset,
                price_step=price_step,
                cancel_all=cancel_all_open_orders,
            )
        except BitexError:
            log.exception("Ticker %s failed", ticker.id)
            ok = False
    return ok


async def _requote_ticker(
    client: ExchangeClient,
    ticker: TickerConfig,
    quote: AskQuote,
    open_orders: List[OpenOrder],
    balance: float,
    *,
    asset: str,
    price_step: float,
    cancel_all: bool,
) -> float:
    stale = stale_orders(open_orders, quote, price_step=price_step, cancel_all=cancel_all)
    if stale:
        log.info("Lowest ask %s", quote.ask)
        log.info("Cancel open %s orders: %s", ticker.id, ",".join(o.id for o in stale))
        for order in stale:
            await client.cancel_order(order.id)

        balance = await client.get_balance(asset)
        log.info("New available balance in %s: %s", asset.upper(), balance)

    if balance <= 0:
        log.info("Zero %s balance, no order for %s", asset.upper(), ticker.id)
        return balance

    amount = sell_amount(balance, ticker.btc_order_amount)
    price = undercut_price(quote.ask, price_step)
    log.info("Creating order for %s amount: %s ticker: %s price: %s", asset.upper(), amount, ticker.id, price)
    placed = await client.place_sell_order(ticker.id, amount, price)
    log.info("Place order result: %s", placed)
    return balance
