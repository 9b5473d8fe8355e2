from __future__ import annotations

import logging
from typing import Optional

from .bitex_client import BitexClient
from .errors import BitexError
from .exchange import ExchangeClient
from .pricing import sell_amount, sell_price
from .types import RunResult, TickParams

log = logging.getLogger(__name__)


async def tick(client: ExchangeClient, params: TickParams) -> RunResult:
    """One requote of a single pair: cancel all of its open asks, then place one.

    Every failure is returned as an error result; nothing is raised. A failed
    cancellation stops the batch and earlier cancellations stay cancelled.
    """
    raw_requests = params.as_raw_requests()
    asset = params.currency_from
    ticker_id = params.ticker_id

    try:
        balance = await client.get_balance(asset)
    except BitexError as exc:
        return RunResult.failure(raw_requests, "Can't get balance", exc)
    log.info("Available balance in %s: %s", asset, balance)

    try:
        asks = await client.get_lowest_asks(asset)
    except BitexError as exc:
        return RunResult.failure(raw_requests, "Can't get asks", exc)

    quote = next((q for q in asks if q.id == ticker_id), None)
    if quote is None:
        return RunResult.failure(raw_requests, f"No lowest ask for {ticker_id}")
    log.info("Lowest sell order price for ticker (%s): %s", ticker_id, quote.ask)

    try:
        open_orders = await client.get_open_orders()
    except BitexError as exc:
        return RunResult.failure(raw_requests, "Can't get orders", exc)

    to_cancel = [o for o in open_orders if o.orderbook_code == ticker_id]
    if to_cancel:
        log.info("Cancel open %s orders: %s", ticker_id, ",".join(o.id for o in to_cancel))
        for order in to_cancel:
            try:
                await client.cancel_order(order.id)
            except BitexError as exc:
                return RunResult.failure(raw_requests, f"Can't get cancel order: {order.id}", exc)

        try:
            balance = await client.get_balance(asset)
        except BitexError as exc:
            return RunResult.failure(raw_requests, "Can't get balance", exc)
        log.info("New available balance in %s: %s", asset, balance)

    if balance <= 0:
        return RunResult.failure(raw_requests, "Zero balance")

    amount = sell_amount(balance, params.order_amount)
    price = sell_price(
        quote.ask,
        minimum_price=params.minimum_price,
        allow_take=params.allow_take,
    )
    log.info("Creating order for %s amount: %s ticker: %s price: %s", asset, amount, ticker_id, price)

    try:
        placed = await client.place_sell_order(ticker_id, amount, price)
    except BitexError as exc:
        return RunResult.failure(raw_requests, "Can't place sell order", exc)

    return RunResult.success(raw_requests, placed)


async def run_tick(
    params: TickParams,
    *,
    timeout_s: Optional[float] = None,
    base_url: Optional[str] = None,
) -> RunResult:
    """Build a client from `params` and run one tick with it."""
    async with BitexClient(
        params.api_key,
        params.api_version,
        params.use_dev_server,
        base_url=base_url,
        timeout_s=timeout_s,
    ) as client:
        return await tick(client, params)
