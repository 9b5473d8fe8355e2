# mm_bitex/runner_tick.py

import argparse
import asyncio
import json
import logging

from .config import DEFAULT_CONFIG_PATH, BotConfig, load_config
from .logging_config import setup_logging
from .tick import run_tick
from .types import TickParams


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Requote a single Bitex pair and print the JSON result.")
    p.add_argument("--config", type=str, default=DEFAULT_CONFIG_PATH, help="Config file with apiKey/apiVersion/useDevServer")
    p.add_argument("--from", dest="currency_from", type=str, required=True, help="Asset to sell, e.g. btc")
    p.add_argument("--to", dest="currency_to", type=str, required=True, help="Quote asset, e.g. usd")
    p.add_argument("--amount", type=float, required=True, help="Max amount of the sold asset per order")
    p.add_argument("--minimum-price", type=float, default=0.0, help="Never place below this price")
    p.add_argument("--allow-take", action="store_true", help="Price at the best ask instead of one step below it")
    p.add_argument("--log-dir", type=str, default="logs", help="Base directory for daily log files")
    args = p.parse_args(argv)

    cfg_raw = load_config(args.config)
    ticker_id = f"{args.currency_from}_{args.currency_to}"
    setup_logging(cfg_raw.get("logLevel", "INFO"), component="bitex", subdir=f"tick_{ticker_id}", base_dir=args.log_dir)
    log = logging.getLogger("runner_tick")

    try:
        cfg = BotConfig.from_dict(cfg_raw)
    except ValueError as e:
        log.error("Invalid config: %s", e)
        return 1

    params = TickParams(
        api_key=cfg.api_key,
        api_version=cfg.api_version,
        use_dev_server=cfg.use_dev_server,
        order_amount=args.amount,
        minimum_price=args.minimum_price,
        currency_from=args.currency_from,
        currency_to=args.currency_to,
        allow_take=args.allow_take,
    )
    result = asyncio.run(run_tick(params, timeout_s=cfg.timeout_s))

    print(json.dumps(result.to_dict(), indent=2, default=str))
    if not result.ok:
        log.warning("Tick for %s failed: %s", ticker_id, result.description)
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
