# mm_bitex/runner_rebalance.py

import argparse
import asyncio
import logging

from .bitex_client import BitexClient
from .config import DEFAULT_CONFIG_PATH, BotConfig, load_config
from .logging_config import setup_logging
from .rebalancer import rebalance_tickers


async def run(cfg: BotConfig) -> bool:
    async with BitexClient(
        cfg.api_key,
        cfg.api_version,
        cfg.use_dev_server,
        timeout_s=cfg.timeout_s,
    ) as client:
        return await rebalance_tickers(
            client,
            cfg.tickers,
            asset=cfg.reference_asset,
            price_step=cfg.price_step,
            cancel_all_open_orders=cfg.cancel_all_open_orders,
        )


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Requote every configured Bitex ticker once.")
    p.add_argument("--config", type=str, default=DEFAULT_CONFIG_PATH, help="Config file (CONFIG_PATH env wins)")
    p.add_argument("--log-dir", type=str, default="logs", help="Base directory for daily log files")
    args = p.parse_args(argv)

    cfg_raw = load_config(args.config)
    setup_logging(cfg_raw.get("logLevel", "INFO"), component="bitex", subdir="rebalance", base_dir=args.log_dir)
    log = logging.getLogger("runner_rebalance")

    try:
        cfg = BotConfig.from_dict(cfg_raw)
    except ValueError as e:
        log.error("Invalid config: %s", e)
        return 1

    log.info(
        "Starting rebalance for %d ticker(s) (sandbox=%s)",
        len(cfg.tickers),
        cfg.use_dev_server,
    )
    ok = asyncio.run(run(cfg))
    log.info("Rebalance finished (ok=%s)", ok)
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
