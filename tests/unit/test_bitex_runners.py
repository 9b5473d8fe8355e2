from __future__ import annotations

import json
from pathlib import Path

import mm_bitex.runner_rebalance as rebalance_mod
import mm_bitex.runner_tick as tick_mod
from mm_bitex.types import RunResult, TickerConfig
from mm_bitex.errors import TransportError


def _config(tmp_path: Path) -> Path:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "apiKey": "0123456789abcdef",
                "apiVersion": "2.1",
                "useDevServer": True,
                "timeoutS": 3,
                "tickers": [{"id": "btc_usd", "btcOrderAmount": 0.01}],
            }
        ),
        encoding="utf-8",
    )
    return path


def _quiet_logging(monkeypatch, module):
    calls = []
    monkeypatch.setattr(module, "setup_logging", lambda *a, **kw: calls.append((a, kw)))
    return calls


def test_runner_tick_prints_result_and_exit_code(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    _quiet_logging(monkeypatch, tick_mod)
    seen = {}

    async def fake_run_tick(params, *, timeout_s=None, base_url=None):
        seen["params"] = params
        seen["timeout_s"] = timeout_s
        return RunResult.success(params.as_raw_requests(), {"id": "77", "type": "asks"})

    monkeypatch.setattr(tick_mod, "run_tick", fake_run_tick)

    code = tick_mod.main(
        ["--config", str(_config(tmp_path)), "--from", "btc", "--to", "usd", "--amount", "0.01", "--minimum-price", "7000"]
    )

    assert code == 0
    params = seen["params"]
    assert params.ticker_id == "btc_usd"
    assert params.allow_take is False
    assert params.minimum_price == 7000.0
    assert seen["timeout_s"] == 3.0
    out = json.loads(capsys.readouterr().out)
    assert out["status"] == "success"
    assert out["record_id"] == "77"


def test_runner_tick_error_result_exit_code(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    _quiet_logging(monkeypatch, tick_mod)

    async def fake_run_tick(params, **kwargs):
        return RunResult.failure(params.as_raw_requests(), "Can't get asks", TransportError("down"))

    monkeypatch.setattr(tick_mod, "run_tick", fake_run_tick)

    code = tick_mod.main(
        ["--config", str(_config(tmp_path)), "--from", "btc", "--to", "usd", "--amount", "0.01", "--allow-take"]
    )

    assert code == 1
    out = json.loads(capsys.readouterr().out)
    assert out["description"] == "Can't get asks"
    assert out["error"] == {"type": "TransportError", "message": "down"}


def test_runner_rebalance_passes_config(tmp_path, monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    log_calls = _quiet_logging(monkeypatch, rebalance_mod)
    seen = {}

    async def fake_run(cfg):
        seen["cfg"] = cfg
        return False

    monkeypatch.setattr(rebalance_mod, "run", fake_run)

    code = rebalance_mod.main(["--config", str(_config(tmp_path)), "--log-dir", str(tmp_path / "logs")])

    assert code == 1
    assert seen["cfg"].tickers == [TickerConfig("btc_usd", 0.01)]
    assert log_calls[0][1]["subdir"] == "rebalance"
