# mm_bitex/bitex_client.py
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from . import settings
from .errors import ParseError, TransportError
from .exchange import ExchangeClient
from .normalizer import parse_balance, parse_lowest_asks, parse_open_orders, parse_placed_order
from .types import AskQuote, OpenOrder

log = logging.getLogger(__name__)

_WALLETS_PATH = "/api/coin_wallets"
_TICKERS_PATH = "/api/tickers"
_ASKS_PATH = "/api/asks"


def resolve_base_url(use_dev_server: bool, base_url: Optional[str] = None) -> str:
    explicit = base_url or settings.BITEX_BASE_URL
    if explicit:
        return explicit.rstrip("/")
    host = settings.SANDBOX_HOST if use_dev_server else settings.PROD_HOST
    return f"https://{host}"


class BitexClient(ExchangeClient):
    """
    aiohttp connector for the Bitex REST API (JSON:API payloads).

    NOTE:
    - One ClientSession per client; use `async with BitexClient(...)` or call close().
    - No retries. Every call is bounded by `timeout_s`.
    """

    def __init__(
        self,
        api_key: str,
        api_version: str,
        use_dev_server: bool = False,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.api_key = api_key
        self.api_version = str(api_version)
        self.use_dev_server = use_dev_server
        self.base_url = resolve_base_url(use_dev_server, base_url)
        self.timeout_s = settings.BITEX_TIMEOUT_S if timeout_s is None else float(timeout_s)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "BitexClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    # --- transport ------------------------------------------------------------

    def _headers(self, auth: bool) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Version": self.api_version}
        if auth:
            headers["Authorization"] = self.api_key
        return headers

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def _request(
        self,
        method: str,
        path: str,
        *,
        auth: bool = True,
        body: Optional[Dict[str, Any]] = None,
    ) -> str:
        url = f"{self.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.timeout_s)
        log.debug("%s %s", method, url)
        try:
            async with self._get_session().request(
                method, url, headers=self._headers(auth), json=body, timeout=timeout
            ) as resp:
                try:
                    text = await resp.text()
                except UnicodeDecodeError as exc:
                    raise ParseError(f"{method} {path} returned an undecodable body: {exc}") from exc
                if resp.status >= 400:
                    raise TransportError(
                        f"{method} {path} returned HTTP {resp.status}: {text[:200]}",
                        status=resp.status,
                    )
                return text
        except asyncio.TimeoutError as exc:
            raise TransportError(f"{method} {path} timed out after {self.timeout_s}s") from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

    async def _request_json(self, method: str, path: str, **kwargs) -> Any:
        text = await self._request(method, path, **kwargs)
        try:
            return json.loads(text)
        except ValueError as exc:
            raise ParseError(f"{method} {path} returned non-JSON body: {text[:200]!r}") from exc

    # --- account --------------------------------------------------------------

    async def get_balance(self, asset: str) -> float:
        payload = await self._request_json("GET", _WALLETS_PATH)
        return parse_balance(payload, asset)

    # --- pricing --------------------------------------------------------------

    async def get_lowest_asks(self, asset: str) -> List[AskQuote]:
        payload = await self._request_json("GET", _TICKERS_PATH, auth=False)
        return parse_lowest_asks(payload, asset)

    # --- orders ---------------------------------------------------------------

    async def get_open_orders(self) -> List[OpenOrder]:
        payload = await self._request_json("GET", _ASKS_PATH)
        return parse_open_orders(payload)

    async def cancel_order(self, order_id: str) -> str:
        # The body is not inspected; any non-error completion counts as sent.
        return await self._request("POST", f"{_ASKS_PATH}/{order_id}/cancel")

    async def place_sell_order(self, pair: str, amount: float, price: float) -> Dict[str, Any]:
        body = {
            "data": {
                "type": "asks",
                "attributes": {
                    "amount": amount,
                    "price": price,
                    "orderbook_code": pair,
                },
            }
        }
        payload = await self._request_json("POST", _ASKS_PATH, body=body)
        return parse_placed_order(payload)
