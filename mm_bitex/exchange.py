# mm_bitex/exchange.py
import abc
from typing import Any, Dict, List

from .types import AskQuote, OpenOrder


class ExchangeClient(abc.ABC):
    """Operations the quoting loops need from an exchange.

    Implementations never retry; failures surface as `BitexError` subclasses.
    """

    @abc.abstractmethod
    async def get_balance(self, asset: str) -> float:
        ...

    @abc.abstractmethod
    async def get_lowest_asks(self, asset: str) -> List[AskQuote]:
        """Lowest ask per pair quoted against `asset`, in exchange order."""
        ...

    @abc.abstractmethod
    async def get_open_orders(self) -> List[OpenOrder]:
        ...

    @abc.abstractmethod
    async def cancel_order(self, order_id: str) -> str:
        ...

    @abc.abstractmethod
    async def place_sell_order(self, pair: str, amount: float, price: float) -> Dict[str, Any]:
        """Returns the exchange's created-order object (carries its `id`)."""
        ...
