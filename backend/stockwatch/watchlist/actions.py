"""The closed set of actions the watchlist store accepts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..market.models import Stock


@dataclass(frozen=True, slots=True)
class AddStock:
    stock: Stock


@dataclass(frozen=True, slots=True)
class RemoveStock:
    symbol: str


@dataclass(frozen=True, slots=True)
class SetWatchlist:
    """Replace the whole watchlist, e.g. when loading from persistence."""

    stocks: tuple[Stock, ...]


@dataclass(frozen=True, slots=True)
class UpdateStockData:
    stock: Stock


@dataclass(frozen=True, slots=True)
class SetLoading:
    loading: bool


@dataclass(frozen=True, slots=True)
class SetError:
    message: str | None


@dataclass(frozen=True, slots=True)
class SetSearchResults:
    stocks: tuple[Stock, ...]


@dataclass(frozen=True, slots=True)
class SetSearchLoading:
    loading: bool


@dataclass(frozen=True, slots=True)
class ClearSearch:
    pass


Action = Union[
    AddStock,
    RemoveStock,
    SetWatchlist,
    UpdateStockData,
    SetLoading,
    SetError,
    SetSearchResults,
    SetSearchLoading,
    ClearSearch,
]
