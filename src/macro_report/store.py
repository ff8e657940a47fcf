"""Named-array store that exposes solved model symbols by query."""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Iterable, Literal, Mapping, Protocol, Sequence, TypeVar

import pandas as pd
import xarray as xr

LOGGER = logging.getLogger(__name__)

React = Literal["silent", "warning", "error"]
SetMembers = Sequence[Hashable]

T = TypeVar("T")

_REACTIONS = ("silent", "warning", "error")


class MissingVariableError(KeyError):
    """Raised when none of the candidate names exist in the store."""

    def __init__(self, names: Sequence[str]):
        self.names = tuple(names)
        super().__init__(f"None of the symbols {list(self.names)} found in the store.")


def first_match(keys: Iterable[str], lookup: Callable[[str], T | None]) -> tuple[str, T] | None:
    """Return ``(key, value)`` for the first key whose lookup is not ``None``."""

    for key in keys:
        value = lookup(key)
        if value is not None:
            return key, value
    return None


def _as_names(names: str | Sequence[str]) -> list[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


def _handle_missing(names: Sequence[str], react: React) -> None:
    if react not in _REACTIONS:
        raise ValueError(f"Unknown react '{react}'. Expected one of {_REACTIONS}.")
    if react == "error":
        raise MissingVariableError(names)
    if react == "warning":
        LOGGER.warning("None of the symbols %s found; continuing without it.", list(names))


class ArrayStore(Protocol):
    def query(
        self,
        names: str | Sequence[str],
        *,
        field: str | None = None,
        react: React = "error",
    ) -> xr.DataArray | None: ...

    def query_set(self, name: str, *, react: React = "silent") -> list[Hashable] | None: ...


class DatasetStore:
    """In-memory store of named ``xr.DataArray`` symbols and named sets.

    Variables carry their levels, marginals, ... along a ``field`` dimension;
    parameters have no such dimension. Scalars are 0-d arrays. Sets are
    sequences of labels, relations are sequences of label tuples.
    """

    def __init__(
        self,
        symbols: Mapping[str, xr.DataArray] | None = None,
        sets: Mapping[str, SetMembers] | None = None,
    ) -> None:
        self._symbols: dict[str, xr.DataArray] = dict(symbols or {})
        self._sets: dict[str, list[Hashable]] = {
            name: list(members) for name, members in (sets or {}).items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._symbols or name in self._sets

    def add(self, name: str, data: xr.DataArray) -> None:
        self._symbols[name] = data

    def add_set(self, name: str, members: SetMembers) -> None:
        self._sets[name] = list(members)

    def _lookup(self, name: str, field: str | None) -> xr.DataArray | None:
        data = self._symbols.get(name)
        if data is None:
            return None
        if field is not None and "field" in data.dims:
            data = data.sel(field=field, drop=True)
        return data.rename(name)

    def query(
        self,
        names: str | Sequence[str],
        *,
        field: str | None = None,
        react: React = "error",
    ) -> xr.DataArray | None:
        """Return the first symbol found among ``names``."""

        candidates = _as_names(names)
        found = first_match(candidates, lambda key: self._lookup(key, field))
        if found is None:
            _handle_missing(candidates, react)
            return None
        key, data = found
        if key != candidates[0]:
            LOGGER.debug("Resolved %s via fallback name '%s'.", candidates, key)
        return data

    def query_set(self, name: str, *, react: React = "silent") -> list[Hashable] | None:
        members = self._sets.get(name)
        if members is None:
            _handle_missing([name], react)
            return None
        return list(members)


def symbol_from_frame(
    frame: pd.DataFrame,
    dims: Sequence[str],
    *,
    value_column: str = "value",
) -> xr.DataArray:
    """Build a symbol from a long-format table with one column per dimension.

    Combinations not listed in ``frame`` become missing values so the result
    stays rectangular.
    """

    missing = [col for col in [*dims, value_column] if col not in frame.columns]
    if missing:
        raise ValueError(f"Frame is missing columns: {missing}")
    table = frame[[*dims, value_column]].copy()
    if "year" in dims:
        table["year"] = table["year"].astype(int)
    series = table.set_index(list(dims))[value_column].astype(float)
    if series.index.has_duplicates:
        raise ValueError("Frame contains duplicate index combinations.")
    return series.to_xarray()
