"""Retrieve raw model symbols, apply scaling and resolve the model structure."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Hashable, Mapping, Sequence

import xarray as xr

from .constants import BUILDINGS_SIMPLE, GDP_INPUT, OPTIONAL_DEFAULTS
from .store import ArrayStore, React, first_match

LOGGER = logging.getLogger(__name__)


def restrict_years(data: xr.DataArray, years: Sequence[int] | None) -> xr.DataArray:
    """Keep the reporting years the array actually covers; arrays without a year axis pass."""

    if years is None or "year" not in data.dims:
        return data
    available = set(int(y) for y in data["year"].values)
    keep = [int(y) for y in years if int(y) in available]
    return data.sel(year=keep)


def read_variable(
    store: ArrayStore,
    names: str | Sequence[str],
    *,
    field: str | None = None,
    select: Mapping[str, Hashable] | None = None,
    scale: float = 1.0,
    years: Sequence[int] | None = None,
    react: React = "error",
    label: str | None = None,
) -> xr.DataArray | None:
    """Query ``names`` (first found wins) and return the scaled, year-restricted array.

    ``select`` picks a single sub-category, e.g. ``{"all_enty": "good"}``,
    dropping that dimension. ``label`` renames the result.
    """

    data = store.query(names, field=field, react=react)
    if data is None:
        return None
    if select:
        data = data.sel(dict(select), drop=True)
    data = restrict_years(data, years)
    if scale != 1.0:
        data = data * scale
    if label is not None:
        data = data.rename(label)
    return data


def read_optional(
    store: ArrayStore,
    names: str | Sequence[str],
    key: str,
    *,
    field: str | None = None,
    years: Sequence[int] | None = None,
) -> xr.DataArray | float:
    """Read an optional symbol, substituting ``OPTIONAL_DEFAULTS[key]`` when absent."""

    data = read_variable(store, names, field=field, years=years, react="silent")
    if data is None:
        default = OPTIONAL_DEFAULTS[key]
        LOGGER.debug("Optional input '%s' absent, using %s.", key, default)
        return default
    return data


def _relation_pairs(members: Sequence[Hashable]) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for member in members:
        if not isinstance(member, (tuple, list)) or len(member) < 2:
            raise ValueError(f"Module realisation entry {member!r} is not a (module, realisation) pair.")
        pairs[str(member[0])] = str(member[1])
    return pairs


@dataclass(frozen=True, slots=True)
class ModelStructure:
    """Structural switches of the solved model, resolved once per report."""

    buildings_realisation: str
    steel_process_based: bool
    ces_inputs: tuple[str, ...]
    industry_energy_inputs: tuple[str, ...] = ()
    industry_capital_inputs: tuple[str, ...] = ()

    @property
    def buildings_simple(self) -> bool:
        return self.buildings_realisation == BUILDINGS_SIMPLE

    @property
    def priced_inputs(self) -> tuple[str, ...]:
        """CES inputs that have a derivative of GDP (everything but GDP itself)."""
        return tuple(name for name in self.ces_inputs if name != GDP_INPUT)

    @classmethod
    def from_store(cls, store: ArrayStore) -> "ModelStructure":
        realisations = store.query_set("module2realisation", react="silent")
        if realisations is None:
            buildings = BUILDINGS_SIMPLE
        else:
            modules = _relation_pairs(realisations)
            if "CES_structure" in modules:
                buildings = BUILDINGS_SIMPLE
            else:
                buildings = modules.get("buildings", BUILDINGS_SIMPLE)

        steel_set = store.query_set("secInd37Prc", react="silent") or []
        inputs = store.query_set("in", react="error") or []

        found = first_match(
            ("ppfen_industry_dyn37", "ppfen_industry_dyn28", "ppfen_industry"),
            lambda name: store.query_set(name, react="silent"),
        )
        energy = found[1] if found is not None else []
        capital = store.query_set("ppfKap_industry_dyn37", react="silent") or []

        structure = cls(
            buildings_realisation=buildings,
            steel_process_based="steel" in {str(item) for item in steel_set},
            ces_inputs=tuple(str(item) for item in inputs),
            industry_energy_inputs=tuple(str(item) for item in energy),
            industry_capital_inputs=tuple(str(item) for item in capital),
        )
        LOGGER.debug(
            "Model structure: buildings=%s, process-based steel=%s, %d CES inputs.",
            structure.buildings_realisation,
            structure.steel_process_based,
            len(structure.ces_inputs),
        )
        return structure
