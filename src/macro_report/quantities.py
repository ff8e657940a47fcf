"""Unit conversions and derived macroeconomic aggregates."""

from __future__ import annotations

import numpy as np
import xarray as xr

from .constants import (
    BUILDINGS_SIMPLE_INPUTS,
    CAPITAL_INPUT,
    CAPITAL_STOCK,
    GDP_INPUT,
    GDP_MER,
    GDP_PPP,
    INVESTMENTS,
    MACRO_INVESTMENTS,
    MONETARY_SCALE,
    TWA_2_EJ,
    ces_input_label,
)
from .resolver import ModelStructure

INPUT_DIM = "all_in"


def ces_quantity(ces_io: xr.DataArray, name: str, *, scale: float, label: str) -> xr.DataArray:
    """Select one production-function input from the CES quantity array and scale it."""

    if name not in ces_io[INPUT_DIM].values:
        raise KeyError(f"CES input '{name}' not present in the CES quantity array.")
    return (ces_io.sel({INPUT_DIM: name}, drop=True) * scale).rename(label)


def gdp_mer(ces_io: xr.DataArray) -> xr.DataArray:
    return ces_quantity(ces_io, GDP_INPUT, scale=MONETARY_SCALE, label=GDP_MER)


def capital_stock(ces_io: xr.DataArray) -> xr.DataArray:
    return ces_quantity(ces_io, CAPITAL_INPUT, scale=MONETARY_SCALE, label=CAPITAL_STOCK)


def macro_investment(inv_macro: xr.DataArray) -> xr.DataArray:
    return ces_quantity(inv_macro, CAPITAL_INPUT, scale=MONETARY_SCALE, label=MACRO_INVESTMENTS)


def gdp_ppp(gdp: xr.DataArray, sh_ppp_mer: xr.DataArray) -> xr.DataArray:
    """Convert MER GDP to PPP. A zero ratio yields inf and is passed through."""

    with np.errstate(divide="ignore", invalid="ignore"):
        result = gdp / sh_ppp_mer
    return result.rename(GDP_PPP)


def common_years(*arrays: xr.DataArray) -> list[int]:
    """Sorted years shared by every array that has a year axis."""

    year_sets = [set(int(y) for y in arr["year"].values) for arr in arrays if "year" in arr.dims]
    if not year_sets:
        return []
    return sorted(set.intersection(*year_sets))


def net_of_damages(gdp: xr.DataArray, damage_factor: xr.DataArray, label: str) -> xr.DataArray:
    """GDP times the damage factor on the years both series cover."""

    years = common_years(gdp, damage_factor)
    return (gdp.sel(year=years) * damage_factor.sel(year=years)).rename(label)


def total_investment(macro: xr.DataArray, energy: xr.DataArray) -> xr.DataArray:
    return (macro + energy).rename(INVESTMENTS)


def ces_input_quantities(ces_io: xr.DataArray, structure: ModelStructure) -> list[xr.DataArray]:
    """Production-function inputs in reporting units.

    Capital-type inputs are scaled to billion US$, energy-type inputs from TWa
    to EJ. The buildings carriers only exist as separate inputs in the simple
    buildings realisation.
    """

    series = [
        ces_quantity(
            ces_io,
            CAPITAL_INPUT,
            scale=MONETARY_SCALE,
            label=ces_input_label(CAPITAL_INPUT, "billion US$2017"),
        )
    ]
    if structure.buildings_simple:
        for name in BUILDINGS_SIMPLE_INPUTS:
            series.append(ces_quantity(ces_io, name, scale=TWA_2_EJ, label=ces_input_label(name, "EJ/yr")))
    for name in structure.industry_capital_inputs:
        series.append(
            ces_quantity(
                ces_io, name, scale=MONETARY_SCALE, label=ces_input_label(name, "billion US$2017")
            )
        )
    for name in structure.industry_energy_inputs:
        series.append(ces_quantity(ces_io, name, scale=TWA_2_EJ, label=ces_input_label(name, "EJ/yr")))
    return series
