"""Diagnostics of the nested CES production function.

These are internal variables that are usually not reported to external
projects. They help to understand the solution: CES prices (derivatives of
GDP with respect to each input), marginal rates of substitution between
selected final-energy inputs, and the value generated by every input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
import xarray as xr

from .constants import (
    FE_PREFIX,
    FE_PRICE_UNIT,
    GDP_INPUT,
    INPUT_PRICE_UNIT,
    MONETARY_SCALE,
    MRS_PRICE_PAIRS,
    MRS_PRICE_PAIRS_NON_PROCESS_STEEL,
    MRS_RAW_PAIRS,
    MRS_RAW_PAIRS_NON_PROCESS_STEEL,
    ces_mrs_label,
    ces_price_label,
    ces_value_label,
)
from .quantities import INPUT_DIM
from .resolver import ModelStructure, read_variable
from .store import ArrayStore

LOGGER = logging.getLogger(__name__)

DERIVATIVE_DIM = "all_in1"


@dataclass(slots=True)
class CESDiagnostics:
    """CES prices, marginal rates of substitution and input values."""

    regions: list[str]
    prices: dict[str, xr.DataArray] = field(default_factory=dict)
    mrs: list[xr.DataArray] = field(default_factory=list)
    values: list[xr.DataArray] = field(default_factory=list)

    def variables(self) -> list[xr.DataArray]:
        return [*self.prices.values(), *self.mrs, *self.values]


def extend_to_years(data: xr.DataArray, years: Sequence[int]) -> xr.DataArray:
    """Reindex onto the full reporting grid, filling uncovered years with NaN."""

    return data.reindex(year=[int(y) for y in years])


def mrs_catalogue(
    structure: ModelStructure,
) -> tuple[tuple[tuple[str, str], ...], tuple[tuple[str, str], ...]]:
    """Return the raw-ratio pairs and the price-ratio pairs to report."""

    raw_pairs = MRS_RAW_PAIRS
    price_pairs = MRS_PRICE_PAIRS
    if not structure.steel_process_based:
        raw_pairs = raw_pairs + MRS_RAW_PAIRS_NON_PROCESS_STEEL
        price_pairs = price_pairs + MRS_PRICE_PAIRS_NON_PROCESS_STEEL
    return raw_pairs, price_pairs


def ces_prices(
    derivatives: xr.DataArray,
    inputs: Sequence[str],
    fe_price_unit_factor: float,
) -> dict[str, xr.DataArray]:
    """Derivative of GDP with respect to each input.

    Final-energy inputs are converted to US$/GJ, all other inputs stay in
    trillion US$ per unit of input.
    """

    gdp_derivatives = derivatives.sel({INPUT_DIM: GDP_INPUT}, drop=True)
    prices: dict[str, xr.DataArray] = {}
    for name in inputs:
        derivative = gdp_derivatives.sel({DERIVATIVE_DIM: name}, drop=True)
        if name.startswith(FE_PREFIX):
            prices[name] = (derivative / fe_price_unit_factor).rename(
                ces_price_label(name, FE_PRICE_UNIT)
            )
        else:
            prices[name] = derivative.rename(ces_price_label(name, INPUT_PRICE_UNIT))
    return prices


def _has_pair(mrs: xr.DataArray, numerator: str, denominator: str) -> bool:
    return numerator in mrs[INPUT_DIM].values and denominator in mrs[DERIVATIVE_DIM].values


def marginal_rates_of_substitution(
    mrs: xr.DataArray,
    prices: dict[str, xr.DataArray],
    structure: ModelStructure,
) -> list[xr.DataArray]:
    """Rates for the reported pairs, taken from ``mrs`` or else from price ratios."""

    raw_pairs, price_pairs = mrs_catalogue(structure)
    result: list[xr.DataArray] = []
    skipped: list[str] = []
    for numerator, denominator in (*raw_pairs, *price_pairs):
        label = ces_mrs_label(numerator, denominator)
        if _has_pair(mrs, numerator, denominator):
            ratio = mrs.sel({INPUT_DIM: numerator, DERIVATIVE_DIM: denominator}, drop=True)
        elif numerator in prices and denominator in prices:
            with np.errstate(divide="ignore", invalid="ignore"):
                ratio = prices[numerator] / prices[denominator]
        else:
            skipped.append(f"{numerator}/{denominator}")
            continue
        result.append(ratio.rename(label))
    if skipped:
        LOGGER.warning(
            "Skipping %d MRS pairs without ratio or prices: %s", len(skipped), ", ".join(skipped)
        )
    return result


def input_values(
    derivatives: xr.DataArray,
    ces_io: xr.DataArray,
    inputs: Sequence[str],
) -> list[xr.DataArray]:
    """Value generated by each input: derivative times quantity, in billion US$."""

    gdp_derivatives = derivatives.sel({INPUT_DIM: GDP_INPUT}, drop=True)
    values = []
    for name in inputs:
        derivative = gdp_derivatives.sel({DERIVATIVE_DIM: name}, drop=True)
        quantity = ces_io.sel({INPUT_DIM: name}, drop=True)
        values.append((derivative * quantity * MONETARY_SCALE).rename(ces_value_label(name)))
    return values


def compute_ces_diagnostics(
    store: ArrayStore,
    ces_io: xr.DataArray,
    structure: ModelStructure,
    years: Sequence[int],
) -> CESDiagnostics | None:
    """Run the CES block, or return ``None`` when the diagnostic arrays are absent."""

    derivatives = read_variable(store, "o01_CESderivatives", react="silent")
    mrs = read_variable(store, "o01_CESmrs", react="silent")
    if derivatives is None or mrs is None or derivatives.size == 0 or mrs.size == 0:
        LOGGER.info("CES diagnostics not available; skipping CES function reporting.")
        return None

    derivatives = extend_to_years(derivatives, years)
    mrs = extend_to_years(mrs, years)
    fe_price_unit_factor = float(read_variable(store, "sm_DpGJ_2_TDpTWa"))

    available = set(derivatives[DERIVATIVE_DIM].values)
    inputs = [name for name in structure.priced_inputs if name in available]
    missing = sorted(set(structure.priced_inputs) - available)
    if missing:
        LOGGER.debug("No CES derivative for inputs %s.", missing)

    prices = ces_prices(derivatives, inputs, fe_price_unit_factor)
    return CESDiagnostics(
        regions=[str(region) for region in derivatives["region"].values],
        prices=prices,
        mrs=marginal_rates_of_substitution(mrs, prices, structure),
        values=input_values(derivatives, ces_io, inputs),
    )
