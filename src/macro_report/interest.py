"""Real interest rates from the shadow price of capital."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import xarray as xr

from .constants import INTEREST_RATE_BACKWARD, INTEREST_RATE_CENTRAL


def _annualised_rate(later: xr.DataArray, earlier: xr.DataArray, span: int) -> xr.DataArray:
    with np.errstate(divide="ignore", invalid="ignore"):
        return 1 - (later / earlier) ** (1 / span)


def interest_rates(
    pvp: xr.DataArray,
    years: Sequence[int],
    regions: Sequence[str],
) -> xr.DataArray:
    """Central and backward finite-difference interest rates.

    For every reporting year strictly inside ``years`` the neighbouring years
    are taken from the shadow price's own year axis::

        central[t]  = 1 - (pvp[t+1] / pvp[t-1]) ** (1 / (year[t+1] - year[t-1]))
        backward[t] = 1 - (pvp[t] / pvp[t-1]) ** (1 / (year[t] - year[t-1]))

    The first and last reporting year, years the shadow price does not cover
    and regions without a shadow price stay NaN.
    """

    years = [int(y) for y in years]
    labels = [INTEREST_RATE_CENTRAL, INTEREST_RATE_BACKWARD]
    rates = xr.DataArray(
        np.full((len(regions), len(years), len(labels)), np.nan),
        coords={"region": list(regions), "year": years, "variable": labels},
        dims=("region", "year", "variable"),
    )
    if len(years) < 3:
        return rates

    pvp = pvp.reindex(region=list(regions))
    pvp_years = sorted(int(y) for y in pvp["year"].values)
    for year in years[1:-1]:
        if year not in pvp_years:
            continue
        position = pvp_years.index(year)
        if position == 0 or position == len(pvp_years) - 1:
            continue
        previous, following = pvp_years[position - 1], pvp_years[position + 1]
        rates.loc[{"year": year, "variable": INTEREST_RATE_CENTRAL}] = _annualised_rate(
            pvp.sel(year=following), pvp.sel(year=previous), following - previous
        ).values
        rates.loc[{"year": year, "variable": INTEREST_RATE_BACKWARD}] = _annualised_rate(
            pvp.sel(year=year), pvp.sel(year=previous), year - previous
        ).values
    return rates
