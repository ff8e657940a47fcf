"""Isoelastic (constant relative risk aversion) welfare of per-capita consumption."""

from __future__ import annotations

import numpy as np
import xarray as xr

from .constants import WELFARE

# Keeps the log/power argument well above one; has no economic meaning.
WELFARE_SCALE = 1000.0


def isoelastic_welfare(
    consumption: xr.DataArray,
    population: xr.DataArray,
    ies: xr.DataArray,
    *,
    damage_coupling: xr.DataArray | float = 0.0,
    overshoot_forcing: xr.DataArray | float = 0.0,
) -> xr.DataArray:
    """Yearly undiscounted welfare per region.

    Regions with an intertemporal elasticity of substitution of exactly one use
    the logarithmic form, all others the power form::

        c = 1000 * cons * (1 - c_damage * forcOs) / pop
        W = pop * ln(c)                                  if ies == 1
        W = pop * (c ** (1 - 1/ies) - 1) / (1 - 1/ies)   otherwise

    The comparison with one is exact. Non-positive arguments propagate as NaN.
    """

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        per_capita = (
            WELFARE_SCALE * consumption * (1 - damage_coupling * overshoot_forcing) / population
        )
        exponent = 1 - 1 / ies
        log_form = population * np.log(per_capita)
        power_form = population * (per_capita**exponent - 1) / exponent
        welfare = xr.where(ies == 1, log_form, power_form)
    dims = [dim for dim in ("region", "year") if dim in welfare.dims]
    return welfare.transpose(*dims, ...).rename(WELFARE)
