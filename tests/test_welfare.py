import math

import numpy as np
import pytest
import xarray as xr

from macro_report.constants import WELFARE
from macro_report.welfare import isoelastic_welfare

YEARS = [2005, 2010]


def _inputs(ies_values):
    regions = ["EUR", "USA"]
    cons = xr.DataArray(
        [[1000.0, 1100.0], [2000.0, 2100.0]],
        coords={"region": regions, "year": YEARS},
        dims=("region", "year"),
    )
    pop = xr.DataArray(
        [[500.0, 500.0], [300.0, 300.0]],
        coords={"region": regions, "year": YEARS},
        dims=("region", "year"),
    )
    ies = xr.DataArray(ies_values, coords={"region": regions}, dims="region")
    return cons, pop, ies


def test_log_and_power_branches_per_region():
    cons, pop, ies = _inputs([1.0, 0.5])
    welfare = isoelastic_welfare(cons, pop, ies)

    assert welfare.name == WELFARE
    assert welfare.dims == ("region", "year")
    assert welfare.sel(region="EUR", year=2005).item() == pytest.approx(500.0 * math.log(2000.0))
    assert welfare.sel(region="EUR", year=2005).item() == pytest.approx(3800.45123, rel=1e-6)
    # ies = 0.5: exponent -1, so W = pop * (1 - 1/c)
    assert welfare.sel(region="USA", year=2005).item() == pytest.approx(299.955, rel=1e-6)


def test_power_branch_for_elasticity_above_one():
    cons, pop, ies = _inputs([2.0, 2.0])
    welfare = isoelastic_welfare(cons, pop, ies)
    per_capita = 1000.0 * 1100.0 / 500.0
    expected = 500.0 * (per_capita**0.5 - 1.0) / 0.5
    assert welfare.sel(region="EUR", year=2010).item() == pytest.approx(expected)


def test_damage_coupling_scales_consumption():
    cons, pop, ies = _inputs([1.0, 1.0])
    forcing = xr.DataArray([1.0, 2.0], coords={"year": YEARS}, dims="year")
    welfare = isoelastic_welfare(cons, pop, ies, damage_coupling=0.1, overshoot_forcing=forcing)
    assert welfare.sel(region="EUR", year=2005).item() == pytest.approx(
        500.0 * math.log(1000.0 * 1000.0 * 0.9 / 500.0)
    )
    assert welfare.sel(region="USA", year=2010).item() == pytest.approx(
        300.0 * math.log(1000.0 * 2100.0 * 0.8 / 300.0)
    )


def test_elasticity_near_one_uses_power_form():
    cons, pop, ies = _inputs([1.0 + 1e-12, 1.0])
    welfare = isoelastic_welfare(cons, pop, ies)
    log_form = 500.0 * math.log(2000.0)
    assert welfare.sel(region="EUR", year=2005).item() != log_form
    assert welfare.sel(region="EUR", year=2005).item() == pytest.approx(log_form, rel=1e-3)


def test_non_positive_consumption_propagates_nan():
    cons, pop, ies = _inputs([1.0, 0.5])
    cons = cons.copy()
    cons.loc[{"region": "EUR", "year": 2010}] = -1.0
    welfare = isoelastic_welfare(cons, pop, ies)
    assert np.isfinite(welfare.sel(region="EUR", year=2005).item())
    assert np.isnan(welfare.sel(region="EUR", year=2010).item())
