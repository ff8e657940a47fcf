import numpy as np
import pytest
import xarray as xr

from macro_report.constants import INTEREST_RATE_BACKWARD, INTEREST_RATE_CENTRAL
from macro_report.interest import interest_rates


def _pvp(values, years, regions=("EUR",)) -> xr.DataArray:
    return xr.DataArray(
        np.asarray(values, dtype=float),
        coords={"region": list(regions), "year": list(years)},
        dims=("region", "year"),
    )


def test_interior_rates_match_finite_differences():
    pvp = _pvp([[100.0, 90.0, 80.0]], [2005, 2010, 2015])
    rates = interest_rates(pvp, [2005, 2010, 2015], ["EUR"])

    assert rates.dims == ("region", "year", "variable")
    backward = rates.sel(region="EUR", year=2010, variable=INTEREST_RATE_BACKWARD).item()
    central = rates.sel(region="EUR", year=2010, variable=INTEREST_RATE_CENTRAL).item()
    assert backward == pytest.approx(1 - (90 / 100) ** (1 / 5))
    assert central == pytest.approx(1 - (80 / 100) ** (1 / 10))


def test_boundary_years_are_missing():
    pvp = _pvp([[100.0, 90.0, 80.0, 70.0]], [2005, 2010, 2015, 2020])
    rates = interest_rates(pvp, [2005, 2010, 2015, 2020], ["EUR"])
    assert np.isnan(rates.sel(year=2005)).all()
    assert np.isnan(rates.sel(year=2020)).all()
    assert not np.isnan(rates.sel(year=[2010, 2015])).any()


def test_neighbours_come_from_shadow_price_years():
    # the shadow price has a finer grid than the report
    pvp = _pvp([[100.0, 95.0, 90.0, 85.0, 80.0]], [2050, 2055, 2060, 2065, 2070])
    rates = interest_rates(pvp, [2050, 2060, 2070], ["EUR"])
    central = rates.sel(region="EUR", year=2060, variable=INTEREST_RATE_CENTRAL).item()
    assert central == pytest.approx(1 - (85 / 95) ** (1 / 10))


def test_unequal_spacing_annualises_over_actual_gap():
    pvp = _pvp([[100.0, 80.0, 50.0]], [2060, 2070, 2090])
    rates = interest_rates(pvp, [2060, 2070, 2090], ["EUR"])
    central = rates.sel(region="EUR", year=2070, variable=INTEREST_RATE_CENTRAL).item()
    backward = rates.sel(region="EUR", year=2070, variable=INTEREST_RATE_BACKWARD).item()
    assert central == pytest.approx(1 - 0.5 ** (1 / 30))
    assert backward == pytest.approx(1 - 0.8 ** (1 / 10))


def test_regions_without_shadow_price_are_missing():
    pvp = _pvp([[100.0, 90.0, 80.0]], [2005, 2010, 2015])
    rates = interest_rates(pvp, [2005, 2010, 2015], ["EUR", "GLO"])
    assert np.isnan(rates.sel(region="GLO")).all()


def test_zero_shadow_price_propagates_non_finite_values():
    pvp = _pvp([[0.0, 90.0, 80.0]], [2005, 2010, 2015])
    rates = interest_rates(pvp, [2005, 2010, 2015], ["EUR"])
    assert not np.isfinite(rates.sel(region="EUR", year=2010)).all()
