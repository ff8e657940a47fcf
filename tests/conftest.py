"""Ensure the project package is importable during tests without installation."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest
import xarray as xr

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

root_path = str(ROOT)
if root_path not in sys.path:
    sys.path.insert(0, root_path)

src_path = str(SRC)
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from macro_report.store import DatasetStore  # noqa: E402

REGIONS = ["EUR", "USA"]
YEARS = [2005, 2010, 2015, 2020]
CES_YEARS = [2010, 2015, 2020]
INPUTS = ["inco", "kap", "feelb", "fegab", "fehob", "fesob", "feheb", "feh2b", "feelhpb"]
FE_UNIT_FACTOR = 31.71


def _variable(values, coords: dict) -> xr.DataArray:
    """Model variable with a level field, like a solved GAMS variable."""
    data = xr.DataArray(np.asarray(values, dtype=float), coords=coords, dims=list(coords))
    return data.expand_dims(field=["l"]).transpose(*coords, "field")


def _parameter(values, coords: dict) -> xr.DataArray:
    return xr.DataArray(np.asarray(values, dtype=float), coords=coords, dims=list(coords))


def build_symbols() -> dict[str, xr.DataArray]:
    ces_io = np.empty((len(REGIONS), len(YEARS), len(INPUTS)))
    for r in range(len(REGIONS)):
        for t in range(len(YEARS)):
            for i in range(len(INPUTS)):
                ces_io[r, t, i] = (r + 1) * (t + 1) * (i + 1) * 0.1

    derivatives = np.zeros((1, len(CES_YEARS), 1, len(INPUTS) - 1))
    for j in range(len(INPUTS) - 1):
        derivatives[..., j] = 0.01 * (j + 1)

    return {
        "vm_cesIO": _variable(
            ces_io, {"region": REGIONS, "year": YEARS, "all_in": INPUTS}
        ),
        "vm_invMacro": _variable(
            [[[0.5]] * len(YEARS), [[1.0]] * len(YEARS)],
            {"region": REGIONS, "year": YEARS, "all_in": ["kap"]},
        ),
        "pm_pvp": _parameter(
            [
                [[100.0, 1.0], [90.0, 1.0], [80.0, 1.0], [70.0, 1.0]],
                [[100.0, 1.0], [95.0, 1.0], [90.0, 1.0], [85.0, 1.0]],
            ],
            {"region": REGIONS, "year": YEARS, "all_enty": ["good", "perm"]},
        ),
        "vm_cons": _variable(
            [[1.0, 1.1, 1.2, 1.3], [2.0, 2.1, 2.2, 2.3]], {"region": REGIONS, "year": YEARS}
        ),
        "pm_shPPPMER": _parameter([0.8, 1.0], {"region": REGIONS}),
        "v_costInv": _variable(np.full((2, 4), 0.05), {"region": REGIONS, "year": YEARS}),
        "pm_pop": _parameter(
            [[0.5, 0.5, 0.5, 0.5], [0.3, 0.3, 0.3, 0.3]], {"region": REGIONS, "year": YEARS}
        ),
        "vm_damageFactor": _variable(
            [[0.99] * 4, [0.98] * 4], {"region": REGIONS, "year": YEARS}
        ),
        "pm_ies": _parameter([1.0, 0.5], {"region": REGIONS}),
        "o01_CESderivatives": _parameter(
            derivatives,
            {"region": ["EUR"], "year": CES_YEARS, "all_in": ["inco"], "all_in1": INPUTS[1:]},
        ),
        "o01_CESmrs": _parameter(
            np.full((1, len(CES_YEARS), 1, 2), 1.5),
            {"region": ["EUR"], "year": CES_YEARS, "all_in": ["feelhpb"], "all_in1": ["fehob", "fesob"]},
        ),
        "sm_DpGJ_2_TDpTWa": xr.DataArray(FE_UNIT_FACTOR),
        "v02_welfare": xr.DataArray([12.5], coords={"field": ["l"]}, dims=["field"]),
    }


def build_sets() -> dict[str, list]:
    return {
        "in": list(INPUTS),
        "module2realisation": [("buildings", "simple"), ("macro", "singleSectorGr")],
    }


@pytest.fixture
def symbols() -> dict[str, xr.DataArray]:
    return build_symbols()


@pytest.fixture
def sets() -> dict[str, list]:
    return build_sets()


@pytest.fixture
def store(symbols, sets) -> DatasetStore:
    return DatasetStore(symbols, sets)
