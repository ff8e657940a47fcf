"""Temporal alignment, assembly and regional aggregation of report variables."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

import xarray as xr

from .constants import CES_MRS_PREFIX, CES_PRICE_PREFIX
from .quantities import common_years

LOGGER = logging.getLogger(__name__)

REPORT_DIMS = ("region", "year", "variable")


def align_years(variables: Sequence[xr.DataArray]) -> tuple[list[xr.DataArray], list[int]]:
    """Restrict every variable to the years all of them share (no interpolation)."""

    years = common_years(*variables)
    if not years:
        raise ValueError("Report variables do not share any year.")
    return [var.sel(year=years) for var in variables], years


def stack_variables(variables: Sequence[xr.DataArray]) -> xr.DataArray:
    """Combine named ``(region, year)`` arrays into one ``(region, year, variable)`` array.

    Regions missing from an individual variable become NaN.
    """

    labels = [str(var.name) for var in variables]
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise ValueError(f"Duplicate report variables: {duplicates}")
    arrays = [
        var.reset_coords(drop=True).transpose("region", "year").expand_dims(variable=[str(var.name)])
        for var in variables
    ]
    stacked = xr.concat(arrays, dim="variable", join="outer", coords="minimal", compat="override")
    return stacked.transpose(*REPORT_DIMS)


def tool_aggregate(
    data: xr.DataArray,
    groups: Mapping[str, Sequence[str]],
    weight: xr.DataArray | None = None,
) -> xr.DataArray:
    """Aggregate regions into groups.

    ``groups`` maps every group label to its member regions. Without
    ``weight`` the members are summed, with ``weight`` the result is the
    weighted mean ``sum(w * x) / sum(w)``. Missing member values propagate.
    """

    known = set(str(region) for region in data["region"].values)
    parts = []
    for group, members in groups.items():
        members = [str(member) for member in members]
        unknown = sorted(set(members) - known)
        if unknown:
            raise ValueError(f"Region group '{group}' references unknown regions: {unknown}")
        subset = data.sel(region=members)
        if weight is None:
            aggregated = subset.sum("region", skipna=False)
        else:
            member_weight = weight.sel(region=members)
            aggregated = (subset * member_weight).sum("region", skipna=False) / member_weight.sum(
                "region", skipna=False
            )
        parts.append(aggregated.expand_dims(region=[str(group)]))
    if not parts:
        return data.isel(region=slice(0, 0))
    return xr.concat(parts, dim="region").transpose(*data.dims)


def region_aggregates(
    report: xr.DataArray,
    groups: Mapping[str, Sequence[str]],
    *,
    weighted: Sequence[str] = (),
    weight: xr.DataArray | None = None,
) -> xr.DataArray:
    """Sum ``report`` over every group; variables in ``weighted`` use a weighted mean."""

    summed = tool_aggregate(report, groups)
    weighted = [name for name in weighted if name in report["variable"].values]
    if not weighted or weight is None:
        return summed
    averaged = tool_aggregate(report.sel(variable=weighted), groups, weight=weight)
    combined = xr.concat(
        [summed.drop_sel(variable=weighted), averaged], dim="variable", coords="minimal"
    )
    return combined.reindex(variable=summed["variable"].values).transpose(*report.dims)


def append_regions(report: xr.DataArray, *others: xr.DataArray) -> xr.DataArray:
    return xr.concat([report, *others], dim="region", coords="minimal").transpose(*report.dims)


def ces_masked_variables(report: xr.DataArray) -> list[str]:
    return [
        str(name)
        for name in report["variable"].values
        if str(name).startswith((CES_MRS_PREFIX, CES_PRICE_PREFIX))
    ]


def mask_ces_aggregates(report: xr.DataArray, ces_regions: Sequence[str]) -> None:
    """Set CES prices and MRS to zero (in place) for regions without diagnostic data.

    Zero instead of NaN keeps these variables labelled in scenario
    comparison plots.
    """

    variables = ces_masked_variables(report)
    regions = [str(r) for r in report["region"].values if str(r) not in set(ces_regions)]
    if not variables or not regions:
        return
    LOGGER.debug("Zeroing %d CES variables for regions %s.", len(variables), regions)
    report.loc[{"region": regions, "variable": variables}] = 0.0
