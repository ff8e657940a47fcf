"""Macro-economic reporting of a solved energy-economy model.

Reads consumption, GDP, capital, investment, population and damage
information, converts it to reporting units, derives welfare, net-of-damage
GDP and (when available) CES production-function diagnostics, aligns all
series on their common years and adds regional aggregates and real interest
rates. The result is one ``(region, year, variable)`` array.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

import xarray as xr

from .aggregation import (
    align_years,
    append_regions,
    mask_ces_aggregates,
    region_aggregates,
    stack_variables,
)
from .ces import compute_ces_diagnostics
from .constants import (
    AGGREGATE_REGION,
    CONSUMPTION,
    DAMAGE_FACTOR,
    DEFAULT_YEARS,
    ENERGY_INVESTMENTS,
    GDP_MER_NET,
    GDP_PPP_NET,
    MONETARY_SCALE,
    POPULATION,
)
from .interest import interest_rates
from .quantities import (
    capital_stock,
    ces_input_quantities,
    gdp_mer,
    gdp_ppp,
    macro_investment,
    net_of_damages,
    total_investment,
)
from .resolver import ModelStructure, read_optional, read_variable
from .settings import ReportSettings
from .store import ArrayStore
from .welfare import isoelastic_welfare

LOGGER = logging.getLogger("macro_report")
if not LOGGER.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    LOGGER.addHandler(handler)
LOGGER.setLevel(logging.INFO)
LOGGER.propagate = False

WELFARE_OBJECTIVE_NAMES = ("v02_welfare", "v_welfare", "vm_welfare")


def _check_subset_labels(region_subsets: Mapping[str, Sequence[str]], regions: Sequence[str]) -> None:
    """Group labels must not collide with model regions or the global aggregate."""

    taken = set(regions) | {AGGREGATE_REGION}
    clashes = sorted(str(label) for label in region_subsets if str(label) in taken)
    if clashes:
        raise ValueError(f"Region group labels clash with existing regions: {clashes}")


def report_macro_economy(
    store: ArrayStore,
    region_subsets: Mapping[str, Sequence[str]] | None = None,
    years: Sequence[int] | None = None,
    *,
    settings: ReportSettings | None = None,
) -> xr.DataArray:
    """Build the macro-economy report from ``store``.

    ``region_subsets`` maps additional aggregate labels to their member
    regions; ``years`` is the reporting grid. Both default to ``settings``
    when given, otherwise to no extra groups and :data:`DEFAULT_YEARS`.
    Any missing required symbol raises
    :class:`~macro_report.store.MissingVariableError` and no report is built.
    """

    if settings is not None:
        region_subsets = settings.region_subsets if region_subsets is None else region_subsets
        years = settings.years if years is None else years
    years = tuple(int(y) for y in (years if years is not None else DEFAULT_YEARS))

    structure = ModelStructure.from_store(store)
    LOGGER.info(
        "Reporting macro economy for %d years (buildings realisation '%s').",
        len(years),
        structure.buildings_realisation,
    )

    ces_io = read_variable(store, ["vm_cesIO", "v_vari"], field="l", years=years)
    inv_macro = read_variable(store, ["vm_invMacro", "v_invest"], field="l")
    pvp = read_variable(store, ["pm_pvp", "p80_pvp"], select={"all_enty": "good"})

    consumption = read_variable(
        store, "vm_cons", field="l", scale=MONETARY_SCALE, years=years, label=CONSUMPTION
    )
    gdp = gdp_mer(ces_io)
    gdp_ppp_series = gdp_ppp(gdp, read_variable(store, ["pm_shPPPMER", "p_ratio_ppp"]))
    energy_investment = read_variable(
        store, ["v_costInv", "v_costin"], field="l", scale=MONETARY_SCALE, label=ENERGY_INVESTMENTS
    )
    population = read_variable(
        store, ["pm_pop", "pm_datapop"], scale=MONETARY_SCALE, years=years, label=POPULATION
    )
    damage_factor = read_variable(
        store, ["vm_damageFactor", "vm_damage"], field="l", label=DAMAGE_FACTOR
    )

    welfare = isoelastic_welfare(
        consumption,
        population,
        read_variable(store, ["pm_ies", "p_ies"]),
        damage_coupling=read_optional(store, ["cm_damage", "c_damage"], "damage_coupling"),
        overshoot_forcing=read_optional(
            store, "vm_forcOs", "overshoot_forcing", field="l", years=years
        ),
    )

    # The objective has no year axis and stays out of the report; only its absence is noted.
    objective = store.query(WELFARE_OBJECTIVE_NAMES, field="l", react="warning")
    if objective is not None:
        LOGGER.debug("Welfare objective '%s' found (not reported).", objective.name)

    macro_inv = macro_investment(inv_macro)
    variables = [
        consumption,
        gdp,
        gdp_ppp_series,
        net_of_damages(gdp, damage_factor, GDP_MER_NET),
        net_of_damages(gdp_ppp_series, damage_factor, GDP_PPP_NET),
        energy_investment,
        macro_inv,
        population,
        capital_stock(ces_io),
        total_investment(macro_inv, energy_investment),
        *ces_input_quantities(ces_io, structure),
    ]

    diagnostics = compute_ces_diagnostics(store, ces_io, structure, years)
    if diagnostics is not None:
        variables.extend(diagnostics.variables())
    variables.append(welfare)

    variables, common = align_years(variables)
    LOGGER.info("Aligned %d variables on %d common years.", len(variables), len(common))

    report = stack_variables([*variables, damage_factor.sel(year=common)])
    regions = [str(region) for region in report["region"].values]
    weight = gdp.sel(year=common)
    _check_subset_labels(region_subsets or {}, regions)

    aggregates = [
        region_aggregates(
            report, {AGGREGATE_REGION: regions}, weighted=[DAMAGE_FACTOR], weight=weight
        )
    ]
    if region_subsets:
        # Damage factor of a group is its GDP-weighted mean, as for GLO; a sum has no meaning.
        aggregates.append(
            region_aggregates(report, region_subsets, weighted=[DAMAGE_FACTOR], weight=weight)
        )
    report = append_regions(report, *aggregates)

    if diagnostics is not None:
        mask_ces_aggregates(report, diagnostics.regions)

    rates = interest_rates(pvp, common, [str(r) for r in report["region"].values])
    report = xr.concat([report, rates], dim="variable", coords="minimal")
    LOGGER.info(
        "Macro-economy report: %d regions, %d years, %d variables.",
        report.sizes["region"],
        report.sizes["year"],
        report.sizes["variable"],
    )
    return report
