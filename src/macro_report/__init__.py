"""Macro-economic reporting of solved energy-economy model output."""

from .aggregation import align_years, mask_ces_aggregates, stack_variables, tool_aggregate
from .ces import CESDiagnostics, compute_ces_diagnostics
from .constants import AGGREGATE_REGION, DEFAULT_YEARS, TWA_2_EJ
from .interest import interest_rates
from .report import report_macro_economy
from .resolver import ModelStructure, read_optional, read_variable
from .settings import ReportSettings, load_settings
from .store import ArrayStore, DatasetStore, MissingVariableError, first_match, symbol_from_frame
from .welfare import isoelastic_welfare

__all__ = [
    "AGGREGATE_REGION",
    "DEFAULT_YEARS",
    "TWA_2_EJ",
    "ArrayStore",
    "CESDiagnostics",
    "DatasetStore",
    "MissingVariableError",
    "ModelStructure",
    "ReportSettings",
    "align_years",
    "compute_ces_diagnostics",
    "first_match",
    "interest_rates",
    "isoelastic_welfare",
    "load_settings",
    "mask_ces_aggregates",
    "read_optional",
    "read_variable",
    "report_macro_economy",
    "stack_variables",
    "symbol_from_frame",
    "tool_aggregate",
]
