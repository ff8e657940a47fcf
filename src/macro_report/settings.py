"""Report settings read from the ``macro_report`` section of ``config.yaml``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

from .constants import AGGREGATE_REGION, DEFAULT_YEARS

SECTION = "macro_report"


def _parse_years(raw: object) -> tuple[int, ...]:
    if raw is None:
        return DEFAULT_YEARS
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise ValueError("'years' must be a list of calendar years.")
    years = tuple(int(year) for year in raw)
    if not years:
        raise ValueError("'years' must contain at least one year.")
    if list(years) != sorted(set(years)):
        raise ValueError("'years' must be strictly increasing without duplicates.")
    return years


def _parse_region_subsets(raw: object) -> dict[str, tuple[str, ...]]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError("'region_subsets' must map group labels to lists of regions.")
    subsets: dict[str, tuple[str, ...]] = {}
    for label, members in raw.items():
        label = str(label).strip()
        if not label:
            raise ValueError("Region group labels must not be empty.")
        if label == AGGREGATE_REGION:
            raise ValueError(f"'{AGGREGATE_REGION}' is reserved for the global aggregate.")
        if isinstance(members, (str, bytes)) or not isinstance(members, Sequence) or not members:
            raise ValueError(f"Region group '{label}' must list at least one region.")
        subsets[label] = tuple(str(member).strip() for member in members)
    return subsets


@dataclass(frozen=True, slots=True)
class ReportSettings:
    """Reporting years and optional user-defined region groups."""

    years: tuple[int, ...] = DEFAULT_YEARS
    region_subsets: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_config(cls, cfg: Mapping[str, object]) -> "ReportSettings":
        section = cfg.get(SECTION) or {}
        if not isinstance(section, Mapping):
            raise ValueError(f"'{SECTION}' section must be a mapping.")
        return cls(
            years=_parse_years(section.get("years")),
            region_subsets=_parse_region_subsets(section.get("region_subsets")),
        )


def load_settings(path: Path | str | None = None) -> ReportSettings:
    """Load :class:`ReportSettings` from ``config.yaml`` (see :mod:`config_paths`)."""
    from config_paths import load_config

    return ReportSettings.from_config(load_config(path))
