from __future__ import annotations

TWA_2_EJ = 31.536
MONETARY_SCALE = 1000.0

AGGREGATE_REGION = "GLO"

DEFAULT_YEARS: tuple[int, ...] = (
    *range(2005, 2061, 5),
    *range(2070, 2111, 10),
    2130,
    2150,
)

# Optional inputs and the value used when the store does not provide them.
OPTIONAL_DEFAULTS: dict[str, float] = {
    "damage_coupling": 0.0,
    "overshoot_forcing": 0.0,
}

GDP_INPUT = "inco"
CAPITAL_INPUT = "kap"
FE_PREFIX = "fe"

BUILDINGS_SIMPLE = "simple"
BUILDINGS_SIMPLE_INPUTS: tuple[str, ...] = ("feelb", "fegab", "fehob", "fesob", "feheb", "feh2b")

CONSUMPTION = "Consumption (billion US$2017/yr)"
GDP_MER = "GDP|MER (billion US$2017/yr)"
GDP_PPP = "GDP|PPP (billion US$2017/yr)"
GDP_MER_NET = "GDP|MER|Net_afterDamages (billion US$2017/yr)"
GDP_PPP_NET = "GDP|PPP|Net_afterDamages (billion US$2017/yr)"
ENERGY_INVESTMENTS = "Energy Investments (billion US$2017/yr)"
MACRO_INVESTMENTS = "Investments|Non-ESM (billion US$2017/yr)"
INVESTMENTS = "Investments (billion US$2017/yr)"
POPULATION = "Population (million)"
CAPITAL_STOCK = "Capital Stock|Non-ESM (billion US$2017)"
DAMAGE_FACTOR = "Damage factor (1)"
WELFARE = "Welfare|Real and undiscounted|Yearly (arbitrary unit/yr)"
INTEREST_RATE_CENTRAL = "Interest Rate (t+1)/(t-1)|Real (unitless)"
INTEREST_RATE_BACKWARD = "Interest Rate t/(t-1)|Real (unitless)"

CES_PREFIX = "Internal|CES Function"
CES_PRICE_PREFIX = f"{CES_PREFIX}|CES Price|"
CES_MRS_PREFIX = f"{CES_PREFIX}|MRS|"
CES_VALUE_PREFIX = f"{CES_PREFIX}|Value|"

FE_PRICE_UNIT = "US$2017/GJ"
INPUT_PRICE_UNIT = "trUS$2017/Input"

# Pairs reported straight from the raw marginal-rate-of-substitution array.
MRS_RAW_PAIRS: tuple[tuple[str, str], ...] = (
    ("feelhpb", "fehob"),
    ("feelhpb", "fesob"),
    ("feelhpb", "feheb"),
    ("feelhpb", "feelrhb"),
    ("feh2b", "fegab"),
    ("feelhth_otherInd", "fega_otherInd"),
    ("feelhth_otherInd", "feli_otherInd"),
    ("feelhth_otherInd", "feso_otherInd"),
    ("feelhth_chemicals", "fega_chemicals"),
    ("feelhth_chemicals", "feli_chemicals"),
    ("feh2_otherInd", "fega_otherInd"),
    ("feh2_otherInd", "feli_otherInd"),
    ("feh2_otherInd", "feso_otherInd"),
    ("feh2_chemicals", "fega_chemicals"),
    ("feh2_chemicals", "feli_chemicals"),
    ("feh2_cement", "fega_cement"),
    ("feh2_cement", "feso_cement"),
    ("feh2_cement", "feli_cement"),
)
MRS_RAW_PAIRS_NON_PROCESS_STEEL: tuple[tuple[str, str], ...] = (("feh2_steel", "feso_steel"),)

# Inputs outside a common nest; their rate is the ratio of CES prices.
MRS_PRICE_PAIRS: tuple[tuple[str, str], ...] = (
    ("feelhpb", "fegab"),
    ("feelhpb", "feh2b"),
)
MRS_PRICE_PAIRS_NON_PROCESS_STEEL: tuple[tuple[str, str], ...] = (
    ("feel_steel_secondary", "feso_steel"),
)


def ces_input_label(name: str, unit: str) -> str:
    return f"CES_input|{name} ({unit})"


def ces_price_label(name: str, unit: str) -> str:
    return f"{CES_PRICE_PREFIX}{name} ({unit})"


def ces_mrs_label(numerator: str, denominator: str) -> str:
    return f"{CES_MRS_PREFIX}{numerator}|{denominator} (ratio)"


def ces_value_label(name: str) -> str:
    return f"{CES_VALUE_PREFIX}{name} (billion US$2017)"
