"""
psychroenv configuration and constants.
"""

import os
from enum import Enum


class SaturationModel(str, Enum):
    IAPWS = "IAPWS"      # Wagner & Pruss (2002) reduced-temperature form
    BUCK = "Buck"        # Buck (1981, 1996), water/ice branched at 0°C
    MAGNUS = "Magnus"    # Alduchov & Eskridge (1996), pressure scaled
    VAISALA = "VAISALA"  # Hyland-Wexler with Vaisala correction, water/ice branched


class DewPointMethod(str, Enum):
    MAGNUS = "Magnus"
    BUCK = "Buck"


class AbsoluteHumidityMethod(str, Enum):
    BUCK_EF = "Buck_EF"        # closed form with enhancement by atmospheric pressure
    SATURATION = "saturation"  # ideal gas on top of the selected SaturationModel


# Standard atmospheric pressure
DEFAULT_PRESSURE_HPA = 1013.25  # hPa

DEFAULT_SATURATION_MODEL = SaturationModel.BUCK
DEFAULT_DEW_POINT_METHOD = DewPointMethod.MAGNUS
DEFAULT_AH_METHOD = AbsoluteHumidityMethod.BUCK_EF

# Default conservation envelope
DEFAULT_LOW_TEMP = 16.0   # °C
DEFAULT_HIGH_TEMP = 25.0  # °C
DEFAULT_LOW_RH = 40.0     # %
DEFAULT_HIGH_RH = 60.0    # %

# Root-finding for temperature inversions
TEMP_SEARCH_MIN = -40.0  # °C
TEMP_SEARCH_MAX = 60.0   # °C
ROOT_XTOL = 1e-10
ROOT_MAXITER = 100

# Accepted observation and envelope temperatures. Keeps every saturation
# formula away from its singular points and below the critical temperature.
OBSERVATION_TEMP_MIN = -100.0  # °C
OBSERVATION_TEMP_MAX = 200.0   # °C

# Physical constants
KELVIN_OFFSET = 273.15
MIXING_RATIO_FACTOR = 621.9907  # g/kg, ratio of molar masses x 1000
R_DRY_AIR = 287.058   # J/(kg·K)
R_WATER_VAPOR = 461.495  # J/(kg·K)
CP_AIR = 1.006  # kJ/(kg·K)
GAS_CONSTANT = 8.314  # J/(mol·K)

# Collection risk metrics
PI_ACTIVATION_ENERGY = 90300.0   # J/mol, cellulose acetate film
IPI_ACTIVATION_ENERGY = 95220.0  # J/mol, best fit to cellulose triacetate data
LM_ACTIVATION_ENERGY = 100.0     # kJ/mol, paper; 70 for yellowing varnish
LM_REFERENCE_TEMP = 20.0  # °C
LM_REFERENCE_RH = 50.0    # %
EMC_WOOD_TEMP_MIN = -50.0  # °C, range over which the wood sorption fit stays finite
EMC_WOOD_TEMP_MAX = 100.0  # °C

# Decimal places for reported values
ROUND_DIGITS = 4
ROUND_DIGITS_PRESSURE = 6

# Reported targets are pulled back inside the envelope when rounding
# carries them across a bound. Targets within BOUNDARY_TOL of a bound
# count as on it.
BOUNDARY_TOL = 1e-6
INWARD_ROUNDING_MAX_STEPS = 10

# Browser origins allowed to call the API. Override with a comma-separated
# list in PSYCHROENV_CORS_ORIGINS; "*" allows any origin.
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def parse_cors_origins(value: str) -> list[str]:
    """Split a comma-separated origin list, dropping blanks."""
    if value.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


CORS_ORIGINS = parse_cors_origins(
    os.getenv("PSYCHROENV_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
)
