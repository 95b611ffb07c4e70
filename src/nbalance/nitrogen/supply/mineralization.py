"""
Nitrogen supplied by mineralization of soil organic matter.

Uses the MINIP decomposition model (Janssen, 1984) for the plough layer, at a
fixed mean annual temperature for the Netherlands.

References:
-----------
[1] Janssen, B.H. (1984). "A simple method for calculating decomposition and
    accumulation of 'young' soil organic matter." Plant and Soil 76:297-304
"""

from decimal import Decimal

from nbalance.core.decimals import ZERO, clamp, decimal_context, to_decimal
from nbalance.core.errors import MissingSoilParameterError
from nbalance.data.models import TimeFrame
from nbalance.data.soil import SoilParameters
from nbalance.nitrogen.types import MineralizationSupply

MEAN_ANNUAL_TEMPERATURE = Decimal("10.6")  # °C
PLOUGH_LAYER_DEPTH = Decimal(20)  # cm

# Bounds on the annual result (kg N/ha/year)
MINERALIZATION_MIN = Decimal(5)
MINERALIZATION_MAX = Decimal(250)


def temperature_correction(mean_temperature: Decimal) -> Decimal:
    """Decomposition rate multiplier relative to 9 °C."""
    if mean_temperature > 27:
        raise ValueError(f"Mean annual temperature {mean_temperature} is above the model range")
    if mean_temperature > 9:
        return Decimal(2) ** ((mean_temperature - 9) / 9)
    if mean_temperature > -1:
        return mean_temperature * Decimal("0.1")
    return ZERO


def calculate_minip_mineralization(organic_carbon, cn_ratio, bulk_density) -> Decimal:
    """
    Annual net nitrogen mineralization (kg N/ha/year), before clamping.

    Args:
        organic_carbon: Soil organic carbon (g C/kg)
        cn_ratio: Soil C:N ratio
        bulk_density: Soil bulk density (g/cm³)

    Raises:
        MissingSoilParameterError: If any of the three parameters is missing
    """
    if organic_carbon is None:
        raise MissingSoilParameterError("organic_carbon")
    if cn_ratio is None:
        raise MissingSoilParameterError("cn_ratio")
    if bulk_density is None:
        raise MissingSoilParameterError("bulk_density")

    with decimal_context():
        tc = temperature_correction(MEAN_ANNUAL_TEMPERATURE)

        # Fraction of organic carbon decomposed in one year
        b = (tc * 10 + 17) ** Decimal("-0.6")
        c = Decimal(17) ** Decimal("-0.6")
        decomposed = 1 - ((b - c) * Decimal("4.7")).exp()
        c_dec = to_decimal(organic_carbon) * decomposed / 10

        released = Decimal("1.5") * c_dec / to_decimal(cn_ratio)
        immobilised = c_dec / PLOUGH_LAYER_DEPTH
        return (released - immobilised) * 10000 * (PLOUGH_LAYER_DEPTH / 100) * to_decimal(bulk_density)


def calculate_nitrogen_supply_by_soil_mineralization(
    soil: SoilParameters,
    time_frame: TimeFrame,
) -> MineralizationSupply:
    """Mineralization over the time frame: clamped annual MINIP value times the year fraction."""
    annual = calculate_minip_mineralization(soil.organic_carbon, soil.cn_ratio, soil.bulk_density)
    annual = clamp(annual, MINERALIZATION_MIN, MINERALIZATION_MAX)
    return MineralizationSupply(total=annual * time_frame.year_fraction())
