"""Nitrogen balance - supply, removal, emission and their aggregation."""

from nbalance.nitrogen.balance import (
    calculate_nitrogen_balance,
    calculate_nitrogen_balance_field,
    calculate_nitrogen_balances_field_to_farm,
    convert_balance_to_numeric,
)
from nbalance.nitrogen.emission import calculate_nitrogen_emission
from nbalance.nitrogen.factors import determine_nitrate_leaching_factor, get_manure_ammonia_factor
from nbalance.nitrogen.landcover import LandCover, determine_land_cover
from nbalance.nitrogen.removal import calculate_nitrogen_removal
from nbalance.nitrogen.supply import calculate_nitrogen_supply
from nbalance.nitrogen.target import calculate_target_for_nitrogen_balance
from nbalance.nitrogen.types import FieldBalance, FieldBalanceResult, NitrogenBalance

__all__ = [
    "calculate_nitrogen_balance",
    "calculate_nitrogen_balance_field",
    "calculate_nitrogen_balances_field_to_farm",
    "convert_balance_to_numeric",
    "calculate_nitrogen_supply",
    "calculate_nitrogen_removal",
    "calculate_nitrogen_emission",
    "calculate_target_for_nitrogen_balance",
    "LandCover",
    "determine_land_cover",
    "get_manure_ammonia_factor",
    "determine_nitrate_leaching_factor",
    "FieldBalance",
    "FieldBalanceResult",
    "NitrogenBalance",
]
