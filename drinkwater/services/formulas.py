import math

KG_PER_LB = 0.453592
LB_PER_KG = 2.20462


def to_kg(weight, unit="kg"):
    if unit == "lb":
        return weight * KG_PER_LB
    return weight


def to_lb(weight_kg):
    return weight_kg * LB_PER_KG


def round_half_up(value):
    """Nearest integer, halves rounded towards +inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
