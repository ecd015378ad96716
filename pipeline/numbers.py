"""
Brazilian-locale number helpers.

BRL notation uses "." as the thousands separator and "," as the decimal
separator, e.g. "1.234,56" == 1234.56.
"""
import math
from typing import Optional


def parse_brl_number(value: Optional[str]) -> float:
    """
    Convert a BRL numeric string to float.

    None, empty and unparseable input all yield 0.0; this never raises.
    """
    if not value:
        return 0.0
    cleaned = value.strip().replace(".", "").replace(",", ".")
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def format_brl(value: float, prefix: str = "R$") -> str:
    """Render *value* as e.g. "R$ 1500,00" (two decimals, comma separator)."""
    return f"{prefix} " + f"{value:.2f}".replace(".", ",")
