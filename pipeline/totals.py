"""
Order totals.

The printed document TOTAL wins over the sum of the parsed rows whenever it was
found: OCR and layout noise tend to corrupt individual rows, not the single
total line.  The disagreement, if any, is reported by the validator.
"""
from typing import Optional

from models.order import Item, Totals
from .numbers import format_brl


def calculate_totals(
    items: list[Item],
    document_total: Optional[float],
    currency_prefix: str = "R$",
) -> Totals:
    total_quantity = 0.0
    calculated_value = 0.0
    item_count = 0
    for item in items:
        total_quantity += item.quantity
        calculated_value += item.total
        item_count += 1

    total_value = document_total if document_total is not None else calculated_value
    return Totals(
        total_quantity=total_quantity,
        total_value=total_value,
        item_count=item_count,
        document_total=document_total,
        total_value_formatted=format_brl(total_value, currency_prefix),
    )
