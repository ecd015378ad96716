from .order import (
    ExtractedOrder, SupplierInfo, Buyer, PaymentInfo, Item, Totals, Metadata,
)
from .result import Issue, ValidationResult

__all__ = [
    "ExtractedOrder", "SupplierInfo", "Buyer", "PaymentInfo", "Item", "Totals", "Metadata",
    "Issue", "ValidationResult",
]
