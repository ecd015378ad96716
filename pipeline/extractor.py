"""
Field extraction for purchase order (Ordem de Compra) text.

Each header field is located by an independent, tolerant match over the whole
text.  A field that cannot be found comes back as None; nothing here raises.

  order number    "ORDEM DE COMPRA: Nº 4521"   -> "4521"
  issue date      first DD/MM/YYYY in the text
  supplier        name / contact / phone inside the "Fornecedor:" block
  payment         "Condição: ..." and "Frete: ..." (each to end of line)
  document total  "TOTAL: 1.500,00"            -> 1500.0
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from models.order import PaymentInfo, SupplierInfo
from .matchers import BlockMatcher, LabelMatcher, TableAnchors, strip_trailing_labels
from .numbers import parse_brl_number

logger = logging.getLogger(__name__)


ORDER_NUMBER = LabelMatcher(
    "order_number",
    r"ORDEM\s+DE\s+COMPRA:\s*(?:N[º°]?\s*)?(\d+)",
)
ISSUE_DATE = LabelMatcher("date", r"(\d{2}/\d{2}/\d{4})", flags=0)

SUPPLIER_NAME = LabelMatcher(
    "supplier.name",
    r"Fornecedor:\s*(.*?)(?:\s*Telefone:|\s*Fax:|$)",
    flags=re.IGNORECASE | re.MULTILINE,
    cleanup=strip_trailing_labels,
)
SUPPLIER_CONTACT = LabelMatcher(
    "supplier.contact",
    r"Contato:[ \t]*([^\r\n]+)",
    cleanup=strip_trailing_labels,
)
SUPPLIER_PHONE = LabelMatcher("supplier.phone", r"Telefone:[ \t]*([\d.\- ]+)")

PAYMENT_CONDITION = LabelMatcher("payment.condition", r"Condi[çc][ãa]o:[ \t]*([^\r\n]+)")
PAYMENT_FREIGHT = LabelMatcher("payment.freight", r"Frete:[ \t]*([^\r\n]+)")

DOCUMENT_TOTAL = LabelMatcher("document_total", r"\bTOTAL:\s*(?:R\$\s*)?([\d.,]+)")


class FieldExtractor:
    """
    Locates the header fields of a purchase order.

    The supplier lookups are scoped by two blocks derived from the table
    anchors, so a custom table header also moves the supplier boundary:

      name block     "Fornecedor:" up to "Contato:" or the table header
      detail block   "Fornecedor:" up to the table header

    Either block falls back to the whole text when it cannot be bounded.
    """

    def __init__(self, anchors: Optional[TableAnchors] = None):
        self.anchors = anchors or TableAnchors()
        self._name_block = BlockMatcher(
            "supplier_block", r"Fornecedor:", (r"Contato:", self.anchors.header)
        )
        self._detail_block = BlockMatcher(
            "supplier_section", r"Fornecedor:", (self.anchors.header,)
        )

    def extract_order_number(self, text: str) -> Optional[str]:
        return ORDER_NUMBER.match(text)

    def extract_date(self, text: str) -> Optional[str]:
        return ISSUE_DATE.match(text)

    def extract_supplier(self, text: str) -> SupplierInfo:
        name_block = self._name_block.isolate_or_all(text)
        detail_block = self._detail_block.isolate_or_all(text)
        return SupplierInfo(
            name=SUPPLIER_NAME.match(name_block),
            contact=SUPPLIER_CONTACT.match(detail_block),
            phone=SUPPLIER_PHONE.match(detail_block),
        )

    def extract_payment(self, text: str) -> PaymentInfo:
        return PaymentInfo(
            condition=PAYMENT_CONDITION.match(text),
            freight=PAYMENT_FREIGHT.match(text),
        )

    def extract_document_total(self, text: str) -> Optional[float]:
        raw = DOCUMENT_TOTAL.match(text)
        if raw is None:
            return None
        return parse_brl_number(raw)
