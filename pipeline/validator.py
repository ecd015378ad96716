"""
Purchase order validation.

Checks (each independent, all always evaluated):
  Data quality:  order number present, at least one item
  Arithmetic:    sum of item totals vs printed document TOTAL
  Buyer:         CNPJ shape DD.DDD.DDD/DDDD-DD

Validation reads the order and never modifies it; it never raises.
"""
import logging
import re

from models.order import ExtractedOrder
from models.result import Issue, ValidationResult

logger = logging.getLogger(__name__)

# Configurable thresholds (can be overridden via Config)
TOTAL_TOLERANCE = 1.0       # R$ 1.00 absolute tolerance for the document total

CNPJ_PATTERN = re.compile(r"\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}")


def is_valid_cnpj_format(cnpj: str) -> bool:
    """Shape check only; the CNPJ check digits are not verified."""
    return CNPJ_PATTERN.fullmatch(cnpj) is not None


class OrderValidator:
    """
    Produces a ValidationResult for an extracted purchase order.

    Usage:
        validator = OrderValidator()
        result = validator.validate(order)
        if not result.is_valid: ...
    """

    def __init__(self, total_tolerance: float = TOTAL_TOLERANCE):
        self.total_tolerance = total_tolerance

    def validate(self, order: ExtractedOrder) -> ValidationResult:
        """Run all checks and return the combined result."""
        issues: list[Issue] = []
        issues.extend(self._check_data_quality(order))
        issues.extend(self._check_totals(order))
        issues.extend(self._check_buyer(order))
        result = ValidationResult(issues=issues)
        logger.debug(
            "Validated OC %s: %d error(s), %d warning(s)",
            order.order_number, len(result.errors), len(result.warnings),
        )
        return result

    # ------------------------------------------------------------------
    # Data quality checks
    # ------------------------------------------------------------------

    def _check_data_quality(self, order: ExtractedOrder) -> list[Issue]:
        issues = []

        if not order.order_number:
            issues.append(Issue(
                kind="error",
                code="missing_order_number",
                message="Número da OC não identificado",
                field="orderNumber",
            ))

        if not order.items:
            issues.append(Issue(
                kind="error",
                code="missing_items",
                message="Nenhum item encontrado no documento",
                field="items",
            ))

        return issues

    # ------------------------------------------------------------------
    # Arithmetic checks
    # ------------------------------------------------------------------

    def _check_totals(self, order: ExtractedOrder) -> list[Issue]:
        document_total = order.totals.document_total
        if document_total is None:
            return []  # No printed total, nothing to reconcile

        items_total = order.items_total
        if abs(items_total - document_total) <= self.total_tolerance:
            return []

        return [Issue(
            kind="warning",
            code="total_mismatch",
            message=(
                f"Soma dos itens (R$ {items_total:.2f}) difere do "
                f"total do documento (R$ {document_total:.2f})"
            ),
            field="totals.documentTotal",
            found_value=f"{document_total:.2f}",
            expected_value=f"{items_total:.2f}",
        )]

    # ------------------------------------------------------------------
    # Buyer checks
    # ------------------------------------------------------------------

    def _check_buyer(self, order: ExtractedOrder) -> list[Issue]:
        cnpj = order.buyer.cnpj
        if not cnpj or is_valid_cnpj_format(cnpj):
            return []

        return [Issue(
            kind="warning",
            code="invalid_cnpj",
            message="CNPJ em formato inválido",
            field="buyer.cnpj",
            found_value=cnpj,
            expected_value="DD.DDD.DDD/DDDD-DD",
        )]
