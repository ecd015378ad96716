"""
Extraction engine.

ExtractionEngine turns already-decoded document text into an ExtractedOrder:
  1. FieldExtractor     -- order number, date, supplier, payment, document TOTAL
  2. ItemTableParser    -- rows of the item table, in document order
  3. calculate_totals   -- quantity / value / count, document TOTAL preferred
  4. ConfidenceScorer   -- coverage of the expected fields

The engine holds configuration only (buyer profile, anchors, criteria); every
extract() call is independent, so one engine can serve concurrent callers.
Validation is a separate step (OrderValidator) run over the finished record.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from config import Config
from models.order import Buyer, ExtractedOrder, Metadata
from models.result import ValidationResult
from .confidence import ConfidenceScorer, Criterion
from .exceptions import EmptyOrIllegibleDocument
from .extractor import FieldExtractor
from .item_parser import ItemTableParser
from .matchers import TableAnchors
from .totals import calculate_totals
from .validator import OrderValidator

logger = logging.getLogger(__name__)


class ExtractionEngine:
    """
    Rule-based purchase order extractor.

    Usage:
        engine = ExtractionEngine(Config())
        order = engine.extract(text, "OC_4521.pdf")
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        buyer: Optional[Buyer] = None,
        anchors: Optional[TableAnchors] = None,
        criteria: Optional[Sequence[Criterion]] = None,
    ):
        self.config = config or Config()
        self.buyer = buyer or self.config.buyer
        self.anchors = anchors or TableAnchors()
        self.field_extractor = FieldExtractor(self.anchors)
        self.item_parser = ItemTableParser(self.anchors)
        self.scorer = ConfidenceScorer(criteria)
        self.validator = OrderValidator(total_tolerance=self.config.total_tolerance)

    def extract(self, text: Optional[str], file_name: Optional[str] = None) -> ExtractedOrder:
        """
        Extract a purchase order from *text*.

        Raises EmptyOrIllegibleDocument when the text is missing or shorter
        than config.min_text_length once trimmed.  Every other deviation from
        the expected layout degrades to None fields, an empty item list and a
        lower confidence.
        """
        stripped_length = len(text.strip()) if text else 0
        if not text or stripped_length < self.config.min_text_length:
            logger.warning(
                "Rejected %s: %d characters of text", file_name or "(unnamed)", stripped_length
            )
            raise EmptyOrIllegibleDocument(file_name=file_name, length=stripped_length)

        fields = self.field_extractor
        document_total = fields.extract_document_total(text)
        items = self.item_parser.parse(text)

        draft = ExtractedOrder(
            order_number=fields.extract_order_number(text),
            date=fields.extract_date(text),
            supplier=fields.extract_supplier(text),
            buyer=self.buyer,
            items=items,
            payment=fields.extract_payment(text),
            totals=calculate_totals(items, document_total, self.config.currency_prefix),
            metadata=Metadata(
                file_name=file_name,
                extraction_timestamp=datetime.now(timezone.utc).isoformat(),
                source=self.config.extraction_source,
                method=self.config.extraction_method,
            ),
        )

        confidence = self.scorer.score(draft)
        order = draft.model_copy(update={
            "metadata": draft.metadata.model_copy(update={"confidence": confidence}),
        })

        logger.info(
            "Extracted OC %s from %s: %d item(s), confidence %.0f%%",
            order.order_number or "(unknown)",
            file_name or "(unnamed)",
            len(order.items),
            confidence * 100,
        )
        return order

    def process(
        self, text: Optional[str], file_name: Optional[str] = None
    ) -> tuple[ExtractedOrder, ValidationResult]:
        """Extract and then validate; the order is returned untouched by validation."""
        order = self.extract(text, file_name)
        return order, self.validator.validate(order)
