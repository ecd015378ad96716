from .numbers import parse_brl_number, format_brl
from .matchers import LabelMatcher, BlockMatcher, TableAnchors
from .extractor import FieldExtractor
from .item_parser import ItemTableParser
from .totals import calculate_totals
from .confidence import ConfidenceScorer, Criterion, DEFAULT_CRITERIA
from .validator import OrderValidator
from .exceptions import ExtractionError, EmptyOrIllegibleDocument
from .processor import ExtractionEngine

__all__ = [
    "parse_brl_number", "format_brl",
    "LabelMatcher", "BlockMatcher", "TableAnchors",
    "FieldExtractor", "ItemTableParser", "calculate_totals",
    "ConfidenceScorer", "Criterion", "DEFAULT_CRITERIA",
    "OrderValidator", "ExtractionError", "EmptyOrIllegibleDocument",
    "ExtractionEngine",
]
