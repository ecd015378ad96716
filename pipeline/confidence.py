"""
Extraction confidence.

A coverage heuristic, not a probability: each Criterion is a named predicate
over the assembled order with a weight, and the score is the satisfied weight
divided by the total weight.  Changing what counts is a change to the
criteria list, not to the scorer.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from models.order import ExtractedOrder


@dataclass(frozen=True)
class Criterion:
    name: str
    predicate: Callable[[ExtractedOrder], bool]
    weight: float = 1.0


DEFAULT_CRITERIA: tuple[Criterion, ...] = (
    Criterion("order_number", lambda o: bool(o.order_number)),
    Criterion("date", lambda o: bool(o.date)),
    Criterion("supplier_name", lambda o: bool(o.supplier.name)),
    Criterion("items", lambda o: len(o.items) > 0),
    Criterion("payment_condition", lambda o: bool(o.payment.condition)),
    Criterion(
        "document_total",
        lambda o: o.totals.document_total is not None and o.totals.document_total > 0,
    ),
)


class ConfidenceScorer:

    def __init__(self, criteria: Optional[Sequence[Criterion]] = None):
        self.criteria = tuple(DEFAULT_CRITERIA if criteria is None else criteria)
        if any(c.weight < 0 for c in self.criteria):
            raise ValueError("Criterion weights must be non-negative")

    def explain(self, order: ExtractedOrder) -> list[tuple[str, bool]]:
        """(criterion name, satisfied) for each criterion, in order."""
        return [(c.name, bool(c.predicate(order))) for c in self.criteria]

    def score(self, order: ExtractedOrder) -> float:
        """Satisfied weight / total weight, in [0, 1]."""
        max_score = sum(c.weight for c in self.criteria)
        if max_score <= 0:
            return 0.0
        score = sum(c.weight for c in self.criteria if c.predicate(order))
        return min(max(score / max_score, 0.0), 1.0)
