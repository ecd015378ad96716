from pydantic import BaseModel, Field, computed_field
from typing import Optional, List, Literal


IssueCode = Literal[
    # Data quality
    "missing_order_number",
    "missing_items",
    # Arithmetic / totals
    "total_mismatch",
    # Buyer profile
    "invalid_cnpj",
]

IssueKind = Literal["error", "warning"]


class Issue(BaseModel):
    """A single detected validation issue."""
    kind: IssueKind                         # error blocks, warning does not
    code: str                               # One of IssueCode values
    message: str                            # Human-readable explanation (pt-BR)
    field: Optional[str] = None             # Which field is affected
    found_value: Optional[str] = None       # What the document shows
    expected_value: Optional[str] = None    # What was expected / found elsewhere


class ValidationResult(BaseModel):
    """
    Outcome of validating one ExtractedOrder.

    issues keeps every finding in rule order; errors and warnings are the
    message lists derived from it so display layers can stay string-based.
    """
    issues: List[Issue] = Field(default_factory=list)

    @computed_field
    @property
    def errors(self) -> List[str]:
        return [i.message for i in self.issues if i.kind == "error"]

    @computed_field
    @property
    def warnings(self) -> List[str]:
        return [i.message for i in self.issues if i.kind == "warning"]

    @computed_field(alias="isValid")
    @property
    def is_valid(self) -> bool:
        return not self.errors

    def codes(self, kind: Optional[IssueKind] = None) -> List[str]:
        """Issue codes, optionally filtered by kind."""
        return [i.code for i in self.issues if kind is None or i.kind == kind]
