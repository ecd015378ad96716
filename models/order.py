from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List


class OrderModel(BaseModel):
    """
    Base for order models: snake_case in Python, camelCase on the wire.
    Frozen; derive changed records with model_copy(update=...).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SupplierInfo(OrderModel):
    """Supplier details as extracted from the purchase order."""
    name: Optional[str] = None
    contact: Optional[str] = None
    phone: Optional[str] = None


class Buyer(OrderModel):
    """
    The issuing organisation.  Comes from configuration, never from the
    document text, and is the same for every extraction of a given engine.
    """
    company: str
    cnpj: Optional[str] = None          # Brazilian company tax id, DD.DDD.DDD/DDDD-DD
    inscricao_estadual: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    cep: Optional[str] = None


class PaymentInfo(OrderModel):
    condition: Optional[str] = None     # e.g. "28 DDL"
    freight: Optional[str] = None       # e.g. "CIF"


class Item(OrderModel):
    """A single row of the item table, in document order."""
    code: str
    description: str
    quantity: float = Field(ge=0)
    unit: str                           # e.g. "PC", "UN", "CX"
    unit_price: float = Field(ge=0)
    ipi: float = Field(default=0.0, ge=0)   # IPI excise surcharge
    total: float = Field(ge=0)          # printed line total, not recomputed
    delivery_date: str                  # DD/MM/YY or DD/MM/YYYY


class Totals(OrderModel):
    total_quantity: float = 0.0
    total_value: float = 0.0            # document_total when printed, else sum of items
    item_count: int = 0
    document_total: Optional[float] = None
    total_value_formatted: str = ""


class Metadata(OrderModel):
    file_name: Optional[str] = None
    extraction_timestamp: str           # ISO 8601 datetime (UTC)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    source: Optional[str] = None
    method: Optional[str] = None


class ExtractedOrder(OrderModel):
    """
    Full structured purchase order (Ordem de Compra) as extracted from text.
    Dates are kept as the printed DD/MM/YYYY strings.
    All monetary values are in BRL.
    """
    order_number: Optional[str] = None
    date: Optional[str] = None

    supplier: SupplierInfo = Field(default_factory=SupplierInfo)
    buyer: Buyer

    items: List[Item] = Field(default_factory=list)

    payment: PaymentInfo = Field(default_factory=PaymentInfo)
    totals: Totals = Field(default_factory=Totals)
    metadata: Metadata

    @property
    def items_total(self) -> float:
        """Sum of the printed line totals, regardless of any document TOTAL."""
        return sum(item.total for item in self.items)

    @property
    def confidence_level(self) -> str:
        """Coarse confidence band: high / medium / low."""
        confidence = self.metadata.confidence
        if confidence > 0.8:
            return "high"
        if confidence > 0.5:
            return "medium"
        return "low"
