"""
Item table parsing.

The table is located by TableAnchors (header line .. end-marker line) and then
read one line at a time against a single row grammar:

  code  description  qty  unit  v1  v2  unit_price  ipi  total  delivery
  1234  LUMINARIA X  10   PC    ..  ..  12,50       0,00 125,00 15/04/24

v1 and v2 are intermediate unit values printed by the source system; they
are matched so the later columns line up, but are not kept.

Lines that do not fit the grammar are skipped.  There is no partial-row
recovery: a row either parses completely or not at all.
"""
import logging
import re
from typing import Optional

from models.order import Item
from .matchers import TableAnchors, tokenize_lines
from .numbers import parse_brl_number

logger = logging.getLogger(__name__)

_NUM = r"[\d.,]+"

ITEM_ROW = re.compile(
    rf"^(?P<code>\d+)\s+"
    rf"(?P<description>.+?)\s+"
    rf"(?P<quantity>{_NUM})\s+"
    rf"(?P<unit>[A-Z]{{2,4}})\s+"
    rf"{_NUM}\s+{_NUM}\s+"
    rf"(?P<unit_price>{_NUM})\s+"
    rf"(?P<ipi>{_NUM})\s+"
    rf"(?P<total>{_NUM})\s+"
    rf"(?P<delivery_date>\d{{2}}/\d{{2}}/\d{{2,4}})"
)

# "LUMINARIA X =>: ver obs" -> "LUMINARIA X"
_ANNOTATION = re.compile(r"\s*=>:.*$")


class ItemTableParser:
    """
    Parses the item table of a purchase order into Item models.

    Usage:
        parser = ItemTableParser()
        items = parser.parse(text)
    """

    def __init__(self, anchors: Optional[TableAnchors] = None, row_pattern: re.Pattern = ITEM_ROW):
        self.anchors = anchors or TableAnchors()
        self.row_pattern = row_pattern

    def parse(self, text: str) -> list[Item]:
        """Return the items in document order; empty when there is no table header."""
        section = self.anchors.bound(tokenize_lines(text))
        if section is None:
            logger.debug("No item table header found")
            return []

        items: list[Item] = []
        for line in section:
            item = self.parse_row(line)
            if item is not None:
                items.append(item)
            elif line.strip():
                logger.debug("Skipped table line: %r", line.strip())
        return items

    def parse_row(self, line: str) -> Optional[Item]:
        """Parse a single table line, or None if it does not fit the row grammar."""
        m = self.row_pattern.match(line.strip())
        if not m:
            return None
        return Item(
            code=m.group("code"),
            description=_ANNOTATION.sub("", m.group("description")).strip(),
            quantity=parse_brl_number(m.group("quantity")),
            unit=m.group("unit"),
            unit_price=parse_brl_number(m.group("unit_price")),
            ipi=parse_brl_number(m.group("ipi")),
            total=parse_brl_number(m.group("total")),
            delivery_date=m.group("delivery_date"),
        )
