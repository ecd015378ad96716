"""
Export service for extracted purchase orders.

These are lossy projections of ExtractedOrder for downstream consumers:
  json     full record, camelCase keys
  csv      one row per item, with order number / date / supplier repeated
  xml      <PurchaseOrder> document rendered from a Jinja2 template
  summary  confirmation message for the supplier (messaging-app friendly)

The XML and summary templates can be replaced by files in the config
directory (export_template.xml.j2 / summary_template.txt.j2).
"""
import csv
import io
import logging
import os
from pathlib import Path
from typing import Optional

from jinja2 import BaseLoader, Environment, FileSystemLoader

from models.order import ExtractedOrder
from pipeline.numbers import format_brl

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv", "xml", "summary")

_EXTENSIONS = {"json": "json", "csv": "csv", "xml": "xml", "summary": "txt"}

CSV_HEADERS = [
    "orderNumber", "date", "supplierName",
    "itemCode", "itemDescription", "itemQuantity", "itemUnit",
    "itemUnitPrice", "itemIpi", "itemTotal", "itemDeliveryDate",
]

# Default XML export template
DEFAULT_EXPORT_XML_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<PurchaseOrder>
  <orderNumber>{{ orderNumber or '' }}</orderNumber>
  <date>{{ date or '' }}</date>
  <Supplier>
{%- for key, value in supplier.items() if value is not none %}
    <{{ key }}>{{ value }}</{{ key }}>
{%- endfor %}
  </Supplier>
  <Buyer>
{%- for key, value in buyer.items() if value is not none %}
    <{{ key }}>{{ value }}</{{ key }}>
{%- endfor %}
  </Buyer>
  <Payment>
{%- for key, value in payment.items() if value is not none %}
    <{{ key }}>{{ value }}</{{ key }}>
{%- endfor %}
  </Payment>
  <Items>
{%- for item in items %}
    <Item>
{%- for key, value in item.items() %}
      <{{ key }}>{{ '' if value is none else value }}</{{ key }}>
{%- endfor %}
    </Item>
{%- endfor %}
  </Items>
  <Totals>
{%- for key, value in totals.items() if value is not none %}
    <{{ key }}>{{ value }}</{{ key }}>
{%- endfor %}
  </Totals>
</PurchaseOrder>
"""

# Default supplier confirmation message
DEFAULT_SUMMARY_TEMPLATE = """\
---
Confirmamos a emissão da Ordem de Compra nº *{{ order_number }}* para a *{{ supplier_name }}* referente aos itens cotados.

---
Os detalhes do pedido são:

{% for item in items %}
*_[{{ item.code }} - {{ item.description }} - Qtde: {{ item.quantity | qty }} {{ item.unit }}]_*
{% endfor %}

*_Valor Total: {{ total_value | brl }}_*
*_Condição de Pagamento: {{ condition }}_*
*_Condição de Frete: {{ freight }}_*

Segue em Anexo a Ordem de compras:

📎 *OC - {{ order_number }} - {{ supplier_name }} - {{ issue_date }}*

---"""


def _qty(value: float) -> str:
    """10.0 -> "10", 2.5 -> "2.5"."""
    return str(int(value)) if float(value).is_integer() else str(value)


def _template_dir() -> Path:
    return Path(os.environ.get("CONFIG_DIR", Path(__file__).parent.parent / "config"))


def _environment(template_file: Optional[Path], autoescape: bool, trim: bool) -> Environment:
    loader = (
        FileSystemLoader(str(template_file.parent))
        if template_file and template_file.exists()
        else BaseLoader()
    )
    env = Environment(
        loader=loader,
        autoescape=autoescape,
        keep_trailing_newline=True,
        trim_blocks=trim,
        lstrip_blocks=trim,
    )
    env.filters["brl"] = format_brl
    env.filters["qty"] = _qty
    return env


def _load_template(default: str, template_file: Optional[Path], autoescape: bool, trim: bool = False):
    env = _environment(template_file, autoescape, trim)
    if template_file and template_file.exists():
        logger.debug("Using export template %s", template_file)
        return env.get_template(template_file.name)
    return env.from_string(default)


def to_json(order: ExtractedOrder, pretty: bool = True) -> str:
    return order.model_dump_json(by_alias=True, indent=2 if pretty else None)


def to_csv(order: ExtractedOrder) -> str:
    """One row per item; an order without items exports as an empty string."""
    if not order.items:
        return ""

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for item in order.items:
        writer.writerow([
            order.order_number or "",
            order.date or "",
            order.supplier.name or "",
            item.code,
            item.description,
            item.quantity,
            item.unit,
            item.unit_price,
            item.ipi,
            item.total,
            item.delivery_date,
        ])
    return buf.getvalue().rstrip("\n")


def to_xml(order: ExtractedOrder, template_file: Optional[Path] = None) -> str:
    """
    Render *order* as XML using the operator template (or built-in default).
    Values are XML-escaped automatically.
    """
    if template_file is None:
        template_file = _template_dir() / "export_template.xml.j2"
    tmpl = _load_template(DEFAULT_EXPORT_XML_TEMPLATE, template_file, autoescape=True)
    payload = order.model_dump(by_alias=True, exclude={"metadata"})
    return tmpl.render(**payload)


def to_summary(order: ExtractedOrder, template_file: Optional[Path] = None) -> str:
    """Supplier confirmation message; missing values show as N/A or -."""
    if template_file is None:
        template_file = _template_dir() / "summary_template.txt.j2"
    tmpl = _load_template(DEFAULT_SUMMARY_TEMPLATE, template_file, autoescape=False, trim=True)
    return tmpl.render(
        order_number=order.order_number or "N/A",
        supplier_name=order.supplier.name or "N/A",
        issue_date=order.date or "N/A",
        items=order.items,
        total_value=order.totals.total_value,
        condition=order.payment.condition or "-",
        freight=order.payment.freight or "-",
    )


def render(order: ExtractedOrder, fmt: str, pretty: bool = True) -> str:
    """Dispatch to the exporter for *fmt* (one of EXPORT_FORMATS)."""
    if fmt == "json":
        return to_json(order, pretty=pretty)
    if fmt == "csv":
        return to_csv(order)
    if fmt == "xml":
        return to_xml(order)
    if fmt == "summary":
        return to_summary(order)
    raise ValueError(f"Unknown export format: {fmt!r}")


def export_filename(order: ExtractedOrder, fmt: str) -> str:
    """e.g. OC_4521.json"""
    if fmt not in _EXTENSIONS:
        raise ValueError(f"Unknown export format: {fmt!r}")
    return f"OC_{order.order_number or 'sem_numero'}.{_EXTENSIONS[fmt]}"
