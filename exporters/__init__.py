"""
Export projections of an ExtractedOrder (JSON, CSV, XML, supplier summary).
"""
from .export import (
    EXPORT_FORMATS,
    to_json,
    to_csv,
    to_xml,
    to_summary,
    render,
    export_filename,
    DEFAULT_EXPORT_XML_TEMPLATE,
    DEFAULT_SUMMARY_TEMPLATE,
)

__all__ = [
    "EXPORT_FORMATS",
    "to_json",
    "to_csv",
    "to_xml",
    "to_summary",
    "render",
    "export_filename",
    "DEFAULT_EXPORT_XML_TEMPLATE",
    "DEFAULT_SUMMARY_TEMPLATE",
]
