"""Export helpers for the cross-stitch pattern service."""

from .csv_exporter import export_csv
from .json_exporter import export_json
from .pdf_exporter import export_pdf

__all__ = [
    "export_csv",
    "export_json",
    "export_pdf",
]
