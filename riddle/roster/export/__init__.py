"""Record export collaborators."""

from .writers import CSV_HEADER, ExportFormat, csv_row, export_records, write_csv, write_json

__all__ = [
    "CSV_HEADER",
    "ExportFormat",
    "csv_row",
    "export_records",
    "write_csv",
    "write_json",
]
