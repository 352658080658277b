from .csv_exporter import render_export_csv, write_export_csv

__all__ = ["render_export_csv", "write_export_csv"]
