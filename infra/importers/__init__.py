from .csv_importer import CSVImportError, normalize_header, parse_csv_text, read_csv_file

__all__ = ["CSVImportError", "normalize_header", "parse_csv_text", "read_csv_file"]
