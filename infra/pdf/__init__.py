from .pdfminer_parser import PdfMinerParserService

__all__ = ["PdfMinerParserService"]
