from __future__ import annotations

import asyncio
import io

from pdfminer.converter import PDFPageAggregator
from pdfminer.layout import LAParams, LTTextBox, LTTextLine
from pdfminer.pdfinterp import PDFPageInterpreter, PDFResourceManager
from pdfminer.pdfpage import PDFPage

from domain.models import PDFText, ServiceResult


def _extract_pages(content: bytes) -> list[str]:
    rsrcmgr = PDFResourceManager()
    device = PDFPageAggregator(rsrcmgr, laparams=LAParams())
    interpreter = PDFPageInterpreter(rsrcmgr, device)

    pages: list[str] = []
    for page in PDFPage.get_pages(io.BytesIO(content)):
        interpreter.process_page(page)
        items = [
            obj.get_text().strip()
            for obj in device.get_result()
            if isinstance(obj, (LTTextBox, LTTextLine))
        ]
        pages.append("\n".join(item for item in items if item))
    return pages


class PdfMinerParserService:
    """``PDFParserPort`` backed by pdfminer.six; parsing runs in a worker thread."""

    async def extract_text(self, file: bytes) -> ServiceResult[PDFText]:
        try:
            pages = await asyncio.to_thread(_extract_pages, file)
        except Exception as exc:
            return ServiceResult.failure(f"PDF extraction failed: {exc}")

        text = "\n\n".join(p for p in pages if p).strip()
        if not text:
            return ServiceResult.failure("No text found in PDF")
        return ServiceResult.success(PDFText(text=text, page_count=len(pages)))
