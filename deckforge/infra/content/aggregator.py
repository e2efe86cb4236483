"""
Content aggregation: uploaded files -> one text blob plus image assets.
"""

import io
from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterable
from uuid import uuid4

import docx
import fitz  # PyMuPDF

from deckforge.domain.entities import AggregatedContent, ImageAsset
from deckforge.infra.config.logging_config import get_logger

IMAGE_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
}
TEXT_EXTENSIONS = {"txt", "md", "html"}

PDF_ERROR_TEXT = "Error parsing PDF content."
DOCX_ERROR_TEXT = "Error parsing DOCX content."


@dataclass(frozen=True)
class SourceFile:
    name: str
    content: bytes

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lstrip(".").lower()


class ContentAggregator:
    """Extracts document text and collects images from uploaded files."""

    def __init__(self) -> None:
        self._log = get_logger("infra.content")

    def aggregate(self, files: Iterable[SourceFile]) -> AggregatedContent:
        text_parts = []
        images = []

        for source in files:
            ext = source.extension
            if ext in IMAGE_MIME_TYPES:
                images.append(
                    ImageAsset.from_bytes(
                        uuid4().hex[:7], source.name, source.content, IMAGE_MIME_TYPES[ext]
                    )
                )
                continue

            if ext == "pdf":
                text = self._extract_pdf(source)
            elif ext == "docx":
                text = self._extract_docx(source)
            elif ext in TEXT_EXTENSIONS:
                text = source.content.decode("utf-8", errors="replace")
            else:
                self._log.info("content.skip", file=source.name, extension=ext)
                continue

            text_parts.append(f"\n--- DOCUMENT: {source.name} ---\n{text}")

        self._log.info("content.aggregated", documents=len(text_parts), images=len(images))
        return AggregatedContent(text="".join(text_parts), images=images)

    def _extract_pdf(self, source: SourceFile) -> str:
        try:
            with fitz.open(stream=source.content, filetype="pdf") as doc:
                return "".join(
                    f"[Page {number}] {page.get_text()}\n"
                    for number, page in enumerate(doc, start=1)
                )
        except Exception as exc:
            self._log.warning("content.pdf.error", file=source.name, error=str(exc))
            return PDF_ERROR_TEXT

    def _extract_docx(self, source: SourceFile) -> str:
        try:
            document = docx.Document(io.BytesIO(source.content))
        except Exception as exc:
            self._log.warning("content.docx.error", file=source.name, error=str(exc))
            return DOCX_ERROR_TEXT
        return "\n".join(paragraph.text for paragraph in document.paragraphs)
