"""Page counting for uploaded documents, resilient to malformed PDFs."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterable, Tuple, Union

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from logging_config import get_logger


logger = get_logger(__name__)

PdfSource = Union[str, Path, bytes, BinaryIO]


class PDFAnalyzer:
    """Extract page counts from uploaded PDFs without ever raising."""

    def analyze(self, source: PdfSource, name: str = "") -> Dict[str, Any]:
        info: Dict[str, Any] = {"name": name, "pages": 0, "size_kb": 0}

        if isinstance(source, (str, Path)):
            path = Path(source)
            info["name"] = name or path.name
            info["size_kb"] = round(path.stat().st_size / 1024, 2) if path.exists() else 0
            stream: Any = str(path)
        elif isinstance(source, bytes):
            info["size_kb"] = round(len(source) / 1024, 2)
            stream = BytesIO(source)
        else:
            stream = source

        try:
            reader = PdfReader(stream)
            info["pages"] = len(reader.pages)
        except (PdfReadError, OSError, ValueError) as exc:
            logger.warning(f"PDF analysis failed for {info['name'] or 'upload'}: {exc}")
            info["error"] = f"PDF analysis failed: {exc}"

        return info

    def count_pages(self, sources: Iterable[Tuple[str, PdfSource]]) -> Dict[str, Any]:
        """
        Count pages across several named uploads.

        Returns:
            ``{"documents": [...per-file info...], "total_pages": int}``
        """
        documents = [self.analyze(source, name) for name, source in sources]
        return {
            "documents": documents,
            "total_pages": sum(doc["pages"] for doc in documents),
        }
