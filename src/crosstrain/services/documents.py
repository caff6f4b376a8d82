"""DocumentService — parse and re-render header-plus-body documents."""

from __future__ import annotations

from pathlib import Path

import structlog

from crosstrain.domain.header import parse_document_with_warnings, serialize_document
from crosstrain.services.result import ServiceResult

logger = structlog.get_logger(__name__)


class DocumentService:
    """File-level wrapper over the header parser and serializer.

    The parser itself never touches the filesystem; this service reads
    the text and turns I/O failures into a failed ServiceResult.
    """

    def _read(self, op: str, path: Path) -> str | ServiceResult:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ServiceResult.failure(op, "NOT_FOUND", f"No such file: {path}", path=str(path))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("document unreadable", path=str(path), error=str(exc))
            return ServiceResult.failure(op, "READ_ERROR", f"Cannot read {path}: {exc}")

    def parse_file(self, path: Path) -> ServiceResult:
        """Parse *path* and return its header and body."""
        text = self._read("parse_document", path)
        if isinstance(text, ServiceResult):
            return text
        parsed = parse_document_with_warnings(text)
        return ServiceResult(
            ok=True,
            op="parse_document",
            data={
                "path": str(path),
                "header": parsed.value.header,
                "body": parsed.value.body,
            },
            warnings=parsed.warnings,
        )

    def render_file(self, path: Path) -> ServiceResult:
        """Parse *path* and re-serialize it in canonical form."""
        text = self._read("render_document", path)
        if isinstance(text, ServiceResult):
            return text
        parsed = parse_document_with_warnings(text)
        rendered = serialize_document(parsed.value.header, parsed.value.body)
        return ServiceResult(
            ok=True,
            op="render_document",
            data={"path": str(path), "text": rendered, "changed": rendered != text},
            warnings=parsed.warnings,
        )
