"""Plain-text extraction from uploaded CV files (PDF, DOCX, XLSX, XLS)."""

import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import openpyxl
import pdfplumber
import xlrd
from docx import Document

from models.cv import FileType
from services.errors import DocumentParseError, EmptyContentError, UnsupportedFormatError
from services.section_parser import extract_contact_info

logger = logging.getLogger(__name__)

CELL_DELIMITER = " | "

# Words that suggest the text really is a CV
CV_KEYWORDS = (
    "experience", "education", "skills", "work", "job", "position",
    "company", "university", "degree", "responsibilities", "achievements",
)
MIN_CV_LENGTH = 50
MAX_CV_LENGTH = 50000

_BLANK_RUN_RE = re.compile(r"\n{3,}")


@dataclass
class ContentValidation:
    is_valid: bool = True
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def detect_file_type(filename: str) -> FileType:
    """Map a filename's extension to a supported FileType."""
    extension = Path(filename or "").suffix.lower().lstrip(".")
    return _coerce_file_type(extension)


def _coerce_file_type(file_type: FileType | str) -> FileType:
    if isinstance(file_type, FileType):
        return file_type
    tag = str(file_type).strip().lower().lstrip(".")
    try:
        return FileType(tag)
    except ValueError:
        raise UnsupportedFormatError(tag) from None


def normalize_text(text: str) -> str:
    """Collapse CRLF/CR to LF and runs of blank lines to a single one."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _BLANK_RUN_RE.sub("\n\n", text).strip()


def extract_text(buffer: bytes, file_type: FileType | str) -> str:
    """Extract normalized plain text from a file buffer.

    Raises UnsupportedFormatError for unknown types, DocumentParseError when
    the reader rejects the buffer, and EmptyContentError when no text is left.
    """
    kind = _coerce_file_type(file_type)
    reader = _READERS[kind]
    try:
        raw = reader(buffer)
    except Exception as e:
        logger.error("Failed to read %s file: %s", kind.value, e)
        raise DocumentParseError(f"{kind.value.upper()} processing failed: {e}") from e

    text = normalize_text(raw)
    if not text:
        raise EmptyContentError(f"No text content found in {kind.value.upper()} file")
    logger.debug("Extracted %d chars from %s file", len(text), kind.value)
    return text


def _read_pdf(buffer: bytes) -> str:
    with pdfplumber.open(io.BytesIO(buffer)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages)


def _read_docx(buffer: bytes) -> str:
    doc = Document(io.BytesIO(buffer))
    return "\n".join(p.text for p in doc.paragraphs)


def _cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _row_text(cells) -> str:
    parts = [_cell_text(c) for c in cells]
    return CELL_DELIMITER.join(p for p in parts if p)


def _join_sheets(sheets: list[tuple[str, list[str]]]) -> str:
    """Join per-sheet row lines; each sheet but the last is closed by a marker naming it."""
    lines: list[str] = []
    for index, (name, rows) in enumerate(sheets):
        lines.extend(row for row in rows if row)
        if index < len(sheets) - 1:
            lines.extend(["", f"--- {name} ---", ""])
    return "\n".join(lines)


def _read_xlsx(buffer: bytes) -> str:
    workbook = openpyxl.load_workbook(io.BytesIO(buffer), read_only=True, data_only=True)
    try:
        sheets = [
            (ws.title, [_row_text(row) for row in ws.iter_rows(values_only=True)])
            for ws in workbook.worksheets
        ]
    finally:
        workbook.close()
    return _join_sheets(sheets)


def _read_xls(buffer: bytes) -> str:
    book = xlrd.open_workbook(file_contents=buffer)
    sheets = [
        (sheet.name, [_row_text(sheet.row_values(i)) for i in range(sheet.nrows)])
        for sheet in book.sheets()
    ]
    return _join_sheets(sheets)


_READERS = {
    FileType.PDF: _read_pdf,
    FileType.DOCX: _read_docx,
    FileType.XLSX: _read_xlsx,
    FileType.XLS: _read_xls,
}


def validate_content(text: str) -> ContentValidation:
    """Heuristic sanity checks on extracted text. Warnings never block processing."""
    result = ContentValidation()
    if not text or not text.strip():
        result.is_valid = False
        result.errors.append("No content found in file")
        return result

    if len(text) < MIN_CV_LENGTH:
        result.warnings.append("File content seems too short for a CV")
    if len(text) > MAX_CV_LENGTH:
        result.warnings.append("File content is very long, processing may take time")

    lower = text.lower()
    found = [kw for kw in CV_KEYWORDS if kw in lower]
    if len(found) < 3:
        result.warnings.append("Content may not be a CV (few CV-related keywords found)")
    return result


def extract_basic_info(text: str) -> dict[str, str | bool | None]:
    """Cheap contact and section presence scan used for upload diagnostics."""
    contact = extract_contact_info(text)
    lower = text.lower()
    return {
        "email": contact["email"],
        "phone": contact["phone"],
        "has_experience": "experience" in lower or "work history" in lower,
        "has_education": "education" in lower or "academic" in lower,
        "has_skills": "skills" in lower or "competencies" in lower,
    }
