import io

import openpyxl
import pytest
from docx import Document

from models.cv import FileType
from services import file_processor
from services.errors import DocumentParseError, EmptyContentError, UnsupportedFormatError
from services.file_processor import (
    detect_file_type,
    extract_basic_info,
    extract_text,
    normalize_text,
    validate_content,
)


def _xlsx(sheets: dict[str, list[list]]) -> bytes:
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _docx(paragraphs: list[str]) -> bytes:
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


class _FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class _FakePDF:
    def __init__(self, texts):
        self.pages = [_FakePage(t) for t in texts]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


# --- File type detection ---


def test_detect_file_type():
    assert detect_file_type("resume.PDF") == FileType.PDF
    assert detect_file_type("cv.docx") == FileType.DOCX
    assert detect_file_type("cv.xlsx") == FileType.XLSX
    assert detect_file_type("old.xls") == FileType.XLS


@pytest.mark.parametrize("name", ["cv.txt", "cv.doc", "cv", ""])
def test_detect_file_type_unsupported(name):
    with pytest.raises(UnsupportedFormatError):
        detect_file_type(name)


def test_extract_text_unsupported_tag():
    with pytest.raises(UnsupportedFormatError):
        extract_text(b"hello", "txt")


def test_extract_text_accepts_tag_strings():
    data = _docx(["Jane Doe"])
    assert extract_text(data, ".DOCX") == "Jane Doe"


# --- Newline normalization ---


def test_normalize_text_line_endings():
    assert normalize_text("a\r\nb\rc") == "a\nb\nc"


def test_normalize_text_collapses_blank_runs():
    assert normalize_text("a\n\n\n\n\nb") == "a\n\nb"
    assert normalize_text("a\n\nb") == "a\n\nb"


def test_normalize_text_strips():
    assert normalize_text("\n\n  text  \n") == "text"


# --- XLSX ---


def test_xlsx_two_sheets_with_separator():
    data = _xlsx({
        "Profile": [["Name", "Jane Doe"]],
        "Skills": [["Skill", "Go"]],
    })
    text = extract_text(data, FileType.XLSX)
    assert text == "Name | Jane Doe\n\n--- Profile ---\n\nSkill | Go"


def test_xlsx_marker_closes_every_sheet_but_last():
    data = _xlsx({
        "Profile": [["Name", "Jane Doe"]],
        "Skills": [["Skill", "Go"]],
        "Languages": [["English"]],
    })
    text = extract_text(data, FileType.XLSX)
    assert "--- Profile ---" in text
    assert "--- Skills ---" in text
    assert "--- Languages ---" not in text
    assert text.index("Skill | Go") < text.index("--- Skills ---") < text.index("English")


def test_xlsx_single_sheet_has_no_separator():
    data = _xlsx({"Sheet": [["Name", "Jane Doe"], ["Email", "jane@example.com"]]})
    text = extract_text(data, FileType.XLSX)
    assert text == "Name | Jane Doe\nEmail | jane@example.com"
    assert "---" not in text


def test_xlsx_skips_empty_cells_and_trims():
    data = _xlsx({"Sheet": [["  Python ", None, "   ", "SQL"], [None, None], ["Years", 5]]})
    text = extract_text(data, FileType.XLSX)
    assert text == "Python | SQL\nYears | 5"


def test_xlsx_extraction_is_deterministic():
    data = _xlsx({
        "Profile": [["Name", "Jane Doe"], ["Title", "Engineer"]],
        "Skills": [["Skill", "Go"], ["Skill", "Python"]],
    })
    first = extract_text(data, FileType.XLSX)
    second = extract_text(data, FileType.XLSX)
    assert first.encode("utf-8") == second.encode("utf-8")


def test_xlsx_all_empty_raises_empty_content():
    data = _xlsx({"Sheet": [[None, "  "]]})
    with pytest.raises(EmptyContentError):
        extract_text(data, FileType.XLSX)


def test_xlsx_corrupt_buffer():
    with pytest.raises(DocumentParseError):
        extract_text(b"definitely not a zip file", FileType.XLSX)


# --- XLS ---


class _FakeSheet:
    def __init__(self, name, rows):
        self.name = name
        self._rows = rows
        self.nrows = len(rows)

    def row_values(self, i):
        return self._rows[i]


class _FakeBook:
    def __init__(self, sheets):
        self._sheets = sheets

    def sheets(self):
        return self._sheets


def test_xls_uses_same_layout(monkeypatch):
    book = _FakeBook([
        _FakeSheet("Profile", [["Name", "Jane Doe", ""]]),
        _FakeSheet("Skills", [["Skill", "Go"], ["Years", 3.0]]),
    ])
    monkeypatch.setattr(file_processor.xlrd, "open_workbook", lambda file_contents: book)

    text = extract_text(b"xls-bytes", FileType.XLS)
    assert text == "Name | Jane Doe\n\n--- Profile ---\n\nSkill | Go\nYears | 3"


# --- DOCX ---


def test_docx_paragraph_text():
    data = _docx(["Jane Doe", "Project Manager", "", "", "", "Experience"])
    text = extract_text(data, FileType.DOCX)
    assert text.startswith("Jane Doe\nProject Manager")
    assert "\n\n\n" not in text
    assert text.endswith("Experience")


def test_docx_whitespace_only_raises_empty_content():
    data = _docx(["   ", "\t"])
    with pytest.raises(EmptyContentError):
        extract_text(data, FileType.DOCX)


# --- PDF ---


def test_pdf_pages_joined_and_normalized(monkeypatch):
    monkeypatch.setattr(
        file_processor.pdfplumber, "open",
        lambda fp: _FakePDF(["Jane Doe\r\nEngineer\r\n\r\n\r\n\r\n", "Skills"]),
    )
    text = extract_text(b"%PDF-fake", FileType.PDF)
    assert text == "Jane Doe\nEngineer\n\nSkills"


def test_pdf_without_text_layer(monkeypatch):
    monkeypatch.setattr(file_processor.pdfplumber, "open", lambda fp: _FakePDF([None, "  "]))
    with pytest.raises(EmptyContentError):
        extract_text(b"%PDF-scanned", FileType.PDF)


def test_pdf_corrupt_buffer():
    with pytest.raises(DocumentParseError):
        extract_text(b"not a pdf at all", FileType.PDF)


# --- Validation and basic info ---


def test_validate_content_empty():
    result = validate_content("   ")
    assert result.is_valid is False
    assert result.errors


def test_validate_content_short_and_not_cv():
    result = validate_content("Shopping list: eggs")
    assert result.is_valid is True
    assert any("too short" in w for w in result.warnings)
    assert any("may not be a CV" in w for w in result.warnings)


def test_validate_content_real_cv_has_no_warnings():
    text = (
        "Jane Doe\nExperience\nProject Manager at Acme, responsible for delivery.\n"
        "Education\nUniversity of Leeds, BEng degree\nSkills\nBudgeting, Planning"
    )
    assert validate_content(text).warnings == []


def test_extract_basic_info():
    info = extract_basic_info("Jane Doe\njane@example.com\n(555) 123-4567\nWork history\nSkills")
    assert info["email"] == "jane@example.com"
    assert info["phone"] == "(555) 123-4567"
    assert info["has_experience"] is True
    assert info["has_education"] is False
    assert info["has_skills"] is True
