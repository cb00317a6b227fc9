# =========================
# file: hlalign/io/docx_reader.py
# =========================
from pathlib import Path
from typing import List, Union

from docx import Document


def read_docx_paragraphs(path: Union[str, Path]) -> List[str]:
    doc = Document(str(path))
    return [p.text for p in doc.paragraphs if p.text and p.text.strip()]


def read_source_text(path: Union[str, Path]) -> str:
    """
    Đọc văn bản nguồn: .docx qua python-docx (mỗi đoạn một dòng),
    còn lại đọc như UTF-8 text.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Source file not found: {p}")
    if p.suffix.lower() == ".docx":
        return "\n".join(read_docx_paragraphs(p))
    return p.read_text(encoding="utf-8")
