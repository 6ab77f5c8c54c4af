"""
Extractors module for resume text extraction.

- pdf_extractor: PDF files using PyMuPDF
- word_extractor: DOCX files using python-docx, DOC files using antiword
- text_extractor: dispatch table from file type to extractor
"""

from extractors.pdf_extractor import extract_pdf
from extractors.word_extractor import extract_doc, extract_word
from extractors.text_extractor import EXTRACTORS, extract_text, extract_text_sync

__all__ = [
    "extract_pdf",
    "extract_word",
    "extract_doc",
    "extract_text",
    "extract_text_sync",
    "EXTRACTORS",
]
