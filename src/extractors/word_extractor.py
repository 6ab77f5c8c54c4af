"""Word extractors: python-docx for DOCX, antiword for legacy DOC."""

import shutil
import subprocess

import docx

# Seconds to wait for antiword before giving up on a .doc file
ANTIWORD_TIMEOUT = 30


def extract_word(file_path):
    """Extract paragraphs and table cells from a DOCX document, in body order."""
    document = docx.Document(file_path)
    lines = []

    for element in document.element.body:
        if element.tag.endswith("p"):
            para = docx.text.paragraph.Paragraph(element, document)
            lines.append(para.text)

        # Contact details are often laid out in header tables
        elif element.tag.endswith("tbl"):
            table = docx.table.Table(element, document)
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))

    return "\n".join(lines)


def extract_doc(file_path):
    """Extract text from a legacy binary .doc file with the antiword CLI."""
    if shutil.which("antiword") is None:
        raise RuntimeError("antiword is not installed; cannot read .doc files")

    result = subprocess.run(
        ["antiword", file_path],
        capture_output=True,
        text=True,
        timeout=ANTIWORD_TIMEOUT,
        check=False,
    )
    if result.returncode != 0:
        message = result.stderr.strip() or f"antiword exited with code {result.returncode}"
        raise RuntimeError(message)

    return result.stdout
