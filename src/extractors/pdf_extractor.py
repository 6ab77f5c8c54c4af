"""PDF text extractor using PyMuPDF."""

import fitz  # PyMuPDF


def extract_pdf(file_path):
    """
    Extract the text layer of a PDF, page by page.
    Encrypted documents are rejected instead of returning empty text.
    """
    pdf_doc = fitz.open(file_path)

    try:
        if pdf_doc.needs_pass:
            raise ValueError("PDF is password protected")
        if pdf_doc.page_count == 0:
            raise ValueError("PDF has no pages")

        pages = []
        for page in pdf_doc:
            page_text = page.get_text("text")
            if page_text:
                pages.append(page_text)
    finally:
        pdf_doc.close()

    return "\n".join(pages)
