import logging
from PyPDF2 import PdfReader


def extract_pdf_text(filepath: str) -> str:
    """Extracts text from all pages of a PDF file."""
    try:
        with open(filepath, "rb") as f:
            reader = PdfReader(f)
            full_text = "\n".join(page.extract_text() for page in reader.pages if page.extract_text())
        return full_text
    except FileNotFoundError:
        logging.error(f"The file was not found at path: {filepath}")
        return ""
    except Exception as e:
        logging.error(f"An error occurred while reading the PDF file: {e}")
        return ""


def load_text_file(filepath: str) -> str:
    """Reads a UTF-8 text file, or the text layer of a PDF when the path ends in .pdf."""
    if filepath.lower().endswith(".pdf"):
        return extract_pdf_text(filepath)
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        logging.error(f"File not found: {filepath}")
        return ""
    except UnicodeDecodeError:
        logging.error(f"Encoding error reading file: {filepath}. Please ensure the file is saved with UTF-8 encoding.")
        return ""
