import logging
import threading
from contextlib import contextmanager
from typing import Optional, Tuple

from reportlab.lib.pagesizes import A4

from .ai_gateway import AIGateway
from .exceptions import ExportError, ExtractionError, PreconditionError, SessionBusyError
from .models import AtsResult, Resume
from .pdf_docx_generator import PdfDocxGenerator


def extraction_failure_message(error: ExtractionError) -> str:
    return f"Failed to process request. Please try again. Error: {error}"


def export_failure_message(error: ExportError) -> str:
    return f"Failed to generate {error.file_format.upper()}. Error: {error.original_exception or error}"


class ResumeSession:
    """
    Holds the single live Resume and AtsResult and runs the user actions
    against them.

    Only one action may be outstanding at a time; a second one is refused with
    ``SessionBusyError`` rather than queued. Successful actions replace the
    stored record wholesale. Failed actions leave the last good records in
    place and set ``last_error`` to a message fit for display.
    """

    def __init__(self, gateway: AIGateway, page_size=A4):
        self.gateway = gateway
        self.page_size = page_size
        self.resume: Optional[Resume] = None
        self.ats_result: Optional[AtsResult] = None
        self.last_error = ""
        self._lock = threading.Lock()
        self._running_action: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def _action(self, name: str):
        if not self._lock.acquire(blocking=False):
            raise SessionBusyError(self._running_action)
        self._running_action = name
        self.last_error = ""
        try:
            yield
        except PreconditionError as e:
            self.last_error = str(e)
            raise
        except ExtractionError as e:
            logging.error(f"{name} failed: {e}")
            self.last_error = extraction_failure_message(e)
            raise
        except ExportError as e:
            self.last_error = export_failure_message(e)
            raise
        finally:
            self._running_action = None
            self._lock.release()

    def _require_resume(self, message: str = "Please parse your resume first.") -> Resume:
        if self.resume is None:
            raise PreconditionError(message)
        return self.resume

    def clear_error(self):
        self.last_error = ""

    def parse(self, raw_text: str) -> Resume:
        with self._action("Parsing Resume..."):
            self.resume = self.gateway.extract(raw_text)
            return self.resume

    def enhance(self) -> Resume:
        with self._action("Enhancing Resume..."):
            resume = self._require_resume()
            self.resume = self.gateway.enhance(resume)
            return self.resume

    def modify(self, instruction: str) -> Resume:
        with self._action("Applying Changes..."):
            resume = self._require_resume()
            self.resume = self.gateway.modify(resume, instruction)
            return self.resume

    def check_score(self, job_description: str) -> AtsResult:
        with self._action("Checking ATS Score..."):
            resume = self._require_resume()
            self.ats_result = self.gateway.score(resume, job_description)
            return self.ats_result

    def dismiss_score(self):
        self.ats_result = None

    def export_pdf(self) -> Tuple[str, bytes]:
        """Returns ``(file name, PDF bytes)`` for the current resume."""
        with self._action("Exporting PDF..."):
            resume = self._require_resume("No resume data available to export.")
            generator = PdfDocxGenerator(resume, page_size=self.page_size)
            return generator.pdf_filename, generator.to_pdf_bytes()

    def export_docx(self) -> Tuple[str, bytes]:
        with self._action("Exporting DOCX..."):
            resume = self._require_resume("No resume data available to export.")
            generator = PdfDocxGenerator(resume, page_size=self.page_size)
            return generator.docx_filename, generator.to_docx_bytes()
