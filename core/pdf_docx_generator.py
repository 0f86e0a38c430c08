import io
import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from .exceptions import ExportError
from .models import EducationEntry, Resume, WorkExperienceEntry

MARGIN = 40
BODY_LINE_HEIGHT = 12
ROLE_LINE_HEIGHT = 14
BULLET_INDENT = 15

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"


def resume_filename(name: str, extension: str = "pdf") -> str:
    """Every whitespace character in the name becomes an underscore."""
    safe_name = re.sub(r'\s', '_', name)
    return f"{safe_name}_Resume.{extension}"


@dataclass(frozen=True)
class Placement:
    """One block committed by the layout sweep: where it landed and how tall it is."""
    kind: str
    page: int
    y: float
    line_count: int = 1


class PdfCanvasSurface:
    """
    Drawing capability over a reportlab canvas.

    Coordinates are top-down points (y grows towards the bottom of the page)
    and are flipped to reportlab's bottom-up system here.
    """

    def __init__(self, buffer, page_size: Tuple[float, float] = A4):
        self.page_width, self.page_height = page_size
        self.canvas = canvas.Canvas(buffer, pagesize=page_size)
        self.font_name = FONT_REGULAR
        self.font_size = 10

    def set_font(self, font_name: str, font_size: float):
        self.font_name = font_name
        self.font_size = font_size
        self.canvas.setFont(font_name, font_size)

    def draw_text(self, text: str, x: float, y: float):
        self.canvas.drawString(x, self.page_height - y, text)

    def draw_right_text(self, text: str, x: float, y: float):
        self.canvas.drawRightString(x, self.page_height - y, text)

    def draw_line(self, x1: float, x2: float, y: float, width: float = 1):
        self.canvas.setLineWidth(width)
        self.canvas.line(x1, self.page_height - y, x2, self.page_height - y)

    def wrap(self, text: str, width: float) -> List[str]:
        """
        Splits text into lines that fit ``width`` in the current font.

        Lines break at whitespace; a single word wider than ``width`` (a long
        URL, say) is further broken between characters.
        """
        lines = []
        for line in simpleSplit(text, self.font_name, self.font_size, width):
            if stringWidth(line, self.font_name, self.font_size) <= width:
                lines.append(line)
            else:
                lines.extend(self._break_characters(line, width))
        return lines

    def _break_characters(self, line: str, width: float) -> List[str]:
        chunks = []
        current = ""
        for char in line:
            if current and stringWidth(current + char, self.font_name, self.font_size) > width:
                chunks.append(current)
                current = char.lstrip()
            else:
                current += char
        if current:
            chunks.append(current)
        return chunks

    def add_page(self):
        self.canvas.showPage()
        # showPage resets the graphics state
        self.canvas.setFont(self.font_name, self.font_size)

    def save(self):
        self.canvas.save()


class ResumePdfLayout:
    """
    Places a resume onto pages in a single top-to-bottom sweep.

    A vertical cursor starts at the top margin. Before each block of known
    height the cursor is checked against the bottom margin and, on overflow, a
    new page is started. Committed blocks are never moved again.

    Page breaks are greedy: there is no widow/orphan control and a block is
    never split. A paragraph or bullet taller than a whole page starts on a
    fresh page and runs past its bottom margin; a warning is logged when that
    happens.
    """

    def __init__(self, surface: PdfCanvasSurface, margin: float = MARGIN):
        self.surface = surface
        self.margin = margin
        self.usable_width = surface.page_width - margin * 2
        self.right_edge = margin + self.usable_width
        self.y = margin
        self.page_count = 1
        self.placements: List[Placement] = []

    def _check_page_break(self, space_needed: float):
        if self.y + space_needed > self.surface.page_height - self.margin:
            self.surface.add_page()
            self.page_count += 1
            self.y = self.margin

    def _check_text_block(self, kind: str, line_count: int):
        height = line_count * BODY_LINE_HEIGHT
        if height > self.surface.page_height - 2 * self.margin:
            logging.warning(
                f"{kind.capitalize()} of {line_count} lines is taller than a page "
                f"and will run past the bottom margin."
            )
        self._check_page_break(height)

    def _place(self, kind: str, line_count: int = 1):
        self.placements.append(Placement(kind, self.page_count, self.y, line_count))

    def _section_heading(self, title: str):
        self._check_page_break(50)
        self._place("heading")
        self.surface.set_font(FONT_BOLD, 14)
        self.surface.draw_text(title, self.margin, self.y)
        self.y += 5
        self.surface.draw_line(self.margin, self.right_edge, self.y)
        self.y += 15

    def _paragraph(self, text: str, kind: str):
        self.surface.set_font(FONT_REGULAR, 10)
        lines = self.surface.wrap(text, self.usable_width)
        if not lines:
            return
        self._check_text_block(kind, len(lines))
        self._place(kind, len(lines))
        for index, line in enumerate(lines):
            self.surface.draw_text(line, self.margin, self.y + index * BODY_LINE_HEIGHT)
        self.y += len(lines) * BODY_LINE_HEIGHT

    def _two_column_line(self, left: str, right: str, left_font: str, right_font: str, size: float):
        self.surface.set_font(left_font, size)
        self.surface.draw_text(left, self.margin, self.y)
        if right:
            self.surface.set_font(right_font, size)
            self.surface.draw_right_text(right, self.right_edge, self.y)

    def _header(self, resume: Resume):
        contact = resume.contact_info
        self._place("name")
        self.surface.set_font(FONT_BOLD, 24)
        self.surface.draw_text(contact.name, self.margin, self.y)
        self.y += 28

        self._place("contact")
        self.surface.set_font(FONT_REGULAR, 10)
        self.surface.draw_text(contact.contact_line(), self.margin, self.y)
        self.y += 30

    def _work_entry(self, entry: WorkExperienceEntry):
        self._check_page_break(60)
        self._place("role")
        self._two_column_line(entry.job_title, entry.dates, FONT_BOLD, FONT_REGULAR, 11)
        self.y += ROLE_LINE_HEIGHT

        self._two_column_line(entry.company, entry.location, FONT_ITALIC, FONT_ITALIC, 10)
        self.y += ROLE_LINE_HEIGHT

        bullet_width = self.usable_width - BULLET_INDENT
        for responsibility in entry.responsibilities:
            self.surface.set_font(FONT_REGULAR, 10)
            lines = self.surface.wrap(responsibility, bullet_width)
            if not lines:
                continue
            self._check_text_block("bullet", len(lines))
            self._place("bullet", len(lines))
            self.surface.draw_text("•", self.margin + 5, self.y)
            for index, line in enumerate(lines):
                self.surface.draw_text(line, self.margin + BULLET_INDENT, self.y + index * BODY_LINE_HEIGHT)
            self.y += len(lines) * BODY_LINE_HEIGHT
        self.y += 10

    def _education_entry(self, entry: EducationEntry):
        self._check_page_break(40)
        self._place("degree")
        self._two_column_line(entry.degree, entry.graduation_date, FONT_BOLD, FONT_REGULAR, 11)
        self.y += ROLE_LINE_HEIGHT

        self._two_column_line(entry.institution, entry.location, FONT_ITALIC, FONT_ITALIC, 10)
        self.y += 20

    def render(self, resume: Resume):
        self._header(resume)

        self._section_heading("Summary")
        self._paragraph(resume.summary, "summary")
        self.y += 10

        self._section_heading("Work Experience")
        for entry in resume.work_experience:
            self._work_entry(entry)

        self._section_heading("Education")
        for entry in resume.education:
            self._education_entry(entry)

        self._section_heading("Skills")
        self._paragraph(", ".join(resume.skills), "skills")


class PdfDocxGenerator:
    """
    Exports a structured resume as a paginated PDF (reportlab) or a styled DOCX
    (python-docx). Documents are built in memory and returned as bytes; callers
    write them out only once rendering has succeeded.
    """

    def __init__(self, resume: Resume, page_size: Tuple[float, float] = A4):
        self.resume = resume
        self.page_size = page_size
        self.font_name = 'Calibri'
        self.last_layout = None

    @property
    def pdf_filename(self) -> str:
        return resume_filename(self.resume.contact_info.name, "pdf")

    @property
    def docx_filename(self) -> str:
        return resume_filename(self.resume.contact_info.name, "docx")

    def layout(self) -> ResumePdfLayout:
        """Runs the pagination sweep against a throwaway buffer and returns it."""
        surface = PdfCanvasSurface(io.BytesIO(), self.page_size)
        layout = ResumePdfLayout(surface)
        layout.render(self.resume)
        return layout

    def to_pdf_bytes(self) -> bytes:
        """
        Raises:
            ExportError: If any drawing step fails.
        """
        buffer = io.BytesIO()
        try:
            surface = PdfCanvasSurface(buffer, self.page_size)
            layout = ResumePdfLayout(surface)
            layout.render(self.resume)
            surface.save()
        except Exception as e:
            logging.error(f"An error occurred during PDF generation: {e}")
            raise ExportError("pdf", e)

        self.last_layout = layout
        logging.info(f"PDF generation complete: {layout.page_count} page(s).")
        return buffer.getvalue()

    def _set_paragraph_border(self, paragraph):
        p_pr = paragraph._p.get_or_add_pPr()
        p_bdr = OxmlElement('w:pBdr')
        p_pr.append(p_bdr)
        bottom_bdr = OxmlElement('w:bottom')
        bottom_bdr.set(qn('w:val'), 'single')
        bottom_bdr.set(qn('w:sz'), '4')
        bottom_bdr.set(qn('w:space'), '1')
        bottom_bdr.set(qn('w:color'), '000000')
        p_bdr.append(bottom_bdr)

    def _add_heading(self, doc, title: str):
        p = doc.add_paragraph()
        run = p.add_run(title.upper())
        run.font.bold = True
        run.font.size = Pt(11)
        p.paragraph_format.space_before = Pt(8)
        p.paragraph_format.space_after = Pt(4)
        self._set_paragraph_border(p)

    def _add_two_column_row(self, doc, left: str, right: str, bold_left: bool):
        table = doc.add_table(rows=1, cols=2)
        table.autofit = False
        table.columns[0].width = Inches(5.0)
        table.columns[1].width = Inches(2.5)

        left_cell, right_cell = table.rows[0].cells
        left_run = left_cell.paragraphs[0].add_run(left)
        if bold_left:
            left_run.bold = True
        else:
            left_run.italic = True

        right_p = right_cell.paragraphs[0]
        right_p.add_run(right)
        right_p.alignment = WD_ALIGN_PARAGRAPH.RIGHT

        for cell in (left_cell, right_cell):
            cell.paragraphs[0].paragraph_format.space_before = Pt(0)
            cell.paragraphs[0].paragraph_format.space_after = Pt(0)

    def _build_docx(self):
        resume = self.resume
        doc = Document()
        for section in doc.sections:
            section.left_margin = Inches(0.5)
            section.right_margin = Inches(0.5)
            section.top_margin = Inches(0.5)
            section.bottom_margin = Inches(0.5)

        doc.styles['Normal'].font.name = self.font_name
        doc.styles['Normal'].font.size = Pt(10.5)

        p = doc.add_paragraph()
        run = p.add_run(resume.contact_info.name)
        run.font.size = Pt(22)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        p.paragraph_format.space_after = Pt(2)

        p = doc.add_paragraph(resume.contact_info.contact_line())
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        p.paragraph_format.space_after = Pt(8)

        self._add_heading(doc, "Summary")
        doc.add_paragraph(resume.summary)

        self._add_heading(doc, "Work Experience")
        for entry in resume.work_experience:
            self._add_two_column_row(doc, entry.job_title, entry.dates, bold_left=True)
            self._add_two_column_row(doc, entry.company, entry.location, bold_left=False)
            for responsibility in entry.responsibilities:
                p = doc.add_paragraph(responsibility, style='List Bullet')
                p.paragraph_format.left_indent = Inches(0.25)
                p.paragraph_format.space_before = Pt(0)
                p.paragraph_format.space_after = Pt(2)

        self._add_heading(doc, "Education")
        for entry in resume.education:
            self._add_two_column_row(doc, entry.degree, entry.graduation_date, bold_left=True)
            self._add_two_column_row(doc, entry.institution, entry.location, bold_left=False)

        self._add_heading(doc, "Skills")
        doc.add_paragraph(", ".join(resume.skills))
        return doc

    def to_docx_bytes(self) -> bytes:
        buffer = io.BytesIO()
        try:
            self._build_docx().save(buffer)
        except Exception as e:
            logging.error(f"An error occurred during DOCX generation: {e}")
            raise ExportError("docx", e)
        logging.info("Styled DOCX generation complete.")
        return buffer.getvalue()
