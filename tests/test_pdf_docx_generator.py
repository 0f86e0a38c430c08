import io
import unittest
from unittest.mock import MagicMock, patch

from docx import Document
from reportlab.pdfbase.pdfmetrics import stringWidth

from core.exceptions import ExportError
from core.models import ContactInfo, Resume
from core.pdf_docx_generator import (
    BODY_LINE_HEIGHT,
    BULLET_INDENT,
    FONT_REGULAR,
    MARGIN,
    PdfCanvasSurface,
    PdfDocxGenerator,
    ResumePdfLayout,
    resume_filename,
)

from sample_data import SAMPLE_RESUME, resume_payload

# Exactly 200 characters of wide glyphs, so the bullet wraps on a narrow page.
LONG_RESPONSIBILITY = " ".join(["WWWWWWWWW"] * 19 + ["WWWWWWWWWW"])
NARROW_PAGE_WIDTH = 300


def _single_bullet_resume() -> Resume:
    return Resume.model_validate(resume_payload(
        workExperience=[{
            "jobTitle": "Engineer",
            "company": "Acme Corp",
            "location": "Remote",
            "dates": "2020 - 2024",
            "responsibilities": [LONG_RESPONSIBILITY],
        }],
        education=[],
        skills=["Python"],
    ))


class TestFilenames(unittest.TestCase):

    def test_whitespace_becomes_underscores(self):
        self.assertEqual(resume_filename("Jane Q Doe"), "Jane_Q_Doe_Resume.pdf")
        self.assertEqual(resume_filename("Jane\tQ\nDoe", "docx"), "Jane_Q_Doe_Resume.docx")

    def test_generator_filenames(self):
        generator = PdfDocxGenerator(Resume.model_validate(SAMPLE_RESUME))
        self.assertEqual(generator.pdf_filename, "Jane_Q_Doe_Resume.pdf")
        self.assertEqual(generator.docx_filename, "Jane_Q_Doe_Resume.docx")


class TestContactLine(unittest.TestCase):

    def test_empty_links_are_omitted(self):
        contact = ContactInfo(name="Jane", phone="555-0100", email="jane@example.com", linkedin="", portfolio="")
        self.assertEqual(contact.contact_line(), "555-0100 | jane@example.com")

    def test_only_email(self):
        contact = ContactInfo(name="Jane", email="jane@example.com")
        self.assertEqual(contact.contact_line(), "jane@example.com")

    def test_layout_draws_contact_line_without_stray_separators(self):
        surface = MagicMock(page_width=595.27, page_height=841.89)
        surface.wrap.side_effect = lambda text, width: [text] if text else []
        resume = Resume.model_validate(resume_payload(
            contactInfo={"name": "Jane Doe", "phone": "555-0100", "email": "jane@example.com",
                         "linkedin": "", "portfolio": ""},
        ))

        ResumePdfLayout(surface).render(resume)

        drawn = [c.args[0] for c in surface.draw_text.call_args_list]
        self.assertIn("555-0100 | jane@example.com", drawn)
        self.assertFalse(any(text.rstrip().endswith("|") for text in drawn))


class TestPdfLayout(unittest.TestCase):

    def test_sections_in_fixed_order(self):
        layout = PdfDocxGenerator(Resume.model_validate(SAMPLE_RESUME)).layout()
        kinds = [p.kind for p in layout.placements]
        self.assertEqual(
            kinds,
            ["name", "contact", "heading", "summary", "heading", "role", "bullet", "bullet",
             "heading", "degree", "heading", "skills"],
        )
        self.assertEqual(layout.page_count, 1)
        self.assertEqual(layout.placements[0].y, MARGIN)

    def test_pagination_is_idempotent(self):
        many_jobs = [dict(SAMPLE_RESUME["workExperience"][0], jobTitle=f"Engineer {i}") for i in range(25)]
        generator = PdfDocxGenerator(Resume.model_validate(resume_payload(workExperience=many_jobs)))

        first = generator.layout()
        second = generator.layout()

        self.assertGreater(first.page_count, 1)
        self.assertEqual(first.page_count, second.page_count)
        self.assertEqual(first.placements, second.placements)

    def test_blocks_never_cross_the_bottom_margin(self):
        many_jobs = [dict(SAMPLE_RESUME["workExperience"][0], jobTitle=f"Engineer {i}") for i in range(25)]
        page_height = 841.89
        layout = PdfDocxGenerator(Resume.model_validate(resume_payload(workExperience=many_jobs))).layout()

        for placement in layout.placements:
            if placement.kind == "bullet":
                self.assertLessEqual(
                    placement.y + placement.line_count * BODY_LINE_HEIGHT,
                    page_height - MARGIN,
                )

    def test_long_bullet_wraps_and_breaks_page_once(self):
        resume = _single_bullet_resume()
        self.assertEqual(len(LONG_RESPONSIBILITY), 200)

        # Measure where the bullet lands when the page is effectively unlimited.
        unbounded = PdfDocxGenerator(resume, page_size=(NARROW_PAGE_WIDTH, 2000)).layout()
        bullet = next(p for p in unbounded.placements if p.kind == "bullet")
        self.assertEqual(bullet.page, 1)
        self.assertGreaterEqual(bullet.line_count, 4)

        # Shrink the page so the wrapped bullet overflows by a few points.
        page_height = bullet.y + bullet.line_count * BODY_LINE_HEIGHT + MARGIN - 6
        layout = PdfDocxGenerator(resume, page_size=(NARROW_PAGE_WIDTH, page_height)).layout()

        index = next(i for i, p in enumerate(layout.placements) if p.kind == "bullet")
        moved = layout.placements[index]
        self.assertEqual(layout.page_count, 2)
        self.assertEqual(moved.page, 2)
        self.assertEqual(moved.y, MARGIN)
        self.assertEqual(moved.line_count, bullet.line_count)
        self.assertTrue(all(p.page == 1 for p in layout.placements[:index]))
        self.assertTrue(all(p.page == 2 for p in layout.placements[index:]))


class TestLongContent(unittest.TestCase):

    def test_wrap_breaks_words_wider_than_the_line(self):
        url = "https://github.com/janedoe/" + "a" * 150
        surface = PdfCanvasSurface(io.BytesIO())
        surface.set_font(FONT_REGULAR, 10)
        width = surface.page_width - 2 * MARGIN - BULLET_INDENT

        lines = surface.wrap(f"Published tooling at {url}", width)

        self.assertGreater(len(lines), 1)
        for line in lines:
            self.assertLessEqual(stringWidth(line, FONT_REGULAR, 10), width)
        self.assertEqual("".join(lines).replace(" ", ""), f"Publishedtoolingat{url}")

    def test_bullet_with_long_url_stays_inside_the_margins(self):
        url = "https://github.com/janedoe/" + "a" * 150
        resume = Resume.model_validate(resume_payload(workExperience=[
            dict(SAMPLE_RESUME["workExperience"][0], responsibilities=[f"Maintains {url}"]),
        ]))
        drawn = []
        original_draw_text = PdfCanvasSurface.draw_text

        def record_draw_text(surface, text, x, y):
            drawn.append((text, x, surface.font_name, surface.font_size, surface.page_width))
            original_draw_text(surface, text, x, y)

        with patch.object(PdfCanvasSurface, "draw_text", record_draw_text):
            layout = PdfDocxGenerator(resume).layout()

        bullet = next(p for p in layout.placements if p.kind == "bullet")
        self.assertGreater(bullet.line_count, 1)
        bullet_lines = [d for d in drawn if d[1] == MARGIN + BULLET_INDENT]
        self.assertEqual(len(bullet_lines), bullet.line_count)
        for text, x, font_name, font_size, page_width in bullet_lines:
            self.assertLessEqual(x + stringWidth(text, font_name, font_size), page_width - MARGIN)

    def test_paragraph_taller_than_a_page_logs_warning(self):
        resume = Resume.model_validate(resume_payload(summary=" ".join(["experience"] * 3000)))

        with self.assertLogs(level="WARNING") as logs:
            layout = PdfDocxGenerator(resume).layout()

        summary = next(p for p in layout.placements if p.kind == "summary")
        self.assertEqual(summary.page, 2)
        self.assertEqual(summary.y, MARGIN)
        self.assertTrue(any("taller than a page" in message for message in logs.output))

    def test_regular_resume_logs_no_warning(self):
        with patch("core.pdf_docx_generator.logging.warning") as warning:
            PdfDocxGenerator(Resume.model_validate(SAMPLE_RESUME)).layout()
        warning.assert_not_called()


class TestPdfExport(unittest.TestCase):

    def setUp(self):
        self.resume = Resume.model_validate(SAMPLE_RESUME)

    def test_pdf_bytes(self):
        generator = PdfDocxGenerator(self.resume)
        pdf_bytes = generator.to_pdf_bytes()

        self.assertTrue(pdf_bytes.startswith(b"%PDF"))
        self.assertEqual(generator.last_layout.page_count, 1)

    def test_drawing_failure_raises_export_error(self):
        generator = PdfDocxGenerator(self.resume)
        with patch("core.pdf_docx_generator.PdfCanvasSurface.draw_right_text", side_effect=RuntimeError("font missing")):
            with self.assertRaises(ExportError) as ctx:
                generator.to_pdf_bytes()
        self.assertEqual(ctx.exception.file_format, "pdf")
        self.assertIn("font missing", str(ctx.exception))
        self.assertIsNone(generator.last_layout)


class TestDocxExport(unittest.TestCase):

    def test_docx_content(self):
        docx_bytes = PdfDocxGenerator(Resume.model_validate(SAMPLE_RESUME)).to_docx_bytes()
        doc = Document(io.BytesIO(docx_bytes))

        paragraphs = [p.text for p in doc.paragraphs]
        self.assertEqual(paragraphs[0], "Jane Q Doe")
        self.assertEqual(paragraphs[1], "555-0100 | jane@example.com | linkedin.com/in/janedoe")
        for heading in ("SUMMARY", "WORK EXPERIENCE", "EDUCATION", "SKILLS"):
            self.assertIn(heading, paragraphs)
        self.assertIn("Mentored four junior engineers.", paragraphs)
        self.assertIn("Python, SQL, AWS", paragraphs)

        cells = [cell.text for table in doc.tables for cell in table.rows[0].cells]
        self.assertIn("Senior Software Engineer", cells)
        self.assertIn("2021 - Present", cells)
        self.assertIn("State University", cells)


if __name__ == '__main__':
    unittest.main()
