import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import MagicMock, patch

from core.ai_gateway import AIGateway
from core.session import ResumeSession
from main import build_parser, run

from sample_data import SAMPLE_ATS_RESULT, SAMPLE_RESUME


class TestCli(unittest.TestCase):
    """Runs the CLI pipeline against a mocked Gemini client and a temp directory."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.resume_path = self._write("resume.txt", "Jane Q Doe\njane@example.com\nAcme Corp")
        self.output_dir = os.path.join(self.temp_dir.name, "output")

        self.mock_gemini_client = MagicMock()
        self.mock_gemini_client.generate_json.return_value = json.dumps(SAMPLE_RESUME)
        self.session = ResumeSession(AIGateway(self.mock_gemini_client))

    def _write(self, name, text):
        path = os.path.join(self.temp_dir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def _run(self, *argv):
        args = build_parser().parse_args(["--resume", self.resume_path, *argv])
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            exit_code = run(args, self.session, self.output_dir)
        return exit_code, stdout.getvalue()

    def test_parse_and_export(self):
        exit_code, output = self._run("--docx", "--save-json")

        self.assertEqual(exit_code, 0)
        self.assertIn("# Jane Q Doe", output)
        self.assertEqual(
            sorted(os.listdir(self.output_dir)),
            ["Jane_Q_Doe_Resume.docx", "Jane_Q_Doe_Resume.json", "Jane_Q_Doe_Resume.pdf"],
        )
        with open(os.path.join(self.output_dir, "Jane_Q_Doe_Resume.json"), encoding="utf-8") as f:
            self.assertEqual(json.load(f), SAMPLE_RESUME)

    def test_score_is_printed(self):
        job_path = self._write("job.txt", "Backend engineer, Python, Docker")
        self.mock_gemini_client.generate_json.side_effect = [
            json.dumps(SAMPLE_RESUME),
            json.dumps(SAMPLE_ATS_RESULT),
        ]

        exit_code, output = self._run("--job-desc", job_path)

        self.assertEqual(exit_code, 0)
        self.assertIn("ATS score: 82/100 (fair)", output)
        self.assertIn("  - Mention Docker explicitly.", output)

    def test_extraction_failure_exits_without_files(self):
        self.mock_gemini_client.generate_json.return_value = "{oops"

        exit_code, _ = self._run()

        self.assertEqual(exit_code, 1)
        self.assertFalse(os.path.exists(self.output_dir))

    def test_pdf_failure_writes_no_files(self):
        with patch("core.pdf_docx_generator.PdfCanvasSurface.draw_right_text", side_effect=RuntimeError("font missing")):
            exit_code, _ = self._run("--docx")

        self.assertEqual(exit_code, 1)
        self.assertEqual(os.listdir(self.output_dir), [])
        self.assertEqual(self.session.last_error, "Failed to generate PDF. Error: font missing")

    def test_empty_modification_fails(self):
        exit_code, _ = self._run("--modify", "")
        self.assertEqual(exit_code, 1)
        self.assertEqual(self.session.last_error, "Please enter a modification prompt.")


if __name__ == '__main__':
    unittest.main()
