import os
import sys
import logging
import argparse

from agents import MarkdownFormattingAgent
from core.ai_gateway import AIGateway
from core.config import Settings
from core.exceptions import ConfigurationError, ResumeStudioError
from core.gemini_client import GeminiClient
from core.pdf_docx_generator import resume_filename
from core.response_logger import ResponseLogger
from core.session import ResumeSession
from utils import load_text_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI Resume Studio CLI")
    parser.add_argument(
        "--resume",
        type=str,
        required=True,
        help="Path to the raw resume (plain text, or a PDF whose text layer is used)."
    )
    parser.add_argument(
        "--enhance",
        action="store_true",
        help="Rewrite the parsed resume to be more ATS-friendly."
    )
    parser.add_argument(
        "--modify",
        type=str,
        default=None,
        help="Free-text modification to apply, e.g. 'Make my experience sound more technical'."
    )
    parser.add_argument(
        "--job-desc",
        type=str,
        default=None,
        help="Path to a text file containing a job description to score against."
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save the generated resume files."
    )
    parser.add_argument(
        "--docx",
        action="store_true",
        help="Also export a DOCX next to the PDF."
    )
    parser.add_argument(
        "--save-json",
        action="store_true",
        help="Save the final structured resume as JSON."
    )
    parser.add_argument(
        "--log-responses",
        action="store_true",
        help="Record every AI call and write a performance report."
    )
    return parser


def run(args, session: ResumeSession, output_dir: str) -> int:
    """Runs parse, the optional AI steps and the export. Returns a process exit code."""
    # --- 1. Load Inputs ---
    logging.info("Loading inputs...")
    raw_resume = load_text_file(args.resume)
    job_description = None
    if args.job_desc:
        job_description = load_text_file(args.job_desc)
        if not job_description:
            logging.error(f"Could not read job description: {args.job_desc}")
            return 1

    # --- 2. AI steps ---
    try:
        session.parse(raw_resume)
        if args.enhance:
            session.enhance()
        if args.modify is not None:
            session.modify(args.modify)
        if job_description is not None:
            result = session.check_score(job_description)
            print(f"\nATS score: {result.score}/100 ({result.rating})")
            print(f"Strengths: {result.strengths}")
            for suggestion in result.suggestions:
                print(f"  - {suggestion}")
    except ResumeStudioError:
        logging.error(session.last_error)
        return 1

    print()
    print(MarkdownFormattingAgent().run(session.resume))

    # --- 3. Export ---
    os.makedirs(output_dir, exist_ok=True)
    try:
        exports = [session.export_pdf()]
        if args.docx:
            exports.append(session.export_docx())
    except ResumeStudioError:
        logging.error(session.last_error)
        return 1

    for filename, content in exports:
        path = os.path.join(output_dir, filename)
        with open(path, "wb") as f:
            f.write(content)
        logging.info(f"Saved {path}")

    if args.save_json:
        json_path = os.path.join(output_dir, resume_filename(session.resume.contact_info.name, "json"))
        with open(json_path, "w", encoding="utf-8") as f:
            f.write(session.resume.to_json())
        logging.info(f"Structured resume saved to: {json_path}")

    return 0


def main():
    """
    Main function to run the AI Resume Studio pipeline.
    """
    args = build_parser().parse_args()

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        logging.error(str(e))
        sys.exit(1)

    logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(message)s')
    output_dir = args.output_dir or settings.output_dir

    response_logger = None
    if args.log_responses:
        response_logger = ResponseLogger(output_dir=output_dir)
        logging.info("Response logging enabled.")

    gemini_client = GeminiClient(
        api_key=settings.api_key,
        model_name=settings.model_name,
        max_attempts=settings.max_attempts,
    )
    session = ResumeSession(AIGateway(gemini_client, response_logger=response_logger))

    exit_code = run(args, session, output_dir)

    if response_logger:
        response_logger.save_session_responses()
        response_logger.generate_performance_report()
        analysis = response_logger.analyze_agent_responses()
        logging.info(f"AI calls: {analysis['successful_calls']}/{analysis['total_calls']} succeeded")

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
