# server.py
import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from agents import MarkdownFormattingAgent
from core.ai_gateway import AIGateway
from core.config import Settings
from core.exceptions import ExportError, ExtractionError, PreconditionError, SessionBusyError
from core.gemini_client import GeminiClient
from core.models import AtsResult, Resume
from core.session import ResumeSession, export_failure_message, extraction_failure_message


class ParseResumeRequest(BaseModel):
    """Request model for structuring pasted resume text."""
    resume_text: str


class ModifyResumeRequest(BaseModel):
    instruction: str


class ScoreResumeRequest(BaseModel):
    job_description: str


def build_session(settings: Settings) -> ResumeSession:
    gemini_client = GeminiClient(
        api_key=settings.api_key,
        model_name=settings.model_name,
        max_attempts=settings.max_attempts,
    )
    return ResumeSession(AIGateway(gemini_client))


def create_app(session: Optional[ResumeSession] = None) -> FastAPI:
    """
    Builds the API around one resume session.

    Without an explicit session the settings are read from the environment;
    a missing API key raises ``ConfigurationError`` and the server does not start.
    """
    if session is None:
        settings = Settings.from_env()
        logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(message)s')
        session = build_session(settings)

    app = FastAPI(
        title="AI Resume Studio API",
        description="""
        Paste a resume, structure it with Gemini, enhance or modify it, score it
        against a job description and export it as PDF or DOCX.

        Only one action runs at a time; a request made while another action is
        in progress is answered with 409.
        """,
        version="1.0.0",
    )
    app.state.session = session

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Error mapping ---

    @app.exception_handler(PreconditionError)
    async def precondition_error_handler(request: Request, exc: PreconditionError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(SessionBusyError)
    async def busy_error_handler(request: Request, exc: SessionBusyError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(ExtractionError)
    async def extraction_error_handler(request: Request, exc: ExtractionError):
        return JSONResponse(status_code=502, content={"detail": extraction_failure_message(exc)})

    @app.exception_handler(ExportError)
    async def export_error_handler(request: Request, exc: ExportError):
        return JSONResponse(status_code=500, content={"detail": export_failure_message(exc)})

    # --- API Endpoints ---

    @app.get("/health")
    async def health():
        return {"message": "Health OK", "busy": session.busy}

    @app.get("/resume", response_model=Resume)
    async def get_resume() -> Resume:
        if session.resume is None:
            raise HTTPException(status_code=404, detail="No resume has been parsed yet.")
        return session.resume

    @app.get("/resume/markdown", response_class=PlainTextResponse)
    async def get_resume_markdown() -> str:
        if session.resume is None:
            raise HTTPException(status_code=404, detail="No resume has been parsed yet.")
        return MarkdownFormattingAgent().run(session.resume)

    @app.post("/resume/parse", response_model=Resume)
    async def parse_resume(request: ParseResumeRequest) -> Resume:
        return await asyncio.to_thread(session.parse, request.resume_text)

    @app.post("/resume/enhance", response_model=Resume)
    async def enhance_resume() -> Resume:
        return await asyncio.to_thread(session.enhance)

    @app.post("/resume/modify", response_model=Resume)
    async def modify_resume(request: ModifyResumeRequest) -> Resume:
        return await asyncio.to_thread(session.modify, request.instruction)

    @app.post("/resume/score", response_model=AtsResult)
    async def score_resume(request: ScoreResumeRequest) -> AtsResult:
        return await asyncio.to_thread(session.check_score, request.job_description)

    @app.delete("/resume/score", status_code=204)
    async def dismiss_score():
        session.dismiss_score()
        return Response(status_code=204)

    @app.get("/resume/export/pdf")
    async def export_pdf():
        filename, content = await asyncio.to_thread(session.export_pdf)
        return Response(
            content=content,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/resume/export/docx")
    async def export_docx():
        filename, content = await asyncio.to_thread(session.export_docx)
        return Response(
            content=content,
            media_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


# Local development runner
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:create_app", factory=True, host="127.0.0.1", port=8000)
