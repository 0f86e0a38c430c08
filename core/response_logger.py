import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, TypedDict

import pandas as pd


class AgentResponse(TypedDict):
    """Stores detailed information about one gateway call."""
    timestamp: str
    operation: str
    agent_name: str
    execution_time_ms: float
    status: str  # "success", "error"
    error_message: str
    prompt_used: str
    raw_llm_response: str


class ResponseLogger:
    """
    Records every AI gateway call (prompt, raw response, status, timing) and
    writes them to JSON files and an HTML performance report.

    Purely diagnostic: nothing recorded here is ever read back into a session.
    """

    def __init__(self, output_dir: str = "output"):
        """
        Args:
            output_dir: Directory to store response logs and reports
        """
        self.output_dir = Path(output_dir)
        (self.output_dir / "agent_responses").mkdir(parents=True, exist_ok=True)
        (self.output_dir / "reports").mkdir(parents=True, exist_ok=True)
        self.responses: List[AgentResponse] = []

    def record(
        self,
        operation: str,
        agent,
        started_at: datetime,
        error: Optional[Exception] = None,
    ) -> AgentResponse:
        """Appends a record for a finished call made through ``agent``."""
        response = AgentResponse(
            timestamp=datetime.now().isoformat(),
            operation=operation,
            agent_name=type(agent).__name__,
            execution_time_ms=(datetime.now() - started_at).total_seconds() * 1000,
            status="error" if error else "success",
            error_message=str(error) if error else "",
            prompt_used=getattr(agent, "last_prompt", ""),
            raw_llm_response=getattr(agent, "last_response", ""),
        )
        self.responses.append(response)
        return response

    def save_session_responses(self, filename: Optional[str] = None) -> str:
        """
        Saves every recorded call to one JSON file.

        Returns:
            Path to the saved file
        """
        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"session_responses_{timestamp}.json"

        filepath = self.output_dir / "agent_responses" / filename
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump({"responses": self.responses}, f, indent=2, ensure_ascii=False)

        logging.info(f"Session responses saved to: {filepath}")
        return str(filepath)

    def analyze_agent_responses(self) -> Dict[str, Any]:
        """Summarizes recorded calls: counts, total time and error messages."""
        analysis = {
            "total_calls": len(self.responses),
            "successful_calls": 0,
            "failed_calls": 0,
            "total_execution_time_ms": 0.0,
            "errors": [],
        }

        for response in self.responses:
            analysis["total_execution_time_ms"] += response["execution_time_ms"]
            if response["status"] == "success":
                analysis["successful_calls"] += 1
            else:
                analysis["failed_calls"] += 1
                analysis["errors"].append(f"{response['operation']}: {response['error_message']}")

        return analysis

    def generate_performance_report(self) -> str:
        """
        Writes an HTML report with per-operation timing statistics.

        Returns:
            Path to the generated report
        """
        df = pd.DataFrame(
            self.responses,
            columns=["operation", "status", "execution_time_ms", "error_message"],
        )
        if df.empty:
            summary = pd.DataFrame(columns=["operation", "calls", "failures", "mean_ms", "max_ms"])
        else:
            summary = (
                df.assign(failed=df["status"] != "success")
                .groupby("operation")
                .agg(
                    calls=("status", "size"),
                    failures=("failed", "sum"),
                    mean_ms=("execution_time_ms", "mean"),
                    max_ms=("execution_time_ms", "max"),
                )
                .reset_index()
            )

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_path = self.output_dir / "reports" / f"performance_report_{timestamp}.html"

        html_report = f"""
        <html>
        <head>
            <title>AI Resume Studio - Performance Report</title>
            <style>
                body {{ font-family: Arial, sans-serif; margin: 20px; }}
                table {{ border-collapse: collapse; width: 100%; }}
                th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
                th {{ background-color: #f2f2f2; }}
            </style>
        </head>
        <body>
            <h1>AI Resume Studio - Performance Report</h1>
            <p>Generated: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}</p>
            <h2>Per-operation summary</h2>
            {summary.to_html(index=False, float_format=lambda v: f"{v:.2f}")}
            <h2>All calls</h2>
            {df.to_html(index=False)}
        </body>
        </html>
        """

        with open(report_path, 'w', encoding='utf-8') as f:
            f.write(html_report)

        logging.info(f"Performance report generated: {report_path}")
        return str(report_path)
