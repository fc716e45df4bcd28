"""
Structural checks for final-state files.

Provides checks for:
- File header present exactly once, before any event
- Declared particle counts matching the particle lines that follow
- Particle indices running 0..n-1 within each event
- Cross-section footer present exactly once, after the last event
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .io.final_state import iter_records


@dataclass
class CheckIssue:
    """A single structural issue found in a file."""

    level: str  # "error", "warning"
    line_number: Optional[int]  # None for file-level issues
    message: str

    def __str__(self) -> str:
        loc = f"line {self.line_number}" if self.line_number is not None else "file"
        return f"[{self.level.upper()}] {loc}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "line_number": self.line_number,
            "message": self.message,
        }


@dataclass
class CheckReport:
    """Summary of all structural issues."""

    issues: list[CheckIssue] = field(default_factory=list)
    n_events: int = 0
    n_particles: int = 0

    @property
    def n_errors(self) -> int:
        return sum(1 for i in self.issues if i.level == "error")

    @property
    def n_warnings(self) -> int:
        return sum(1 for i in self.issues if i.level == "warning")

    @property
    def is_valid(self) -> bool:
        return self.n_errors == 0

    def __str__(self) -> str:
        lines = [
            f"Check: {self.n_events} events, {self.n_particles} particles, "
            f"{self.n_errors} errors, {self.n_warnings} warnings"
        ]
        for issue in self.issues[:50]:  # Cap output
            lines.append(f"  {issue}")
        if len(self.issues) > 50:
            lines.append(f"  ... and {len(self.issues) - 50} more")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "n_events": self.n_events,
            "n_particles": self.n_particles,
            "n_errors": self.n_errors,
            "n_warnings": self.n_warnings,
            "is_valid": self.is_valid,
            "issues": [i.to_dict() for i in self.issues],
        }


class _EventState:
    def __init__(self, line_number: int, number: int, label: str, n_declared: int):
        self.line_number = line_number
        self.number = number
        self.label = label
        self.n_declared = n_declared
        self.n_seen = 0


def _close_event(ev: Optional[_EventState], report: CheckReport) -> None:
    if ev is None:
        return
    if ev.n_seen != ev.n_declared:
        report.issues.append(
            CheckIssue(
                "error",
                ev.line_number,
                f"event {ev.number} declares {ev.n_declared} particles but has {ev.n_seen}",
            )
        )


def check_file(path: Union[str, Path]) -> CheckReport:
    """Check the framing and counts of a final-state file.

    Malformed lines raise ``ValueError`` from the tokenizer; everything else
    is reported as an issue.
    """
    report = CheckReport()
    n_file_headers = 0
    footer_line: Optional[int] = None
    current: Optional[_EventState] = None
    labels: set[str] = set()
    last_number: Optional[int] = None

    for rec in iter_records(path):
        if footer_line is not None and rec.kind not in ("comment", "footer"):
            report.issues.append(
                CheckIssue("error", rec.line_number, f"{rec.kind} record after cross-section footer")
            )

        if rec.kind == "file_header":
            n_file_headers += 1
            if n_file_headers > 1:
                report.issues.append(CheckIssue("error", rec.line_number, "repeated file header"))
            elif report.n_events:
                report.issues.append(CheckIssue("error", rec.line_number, "file header after first event"))
            continue

        if rec.kind == "event":
            _close_event(current, report)
            values = rec.data
            label, n_declared = "", 0
            for key, value in values.items():
                if key.startswith("N_"):
                    label = key[2:]
                    n_declared = int(value)
            number = int(values.get("Event", "0"))
            if not label:
                report.issues.append(CheckIssue("error", rec.line_number, "event header without N_<label> count"))
            labels.add(label)
            if last_number is not None and number <= last_number:
                report.issues.append(
                    CheckIssue("warning", rec.line_number, f"event number {number} does not increase")
                )
            last_number = number
            current = _EventState(rec.line_number, number, label, n_declared)
            report.n_events += 1
            continue

        if rec.kind == "particle":
            report.n_particles += 1
            if current is None:
                if footer_line is None:
                    report.issues.append(CheckIssue("error", rec.line_number, "particle line before first event header"))
                continue
            if rec.data["index"] != current.n_seen:
                report.issues.append(
                    CheckIssue(
                        "error",
                        rec.line_number,
                        f"particle index {rec.data['index']} out of sequence (expected {current.n_seen})",
                    )
                )
            current.n_seen += 1
            continue

        if rec.kind == "footer":
            _close_event(current, report)
            current = None
            if footer_line is not None:
                report.issues.append(CheckIssue("error", rec.line_number, "repeated cross-section footer"))
            footer_line = rec.line_number

    _close_event(current, report)

    if n_file_headers == 0:
        report.issues.append(CheckIssue("error", None, "missing file header"))
    if footer_line is None:
        report.issues.append(CheckIssue("error", None, "missing cross-section footer (writer not closed?)"))
    if len(labels) > 1:
        report.issues.append(
            CheckIssue("warning", None, f"mixed record labels: {', '.join(sorted(labels))}")
        )
    return report
