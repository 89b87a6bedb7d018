"""Cheat Sheet Schemas — response shapes for the parsed document and its lint report."""

from pydantic import BaseModel


class CodeBlockOut(BaseModel):
    language: str
    line: int
    code: str


class SectionOut(BaseModel):
    title: str
    line: int
    prose: str
    code_blocks: list[CodeBlockOut]


class CheatsheetOut(BaseModel):
    title: str | None
    section_count: int
    sections: list[SectionOut]


class LintIssueOut(BaseModel):
    rule: str
    line: int
    message: str
    severity: str


class LintReportOut(BaseModel):
    ok: bool
    error_count: int
    warning_count: int
    docs_url: str
    redoc_url: str
    issues: list[LintIssueOut]
