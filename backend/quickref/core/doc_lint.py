"""Documentation Lint — integrity checks for the cheat sheet Markdown.

Invariants:
    - Every rule is a pure function Document -> list[LintIssue]
    - Issues sorted by (line, rule) so reports are stable across runs
    - LintReport.ok is True iff no ERROR-severity issue exists
    - Only python/py, json and toml blocks are syntax-checked; other languages pass

Design Decisions:
    - Rules registered explicitly in RULES (no discovery): adding a rule is one line
    - Docs-link rule parametrized by the live app's docs/redoc URLs so the document
      and the running service cannot drift apart
"""

import ast
import json
import tomllib
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable
from urllib.parse import urlparse

from quickref.core.domain_types import LintSeverity, Section
from quickref.core.markdown_doc import (
    CodeBlock, Document, is_delimiter_row,
)

REQUIRED_SECTIONS: tuple[str, ...] = tuple(s.value for s in Section)


@dataclass
class LintIssue:
    rule: str
    line: int
    message: str
    severity: LintSeverity = LintSeverity.ERROR

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "line": self.line,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass
class LintConfig:
    docs_url: str = "/docs"
    redoc_url: str = "/redoc"
    required_sections: tuple[str, ...] = REQUIRED_SECTIONS


@dataclass
class LintReport:
    issues: list[LintIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == LintSeverity.ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == LintSeverity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "issues": [i.to_dict() for i in self.issues],
        }


# ─── Code block syntax ──────────────────────────────────────────

def _python_error(code: str) -> str | None:
    try:
        ast.parse(code)
    except SyntaxError as e:
        return f"line {e.lineno}: {e.msg}"
    return None


def _json_error(code: str) -> str | None:
    try:
        json.loads(code)
    except json.JSONDecodeError as e:
        return f"line {e.lineno}: {e.msg}"
    return None


def _toml_error(code: str) -> str | None:
    try:
        tomllib.loads(code)
    except tomllib.TOMLDecodeError as e:
        return str(e)
    return None


SYNTAX_CHECKERS: dict[str, Callable[[str], str | None]] = {
    "python": _python_error,
    "py": _python_error,
    "json": _json_error,
    "toml": _toml_error,
}


def check_block_syntax(block: CodeBlock) -> str | None:
    """Return a syntax error description, or None when the block is well formed."""
    checker = SYNTAX_CHECKERS.get(block.language)
    if checker is None:
        return None
    return checker(block.code)


def rule_unclosed_fence(doc: Document, config: LintConfig) -> list[LintIssue]:
    if doc.unclosed_fence_line is None:
        return []
    return [LintIssue(
        "unclosed-fence", doc.unclosed_fence_line,
        "Code fence opened here is never closed",
    )]


def rule_code_syntax(doc: Document, config: LintConfig) -> list[LintIssue]:
    issues = []
    for block in doc.code_blocks:
        error = check_block_syntax(block)
        if error:
            issues.append(LintIssue(
                "code-syntax", block.line,
                f"Invalid {block.language} in code block ({error})",
            ))
    return issues


def rule_empty_code_block(doc: Document, config: LintConfig) -> list[LintIssue]:
    return [
        LintIssue(
            "empty-code-block", block.line, "Code block is empty",
            LintSeverity.WARNING,
        )
        for block in doc.code_blocks if not block.code.strip()
    ]


# ─── Headings ───────────────────────────────────────────────────

def rule_single_h1(doc: Document, config: LintConfig) -> list[LintIssue]:
    h1s = [h for h in doc.headings if h.level == 1]
    if len(h1s) == 1:
        return []
    if not h1s:
        return [LintIssue("single-h1", 1, "Document has no top-level (#) heading")]
    return [
        LintIssue("single-h1", h.line, f"Extra top-level heading '{h.title}'")
        for h in h1s[1:]
    ]


def rule_heading_increment(doc: Document, config: LintConfig) -> list[LintIssue]:
    issues = []
    previous = 0
    for heading in doc.headings:
        if previous and heading.level > previous + 1:
            issues.append(LintIssue(
                "heading-increment", heading.line,
                f"Heading level jumps from h{previous} to h{heading.level}",
            ))
        previous = heading.level
    return issues


def rule_duplicate_heading(doc: Document, config: LintConfig) -> list[LintIssue]:
    seen: set[tuple[int, str]] = set()
    issues = []
    for heading in doc.headings:
        key = (heading.level, heading.title.casefold())
        if key in seen:
            issues.append(LintIssue(
                "duplicate-heading", heading.line,
                f"Duplicate h{heading.level} heading '{heading.title}'",
                LintSeverity.WARNING,
            ))
        seen.add(key)
    return issues


# ─── Tables & lists ─────────────────────────────────────────────

def rule_table_columns(doc: Document, config: LintConfig) -> list[LintIssue]:
    issues = []
    for table in doc.tables:
        if not table.has_delimiter:
            issues.append(LintIssue(
                "table-columns", table.line,
                "Table is missing a delimiter row (|---|) after the header",
            ))
            continue
        width = len(table.header)
        for cells, line in zip(table.rows[1:], table.row_lines[1:]):
            if len(cells) != width:
                issues.append(LintIssue(
                    "table-columns", line,
                    f"Row has {len(cells)} cells; header has {width}",
                ))
        for cells, line in zip(table.rows[2:], table.row_lines[2:]):
            if is_delimiter_row(cells):
                issues.append(LintIssue(
                    "table-columns", line, "Unexpected second delimiter row",
                ))
    return issues


def rule_list_markers(doc: Document, config: LintConfig) -> list[LintIssue]:
    issues = []
    for block in doc.lists:
        markers: dict[int, str] = {}
        for item in block.items:
            kind = "ordered" if item.marker[0].isdigit() else item.marker
            expected = markers.setdefault(item.indent, kind)
            if kind != expected:
                issues.append(LintIssue(
                    "list-marker", item.line,
                    f"List marker '{item.marker}' differs from '{expected}' "
                    "used earlier in the same list",
                    LintSeverity.WARNING,
                ))
    return issues


# ─── Links & sections ───────────────────────────────────────────

def rule_docs_link(doc: Document, config: LintConfig) -> list[LintIssue]:
    issues = []
    for link in doc.links:
        path = urlparse(link.target).path.rstrip("/")
        leaf = path.rsplit("/", 1)[-1]
        if leaf == "docs" and path != config.docs_url.rstrip("/"):
            expected = config.docs_url
        elif leaf == "redoc" and path != config.redoc_url.rstrip("/"):
            expected = config.redoc_url
        else:
            continue
        issues.append(LintIssue(
            "docs-link", link.line,
            f"Link '{link.target}' does not match docs convention '{expected}'",
        ))
    return issues


def rule_required_sections(doc: Document, config: LintConfig) -> list[LintIssue]:
    return [
        LintIssue(
            "required-section", 1, f"Missing required section '{title}'",
        )
        for title in config.required_sections if doc.section(title) is None
    ]


def rule_section_code(doc: Document, config: LintConfig) -> list[LintIssue]:
    return [
        LintIssue(
            "section-code", section.line,
            f"Section '{section.title}' has no code block",
            LintSeverity.WARNING,
        )
        for section in doc.sections if not section.code_blocks
    ]


RULES: list[Callable[[Document, LintConfig], list[LintIssue]]] = [
    rule_unclosed_fence,
    rule_code_syntax,
    rule_empty_code_block,
    rule_single_h1,
    rule_heading_increment,
    rule_duplicate_heading,
    rule_table_columns,
    rule_list_markers,
    rule_docs_link,
    rule_required_sections,
    rule_section_code,
]


def lint_document(
    doc: Document,
    docs_url: str = "/docs",
    redoc_url: str = "/redoc",
    required_sections: tuple[str, ...] = REQUIRED_SECTIONS,
) -> LintReport:
    """Run every rule against `doc` and return the sorted report."""
    config = LintConfig(
        docs_url=docs_url, redoc_url=redoc_url,
        required_sections=required_sections,
    )
    issues: list[LintIssue] = []
    for rule in RULES:
        issues.extend(rule(doc, config))
    issues.sort(key=lambda i: (i.line, i.rule))
    return LintReport(issues=issues)


def summarize(report: LintReport) -> dict[str, int]:
    """Issue counts per rule, for CLI and API summaries."""
    return dict(Counter(i.rule for i in report.issues))
