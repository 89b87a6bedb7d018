"""Docs & CORS — serves the shipped cheat sheet and its lint report.

Invariants:
    - The lint report uses the running app's docs_url/redoc_url as the link convention
    - Section lookup by title is case-insensitive; unknown title → 404
"""

from fastapi import APIRouter, Request

from quickref.core.content import load_cheatsheet
from quickref.core.doc_lint import lint_document
from quickref.core.errors import ResourceNotFoundError
from quickref.core.markdown_doc import Section
from quickref.schemas.cheatsheet import (
    CheatsheetOut, CodeBlockOut, LintReportOut, SectionOut,
)

router = APIRouter(prefix="/api/v1/cheatsheet", tags=["docs-cors"])


def _section_out(section: Section) -> SectionOut:
    return SectionOut(
        title=section.title,
        line=section.line,
        prose=section.prose,
        code_blocks=[
            CodeBlockOut(language=b.language, line=b.line, code=b.code)
            for b in section.code_blocks
        ],
    )


@router.get("/sections", response_model=CheatsheetOut)
async def list_sections():
    doc = load_cheatsheet()
    return CheatsheetOut(
        title=doc.title,
        section_count=len(doc.sections),
        sections=[_section_out(s) for s in doc.sections],
    )


@router.get("/sections/{title:path}", response_model=SectionOut)
async def get_section(title: str):
    section = load_cheatsheet().section(title)
    if section is None:
        raise ResourceNotFoundError("Section", title)
    return _section_out(section)


@router.get("/lint", response_model=LintReportOut)
async def lint_cheatsheet(request: Request):
    docs_url = request.app.docs_url or "/docs"
    redoc_url = request.app.redoc_url or "/redoc"
    report = lint_document(load_cheatsheet(), docs_url=docs_url, redoc_url=redoc_url)
    return LintReportOut(
        docs_url=docs_url, redoc_url=redoc_url, **report.to_dict(),
    )
