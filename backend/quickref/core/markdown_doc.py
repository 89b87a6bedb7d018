"""Markdown Document Model — parse the cheat sheet into headings, sections, code, links, tables.

Invariants:
    - Line numbers are 1-based and refer to the source text
    - Nothing inside a fenced code block is treated as a heading, link, list or table
    - A fence closes only on the same character with a run at least as long as the opener
    - Code blocks under ###+ headings belong to the enclosing ## section

Design Decisions:
    - Line-oriented regex parser over a full CommonMark library: the lint rules only
      need block structure, and exact line numbers are easier to keep this way
"""

import re
from dataclasses import dataclass, field

_FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_HEADING = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*))?$")
_CLOSING_HASHES = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
_LINK = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)")
_CODE_SPAN = re.compile(r"`[^`]*`")
_LIST_ITEM = re.compile(r"^(\s*)([-*+]|\d+[.)])[ \t]+\S")
_CELL_SPLIT = re.compile(r"(?<!\\)\|")
_DELIMITER_CELL = re.compile(r"^:?-+:?$")


@dataclass
class Heading:
    level: int
    title: str
    line: int


@dataclass
class CodeBlock:
    language: str
    info: str
    code: str
    line: int
    section: str | None = None


@dataclass
class Link:
    text: str
    target: str
    line: int


@dataclass
class Table:
    line: int
    rows: list[list[str]] = field(default_factory=list)
    row_lines: list[int] = field(default_factory=list)

    @property
    def header(self) -> list[str]:
        return self.rows[0] if self.rows else []

    @property
    def has_delimiter(self) -> bool:
        return len(self.rows) > 1 and is_delimiter_row(self.rows[1])


@dataclass
class ListItem:
    indent: int
    marker: str
    line: int


@dataclass
class ListBlock:
    line: int
    items: list[ListItem] = field(default_factory=list)


@dataclass
class Section:
    title: str
    line: int
    prose: str = ""
    code_blocks: list[CodeBlock] = field(default_factory=list)


@dataclass
class Document:
    title: str | None
    headings: list[Heading] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    code_blocks: list[CodeBlock] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    tables: list[Table] = field(default_factory=list)
    lists: list[ListBlock] = field(default_factory=list)
    unclosed_fence_line: int | None = None

    def section(self, title: str) -> Section | None:
        wanted = title.casefold()
        for section in self.sections:
            if section.title.casefold() == wanted:
                return section
        return None


def split_cells(line: str) -> list[str]:
    """Split a pipe table row into trimmed cells, ignoring the outer pipes."""
    inner = line.strip()
    if inner.startswith("|"):
        inner = inner[1:]
    if inner.endswith("|") and not inner.endswith("\\|"):
        inner = inner[:-1]
    return [cell.strip() for cell in _CELL_SPLIT.split(inner)]


def is_delimiter_row(cells: list[str]) -> bool:
    return bool(cells) and all(_DELIMITER_CELL.match(c) for c in cells)


def _heading_title(raw: str | None) -> str:
    if not raw:
        return ""
    return _CLOSING_HASHES.sub("", raw).strip()


def _is_fence_close(line: str, char: str, length: int) -> bool:
    stripped = line.strip()
    if len(line) - len(line.lstrip(" ")) > 3 or not stripped:
        return False
    run = len(stripped) - len(stripped.lstrip(char))
    return run >= length and stripped == char * run


def parse_document(text: str) -> Document:
    """Parse Markdown text into a Document."""
    doc = Document(title=None)
    current: Section | None = None
    prose: list[str] = []

    fence: tuple[str, int] | None = None
    block_lang = block_info = ""
    block_line = 0
    block_body: list[str] = []

    table: Table | None = None
    list_block: ListBlock | None = None

    def flush_section() -> None:
        if current is not None:
            current.prose = "\n".join(prose).strip()

    for lineno, line in enumerate(text.splitlines(), start=1):
        if fence is not None:
            if _is_fence_close(line, fence[0], fence[1]):
                block = CodeBlock(
                    language=block_lang, info=block_info,
                    code="\n".join(block_body), line=block_line,
                    section=current.title if current else None,
                )
                doc.code_blocks.append(block)
                if current is not None:
                    current.code_blocks.append(block)
                fence = None
            else:
                block_body.append(line)
            continue

        opener = _FENCE_OPEN.match(line)
        if opener and not (opener.group(1)[0] == "`" and "`" in opener.group(2)):
            table = None
            list_block = None
            run = opener.group(1)
            fence = (run[0], len(run))
            block_info = opener.group(2).strip()
            block_lang = block_info.split()[0].lower() if block_info else ""
            block_line = lineno
            block_body = []
            continue

        stripped = line.strip()

        if stripped.startswith("|"):
            if table is None:
                table = Table(line=lineno)
                doc.tables.append(table)
            table.rows.append(split_cells(stripped))
            table.row_lines.append(lineno)
        else:
            table = None

        item = _LIST_ITEM.match(line)
        if item:
            if list_block is None:
                list_block = ListBlock(line=lineno)
                doc.lists.append(list_block)
            list_block.items.append(ListItem(
                indent=len(item.group(1).expandtabs(4)),
                marker=item.group(2),
                line=lineno,
            ))
        elif not stripped or not line[:1].isspace():
            # blank lines and unindented text end a list; indented text continues an item
            list_block = None

        heading = _HEADING.match(line)
        if heading:
            level = len(heading.group(1))
            title = _heading_title(heading.group(2))
            doc.headings.append(Heading(level=level, title=title, line=lineno))
            if level == 1 and doc.title is None:
                doc.title = title
            if level <= 2:
                flush_section()
                prose = []
                current = None
                if level == 2:
                    current = Section(title=title, line=lineno)
                    doc.sections.append(current)
            elif current is not None:
                prose.append(title)
            continue

        for m in _LINK.finditer(_CODE_SPAN.sub("", line)):
            doc.links.append(Link(text=m.group(1), target=m.group(2), line=lineno))

        if current is not None:
            prose.append(line)

    if fence is not None:
        doc.unclosed_fence_line = block_line
    flush_section()
    return doc
