"""Shipped Content — access to the bundled cheat sheet document.

Invariants:
    - The cheat sheet is read from package data, never from the working directory
    - load_cheatsheet() is cached: the parsed Document is built once per process
"""

from functools import lru_cache
from importlib import resources

from quickref.core.markdown_doc import Document, parse_document

CHEATSHEET_RESOURCE = "cheatsheet.md"


def cheatsheet_text() -> str:
    return (
        resources.files("quickref.content")
        .joinpath(CHEATSHEET_RESOURCE)
        .read_text(encoding="utf-8")
    )


@lru_cache
def load_cheatsheet() -> Document:
    return parse_document(cheatsheet_text())
