"""Core — pure logic shared by routes and the CLI (errors, security, document linting).

Invariants:
    - No FastAPI route objects defined here
    - Markdown parsing and linting perform no IO
"""
