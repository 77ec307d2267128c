"""HTML rendering for quiz pages and the index page.

Pages are assembled from plain f-strings. Every user-supplied string passes
through :func:`_text`, which HTML-escapes it unless ``escape_html`` is off, in
which case content is inserted verbatim.
"""

from __future__ import annotations

import logging
from html import escape
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .config import DEFAULT_SITE_TITLE
from .manifest import IndexEntry

_LOGGER = logging.getLogger("quiz_site.build")

INDEX_PAGE = "index.html"
STYLESHEET = "styles.css"
SCRIPT = "script.js"
CORRECT_CLASS = "correct-answer"


def render_quiz_page(
    document: Any,
    *,
    escape_html: bool = True,
    root: str = "",
    source: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """Render one quiz document, or return ``None`` when it must be skipped.

    ``root`` is the relative prefix from the page back to the site root
    (``""`` for top-level pages, ``"../"`` one directory down).
    """

    log = logger or _LOGGER
    context = {"source": source}

    if (
        not isinstance(document, Mapping)
        or "title" not in document
        or "questions" not in document
    ):
        log.warning("Skipping invalid JSON structure", extra=context)
        return None

    title = document["title"]
    questions = document["questions"]
    if not title or not isinstance(questions, list):
        log.warning("Skipping file due to missing fields", extra=context)
        return None

    cards = [
        _render_card(question, escape_html=escape_html)
        for question in _renderable_questions(questions)
    ]
    title_text = _text(title, escape_html)
    body = [
        f'    <header><a href="{root}{INDEX_PAGE}">{title_text}</a></header>',
        "    <main>",
        *cards,
        "    </main>",
    ]
    return _page_shell(title_text, body, root=root)


def render_index_page(
    entries: Iterable[IndexEntry],
    *,
    site_title: str = DEFAULT_SITE_TITLE,
    escape_html: bool = True,
) -> str:
    """Render the navigation page linking every generated quiz page."""

    items = [
        '        <li><a href="{0}">{1}</a></li>'.format(
            _attr(entry.page_name, escape_html),
            _text(entry.title, escape_html),
        )
        for entry in entries
    ]
    title_text = _text(site_title, escape_html)
    body = [
        f"    <header>{title_text}</header>",
        "    <main>",
        "      <nav>",
        f'        <a href="{INDEX_PAGE}">Home</a>',
        "      </nav>",
        "      <ul>",
        *items,
        "      </ul>",
        "    </main>",
    ]
    return _page_shell(title_text, body, root="")


def page_root(page_name: str) -> str:
    """Return the relative prefix from ``page_name`` back to the site root."""

    depth = page_name.count("/")
    return "../" * depth


def _renderable_questions(questions: Sequence[Any]) -> List[Mapping[str, Any]]:
    return [
        question
        for question in questions
        if isinstance(question, Mapping)
        and isinstance(question.get("answers"), list)
    ]


def _render_card(question: Mapping[str, Any], *, escape_html: bool) -> str:
    lines = [
        '      <div class="card">',
        f"        <h2>{_text(question.get('question'), escape_html)}</h2>",
        "        <ul>",
    ]
    for answer in question["answers"]:
        if not isinstance(answer, Mapping):
            continue
        marker = f' class="{CORRECT_CLASS}"' if answer.get("correct") else ""
        text = _text(answer.get("answer"), escape_html)
        lines.append(f"          <li{marker}>{text}</li>")
    lines.extend(["        </ul>", "      </div>"])
    return "\n".join(lines)


def _page_shell(title: str, body: Sequence[str], *, root: str) -> str:
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "  <head>",
        '    <meta charset="UTF-8">',
        '    <meta name="viewport" '
        'content="width=device-width, initial-scale=1.0">',
        f'    <link rel="stylesheet" href="{root}{STYLESHEET}">',
        f"    <title>{title}</title>",
        "  </head>",
        "  <body>",
        *body,
        f'    <script src="{root}{SCRIPT}"></script>',
        "  </body>",
        "</html>",
    ]
    return "\n".join(lines) + "\n"


def _text(value: Any, escape_html: bool) -> str:
    if value is None:
        return ""
    raw = value if isinstance(value, str) else str(value)
    return escape(raw, quote=False) if escape_html else raw


def _attr(value: str, escape_html: bool) -> str:
    return escape(value, quote=True) if escape_html else value


__all__ = [
    "CORRECT_CLASS",
    "INDEX_PAGE",
    "SCRIPT",
    "STYLESHEET",
    "page_root",
    "render_index_page",
    "render_quiz_page",
]
