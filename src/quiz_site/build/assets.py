"""Static stylesheet and script shared by every generated page."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from quiz_site.core.files import write_text_file

from .pages import SCRIPT, STYLESHEET

_LOGGER = logging.getLogger("quiz_site.build")

_CSS = """\
body {
  font-family: 'Roboto', Arial, sans-serif;
  background-color: #f9f9f9;
  color: #333;
  margin: 0;
  padding: 20px;
}

header {
  background-color: #4caf50;
  padding: 20px;
  color: white;
  text-align: center;
  font-size: 1.8em;
}

header a {
  color: inherit;
  text-decoration: none;
}

main {
  max-width: 900px;
  margin: 20px auto;
  padding: 20px;
}

ul {
  list-style: none;
  padding: 0;
}

.card {
  background-color: #ffffff;
  box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
  padding: 20px;
  margin-bottom: 20px;
  border-radius: 8px;
  transition: transform 0.3s ease;
}

.card:hover {
  transform: translateY(-5px);
}

.card h2 {
  color: #4caf50;
}

.correct-answer {
  color: #2e7d32;
  font-weight: bold;
}
"""

_JS = """\
(function () {
  // script.js sits at the site root, so index.html is resolved against it.
  const script = document.currentScript;
  const home = script ? new URL("index.html", script.src).href : "index.html";

  document.addEventListener("DOMContentLoaded", function () {
    const navBar = document.createElement("nav");
    const link = document.createElement("a");
    link.href = home;
    link.textContent = "Home";
    navBar.appendChild(link);
    document.body.prepend(navBar);
  });
})();
"""


@dataclass(frozen=True)
class AssetOutcome:
    """Result of writing one static asset."""

    name: str
    path: Path
    written: bool
    reason: Optional[str] = None


def css_content() -> str:
    return _CSS


def js_content() -> str:
    return _JS


def emit_assets(
    output_dir: Path, *, logger: Optional[logging.Logger] = None
) -> tuple[AssetOutcome, ...]:
    """Write ``styles.css`` and ``script.js``, logging rather than raising."""

    log = logger or _LOGGER
    outcomes = []
    for name, content in ((STYLESHEET, css_content()), (SCRIPT, js_content())):
        target = output_dir / name
        try:
            write_text_file(target, content)
        except OSError as exc:
            log.error(
                "Error generating asset",
                extra={"asset": name, "path": str(target), "reason": str(exc)},
            )
            outcomes.append(
                AssetOutcome(
                    name=name, path=target, written=False, reason=str(exc)
                )
            )
            continue
        log.info("Asset generated", extra={"path": str(target)})
        outcomes.append(AssetOutcome(name=name, path=target, written=True))
    return tuple(outcomes)


__all__ = ["AssetOutcome", "css_content", "emit_assets", "js_content"]
