"""Line-oriented rendering of the narrative report into display blocks.

Each line is classified on its own. There is no nesting and no inline formatting.
"""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import List

HEADING = "heading"
SUBHEADING = "subheading"
LEAD = "lead"
PARAGRAPH = "paragraph"

_BULLET_RE = re.compile(r"^[-*]\s+")


@dataclass(frozen=True)
class Block:
    kind: str
    text: str


def classify_line(line: str) -> Block:
    if line.startswith("## "):
        return Block(HEADING, line[3:].strip())
    if line.startswith("### "):
        return Block(SUBHEADING, line[4:].strip())
    if line.startswith("**") and line.endswith("**") and len(line) > 4:
        return Block(LEAD, line.replace("**", "").strip())
    stripped = line.strip()
    if stripped.startswith(("- ", "* ")):
        # Bullets render as plain paragraphs
        return Block(PARAGRAPH, _BULLET_RE.sub("", stripped))
    return Block(PARAGRAPH, stripped)


def render_blocks(text: str) -> List[Block]:
    blocks = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        blocks.append(classify_line(line))
    return blocks


_HTML_TAGS = {
    HEADING: "h2",
    SUBHEADING: "h3",
    LEAD: "strong",
    PARAGRAPH: "p",
}


def blocks_to_html(blocks: List[Block]) -> str:
    parts = []
    for block in blocks:
        tag = _HTML_TAGS[block.kind]
        css = ' class="lead"' if block.kind == LEAD else ""
        parts.append(f"<{tag}{css}>{html.escape(block.text)}</{tag}>")
    return "\n".join(parts)


def report_body_html(text: str) -> str:
    """Escaped report markup for in-page display, so model text is never read as markdown."""
    return f'<div class="report-body">\n{blocks_to_html(render_blocks(text))}\n</div>'
