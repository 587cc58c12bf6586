"""
Split assistant replies into renderable blocks.

Markdown pipe tables become structured table blocks; the remaining text is
rendered line by line with a handful of inline substitutions. Nothing here
validates markdown: escaped pipes and multi-line cells are not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Union

TABLE_PATTERN = re.compile(
    r"(\|(?:[^\n|]+\|)+\n\|(?:[\s\-:|]+\|)+\n(?:\|(?:[^\n|]+\|)+\n*)+)"
)
VALUE_PATTERN = re.compile(r"^-?\d")
BLANK_CELL = "| |"

# Applied in order; later rules see the output of earlier ones
INLINE_RULES = (
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    (re.compile(r"^### (.*$)"), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*$)"), r"<h2>\1</h2>"),
    (re.compile(r"^- (.*$)"), r"<li>\1</li>"),
)


@dataclass(slots=True)
class TableCell:
    text: str
    is_value: bool = False


@dataclass(slots=True)
class TableBlock:
    header: List[str]
    rows: List[List[TableCell]]
    kind: str = field(default="table", init=False)


@dataclass(slots=True)
class TextLine:
    html: str = ""
    spacer: bool = False


@dataclass(slots=True)
class TextBlock:
    lines: List[TextLine]
    kind: str = field(default="text", init=False)


Block = Union[TableBlock, TextBlock]


def strip_emphasis(cell: str) -> str:
    return cell.replace("**", "").replace("*", "")


def is_value_cell(cell: str) -> bool:
    """Currency, percentages and numbers get heavier visual weight."""
    return "$" in cell or "%" in cell or bool(VALUE_PATTERN.match(cell))


def _split_row(line: str) -> List[str]:
    cells = line.split("|")
    if BLANK_CELL not in line:
        return [cell.strip() for cell in cells if cell.strip()]
    # A lone blank cell must survive to keep the columns aligned, so only the
    # fragments outside the outer pipes are dropped.
    stripped = line.strip()
    if stripped.startswith("|"):
        cells = cells[1:]
    if stripped.endswith("|"):
        cells = cells[:-1]
    return [cell.strip() for cell in cells]


def parse_table(part: str) -> TableBlock | None:
    lines = part.strip().split("\n")
    if len(lines) < 3:
        return None

    header = [strip_emphasis(cell.strip()) for cell in lines[0].split("|") if cell.strip()]
    rows = []
    for line in lines[2:]:
        cells = _split_row(line)
        if not cells:
            continue
        row = []
        for cell in cells:
            clean = strip_emphasis(cell)
            row.append(TableCell(text=clean, is_value=is_value_cell(clean)))
        rows.append(row)
    return TableBlock(header=header, rows=rows)


def format_line(line: str) -> str:
    formatted = line
    for pattern, replacement in INLINE_RULES:
        formatted = pattern.sub(replacement, formatted)
    return formatted


def parse_text(part: str) -> TextBlock:
    lines = []
    for line in part.split("\n"):
        if not line.strip():
            lines.append(TextLine(spacer=True))
        else:
            lines.append(TextLine(html=format_line(line)))
    return TextBlock(lines=lines)


def format_message(content: str) -> List[Block]:
    blocks: List[Block] = []
    for part in TABLE_PATTERN.split(content):
        if not part:
            continue
        if part.strip().startswith("|") and "\n|" in part:
            table = parse_table(part)
            if table is not None:
                blocks.append(table)
                continue
        blocks.append(parse_text(part))
    return blocks


def render_html(blocks: List[Block]) -> str:
    html = []
    for block in blocks:
        if isinstance(block, TableBlock):
            head = "".join(f"<th>{cell}</th>" for cell in block.header)
            body = "".join(
                "<tr>"
                + "".join(
                    f"<td><strong>{cell.text}</strong></td>"
                    if cell.is_value
                    else f"<td>{cell.text}</td>"
                    for cell in row
                )
                + "</tr>"
                for row in block.rows
            )
            html.append(
                f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"
            )
        else:
            lines = "".join(
                "<br/>" if line.spacer else f"<p>{line.html}</p>"
                for line in block.lines
            )
            html.append(f"<div>{lines}</div>")
    return "".join(html)
