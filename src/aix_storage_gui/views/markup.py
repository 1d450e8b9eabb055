"""Colour markup shared by every page.

Pages are composed as plain text with inline tags such as ``[green]`` or
``[yellow::b]``. A tag sets the colour for the text that follows it; ``[white]``
returns to the default. ``strip_colors`` removes exactly the known tags, so the
export of a page keeps every value it displayed.
"""

from __future__ import annotations

import html
import re

from aix_storage_gui.services.metrics import LEVEL_CRITICAL, LEVEL_WARNING, Thresholds

COLORS = ("green", "red", "yellow", "cyan", "gray", "white", "magenta")

_TAG_RX = re.compile(r"\[(" + "|".join(COLORS) + r")(::b)?\]")

_HTML_COLORS = {
    "green": "#4ec94e",
    "red": "#ef4b4b",
    "yellow": "#e5c33b",
    "cyan": "#3fc6d6",
    "gray": "#8a8a8a",
    "magenta": "#d25ed2",
}

RULE_CHAR = "─"
BAR_FILLED = "█"
BAR_EMPTY = "░"


def strip_colors(s: str) -> str:
    return _TAG_RX.sub("", s)


def markup_to_html(s: str) -> str:
    out: list[str] = []
    pos = 0
    open_span = False
    for m in _TAG_RX.finditer(s):
        out.append(html.escape(s[pos:m.start()]))
        pos = m.end()
        if open_span:
            out.append("</span>")
            open_span = False
        color, bold = m.group(1), bool(m.group(2))
        style = []
        if color in _HTML_COLORS:
            style.append(f"color:{_HTML_COLORS[color]}")
        if bold:
            style.append("font-weight:bold")
        if style:
            out.append(f"<span style=\"{';'.join(style)}\">")
            open_span = True
    out.append(html.escape(s[pos:]))
    if open_span:
        out.append("</span>")
    return "".join(out)


def level_color(level: str) -> str:
    if level == LEVEL_CRITICAL:
        return "[red]"
    if level == LEVEL_WARNING:
        return "[yellow]"
    return "[green]"


def state_color(ok: bool, bad: str = "[red]") -> str:
    return "[green]" if ok else bad


def vg_state_color(state: str) -> str:
    # empty state means lsvg <vg> gave no answer
    if not state:
        return "[gray]"
    return state_color(state == "active")


def heading(title: str) -> str:
    return f"[yellow::b]═══ {title} ═══[white]\n"


def rule(width: int, indent: str = "  ") -> str:
    return indent + RULE_CHAR * width + "\n"


def progress_bar(percent: int, width: int, thresholds: Thresholds) -> str:
    percent = min(max(percent, 0), 100)
    filled = percent * width // 100
    color = level_color(thresholds.classify(percent))
    return (
        color
        + BAR_FILLED * filled
        + "[gray]"
        + BAR_EMPTY * (width - filled)
        + f"[white] {percent:3d}%"
    )


def usage_bar(percent: int, width: int) -> str:
    percent = min(max(percent, 0), 100)
    filled = percent * width // 100
    return "[cyan]" + BAR_FILLED * filled + "[gray]" + BAR_EMPTY * (width - filled) + f"[white] {percent:3d}%"


def truncate(s: str, width: int) -> str:
    return s if len(s) <= width else s[:width]


def truncate_left(s: str, width: int) -> str:
    if len(s) <= width:
        return s
    return "..." + s[len(s) - (width - 3):]
