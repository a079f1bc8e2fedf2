from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from typing import Iterable, List, Sequence

_CODES = {"bold": "1", "dim": "2", "green": "32", "cyan": "36"}


def color_enabled() -> bool:
    if "NO_COLOR" in os.environ:
        return False
    return os.environ.get("TERM", "dumb") != "dumb"


def style(text: str, *names: str) -> str:
    """Wrap text in ANSI codes, or return it as is on plain terminals."""
    if not names or not color_enabled():
        return text
    codes = ";".join(_CODES[n] for n in names)
    return f"\x1b[{codes}m{text}\x1b[0m"


def term_width(default: int = 120) -> int:
    return shutil.get_terminal_size(fallback=(default, 24)).columns


def rule(char: str = "─", width: int | None = None) -> str:
    return char * max(10, width or term_width())


def fit(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    if width <= 1:
        return text[:max(0, width)]
    return text[: width - 1] + "…"


@dataclass(frozen=True)
class Column:
    title: str
    width: int
    right: bool = False

    def cell(self, value: object) -> str:
        s = fit(str(value), self.width)
        return s.rjust(self.width) if self.right else s.ljust(self.width)


def render_table(title: str, columns: Sequence[Column], rows: Iterable[Sequence[object]], *, width: int) -> List[str]:
    line = style(rule("─", width), "dim")
    out = [
        style(title, "bold", "cyan"),
        style("  ".join(c.cell(c.title) for c in columns), "dim"),
        line,
    ]
    out.extend("  ".join(c.cell(v) for c, v in zip(columns, row)) for row in rows)
    out.append(line)
    return out


def print_table(title: str, columns: Sequence[Column], rows: Iterable[Sequence[object]], *, width: int) -> None:
    print("\n".join(render_table(title, columns, rows, width=width)))
