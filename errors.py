from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def _source_window(source: str, line: int, *, around: int = 2) -> str:
    """Source lines around `line` (1-based), the offending one marked with '>'."""
    lines = source.split('\n')
    line = min(max(1, line), len(lines))
    first = max(1, line - around)
    last = min(len(lines), line + around)
    return "\n".join(
        f"{'>' if n == line else ' '} {n:4d} | {lines[n - 1]}"
        for n in range(first, last + 1)
    )


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'open':
        return 'Every "[" needs a matching "]" later in the program.'
    if kind == 'close':
        return 'This "]" has no "[" before it. Remove it or add the missing "[".'
    return None


@dataclass(eq=False)
class LoopMismatch(Exception):
    """Unbalanced brackets. `index` is the position of the offending command."""
    message: str
    index: int
    lineno: int = 0

    kind = 'mismatch'

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class UnmatchedOpen(LoopMismatch):
    kind = 'open'


@dataclass(eq=False)
class UnmatchedClose(LoopMismatch):
    kind = 'close'


def format_loop_error(err: LoopMismatch, *, source: str, line: int) -> str:
    ctx = _source_window(source, line)
    hint = _hint_for(err.kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return f"LoopMismatch: {err.message} (line {line})\n{ctx}{hint_block}"
