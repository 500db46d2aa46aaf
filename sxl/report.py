"""Rendering of positioned errors for terminals and editors."""

from typing import Any, Union

from .errors import SXLError
from .types import Position

SEVERITY_ERROR = 1


def _as_bytes(source: Union[bytes, str]) -> bytes:
    return source.encode("utf-8") if isinstance(source, str) else source


def line_and_column(source: Union[bytes, str], offset: int) -> tuple[int, int]:
    """Zero-based (line, column) of a byte offset; columns count bytes."""
    data = _as_bytes(source)
    offset = max(0, min(offset, len(data)))
    line = data.count(b"\n", 0, offset)
    line_start = data.rfind(b"\n", 0, offset) + 1
    return line, offset - line_start


def utf16_line_and_column(source: Union[bytes, str], offset: int) -> tuple[int, int]:
    """Like line_and_column, but the column counts UTF-16 code units as editors do."""
    data = _as_bytes(source)
    line, col = line_and_column(data, offset)
    line_start = min(max(0, offset), len(data)) - col
    prefix = data[line_start:line_start + col].decode("utf-8", errors="replace")
    return line, len(prefix.encode("utf-16-le")) // 2


def _range(data: bytes, pos: Position) -> dict[str, Any]:
    start_line, start_col = utf16_line_and_column(data, pos.start)
    end_line, end_col = utf16_line_and_column(data, pos.end)
    return {
        "start": {"line": start_line, "character": start_col},
        "end": {"line": end_line, "character": end_col},
    }


def format_error(source: Union[bytes, str], err: SXLError) -> str:
    """Render an error as ``line:col: message`` plus the source line, underlined.

    Lines and columns are printed one-based. Spans that cross a newline are
    underlined up to the end of the first line.
    """
    data = _as_bytes(source)
    line, col = line_and_column(data, err.position.start)
    line_start = err.position.start - col
    line_end = data.find(b"\n", line_start)
    if line_end == -1:
        line_end = len(data)
    text = data[line_start:line_end].decode("utf-8", errors="replace")
    width = max(1, min(err.position.end, line_end) - err.position.start)
    out = [
        f"{line + 1}:{col + 1}: {err.message}",
        f"  {text}",
        "  " + " " * col + "^" * width,
    ]
    if err.origin is not None:
        o_line, o_col = line_and_column(data, err.origin.start)
        out.append(f"  note: first reported at {o_line + 1}:{o_col + 1}")
    return "\n".join(out)


def to_diagnostic(source: Union[bytes, str], err: SXLError) -> dict[str, Any]:
    """Editor-style diagnostic record for an error; columns are UTF-16 units."""
    data = _as_bytes(source)
    diag: dict[str, Any] = {
        "range": _range(data, err.position),
        "severity": SEVERITY_ERROR,
        "source": "sxl",
        "message": err.message,
    }
    if err.origin is not None:
        diag["relatedInformation"] = [
            {"range": _range(data, err.origin), "message": "first reported here"},
        ]
    return diag
