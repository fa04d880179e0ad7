"""
CSV serialization for admin exports.

Fields containing a comma, double quote or newline are wrapped in double
quotes with internal quotes doubled. Lines are joined with '\\n' and there
is no trailing newline.
"""

from typing import Any, Iterable, Sequence

_NEEDS_QUOTING = (",", '"', "\n", "\r")


def format_cell(value: Any) -> str:
    """Render one value as CSV text. None renders as empty."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_field(text: str) -> str:
    if any(ch in text for ch in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'
    return text


def build_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """
    Serialize a header row and data rows.

    Args:
        headers: Column names
        rows: One sequence of values per record, in header order

    Returns:
        CSV text
    """
    lines = [",".join(escape_field(h) for h in headers)]
    for row in rows:
        lines.append(",".join(escape_field(format_cell(v)) for v in row))
    return "\n".join(lines)
