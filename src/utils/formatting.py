from __future__ import annotations

from decimal import Decimal
from typing import Sequence


def format_decimal(value: Decimal) -> str:
    normalized = value.normalize()
    # Avoid scientific notation for integers.
    if normalized == normalized.to_integral():
        return f"{normalized:.0f}"
    return format(normalized, "f")


def format_currency(value: Decimal) -> str:
    cents = value.quantize(Decimal("0.01"))
    return f"{cents:.2f}"


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render a text table; the first column is left aligned, the others right aligned."""
    widths = [max(len(header), max((len(row[idx]) for row in rows), default=0)) for idx, header in enumerate(headers)]

    def _line(cells: Sequence[str]) -> str:
        first, *rest = cells
        parts = [f"{first:<{widths[0]}}"]
        parts.extend(f"{cell:>{width}}" for cell, width in zip(rest, widths[1:]))
        return " ".join(parts)

    header = _line(headers)
    lines = [header, "-" * len(header)]
    lines.extend(_line(row) for row in rows)
    lines.append("-" * len(header))
    return "\n".join(lines)
