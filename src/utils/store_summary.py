from __future__ import annotations

from domain.summary import StoreSummary

from .formatting import format_currency, format_decimal, render_table


def render_store_summary(summary: StoreSummary) -> str:
    sections: list[str] = []

    sections.append("Realized sales:")
    if summary.transactions:
        sections.append(
            render_table(
                ("Tx", "Currency", "Result"),
                [(sale.tx, sale.currency, format_currency(sale.result)) for sale in summary.transactions],
            )
        )
    else:
        sections.append("  (none)")

    sections.append("Storage:")
    if summary.storage:
        sections.append(
            render_table(
                ("Currency", "Amount", "Equivalent"),
                [
                    (entry.currency, format_decimal(entry.amount), format_currency(entry.equivalent))
                    for entry in summary.storage
                ],
            )
        )
    else:
        sections.append("  (empty)")

    sections.append("Pending sales:")
    if summary.pending:
        sections.append(
            render_table(
                ("Tx", "Amount", "Currency", "Price"),
                [
                    (sale.tx, format_decimal(sale.amount), sale.currency, format_currency(sale.price))
                    for sale in summary.pending
                ],
            )
        )
    else:
        sections.append("  (none)")

    return "\n".join(sections)
