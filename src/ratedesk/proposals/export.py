"""Plain-text and CSV renderings of a proposal."""

from __future__ import annotations

import csv
import io

from ratedesk.pricing.formatting import format_compact_number, format_currency
from ratedesk.proposals.builder import Proposal

PROPOSAL_TITLE = "SEEKSY AD PROPOSAL"
CSV_HEADERS = ["Item", "Type", "Placement", "CPM", "Impressions", "Total"]


def render_proposal_text(proposal: Proposal) -> str:
    """Render a proposal as a shareable text block.

    Args:
        proposal: The proposal to render.

    Returns:
        Title, one line per item, then subtotal and revenue split lines.
    """
    lines = [PROPOSAL_TITLE, ""]
    for item in proposal.items:
        lines.append(
            f"{item.name} - {format_currency(item.cpm)} CPM x "
            f"{format_compact_number(item.impressions)} impressions = "
            f"{format_currency(item.total)}"
        )

    totals = proposal.totals()
    lines.extend([
        "",
        f"Subtotal: {format_currency(totals.subtotal)}",
        f"Seeksy Revenue: {format_currency(totals.seeksy_revenue)}",
        f"Creator Payouts: {format_currency(totals.creator_payouts)}",
    ])
    return "\n".join(lines)


def render_proposal_csv(proposal: Proposal) -> str:
    """Render a proposal as CSV.

    Item rows follow the header; a blank row separates them from the
    Subtotal, Seeksy Revenue and Creator Payouts rows, whose amount sits in
    the last column.

    Args:
        proposal: The proposal to render.

    Returns:
        The CSV document as a string.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for item in proposal.items:
        writer.writerow([
            item.name,
            item.type,
            item.placement,
            str(item.cpm),
            item.impressions,
            f"{item.total:.2f}",
        ])

    totals = proposal.totals()
    writer.writerow([])
    writer.writerow(["Subtotal", "", "", "", "", f"{totals.subtotal:.2f}"])
    writer.writerow(["Seeksy Revenue", "", "", "", "", f"{totals.seeksy_revenue:.2f}"])
    writer.writerow(["Creator Payouts", "", "", "", "", f"{totals.creator_payouts:.2f}"])
    return buffer.getvalue()
