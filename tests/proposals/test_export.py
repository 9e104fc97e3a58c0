"""Tests for proposal text and CSV rendering."""

from __future__ import annotations

import csv
import io
from collections.abc import Callable
from decimal import Decimal

import pytest

from ratedesk.domain.models import InventoryUnit
from ratedesk.pricing.engine import price_unit
from ratedesk.proposals.builder import Proposal
from ratedesk.proposals.export import CSV_HEADERS, render_proposal_csv, render_proposal_text


@pytest.fixture
def proposal(make_unit: Callable[..., InventoryUnit]) -> Proposal:
    built = Proposal(creator_rev_share=Decimal("0.7"))
    built.add_unit(price_unit(make_unit(), Decimal("1.0")))
    built.add_unit(
        price_unit(
            make_unit(
                id="inv-event",
                name="Summit Stage Mention",
                type="event",
                placement="stage",
                target_cpm=Decimal("40"),
                floor_cpm=Decimal("30"),
                ceiling_cpm=Decimal("60"),
                expected_monthly_impressions=20000,
            ),
            Decimal("1.0"),
        )
    )
    return built


def test_text_rendering(proposal: Proposal):
    assert render_proposal_text(proposal).splitlines() == [
        "SEEKSY AD PROPOSAL",
        "",
        "Morning Show Mid-roll - $20 CPM x 100K impressions = $2,000",
        "Summit Stage Mention - $56 CPM x 20K impressions = $1,120",
        "",
        "Subtotal: $3,120",
        "Seeksy Revenue: $936",
        "Creator Payouts: $2,184",
    ]


def test_text_rendering_empty():
    text = render_proposal_text(Proposal())

    assert text.startswith("SEEKSY AD PROPOSAL\n\n\n")
    assert text.endswith("Creator Payouts: $0")


def test_csv_rendering(proposal: Proposal):
    rows = list(csv.reader(io.StringIO(render_proposal_csv(proposal))))

    assert rows == [
        CSV_HEADERS,
        ["Morning Show Mid-roll", "podcast", "mid-roll", "20.00", "100000", "2000.00"],
        ["Summit Stage Mention", "event", "stage", "56.00", "20000", "1120.00"],
        [],
        ["Subtotal", "", "", "", "", "3120.00"],
        ["Seeksy Revenue", "", "", "", "", "936.00"],
        ["Creator Payouts", "", "", "", "", "2184.00"],
    ]


def test_csv_quotes_commas_in_names(make_unit: Callable[..., InventoryUnit]):
    built = Proposal()
    built.add_unit(price_unit(make_unit(name="Drive Time, Weekdays"), Decimal("1.0")))

    csv_text = render_proposal_csv(built)

    assert '"Drive Time, Weekdays"' in csv_text
    assert list(csv.reader(io.StringIO(csv_text)))[1][0] == "Drive Time, Weekdays"
