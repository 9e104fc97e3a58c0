"""Advertiser proposals built from priced rate desk inventory."""

from ratedesk.proposals.builder import Proposal, ProposalLineItem, ProposalTotals
from ratedesk.proposals.export import render_proposal_csv, render_proposal_text

__all__ = [
    "Proposal",
    "ProposalLineItem",
    "ProposalTotals",
    "render_proposal_csv",
    "render_proposal_text",
]
