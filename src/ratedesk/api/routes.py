"""FastAPI routes for the rate desk.

- ``GET /rate-desk`` -- the priced inventory view for a scenario.
- ``POST /rate-desk/proposals`` -- price a proposal as JSON, CSV or text.

Datastore work is blocking and runs in a worker thread.  Datastore failures
map to 503; invalid proposals map to 422.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse, Response

from ratedesk.api.schemas import (
    ProposalFormat,
    ProposalRequest,
    ProposalResponse,
    RateDeskResponse,
)
from ratedesk.desk.inventory import filter_inventory
from ratedesk.desk.view import build_rate_desk, get_rate_desk_view
from ratedesk.domain.errors import DataStoreError, ProposalError
from ratedesk.domain.models import RateDeskOptions
from ratedesk.domain.types import TimeWindow
from ratedesk.proposals.builder import Proposal
from ratedesk.proposals.export import render_proposal_csv, render_proposal_text
from ratedesk.store.repository import RateDeskRepository

logger = structlog.get_logger()

router = APIRouter(prefix="/rate-desk", tags=["rate-desk"])


def _get_repository(request: Request) -> RateDeskRepository:
    services: dict[str, Any] = request.app.state.services
    repository = services.get("repository")
    if repository is None:
        raise HTTPException(status_code=503, detail="Rate desk datastore is not configured")
    return repository


@router.get("", response_model=RateDeskResponse)
async def rate_desk_view(
    request: Request,
    scenario: str = "base",
    months: int = Query(default=1, ge=1),
    inventory_type: str | None = Query(default=None, alias="type"),
    window: TimeWindow = TimeWindow.DAYS_30,
) -> RateDeskResponse:
    """Return the rate desk view for *scenario*.

    ``type`` narrows the returned inventory list; the summary always covers
    every active unit.
    """
    repository = _get_repository(request)
    options = RateDeskOptions(scenario_slug=scenario, months=months)
    try:
        view = await asyncio.to_thread(get_rate_desk_view, repository, options)
    except DataStoreError as exc:
        logger.error("rate_desk_view_failed", scenario=scenario, error=str(exc))
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return RateDeskResponse(
        scenario=view.scenario,
        summary=view.summary,
        inventory=filter_inventory(view.inventory, inventory_type),
        window_totals=view.summary.for_window(window),
    )


@router.post("/proposals", response_model=None)
async def build_proposal(
    request: Request,
    body: ProposalRequest,
    output_format: ProposalFormat = Query(default="json", alias="format"),
) -> ProposalResponse | Response:
    """Price the requested units under a scenario and return the proposal."""
    repository = _get_repository(request)
    try:
        built = await asyncio.to_thread(
            build_rate_desk, repository, RateDeskOptions(scenario_slug=body.scenario)
        )
    except DataStoreError as exc:
        logger.error("proposal_pricing_failed", scenario=body.scenario, error=str(exc))
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    units = {unit.id: unit for unit in built.view.inventory}
    proposal = Proposal(creator_rev_share=built.resolved.assumptions.creator_rev_share)
    try:
        for item in body.items:
            unit = units.get(item.unit_id)
            if unit is None:
                raise ProposalError(f"Unknown or inactive inventory unit {item.unit_id!r}")
            proposal.add_unit(unit, cpm=item.cpm, impressions=item.impressions)
    except ProposalError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    logger.info("proposal_built", scenario=body.scenario, items=len(proposal))

    if output_format == "csv":
        return Response(
            content=render_proposal_csv(proposal),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="seeksy-ad-proposal.csv"'},
        )
    if output_format == "text":
        return PlainTextResponse(render_proposal_text(proposal))
    return ProposalResponse.from_proposal(built.view.scenario, proposal)
