"""
Selector Ledger API Endpoints
=============================
REST API for inspecting and feeding the selector learner.

The learner is read from app.state.selector_learner, so each app
serves exactly the ledger it was built with.
"""

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel
from typing import List, Optional

from ..knowledge.selector_learner import SelectorLearner

router = APIRouter(prefix="/api/selectors", tags=["selectors"])


class ReportResultRequest(BaseModel):
    selector: str
    success: bool


class SelectorRecordResponse(BaseModel):
    selector: str
    attempts: int
    successes: int
    success_rate: float
    last_updated: str


def get_learner(request: Request) -> SelectorLearner:
    """Dependency: the learner attached to the running app"""
    learner = getattr(request.app.state, "selector_learner", None)
    if learner is None:
        raise HTTPException(status_code=503, detail="Selector learner is not configured")
    return learner


def _record_response(record) -> SelectorRecordResponse:
    return SelectorRecordResponse(
        selector=record.selector,
        attempts=record.attempts,
        successes=record.successes,
        success_rate=record.success_rate,
        last_updated=record.last_updated.isoformat()
    )


# =========================================================================
# QUERY ENDPOINTS
# =========================================================================

@router.get("")
async def list_elements(learner: SelectorLearner = Depends(get_learner)):
    """Tracked elements with their number of known selectors"""
    return {"elements": learner.summary()}


@router.get("/{element}/best")
async def get_best_selector(element: str, learner: SelectorLearner = Depends(get_learner)):
    """Most reliable selector for an element"""
    selector = learner.get_best_selector(element)
    if selector is None:
        raise HTTPException(status_code=404, detail=f"No selector history for '{element}'")
    return {"element": element, "selector": selector}


@router.get("/{element}/ranked")
async def get_ranked_selectors(
    element: str,
    count: Optional[int] = Query(None, ge=1),
    learner: SelectorLearner = Depends(get_learner)
):
    """Top selectors for an element, best first"""
    return {"element": element, "selectors": learner.get_ranked_selectors(element, count)}


@router.get("/{element}/records", response_model=List[SelectorRecordResponse])
async def get_records(element: str, learner: SelectorLearner = Depends(get_learner)):
    """All records for an element in first-observed order"""
    records = learner.records(element)
    if not records:
        raise HTTPException(status_code=404, detail=f"No selector history for '{element}'")
    return [_record_response(record) for record in records]


# =========================================================================
# REPORTING ENDPOINTS
# =========================================================================

@router.post("/{element}/results", response_model=SelectorRecordResponse)
async def report_result(
    element: str,
    request: ReportResultRequest,
    learner: SelectorLearner = Depends(get_learner)
):
    """Record the outcome of using a selector"""
    learner.report_result(element, request.selector, request.success)
    return _record_response(learner.get_record(element, request.selector))


def create_app(learner: SelectorLearner) -> FastAPI:
    """FastAPI app serving the given learner"""
    app = FastAPI(title="selfheal selector ledger")
    app.state.selector_learner = learner
    app.include_router(router)
    return app
