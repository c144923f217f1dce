# faculty_promotion/api/routes.py

import threading
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from faculty_promotion.config import logger
from faculty_promotion.errors import (
    AlreadyPending,
    IneligibleApplication,
    InvalidCategory,
    PromotionError,
)
from faculty_promotion.tools.faculty_record import (
    add_achievement,
    complete_wizard,
    eligibility_of,
    remove_achievement,
    simulate,
    submit_application,
    update_profile,
)
from faculty_promotion.tools.promotion_status import reset
from faculty_promotion.utils.achievement_schemas import FacultyState, Profile
from faculty_promotion.utils.points_table import POINTS_CONFIG, PROMOTION_REQUIREMENTS


def dbg(title: str, payload: Any = None):
    logger.debug("-" * 72)
    logger.debug(f"📦 {title}")
    if payload is not None:
        logger.debug(f"payload: {payload}")
    logger.debug("-" * 72)


# ======================================================
# FACULTY RECORD STORE
# ======================================================

class FacultyStore:
    """
    Holds the one faculty record served by an app instance.

    Route handlers run in a thread pool, so every read-modify-write cycle
    happens under ``lock``.
    """

    def __init__(self):
        self.state: FacultyState = reset()
        self.lock = threading.Lock()


def get_store(request: Request) -> FacultyStore:
    return request.app.state.faculty_store


_STATUS_CODES = {
    InvalidCategory: 400,
    IneligibleApplication: 400,
    AlreadyPending: 409,
}


async def promotion_error_handler(request: Request, exc: PromotionError) -> JSONResponse:
    status_code = _STATUS_CODES.get(type(exc), 400)
    logger.warning(f"Rejected {request.method} {request.url.path} ({status_code}): {exc}")
    return JSONResponse(status_code=status_code, content={"success": False, "error": str(exc)})


def _validation_failed(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=e.errors(include_url=False, include_context=False, include_input=False),
    )


# ======================================================
# CONFIG ROUTER
# ======================================================

config_router = APIRouter(prefix="/api/config", tags=["Configuration"])


@config_router.get("/points")
def get_points_config():
    return POINTS_CONFIG


@config_router.get("/requirements")
def get_promotion_requirements():
    return PROMOTION_REQUIREMENTS


# ======================================================
# FACULTY ROUTER
# ======================================================

faculty_router = APIRouter(prefix="/api/faculty", tags=["Faculty"])


class WizardRequest(BaseModel):
    profile: Profile
    # Raw mapping, so unknown category names reach InvalidCategory
    achievements: Dict[str, Any] = Field(default_factory=dict)


class SimulateRequest(BaseModel):
    additions: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)


@faculty_router.get("")
def get_faculty(store: FacultyStore = Depends(get_store)):
    return store.state.model_dump(mode="json")


@faculty_router.post("/wizard")
def save_wizard(payload: WizardRequest, store: FacultyStore = Depends(get_store)):
    dbg("SAVE_WIZARD — RECEIVED", {"profile": payload.profile.model_dump()})
    try:
        with store.lock:
            store.state = complete_wizard(store.state, payload.profile, payload.achievements)
            state = store.state
    except ValidationError as e:
        raise _validation_failed(e)

    return {
        "success": True,
        "data": state.model_dump(mode="json"),
        "eligibility": eligibility_of(state).model_dump(mode="json"),
    }


@faculty_router.post("/profile")
def save_profile(changes: Dict[str, Any] = Body(...), store: FacultyStore = Depends(get_store)):
    dbg("SAVE_PROFILE — RECEIVED", changes)
    try:
        with store.lock:
            store.state = update_profile(store.state, changes)
            profile = store.state.profile
    except ValidationError as e:
        raise _validation_failed(e)

    return {"success": True, "profile": profile.model_dump(mode="json")}


@faculty_router.post("/achievements/{category}")
def create_achievement(
    category: str,
    payload: Dict[str, Any] = Body(...),
    store: FacultyStore = Depends(get_store),
):
    dbg("ADD_ACHIEVEMENT — RECEIVED", {"category": category, "payload": payload})
    try:
        with store.lock:
            store.state, item = add_achievement(store.state, category, payload)
            state = store.state
    except ValidationError as e:
        raise _validation_failed(e)

    return {
        "success": True,
        "item": item.model_dump(mode="json"),
        "points": state.points.model_dump(),
        "eligible": state.promotion_status.eligible,
    }


@faculty_router.delete("/achievements/{category}/{item_id}")
def delete_achievement(category: str, item_id: int, store: FacultyStore = Depends(get_store)):
    dbg("DELETE_ACHIEVEMENT", {"category": category, "item_id": item_id})
    with store.lock:
        store.state = remove_achievement(store.state, category, item_id)
        state = store.state

    return {
        "success": True,
        "points": state.points.model_dump(),
        "eligible": state.promotion_status.eligible,
    }


@faculty_router.get("/eligibility")
def get_eligibility(store: FacultyStore = Depends(get_store)):
    state = store.state
    eligibility = eligibility_of(state)
    return {
        **eligibility.model_dump(mode="json"),
        "breakdown": state.points.breakdown,
        "next_position": eligibility.requirement.next_position,
    }


@faculty_router.post("/apply")
def apply_promotion(store: FacultyStore = Depends(get_store)):
    with store.lock:
        store.state = submit_application(store.state)
        status = store.state.promotion_status

    return {"success": True, "status": status.model_dump(mode="json")}


@faculty_router.post("/reset")
def reset_faculty(store: FacultyStore = Depends(get_store)):
    with store.lock:
        store.state = reset()
    logger.info("Faculty record reset")
    return {"success": True}


@faculty_router.post("/simulate")
def simulate_points(payload: SimulateRequest, store: FacultyStore = Depends(get_store)):
    dbg("SIMULATE — RECEIVED", payload.additions)
    try:
        result = simulate(store.state, payload.additions)
    except ValidationError as e:
        raise _validation_failed(e)

    return result.model_dump()


# ======================================================
# MAIN AGGREGATOR ROUTER
# ======================================================

router = APIRouter()

router.include_router(config_router)
router.include_router(faculty_router)
