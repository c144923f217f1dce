"""
Operations over a single, caller-owned faculty record.

Every function takes a FacultyState and returns a new one; the input is
never mutated. Callers swap the returned state in with one assignment, so a
half-applied update is never visible.
"""

from datetime import datetime
from itertools import count
from typing import Optional, Tuple

from pydantic import TypeAdapter

from faculty_promotion.config import logger
from faculty_promotion.tools.points_calculator import assign_points, compute_points
from faculty_promotion.tools.promotion_status import apply_for_promotion, evaluate_eligibility
from faculty_promotion.utils.achievement_schemas import (
    AchievementRecord,
    AchievementSet,
    Category,
    EligibilityResult,
    FacultyState,
    Profile,
    SimulationResult,
    parse_category,
)

_record_adapter = TypeAdapter(AchievementRecord)


def build_record(category, payload: dict):
    """Validate a raw payload into the record variant of its category."""
    category = parse_category(category)
    return _record_adapter.validate_python({**payload, "category": category.value})


def _next_id(achievements: AchievementSet) -> int:
    return max((r.id for r in achievements.all_records() if r.id is not None), default=0) + 1


def _renumbered(achievements: AchievementSet) -> AchievementSet:
    """Give every record a fresh id, 1..n, discarding ids sent by the client."""
    ids = count(1)
    return AchievementSet(**{
        category.value: [
            record.model_copy(update={"id": next(ids)})
            for record in achievements.records(category)
        ]
        for category in Category
    })


def eligibility_of(state: FacultyState) -> EligibilityResult:
    """
    Eligibility of a record as stored points stand.

    A record whose position has no requirement tier (e.g. before onboarding)
    is never eligible to apply, even though its unconfigured tier has a
    minimum of 0.
    """
    result = evaluate_eligibility(state.profile.current_position, state.points.total)
    if not result.configured:
        result = result.model_copy(update={"eligible": False})
    return result


def refresh_eligibility(state: FacultyState) -> FacultyState:
    """Full recompute: per-record points, breakdown, total and eligibility."""
    achievements = assign_points(state.achievements)
    rescored = state.model_copy(update={
        "achievements": achievements,
        "points": compute_points(achievements),
    })
    return rescored.model_copy(update={
        "promotion_status": state.promotion_status.model_copy(
            update={"eligible": eligibility_of(rescored).eligible}
        ),
    })


def complete_wizard(state: FacultyState, profile, achievements) -> FacultyState:
    """
    Finish onboarding: capture the profile, score the initial achievements
    and flip wizard_completed, all in the one returned state.
    """
    if not isinstance(profile, Profile):
        profile = Profile.model_validate(profile)
    if not isinstance(achievements, AchievementSet):
        achievements = AchievementSet.from_mapping(achievements)

    staged = state.model_copy(update={
        "profile": profile,
        "achievements": _renumbered(achievements),
        "wizard_completed": True,
    })
    completed = refresh_eligibility(staged)
    logger.info(
        f"Wizard completed for {profile.name!r}: {completed.points.total} points, "
        f"eligible={completed.promotion_status.eligible}"
    )
    return completed


def update_profile(state: FacultyState, changes: dict) -> FacultyState:
    """Merge profile fields; a position change re-evaluates eligibility."""
    patch = Profile.model_validate(changes)
    profile = state.profile.model_copy(
        update={field: getattr(patch, field) for field in patch.model_fields_set}
    )
    return refresh_eligibility(state.model_copy(update={"profile": profile}))


def add_achievement(state: FacultyState, category, payload: dict) -> Tuple[FacultyState, object]:
    """Append a record to its category and rescore. Returns (state, stored record)."""
    category = parse_category(category)
    record = build_record(category, payload).model_copy(
        update={"id": _next_id(state.achievements)}
    )
    achievements = state.achievements.model_copy(update={
        category.value: [*state.achievements.records(category), record],
    })
    updated = refresh_eligibility(state.model_copy(update={"achievements": achievements}))
    stored = updated.achievements.records(category)[-1]
    logger.info(f"Added {category.value} #{stored.id} worth {stored.points} points")
    return updated, stored


def remove_achievement(state: FacultyState, category, item_id: int) -> FacultyState:
    """Drop a record by id and rescore. An unknown id leaves the set as is."""
    category = parse_category(category)
    remaining = [r for r in state.achievements.records(category) if r.id != item_id]
    achievements = state.achievements.model_copy(update={category.value: remaining})
    return refresh_eligibility(state.model_copy(update={"achievements": achievements}))


def simulate(state: FacultyState, additions: dict) -> SimulationResult:
    """
    What-if scoring of hypothetical additions. The state is not changed.

    would_be_eligible is the plain threshold check, so a record with no
    configured position compares against a minimum of 0.
    """
    lists = {c.value: list(state.achievements.records(c)) for c in Category}
    for name, payloads in (additions or {}).items():
        category = parse_category(name)
        lists[category.value].extend(build_record(category, p) for p in payloads)

    current = compute_points(state.achievements)
    simulated = compute_points(AchievementSet(**lists))
    eligibility = evaluate_eligibility(state.profile.current_position, simulated.total)
    return SimulationResult(
        current_points=current.total,
        simulated_points=simulated.total,
        points_gained=simulated.total - current.total,
        would_be_eligible=eligibility.eligible,
        breakdown=simulated.breakdown,
    )


def submit_application(state: FacultyState, now: Optional[datetime] = None) -> FacultyState:
    """Apply for promotion against eligibility as of this moment."""
    eligibility = eligibility_of(refresh_eligibility(state))
    status = apply_for_promotion(state.promotion_status, eligibility.eligible, now)
    logger.info(f"Promotion application submitted at {status.application_date.isoformat()}")
    return state.model_copy(update={"promotion_status": status})
