"""
Promotion state machine.

An application starts in ``not_applied`` and moves to ``pending`` only
through an explicit apply action taken while the faculty member is
eligible. Nothing moves it back except a full reset.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from faculty_promotion.config import logger
from faculty_promotion.errors import AlreadyPending, IneligibleApplication, UnknownPosition
from faculty_promotion.utils.achievement_schemas import (
    ApplicationStatus,
    EligibilityResult,
    FacultyState,
    PromotionRequirement,
    PromotionStatus,
)
from faculty_promotion.utils.points_table import PROMOTION_REQUIREMENTS


def get_requirement(position) -> PromotionRequirement:
    """Requirement tier for a position. Raises UnknownPosition if there is none."""
    key = position.value if isinstance(position, Enum) else position
    try:
        row = PROMOTION_REQUIREMENTS[key]
    except (KeyError, TypeError):
        raise UnknownPosition(key) from None
    return PromotionRequirement(**row)


def evaluate_eligibility(position, total: int) -> EligibilityResult:
    """
    Check a points total against the position's requirement tier.

    eligible is ``total >= min_points`` (inclusive) and points_needed is
    never negative. An unknown position does not fail: its tier is treated
    as min 0 / max 0 and the result is flagged ``configured=False``.
    max_points only scales progress_percent.
    """
    configured = True
    try:
        requirement = get_requirement(position)
    except UnknownPosition as e:
        logger.warning(f"{e}; evaluating against an unconfigured tier")
        requirement = PromotionRequirement(min_points=0, max_points=0)
        configured = False

    if requirement.max_points:
        progress = min(100.0, total / requirement.max_points * 100)
    else:
        progress = 0.0

    return EligibilityResult(
        eligible=total >= requirement.min_points,
        current_points=total,
        points_needed=max(0, requirement.min_points - total),
        requirement=requirement,
        configured=configured,
        progress_percent=round(progress, 2),
    )


def apply_for_promotion(
    status: PromotionStatus,
    eligible: bool,
    now: Optional[datetime] = None,
) -> PromotionStatus:
    """
    Move an application from not_applied to pending.

    Raises IneligibleApplication when not eligible and AlreadyPending when
    an application is already pending. The given status is left untouched;
    the new status is returned.
    """
    if not eligible:
        raise IneligibleApplication()
    if status.status == ApplicationStatus.PENDING:
        raise AlreadyPending(status.application_date)

    return status.model_copy(update={
        "eligible": True,
        "status": ApplicationStatus.PENDING,
        "application_date": now or datetime.now(timezone.utc),
    })


def reset() -> FacultyState:
    """Fresh record: blank profile, empty categories, zero points, not applied."""
    return FacultyState()
