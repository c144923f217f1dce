from faculty_promotion.config import logger
from faculty_promotion.errors import UnrecognizedDiscriminant
from faculty_promotion.utils.achievement_schemas import (
    AchievementSet,
    Category,
    ConferenceRecord,
    PatentRecord,
    PointsResult,
    ResearchRecord,
    SupervisionRecord,
    TeachingRecord,
    TrainingRecord,
    empty_breakdown,
)
from faculty_promotion.utils.points_table import (
    FALLBACK_POINTS,
    POINTS_CONFIG,
    PRESENTER_ROLES,
    TEACHING_TYPE_ALIASES,
)


def bucket_conference_role(role: str) -> str:
    """Collapse a conference role onto the two rated buckets."""
    return "presenter" if role in PRESENTER_ROLES else "attendee"


def lookup_rate(category: str, *keys) -> int:
    """
    Walk the rate table for a category.

    Raises UnrecognizedDiscriminant when any key along the path has no rate.
    """
    rate = POINTS_CONFIG[category]
    try:
        for key in keys:
            rate = rate[key]
    except (KeyError, TypeError):
        raise UnrecognizedDiscriminant(category, keys) from None
    return rate


def _rate_or_fallback(category: str, *keys) -> int:
    try:
        return lookup_rate(category, *keys)
    except UnrecognizedDiscriminant as e:
        fallback = FALLBACK_POINTS[category]
        logger.debug(f"{e}; scoring at fallback rate {fallback}")
        return fallback


def _score_research(record: ResearchRecord) -> int:
    return _rate_or_fallback("research", record.quartile)


def _score_patent(record: PatentRecord) -> int:
    return _rate_or_fallback("patents", record.status)


def _score_supervision(record: SupervisionRecord) -> int:
    return _rate_or_fallback("supervision", record.type)


def _score_conference(record: ConferenceRecord) -> int:
    return _rate_or_fallback("conferences", record.type, bucket_conference_role(record.role))


def _score_training(record: TrainingRecord) -> int:
    return POINTS_CONFIG["training"]["certified" if record.certified else "uncertified"]


def _score_teaching(record: TeachingRecord) -> int:
    return _rate_or_fallback("teaching", TEACHING_TYPE_ALIASES.get(record.type, record.type))


_SCORERS = {
    ResearchRecord: _score_research,
    PatentRecord: _score_patent,
    SupervisionRecord: _score_supervision,
    ConferenceRecord: _score_conference,
    TrainingRecord: _score_training,
    TeachingRecord: _score_teaching,
}


def score_record(record) -> int:
    """Points earned by a single achievement record."""
    return _SCORERS[type(record)](record)


def compute_points(achievements) -> PointsResult:
    """
    Score a whole achievement set.

    Pure and order independent. The breakdown always carries all six
    categories, with 0 for categories that have no records, and the total
    is the sum of the breakdown. Raw dicts are validated into an
    AchievementSet first; an unknown category name raises InvalidCategory.
    """
    if not isinstance(achievements, AchievementSet):
        achievements = AchievementSet.from_mapping(achievements)

    breakdown = empty_breakdown()
    for category in Category:
        breakdown[category.value] = sum(
            score_record(record) for record in achievements.records(category)
        )

    return PointsResult(total=sum(breakdown.values()), breakdown=breakdown)


def assign_points(achievements: AchievementSet) -> AchievementSet:
    """Return a copy of the set whose records carry freshly computed points."""
    return AchievementSet(**{
        category.value: [
            record.model_copy(update={"points": score_record(record)})
            for record in achievements.records(category)
        ]
        for category in Category
    })
