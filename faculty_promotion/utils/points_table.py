"""Static rate and requirement tables. Loaded once, never mutated at runtime."""

POINTS_CONFIG = {
    # Research publications, keyed by journal quartile
    "research": {
        "Q1": 15,
        "Q2": 12,
        "Q3": 10,
        "Q4": 5,
        "local": 3,
    },
    # Patents, keyed by status
    "patents": {
        "granted": 20,
        "pending": 10,
    },
    # Supervision, keyed by degree level
    "supervision": {
        "phd": 15,
        "masters": 10,
        "graduation": 5,
    },
    # Conferences, keyed by type then role bucket
    "conferences": {
        "international": {
            "presenter": 8,
            "attendee": 4,
        },
        "local": {
            "presenter": 5,
            "attendee": 2,
        },
    },
    # Training, keyed by certification
    "training": {
        "certified": 5,
        "uncertified": 2,
    },
    # Teaching, keyed by activity type
    "teaching": {
        "course_development": 8,
        "lectures": 3,
        "assessment": 2,
    },
}

# Rate applied when a record's key is present but not in its table
FALLBACK_POINTS = {
    "research": POINTS_CONFIG["research"]["local"],
    "patents": POINTS_CONFIG["patents"]["pending"],
    "supervision": POINTS_CONFIG["supervision"]["graduation"],
    "conferences": POINTS_CONFIG["conferences"]["local"]["attendee"],
    "teaching": POINTS_CONFIG["teaching"]["lectures"],
}

# Conference roles credited at the presenter rate; everything else is an attendee
PRESENTER_ROLES = frozenset({"presenter", "keynote", "organizer"})

# Alternate spellings accepted for teaching activity types
TEACHING_TYPE_ALIASES = {
    "curriculum": "course_development",
}


PROMOTION_REQUIREMENTS = {
    "teaching_assistant": {
        "min_points": 46,
        "max_points": 70,
        "next_position": "lecturer",
    },
    "lecturer": {
        "min_points": 50,
        "max_points": 80,
        "next_position": "assistant_professor",
    },
    "assistant_professor": {
        "min_points": 60,
        "max_points": 100,
        "next_position": "associate_professor",
    },
}
