"""
Error taxonomy for the promotion tracker.

Every error is local and recoverable. The core raises these; the API layer
maps them to HTTP statuses.
"""


class PromotionError(Exception):
    """Base class for all promotion tracker errors."""


class UnknownPosition(PromotionError, KeyError):
    """Position has no entry in the requirement table."""

    def __init__(self, position):
        self.position = position
        super().__init__(f"No promotion requirement configured for position {position!r}")

    def __str__(self):
        return self.args[0]


class UnrecognizedDiscriminant(PromotionError, KeyError):
    """A record's rate key has no entry in its category's rate table."""

    def __init__(self, category, keys):
        self.category = category
        self.keys = tuple(keys)
        super().__init__(f"No {category} rate for {'/'.join(map(str, self.keys))!r}")

    def __str__(self):
        return self.args[0]


class InvalidCategory(PromotionError, ValueError):
    """Category name outside the six achievement categories."""

    def __init__(self, category):
        self.category = category
        super().__init__("Invalid achievement type")


class IneligibleApplication(PromotionError):
    """Application submitted while points are below the position minimum."""

    def __init__(self):
        super().__init__("Not eligible for promotion")


class AlreadyPending(PromotionError):
    """Application submitted while a previous one is still pending."""

    def __init__(self, application_date=None):
        self.application_date = application_date
        super().__init__("A promotion application is already pending")
