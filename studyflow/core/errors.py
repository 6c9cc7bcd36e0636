class StudyError(Exception):
    """Base class for failures surfaced to the caller with a typed reason."""


class NotFound(StudyError):
    pass


class InvalidState(StudyError):
    pass


class InvalidArgument(StudyError):
    pass


class Conflict(StudyError):
    """A row kept changing underneath us after every retry."""


class DuplicateRow(Exception):
    """Another writer inserted the same unique row first; safe to retry."""
