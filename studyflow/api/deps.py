from datetime import datetime

from fastapi import Header

from studyflow.core.clock import utcnow


def get_current_user_id(x_user_id: int = Header(...)) -> int:
    """The identity provider in front of us puts the opaque user id here."""
    return x_user_id


def get_clock() -> datetime:
    return utcnow()
