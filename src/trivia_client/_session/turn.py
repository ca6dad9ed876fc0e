# Area: Session
"""
trivia_client._session.turn — Turn authorization
================================================

Pure predicates over a snapshot deciding what the local participant may
do right now. Used both to enable UI controls and to gate outbound
intents.
"""

from __future__ import annotations

from typing import Optional

from ..models import PlayerId, SessionSnapshot
from .enums import Phase


def can_answer(snapshot: SessionSnapshot, local_id: Optional[PlayerId]) -> bool:
    """True if the local participant may submit an answer now."""
    return (
        snapshot.phase == Phase.PLAYING
        and local_id is not None
        and snapshot.current_player is not None
        and snapshot.current_player.id == local_id
        and snapshot.time_left > 0
    )


def is_host(snapshot: SessionSnapshot, local_id: Optional[PlayerId]) -> bool:
    """True if the local participant is first on the roster (the session creator)."""
    return (
        local_id is not None
        and len(snapshot.players) > 0
        and snapshot.players[0].id == local_id
    )
