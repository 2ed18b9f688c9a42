"""
hospital/session.py

Current-user session and the capped login audit trail.

The current user lives in memory only.  The history list is newest-first,
capped, and mirrored to durable storage after every change.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import TypeAdapter

from hospital.config import DEFAULT_HISTORY_LIMIT
from hospital.ids import IdGenerator
from hospital.mirror import LOGIN_HISTORY, DurableMirror
from storage.models import HistoryEntry, SessionStatus, User
from storage.seed import seed_login_history

logger = logging.getLogger(__name__)

_HISTORY_ADAPTER = TypeAdapter(list[HistoryEntry])


def format_date(moment: datetime) -> str:
    """``Oct 5, 2023`` style: abbreviated month, unpadded day."""
    return f"{moment:%b} {moment.day}, {moment.year}"


def format_time(moment: datetime) -> str:
    """``08:30 AM`` style: two-digit 12-hour clock."""
    return moment.strftime("%I:%M %p")


def greeting(moment: datetime) -> str:
    if moment.hour < 12:
        return "Good Morning"
    if moment.hour < 17:
        return "Good Afternoon"
    return "Good Evening"


class SessionTracker:
    def __init__(
        self,
        mirror: DurableMirror,
        ids: IdGenerator,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] = datetime.now,
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self._mirror = mirror
        self._ids = ids
        self.limit = limit
        self._clock = clock
        self._on_change = on_change
        self.current_user: Optional[User] = None
        self._history: list[HistoryEntry] = mirror.hydrate(
            LOGIN_HISTORY, _HISTORY_ADAPTER, seed_login_history
        )[:limit]
        self._ids.observe(entry.id for entry in self._history)

    @property
    def history(self) -> list[HistoryEntry]:
        return [entry.model_copy() for entry in self._history]

    def _commit(self) -> None:
        self._mirror.save(LOGIN_HISTORY, _HISTORY_ADAPTER, self._history)
        if self._on_change is not None:
            self._on_change(LOGIN_HISTORY)

    def login(self, user: Union[User, Mapping[str, Any]]) -> HistoryEntry:
        """Start a session for *user* and record an Active history entry."""
        if not isinstance(user, User):
            user = User.model_validate(user)
        self.current_user = user

        now = self._clock()
        entry = HistoryEntry(
            id=self._ids.next_id(),
            user=user.name,
            role=user.role,
            date=format_date(now),
            time=format_time(now),
            status=SessionStatus.active,
        )
        self._history = [entry, *self._history][: self.limit]
        self._commit()
        logger.info("Login: %s (%s)", user.name, user.role)
        return entry.model_copy()

    def logout(self, confirm: Optional[Callable[[], bool]] = None) -> bool:
        """
        End the current session.

        If *confirm* is given and returns False, nothing changes and the
        call returns False.  Otherwise the newest Active entry for the
        current user's name becomes Logged Out and the user is cleared.
        """
        if confirm is not None and not confirm():
            logger.debug("Logout not confirmed; session kept.")
            return False

        user = self.current_user
        self.current_user = None
        if user is None:
            return True

        for i, entry in enumerate(self._history):
            if entry.user == user.name and entry.status == SessionStatus.active.value:
                self._history[i] = entry.model_copy(update={"status": SessionStatus.logged_out.value})
                self._commit()
                break
        logger.info("Logout: %s", user.name)
        return True

    def flush(self) -> bool:
        return self._mirror.save(LOGIN_HISTORY, _HISTORY_ADAPTER, self._history)

    def reset(self) -> None:
        self._history = seed_login_history()
        self._commit()
