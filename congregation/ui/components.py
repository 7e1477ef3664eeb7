from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Callable, Optional


def _stamp(value: Optional[datetime]) -> str:
    return value.isoformat(timespec="minutes") if value else ""


@dataclass
class ExistingEvent:
    """Calendar event editor. ``event_id == 0`` edits a new event between start and end."""

    on_close: Callable[[], None]
    event_id: int
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def is_new(self) -> bool:
        return self.event_id == 0

    def render(self) -> str:
        title = "New Event" if self.is_new else "Edit Event"
        return (
            f'<form class="event-editor" data-event-id="{self.event_id}">'
            f"<h4>{escape(title)}</h4>"
            f'<input type="datetime-local" name="start" value="{escape(_stamp(self.start))}">'
            f'<input type="datetime-local" name="end" value="{escape(_stamp(self.end))}">'
            '<button type="submit">Save</button>'
            '<button type="button" data-action="close">Close</button>'
            "</form>"
        )

    def close(self) -> None:
        self.on_close()


@dataclass
class UserTwoFactorEnrollment:
    def render(self) -> str:
        return (
            '<form class="two-factor-enrollment">'
            "<h4>Two-Factor Authentication</h4>"
            '<input type="text" name="code" autocomplete="one-time-code">'
            '<button type="submit">Enroll</button>'
            "</form>"
        )
