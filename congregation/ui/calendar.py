from __future__ import annotations

from typing import Any, Callable, Mapping

from ..config import CALENDAR_EVENT_CONTAINER_ID, TWO_FACTOR_CONTAINER_ID
from .components import ExistingEvent, UserTwoFactorEnrollment
from .dom import Document, Element
from .mount import CreateNew, EditExisting, EnrollTwoFactor, HtmlRoot, MountManager, MountRequest, Root


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj[name]
    return getattr(obj, name)


def event_editor_tree(request: MountRequest, on_close: Callable[[], None]) -> ExistingEvent:
    if isinstance(request, EditExisting):
        return ExistingEvent(on_close=on_close, event_id=request.event_id)
    if isinstance(request, CreateNew):
        return ExistingEvent(on_close=on_close, event_id=0, start=request.start, end=request.end)
    raise TypeError(f"Unsupported mount request: {request!r}")


class CalendarEventEditor:
    """Entry points the calendar page calls to open the event editor."""

    def __init__(
        self,
        document: Document,
        refresh_all_full_calendar_sources: Callable[[], None],
        create_root: Callable[[Element], Root] = HtmlRoot,
    ) -> None:
        self.manager = MountManager(
            document,
            CALENDAR_EVENT_CONTAINER_ID,
            on_teardown=refresh_all_full_calendar_sources,
            build_tree=event_editor_tree,
            create_root=create_root,
        )

    def show_event_form(self, event: Any) -> Root:
        return self.manager.show(EditExisting(event_id=int(_field(event, "id"))))

    def show_new_event_form(self, info: Any) -> Root:
        return self.manager.show(CreateNew(start=_field(info, "start"), end=_field(info, "end")))


def mount_two_factor_enrollment(
    document: Document,
    create_root: Callable[[Element], Root] = HtmlRoot,
) -> MountManager:
    manager = MountManager(
        document,
        TWO_FACTOR_CONTAINER_ID,
        on_teardown=lambda: None,
        build_tree=lambda request, on_close: UserTwoFactorEnrollment(),
        create_root=create_root,
    )
    manager.show(EnrollTwoFactor())
    return manager
