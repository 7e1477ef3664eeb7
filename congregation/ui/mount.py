from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Union

from .dom import Document, Element

logger = logging.getLogger(__name__)


class ContainerNotFound(LookupError):
    def __init__(self, container_id: str) -> None:
        super().__init__(f"Mount container not found: #{container_id}")
        self.container_id = container_id


@dataclass(frozen=True)
class EditExisting:
    event_id: int


@dataclass(frozen=True)
class CreateNew:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class EnrollTwoFactor:
    pass


MountRequest = Union[EditExisting, CreateNew, EnrollTwoFactor]


class MountState(str, Enum):
    EMPTY = "EMPTY"
    MOUNTED = "MOUNTED"


class Root(Protocol):
    def render(self, tree: Any) -> None: ...

    def unmount(self) -> None: ...


class HtmlRoot:
    """Owns the markup rendered into one container until unmounted."""

    def __init__(self, container: Element) -> None:
        self.container = container
        self.tree: Any = None
        self.mounted = True
        container.roots.append(self)

    def render(self, tree: Any) -> None:
        if not self.mounted:
            raise RuntimeError("Cannot render into an unmounted root")
        self.tree = tree
        self.container.inner_html = tree.render()

    def unmount(self) -> None:
        if not self.mounted:
            return
        self.mounted = False
        self.tree = None
        self.container.inner_html = ""
        self.container.roots.remove(self)


class MountManager:
    """
    Keeps at most one live root in a single container.

    ``show`` replaces whatever is mounted; the tree it renders receives
    ``close`` as its close callback. Every teardown, whether triggered by a
    new ``show`` or by ``close``, unmounts the root and then calls
    ``on_teardown`` exactly once.
    """

    def __init__(
        self,
        document: Document,
        container_id: str,
        on_teardown: Callable[[], None],
        build_tree: Callable[[MountRequest, Callable[[], None]], Any],
        create_root: Callable[[Element], Root] = HtmlRoot,
    ) -> None:
        self.document = document
        self.container_id = container_id
        self.on_teardown = on_teardown
        self.build_tree = build_tree
        self.create_root = create_root
        self._root: Optional[Root] = None

    @property
    def state(self) -> MountState:
        return MountState.MOUNTED if self._root is not None else MountState.EMPTY

    @property
    def root(self) -> Optional[Root]:
        return self._root

    def show(self, request: MountRequest) -> Root:
        container = self.document.get_element_by_id(self.container_id)
        if container is None:
            raise ContainerNotFound(self.container_id)
        # A request that cannot be built leaves the current root untouched.
        tree = self.build_tree(request, self.close)
        self._teardown()
        root = self.create_root(container)
        self._root = root
        try:
            root.render(tree)
        except Exception:
            self._root = None
            root.unmount()
            raise
        logger.debug("Mounted %r into #%s", request, self.container_id)
        return root

    def close(self) -> None:
        self._teardown()

    def _teardown(self) -> None:
        if self._root is None:
            return
        root, self._root = self._root, None
        root.unmount()
        self.on_teardown()
