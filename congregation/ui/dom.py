from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Element:
    id: str
    inner_html: str = ""
    # Roots currently mounted into this element.
    roots: List[object] = field(default_factory=list)


class Document:
    """The handful of page elements a mount manager can reach by id."""

    def __init__(self, *element_ids: str) -> None:
        self._elements: Dict[str, Element] = {}
        for element_id in element_ids:
            self.add(element_id)

    def add(self, element_id: str) -> Element:
        element = Element(element_id)
        self._elements[element_id] = element
        return element

    def remove(self, element_id: str) -> None:
        self._elements.pop(element_id, None)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return self._elements.get(element_id)
