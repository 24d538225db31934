"""
Page Services

Contract for the DOM, style and accessibility facts the evaluator
consumes, plus the default implementation backed by a captured page
snapshot. The snapshot is an array-backed tree: every node stores the
index of its parent, and parents always precede their children, so
ancestor walks are plain index lookups that cannot loop.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from .models import StyleSnapshot


logger = logging.getLogger(__name__)

# ARIA roles that inherit from widget
WIDGET_ROLES = frozenset({
    "button", "checkbox", "combobox", "grid", "gridcell", "link", "listbox",
    "menu", "menubar", "menuitem", "menuitemcheckbox", "menuitemradio",
    "option", "progressbar", "radio", "radiogroup", "scrollbar", "searchbox",
    "separator", "slider", "spinbutton", "switch", "tab", "tablist",
    "tabpanel", "textbox", "tree", "treegrid", "treeitem",
})


class SnapshotError(ValueError):
    """Raised when a page snapshot cannot be read or is malformed."""


class PageServices(ABC):
    """
    Abstract source of page facts.

    Elements are opaque handles; the evaluator only passes them back to
    these methods. Implementations must return elements in DOM order.
    """

    @abstractmethod
    def elements(self) -> Iterator:
        """Yield every element of the page in DOM traversal order."""

    @abstractmethod
    def style(self, element, name: str) -> str:
        """Computed value of CSS property `name`, or "" when unknown."""

    @abstractmethod
    def parent(self, element):
        """Parent element, or None for the root."""

    @abstractmethod
    def tag_name(self, element) -> str:
        pass

    @abstractmethod
    def is_visible(self, element) -> bool:
        pass

    @abstractmethod
    def has_text_content(self, element) -> bool:
        """True when the element owns at least one text node."""

    @abstractmethod
    def trimmed_text(self, element) -> str:
        pass

    @abstractmethod
    def is_html_element(self, element) -> bool:
        """True for elements in the HTML namespace (not SVG/MathML)."""

    @abstractmethod
    def role(self, element) -> Optional[str]:
        """Computed ARIA role, or None."""

    @abstractmethod
    def attribute(self, element, name: str) -> Optional[str]:
        """Attribute value, or None when the attribute is absent."""

    @abstractmethod
    def is_disabled_widget_label(self, element) -> bool:
        """True when the element is part of the accessible name of a disabled widget."""

    @abstractmethod
    def pointer(self, element) -> str:
        """Stable identifier of the element for reports (selector or path)."""

    def is_widget_role(self, element) -> bool:
        return self.role(element) in WIDGET_ROLES

    def style_snapshot(self, element) -> StyleSnapshot:
        """Read the style facts the evaluator needs, once per element."""
        styles = {}
        for name in StyleSnapshot.model_fields:
            prop = name.replace("_", "-")
            value = self.style(element, prop)
            if value != "":
                styles[prop] = value
        return StyleSnapshot.from_styles(styles)


class SnapshotNode(BaseModel):
    """
    One element of a captured page.

    Attributes:
        tag: Lower-case tag name
        parent: Index of the parent node, None for the root
        namespace: "html", "svg" or "math"
        pointer: CSS selector of the element (optional)
        text: Trimmed text of the element
        has_text_node: Whether the element owns a text node directly
        visible: Result of the visibility check at capture time
        role: Computed ARIA role
        attributes: Element attributes
        styles: Computed styles keyed by CSS property name
        labels: Indices of nodes that make up this element's accessible name
    """

    tag: str
    parent: Optional[int] = None
    namespace: str = "html"
    pointer: Optional[str] = None
    text: str = ""
    has_text_node: Optional[bool] = None
    visible: bool = True
    role: Optional[str] = None
    attributes: dict[str, str] = Field(default_factory=dict)
    styles: dict[str, str] = Field(default_factory=dict)
    labels: list[int] = Field(default_factory=list)


class PageSnapshot(BaseModel):
    """A captured page: its URL and its nodes in DOM order."""

    url: str = ""
    nodes: list[SnapshotNode] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_tree(self) -> "PageSnapshot":
        for index, node in enumerate(self.nodes):
            if node.parent is not None and not 0 <= node.parent < index:
                raise ValueError(
                    f"node {index} ({node.tag}) has parent {node.parent}; "
                    f"parents must precede their children"
                )
            for label in node.labels:
                if not 0 <= label < len(self.nodes):
                    raise ValueError(f"node {index} ({node.tag}) has unknown label node {label}")
        return self


class SnapshotPage(PageServices):
    """
    PageServices over a PageSnapshot. Elements are node indices.

    Example:
        page = load_snapshot(Path("page.json"))
        for element in page.elements():
            print(page.pointer(element), page.style(element, "color"))
    """

    def __init__(self, snapshot: PageSnapshot):
        self.snapshot = snapshot
        self._disabled_labels = self._collect_disabled_labels()
        self._positions, self._child_counts = self._collect_positions()

    @property
    def url(self) -> str:
        return self.snapshot.url

    def _node(self, element: int) -> SnapshotNode:
        return self.snapshot.nodes[element]

    def _collect_disabled_labels(self) -> frozenset[int]:
        labels = set()
        for node in self.snapshot.nodes:
            if node.role not in WIDGET_ROLES:
                continue
            disabled = "disabled" in node.attributes or node.attributes.get("aria-disabled") == "true"
            if disabled:
                labels.update(node.labels)
        return frozenset(labels)

    def _collect_positions(self) -> tuple[list[int], dict[Optional[int], int]]:
        positions = []
        counts: dict[Optional[int], int] = {}
        for node in self.snapshot.nodes:
            counts[node.parent] = counts.get(node.parent, 0) + 1
            positions.append(counts[node.parent])
        return positions, counts

    def elements(self) -> Iterator[int]:
        return iter(range(len(self.snapshot.nodes)))

    def style(self, element: int, name: str) -> str:
        return self._node(element).styles.get(name, "")

    def parent(self, element: int) -> Optional[int]:
        return self._node(element).parent

    def tag_name(self, element: int) -> str:
        return self._node(element).tag.lower()

    def is_visible(self, element: int) -> bool:
        return self._node(element).visible

    def has_text_content(self, element: int) -> bool:
        node = self._node(element)
        if node.has_text_node is not None:
            return node.has_text_node
        return node.text.strip() != ""

    def trimmed_text(self, element: int) -> str:
        return self._node(element).text.strip()

    def is_html_element(self, element: int) -> bool:
        return self._node(element).namespace == "html"

    def role(self, element: int) -> Optional[str]:
        return self._node(element).role

    def attribute(self, element: int, name: str) -> Optional[str]:
        return self._node(element).attributes.get(name)

    def is_disabled_widget_label(self, element: int) -> bool:
        return element in self._disabled_labels

    def pointer(self, element: int) -> str:
        node = self._node(element)
        if node.pointer:
            return node.pointer
        path = []
        current: Optional[int] = element
        while current is not None:
            step = self.tag_name(current)
            if self._child_counts[self.parent(current)] > 1:
                step += f":nth-child({self._positions[current]})"
            path.append(step)
            current = self.parent(current)
        return " > ".join(reversed(path))


def load_snapshot(path: Path) -> SnapshotPage:
    """
    Load a page snapshot from a JSON file.

    Raises:
        SnapshotError: If the file is unreadable, not JSON or not a valid snapshot
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e

    try:
        snapshot = PageSnapshot.model_validate(raw)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot {path}: {e}") from e

    logger.debug("Loaded snapshot %s with %d nodes", path, len(snapshot.nodes))
    return SnapshotPage(snapshot)
