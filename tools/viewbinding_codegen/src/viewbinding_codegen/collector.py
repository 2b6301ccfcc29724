from __future__ import annotations

import enum
from dataclasses import dataclass, field
from html.parser import HTMLParser
from pathlib import Path
from typing import Iterable

from .common import ViewBindingError


@dataclass(frozen=True)
class ClassId:
    class_name: str
    id: str


@dataclass
class ViewBindings:
    """Declarations collected from one UI file, in document order."""

    class_ids: list[ClassId] = field(default_factory=list)
    handlers: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.class_ids and not self.handlers


class ElementKind(enum.Enum):
    OBJECT = "object"
    SIGNAL = "signal"

    @classmethod
    def from_tag(cls, tag: str) -> ElementKind | None:
        try:
            return cls(tag)
        except ValueError:
            return None


def collect_object(bindings: ViewBindings, attributes: Iterable[tuple[str, str]]) -> ViewBindings:
    # Every pair is visited, so a repeated attribute keeps its last value.
    class_name: str | None = None
    widget_id: str | None = None
    for name, value in attributes:
        if name == "class":
            class_name = value
        elif name == "id":
            widget_id = value

    if class_name and widget_id:
        bindings.class_ids.append(ClassId(class_name=class_name, id=widget_id))
    return bindings


def collect_signal(bindings: ViewBindings, attributes: Iterable[tuple[str, str]]) -> ViewBindings:
    handler: str | None = None
    for name, value in attributes:
        if name == "handler":
            handler = value
            break

    if handler:
        bindings.handlers.append(handler)
    return bindings


def collect_element(bindings: ViewBindings, tag: str, attributes: Iterable[tuple[str, str]]) -> ViewBindings:
    kind = ElementKind.from_tag(tag)
    if kind is ElementKind.OBJECT:
        return collect_object(bindings, attributes)
    if kind is ElementKind.SIGNAL:
        return collect_signal(bindings, attributes)
    return bindings


class _StartTagScanner(HTMLParser):
    """Feed start tags to the collector, keeping every attribute pair in source order.

    Element nesting is tracked only to reject unbalanced markup.
    """

    def __init__(self, bindings: ViewBindings) -> None:
        super().__init__(convert_charrefs=True)
        self.bindings = bindings
        self._open: list[str] = []

    def _collect(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        collect_element(self.bindings, tag, [(name, value or "") for name, value in attrs])

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._collect(tag, attrs)
        self._open.append(tag)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._collect(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        if not self._open:
            raise ViewBindingError(f"closing tag </{tag}> has no matching start tag")
        if self._open[-1] != tag:
            raise ViewBindingError(f"closing tag </{tag}> does not match open element <{self._open[-1]}>")
        self._open.pop()

    def close(self) -> None:
        super().close()
        if self._open:
            raise ViewBindingError(f"element <{self._open[-1]}> was never closed")


def scan_ui_text(content: str | bytes) -> ViewBindings:
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ViewBindingError(f"document is not valid UTF-8: {exc}") from exc
    bindings = ViewBindings()
    scanner = _StartTagScanner(bindings)
    scanner.feed(content)
    scanner.close()
    return bindings


def scan_ui_file(path: Path) -> ViewBindings:
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise ViewBindingError(f"Error reading file {path}: {exc}") from exc
    try:
        return scan_ui_text(content)
    except ViewBindingError as exc:
        raise ViewBindingError(f"Error parsing XML file {path}: {exc}") from exc
