"""Presentation nodes of the read-only display tree.

Interactive nodes carry their own UI state (copied timer, active tab, current
slide). That state is scoped to one node and never shared between blocks.
"""

import time
from typing import Annotated, Literal, Protocol, Union

from pydantic import BaseModel, Field


COPY_RESET_SECONDS = 2.0


class Clipboard(Protocol):
    def write_text(self, text: str) -> None: ...


class HighlightSpan(BaseModel):
    token: str                      # pygments token type, e.g. "Token.Keyword"
    text: str


class TextNode(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class ElementNode(BaseModel):
    """A standard element mapped to a named style (None for unstyled tags)."""
    kind: Literal["element"] = "element"
    tag: str
    style: str | None = None
    attrs: dict[str, str] = {}
    children: list["DisplayNode"] = []


class CodeView(BaseModel):
    kind: Literal["code"] = "code"
    language: str
    code: str
    tokens: list[HighlightSpan] = []
    copy_reset: float = COPY_RESET_SECONDS
    copied_at: float | None = None

    @property
    def label(self) -> str:
        return self.language or "text"

    @property
    def display_code(self) -> str:
        return self.code.strip()

    def copy_to_clipboard(self, clipboard: Clipboard, now: float | None = None) -> None:
        """Write the raw code to the clipboard and enter the transient copied state."""
        clipboard.write_text(self.code)
        self.copied_at = time.monotonic() if now is None else now

    def is_copied(self, now: float | None = None) -> bool:
        if self.copied_at is None:
            return False
        now = time.monotonic() if now is None else now
        return now - self.copied_at < self.copy_reset


class SnippetView(BaseModel):
    label: str
    language: str
    code: str
    tokens: list[HighlightSpan] = []


class TabbedCodeView(BaseModel):
    kind: Literal["multicode"] = "multicode"
    snippets: list[SnippetView] = []
    active: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.snippets

    @property
    def active_snippet(self) -> SnippetView | None:
        return self.snippets[self.active] if self.snippets else None

    def select(self, index: int) -> SnippetView:
        if not 0 <= index < len(self.snippets):
            raise IndexError(f"Tab {index} out of range for {len(self.snippets)} snippet(s)")
        self.active = index
        return self.snippets[index]

    def copy_to_clipboard(self, clipboard: Clipboard) -> None:
        if self.active_snippet is not None:
            clipboard.write_text(self.active_snippet.code)


class CalloutView(BaseModel):
    kind: Literal["note"] = "note"
    type: str = "info"
    icon: str = "info"
    children: list["DisplayNode"] = []


class FigureView(BaseModel):
    kind: Literal["image"] = "image"
    src: str
    alt: str
    caption: str | None = None


class GalleryItem(BaseModel):
    url: str
    caption: str = ""


class GalleryView(BaseModel):
    """Paginated carousel; navigation wraps around at both ends."""
    kind: Literal["carousel"] = "carousel"
    items: list[GalleryItem]
    current: int = 0

    @property
    def current_item(self) -> GalleryItem:
        return self.items[self.current]

    @property
    def position(self) -> str:
        return f"{self.current + 1} / {len(self.items)}"

    @property
    def has_controls(self) -> bool:
        return len(self.items) > 1

    def next(self) -> GalleryItem:
        self.current = (self.current + 1) % len(self.items)
        return self.current_item

    def previous(self) -> GalleryItem:
        self.current = (self.current - 1) % len(self.items)
        return self.current_item

    def go_to(self, index: int) -> GalleryItem:
        if not 0 <= index < len(self.items):
            raise IndexError(f"Slide {index} out of range for {len(self.items)} image(s)")
        self.current = index
        return self.current_item


DisplayNode = Annotated[
    Union[TextNode, ElementNode, CodeView, TabbedCodeView, CalloutView, FigureView, GalleryView],
    Field(discriminator="kind"),
]


class DisplayTree(BaseModel):
    children: list[DisplayNode] = []

    def walk(self):
        """Yield every node depth-first, in document order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(getattr(node, "children", [])))


ElementNode.model_rebuild()
CalloutView.model_rebuild()
DisplayTree.model_rebuild()
