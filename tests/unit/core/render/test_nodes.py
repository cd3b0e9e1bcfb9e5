"""Unit tests for core/render/nodes.py"""

import pytest

from lessonmark.core.render.nodes import (
    CodeView,
    DisplayTree,
    ElementNode,
    GalleryItem,
    GalleryView,
    SnippetView,
    TabbedCodeView,
    TextNode,
)


class FakeClipboard:
    def __init__(self):
        self.contents = []

    def write_text(self, text: str) -> None:
        self.contents.append(text)


@pytest.fixture(name="gallery")
def gallery_fixture():
    return GalleryView(items=[GalleryItem(url=f"{i}.png") for i in range(1, 4)])


def test_code_copy_writes_raw_code():
    """Copy writes the untrimmed code and enters the copied state."""
    clip = FakeClipboard()
    view = CodeView(language="python", code="\nx = 1\n")
    view.copy_to_clipboard(clip, now=100.0)
    assert clip.contents == ["\nx = 1\n"]
    assert view.is_copied(now=101.9)


def test_code_copied_state_resets():
    """The copied state ends after copy_reset seconds."""
    view = CodeView(language="python", code="x", copy_reset=2.0)
    assert not view.is_copied(now=0.0)
    view.copy_to_clipboard(FakeClipboard(), now=10.0)
    assert not view.is_copied(now=12.0)


def test_code_copied_state_per_view():
    """Copying one view leaves others untouched."""
    a, b = CodeView(language="js", code="a"), CodeView(language="js", code="b")
    a.copy_to_clipboard(FakeClipboard(), now=1.0)
    assert a.is_copied(now=1.5)
    assert not b.is_copied(now=1.5)


def test_code_label_falls_back_to_text():
    """An empty language is labelled 'text'."""
    assert CodeView(language="", code="x").label == "text"


def test_tabs_select():
    """select switches the active snippet; out-of-range indexes raise."""
    tabs = TabbedCodeView(snippets=[
        SnippetView(label="A", language="go", code="a"),
        SnippetView(label="B", language="rust", code="b"),
    ])
    assert tabs.select(1).label == "B"
    assert tabs.active == 1
    with pytest.raises(IndexError):
        tabs.select(2)


def test_tabs_copy_active_snippet():
    """Copy on a tab view writes the active snippet's code."""
    clip = FakeClipboard()
    tabs = TabbedCodeView(snippets=[
        SnippetView(label="A", language="go", code="a"),
        SnippetView(label="B", language="rust", code="b"),
    ])
    tabs.select(1)
    tabs.copy_to_clipboard(clip)
    assert clip.contents == ["b"]


def test_gallery_next_wraps(gallery):
    """next from the last slide wraps to the first."""
    gallery.go_to(2)
    assert gallery.next().url == "1.png"
    assert gallery.position == "1 / 3"


def test_gallery_previous_wraps(gallery):
    """previous from the first slide wraps to the last."""
    assert gallery.previous().url == "3.png"
    assert gallery.position == "3 / 3"


def test_gallery_go_to_out_of_range(gallery):
    """go_to rejects indexes outside the slides."""
    with pytest.raises(IndexError):
        gallery.go_to(3)


def test_gallery_controls_only_for_many():
    """Navigation controls show only when there is more than one slide."""
    assert not GalleryView(items=[GalleryItem(url="a.png")]).has_controls
    assert GalleryView(items=[GalleryItem(url="a.png"), GalleryItem(url="b.png")]).has_controls


def test_tree_walk_depth_first():
    """walk yields nodes depth-first in document order."""
    tree = DisplayTree(children=[
        ElementNode(tag="p", children=[TextNode(text="a"), ElementNode(tag="em", children=[TextNode(text="b")])]),
        TextNode(text="c"),
    ])
    order = [getattr(n, "text", None) or n.tag for n in tree.walk()]
    assert order == ["p", "a", "em", "b", "c"]
