"""Unit tests for core/serialize.py"""

from lessonmark.core.models import (
    Carousel,
    CarouselImage,
    Code,
    Heading,
    Image,
    MultiCode,
    Note,
    NoteLevel,
    Snippet,
    Text,
)
from lessonmark.core.serialize import serialize, serialize_block, unsafe_values


def test_serialize_empty_document():
    """An empty document serializes to an empty string."""
    assert serialize([]) == ""


def test_serialize_heading_always_h2():
    """Headings are written as h2 with content verbatim."""
    assert serialize_block(Heading(id="a", content="Intro <em>x</em>")) == "<h2>Intro <em>x</em></h2>"


def test_serialize_text():
    """Text blocks become p elements."""
    assert serialize_block(Text(id="a", content="hello")) == "<p>hello</p>"


def test_serialize_code():
    """Code carries its language attribute."""
    assert serialize_block(Code(id="a", content="print(1)", language="python")) == (
        '<code language="python">print(1)</code>'
    )


def test_serialize_multicode():
    """Snippets are emitted in order inside one multicode element."""
    block = MultiCode(id="m", snippets=(
        Snippet(id="s1", label="A", language="go", content="x"),
        Snippet(id="s2", label="B", language="rust", content="y"),
    ))
    assert serialize_block(block) == (
        '<multicode>'
        '<snippet label="A" language="go">x</snippet>'
        '<snippet label="B" language="rust">y</snippet>'
        '</multicode>'
    )


def test_serialize_note():
    """Notes carry their level as the type attribute."""
    assert serialize_block(Note(id="n", content="careful", level=NoteLevel.warning)) == (
        '<note type="warning">careful</note>'
    )


def test_serialize_image_fixed_alt():
    """Standalone images get the fixed 'Image' alt text."""
    assert serialize_block(Image(id="i", url="a.png")) == '<img src="a.png" alt="Image"/>'


def test_serialize_carousel_captions_as_alt():
    """Carousel slides carry their caption in the alt attribute."""
    block = Carousel(id="c", images=(
        CarouselImage(id="1", url="1.png", caption="one"),
        CarouselImage(id="2", url="2.png"),
    ))
    assert serialize_block(block) == '<carousel><img src="1.png" alt="one"/><img src="2.png" alt=""/></carousel>'


def test_serialize_joins_blocks_with_newlines():
    """Each block is one element on its own line, in document order."""
    doc = (Heading(id="a", content="T"), Text(id="b", content="p"))
    assert serialize(doc) == "<h2>T</h2>\n<p>p</p>"


def test_serialize_is_deterministic():
    """Serializing the same document twice gives byte-identical output."""
    doc = (Heading(id="a", content="T"), MultiCode(id="m"), Carousel(id="c"))
    assert serialize(doc) == serialize(doc)


def test_serialize_ignores_ids():
    """Ids never appear in the markup."""
    doc = (Text(id="first", content="x"),)
    same = (Text(id="second", content="x"),)
    assert serialize(doc) == serialize(same)
    assert "first" not in serialize(doc)


def test_unsafe_values_none_for_clean_document():
    """A document without quotes in attribute values is clean."""
    doc = (Code(id="c", content='say("hi")', language="python"), Image(id="i", url="a.png"))
    assert unsafe_values(doc) == []


def test_unsafe_values_reports_fields():
    """Quotes in url, language, label and caption attribute values are reported."""
    doc = (
        Image(id="i", url='a".png'),
        MultiCode(id="m", snippets=(Snippet(id="s", label='say "hi"'),)),
        Carousel(id="c", images=(CarouselImage(id="g", url="x.png", caption='a "b"'),)),
    )
    assert unsafe_values(doc) == [
        ("i", "url"),
        ("m", "snippets.s.label"),
        ("c", "images.g.caption"),
    ]
