"""Document -> storage markup serialization"""

from collections.abc import Callable, Iterable

from lessonmark.core.models import (
    Block,
    Carousel,
    Code,
    Heading,
    Image,
    MultiCode,
    Note,
    Text,
)


IMAGE_ALT = "Image"


def _heading(b: Heading) -> str:
    return f"<h2>{b.content}</h2>"


def _text(b: Text) -> str:
    return f"<p>{b.content}</p>"


def _code(b: Code) -> str:
    return f'<code language="{b.language}">{b.content}</code>'


def _multicode(b: MultiCode) -> str:
    snippets = "".join(
        f'<snippet label="{s.label}" language="{s.language}">{s.content}</snippet>'
        for s in b.snippets
    )
    return f"<multicode>{snippets}</multicode>"


def _note(b: Note) -> str:
    return f'<note type="{b.level.value}">{b.content}</note>'


def _image(b: Image) -> str:
    return f'<img src="{b.url}" alt="{IMAGE_ALT}"/>'


def _carousel(b: Carousel) -> str:
    images = "".join(f'<img src="{img.url}" alt="{img.caption}"/>' for img in b.images)
    return f"<carousel>{images}</carousel>"


EMITTERS: dict[type, Callable] = {
    Heading:   _heading,
    Text:      _text,
    Code:      _code,
    MultiCode: _multicode,
    Note:      _note,
    Image:     _image,
    Carousel:  _carousel,
}


def serialize_block(block: Block) -> str:
    return EMITTERS[type(block)](block)


def serialize(blocks: Iterable[Block]) -> str:
    """Render blocks in order as newline-separated markup elements.

    Values are written verbatim: a '"' inside an attribute value produces markup
    the parser will misread. Check unsafe_values() before saving.
    """
    return "\n".join(serialize_block(b) for b in blocks)


def unsafe_values(blocks: Iterable[Block]) -> list[tuple[str, str]]:
    """Return (block_id, field) pairs whose attribute values contain a double quote."""
    found = []
    for b in blocks:
        if isinstance(b, Code) and '"' in b.language:
            found.append((b.id, "language"))
        elif isinstance(b, Image) and '"' in b.url:
            found.append((b.id, "url"))
        elif isinstance(b, MultiCode):
            for s in b.snippets:
                found.extend((b.id, f"snippets.{s.id}.{name}")
                             for name in ("label", "language") if '"' in getattr(s, name))
        elif isinstance(b, Carousel):
            for img in b.images:
                found.extend((b.id, f"images.{img.id}.{name}")
                             for name in ("url", "caption") if '"' in getattr(img, name))
    return found
