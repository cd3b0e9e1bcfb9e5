"""Storage markup -> Document parsing for the editor"""

import logging
from collections.abc import Callable

from lessonmark.core.models import (
    DEFAULT_LANGUAGE,
    Block,
    Carousel,
    CarouselImage,
    Code,
    Document,
    Heading,
    Image,
    MultiCode,
    Note,
    NoteLevel,
    Snippet,
    Text,
)
from lessonmark.core.utils.ids import IdGenerator, generate_id
from lessonmark.core.utils.markup import (
    PARSE_ERRORS,
    has_ancestor,
    inner_markup,
    is_element,
    parse_body,
    tag_name,
    text_content,
)


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

NextId = Callable[[], str]


def _note_level(value: str | None) -> NoteLevel:
    try:
        return NoteLevel((value or "").strip().lower())
    except ValueError:
        return NoteLevel.info


def _heading(el, next_id: NextId) -> Heading:
    return Heading(id=next_id(), content=inner_markup(el))


def _text(el, next_id: NextId) -> Text:
    return Text(id=next_id(), content=inner_markup(el))


def _code(el, next_id: NextId) -> Code:
    return Code(
        id=next_id(),
        content=text_content(el),
        language=el.get("language") or DEFAULT_LANGUAGE,
    )


def _multicode(el, next_id: NextId) -> MultiCode:
    block_id = next_id()
    snippets = tuple(
        Snippet(
            id=next_id(),
            label=s.get("label") or "Snippet",
            language=s.get("language") or DEFAULT_LANGUAGE,
            content=text_content(s),
        )
        for s in el.iter("snippet")
    )
    if not snippets:
        snippets = (Snippet(id=next_id(), label="Index"),)
    return MultiCode(id=block_id, snippets=snippets)


def _note(el, next_id: NextId) -> Note:
    return Note(id=next_id(), content=inner_markup(el), level=_note_level(el.get("type")))


def _image(el, next_id: NextId) -> Image | None:
    if has_ancestor(el, "carousel"):
        return None
    return Image(id=next_id(), url=el.get("src") or "")


def _carousel(el, next_id: NextId) -> Carousel:
    block_id = next_id()
    images = tuple(
        CarouselImage(id=next_id(), url=img.get("src") or "", caption=img.get("alt") or "")
        for img in el.iter("img")
    )
    return Carousel(id=block_id, images=images)


BLOCK_HANDLERS: dict[str, Callable] = {
    'h1':        _heading,
    'h2':        _heading,
    'h3':        _heading,
    'p':         _text,
    'code':      _code,
    'multicode': _multicode,
    'note':      _note,
    'img':       _image,
    'carousel':  _carousel,
}


def _walk(parent, next_id: NextId, blocks: list[Block], depth: int, max_depth: int) -> None:
    """Append blocks for each element child; unrecognized tags are flattened into their children."""
    for node in parent:
        if not is_element(node):
            continue
        handler = BLOCK_HANDLERS.get(tag_name(node))
        if handler is not None:
            block = handler(node, next_id)
            if block is not None:
                blocks.append(block)
        elif depth >= max_depth:
            logger.warning("Skipping <%s> nested deeper than %d levels", tag_name(node), max_depth)
        else:
            _walk(node, next_id, blocks, depth + 1, max_depth)


def parse(markup: str, ids: IdGenerator | None = None, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    """Parse storage markup into a Document. Never raises.

    Ids are always freshly generated. Blank input gives one empty Text block; when
    nothing else is recognized the single Text block holds the raw input, so
    content is never silently lost.
    """
    next_id = ids.generate if ids else generate_id
    blocks: list[Block] = []

    if markup and markup.strip():
        try:
            body = parse_body(markup)
        except PARSE_ERRORS as e:
            logger.warning("Markup could not be parsed, keeping it as raw text: %s", e)
        else:
            _walk(body, next_id, blocks, 0, max_depth)

    if not blocks:
        if not markup or not markup.strip():
            return (Text(id=next_id(), content=""),)
        logger.debug("No blocks recognized in %d chars of markup; using fallback text block", len(markup))
        return (Text(id=next_id(), content=markup),)
    return tuple(blocks)
