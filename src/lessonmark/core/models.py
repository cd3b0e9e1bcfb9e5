"""Block model: the typed, immutable units of authored topic content"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from lessonmark.core.utils.ids import generate_id


DEFAULT_LANGUAGE = "javascript"
DEFAULT_SNIPPET_LABEL = "Index"


class NoteLevel(str, Enum):
    """Callout levels a note block can carry"""
    info = "info"
    warning = "warning"
    tip = "tip"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Snippet(_Frozen):
    """One labelled, language-tagged code sample inside a MultiCode block."""
    id: str = Field(default_factory=generate_id)
    label: str = "Snippet"
    language: str = DEFAULT_LANGUAGE
    content: str = ""               # raw text, never markup


class CarouselImage(_Frozen):
    id: str = Field(default_factory=generate_id)
    url: str
    caption: str = ""


def _default_snippets() -> tuple[Snippet, ...]:
    return (Snippet(label=DEFAULT_SNIPPET_LABEL),)


class Heading(_Frozen):
    kind: Literal["heading"] = "heading"
    id: str = Field(default_factory=generate_id)
    content: str = ""               # opaque inline markup fragment


class Text(_Frozen):
    kind: Literal["text"] = "text"
    id: str = Field(default_factory=generate_id)
    content: str = ""


class Code(_Frozen):
    kind: Literal["code"] = "code"
    id: str = Field(default_factory=generate_id)
    content: str = ""
    language: str = DEFAULT_LANGUAGE


class MultiCode(_Frozen):
    kind: Literal["multi-code"] = "multi-code"
    id: str = Field(default_factory=generate_id)
    snippets: tuple[Snippet, ...] = Field(default_factory=_default_snippets)


class Note(_Frozen):
    kind: Literal["note"] = "note"
    id: str = Field(default_factory=generate_id)
    content: str = ""
    level: NoteLevel = NoteLevel.info


class Image(_Frozen):
    kind: Literal["image"] = "image"
    id: str = Field(default_factory=generate_id)
    url: str = ""


class Carousel(_Frozen):
    kind: Literal["carousel"] = "carousel"
    id: str = Field(default_factory=generate_id)
    images: tuple[CarouselImage, ...] = ()


Block = Annotated[
    Union[Heading, Text, Code, MultiCode, Note, Image, Carousel],
    Field(discriminator="kind"),
]

# Ordered blocks; position is render order.
Document = tuple[Block, ...]

BLOCK_TYPES: dict[str, type[BaseModel]] = {
    cls.model_fields["kind"].default: cls
    for cls in (Heading, Text, Code, MultiCode, Note, Image, Carousel)
}

_document_adapter = TypeAdapter(Document)


def _drop_ids(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _drop_ids(v) for k, v in data.items() if k != "id"}
    if isinstance(data, (list, tuple)):
        return [_drop_ids(v) for v in data]
    return data


def strip_ids(block: BaseModel) -> dict[str, Any]:
    """Return the block's fields with every id removed, at any nesting level."""
    return _drop_ids(block.model_dump(mode="json"))


def structurally_equal(a: Document, b: Document) -> bool:
    """True when both documents hold the same variants and fields in the same order, ignoring ids."""
    return len(a) == len(b) and all(strip_ids(x) == strip_ids(y) for x, y in zip(a, b))


def find_block(doc: Document, block_id: str) -> Block:
    """Return the block with the given id. Raises KeyError if absent."""
    for block in doc:
        if block.id == block_id:
            return block
    raise KeyError(block_id)


def dump_document(doc: Document, indent: int | None = 2) -> str:
    """Serialize a Document to JSON (editor state, not the storage markup)."""
    return _document_adapter.dump_json(doc, indent=indent).decode("utf-8")


def load_document_json(data: str | bytes) -> Document:
    """Validate a JSON array of blocks back into a Document."""
    return _document_adapter.validate_json(data)
