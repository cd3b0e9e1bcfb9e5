"""Editor operations over a Document.

Every function is pure: it returns a new tuple and leaves the input untouched,
so reordering blocks never aliases editor state. Unknown ids raise KeyError.
"""

from typing import Any

from lessonmark.core.models import (
    BLOCK_TYPES,
    Block,
    Carousel,
    CarouselImage,
    Document,
    MultiCode,
    Snippet,
    find_block,
)
from lessonmark.core.utils.ids import IdGenerator, generate_id


NEW_SNIPPET_LABEL = "New Snippet"
NEW_SLIDE_CAPTION = "Step description..."


def _index_of(doc: Document, block_id: str) -> int:
    for i, block in enumerate(doc):
        if block.id == block_id:
            return i
    raise KeyError(block_id)


def _replace(doc: Document, index: int, block: Block) -> Document:
    return doc[:index] + (block,) + doc[index + 1:]


def _validated(block: Block, changes: dict[str, Any]) -> Block:
    """model_copy skips validation; round-trip through the model so bad values raise."""
    data = block.model_dump()
    data.update(changes)
    return type(block).model_validate(data)


def new_block(kind: str, ids: IdGenerator | None = None) -> Block:
    """Create an empty block of the given kind with editor defaults."""
    cls = BLOCK_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown block kind: {kind!r}")
    next_id = ids.generate if ids else generate_id
    if cls is MultiCode:
        return MultiCode(id=next_id(), snippets=(Snippet(id=next_id(), label="Index"),))
    return cls(id=next_id())


def insert_block(doc: Document, block: Block, index: int | None = None) -> Document:
    """Insert block at index (append when None). Raises ValueError on a duplicate id."""
    if any(b.id == block.id for b in doc):
        raise ValueError(f"Duplicate block id: {block.id}")
    if index is None:
        return doc + (block,)
    return doc[:index] + (block,) + doc[index:]


def delete_block(doc: Document, block_id: str) -> Document:
    i = _index_of(doc, block_id)
    return doc[:i] + doc[i + 1:]


def move_block(doc: Document, block_id: str, offset: int) -> Document:
    """Move a block by offset positions (-1 up, +1 down), clamped to the document bounds."""
    i = _index_of(doc, block_id)
    target = max(0, min(len(doc) - 1, i + offset))
    if target == i:
        return doc
    rest = doc[:i] + doc[i + 1:]
    return rest[:target] + (doc[i],) + rest[target:]


def update_block(doc: Document, block_id: str, **changes: Any) -> Document:
    """Replace fields on one block. The id and kind cannot be changed."""
    if "id" in changes or "kind" in changes:
        raise ValueError("Block id and kind are immutable")
    i = _index_of(doc, block_id)
    return _replace(doc, i, _validated(doc[i], changes))


def _multicode(doc: Document, block_id: str) -> tuple[int, MultiCode]:
    block = find_block(doc, block_id)
    if not isinstance(block, MultiCode):
        raise ValueError(f"Block {block_id} is a {block.kind} block, not multi-code")
    return _index_of(doc, block_id), block


def _carousel(doc: Document, block_id: str) -> tuple[int, Carousel]:
    block = find_block(doc, block_id)
    if not isinstance(block, Carousel):
        raise ValueError(f"Block {block_id} is a {block.kind} block, not carousel")
    return _index_of(doc, block_id), block


def add_snippet(doc: Document, block_id: str, snippet: Snippet | None = None) -> Document:
    i, block = _multicode(doc, block_id)
    snippet = snippet or Snippet(label=NEW_SNIPPET_LABEL)
    return _replace(doc, i, block.model_copy(update={"snippets": block.snippets + (snippet,)}))


def remove_snippet(doc: Document, block_id: str, snippet_id: str) -> Document:
    """Drop one snippet; the last remaining snippet cannot be removed."""
    i, block = _multicode(doc, block_id)
    kept = tuple(s for s in block.snippets if s.id != snippet_id)
    if len(kept) == len(block.snippets):
        raise KeyError(snippet_id)
    if not kept:
        raise ValueError("A multi-code block keeps at least one snippet")
    return _replace(doc, i, block.model_copy(update={"snippets": kept}))


def add_carousel_image(doc: Document, block_id: str, url: str, caption: str = NEW_SLIDE_CAPTION) -> Document:
    i, block = _carousel(doc, block_id)
    image = CarouselImage(url=url, caption=caption)
    return _replace(doc, i, block.model_copy(update={"images": block.images + (image,)}))


def remove_carousel_image(doc: Document, block_id: str, image_id: str) -> Document:
    i, block = _carousel(doc, block_id)
    kept = tuple(img for img in block.images if img.id != image_id)
    if len(kept) == len(block.images):
        raise KeyError(image_id)
    return _replace(doc, i, block.model_copy(update={"images": kept}))
