"""Pipeline step functions: load, save, view, and round-trip checking"""

import logging

from lessonmark.core.models import Document, structurally_equal
from lessonmark.core.parse import DEFAULT_MAX_DEPTH, parse
from lessonmark.core.render.nodes import DisplayTree
from lessonmark.core.render.render import render
from lessonmark.core.serialize import serialize, unsafe_values
from lessonmark.core.utils.diff import unified_diff
from lessonmark.core.utils.ids import IdGenerator
from lessonmark.crud.store import ContentRecord, TopicContentStore


logger = logging.getLogger(__name__)


def load_document(
    store: TopicContentStore,
    topic_id: str,
    ids: IdGenerator | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> Document:
    """Fetch a topic's stored markup and parse it into a fresh editable Document."""
    return parse(store.load(topic_id), ids=ids, max_depth=max_depth)


def save_document(store: TopicContentStore, topic_id: str, doc: Document) -> tuple[ContentRecord, bool]:
    """Serialize doc and persist it. Raises ValueError if an attribute value holds a '"'."""
    unsafe = unsafe_values(doc)
    if unsafe:
        fields = ", ".join(f"{block_id}:{name}" for block_id, name in unsafe)
        raise ValueError(f'Attribute values must not contain \'"\': {fields}')
    return store.save(topic_id, serialize(doc))


def view_topic(store: TopicContentStore, topic_id: str, **render_options) -> DisplayTree:
    """Render a topic's stored markup for read-only display."""
    return render(store.load(topic_id), **render_options)


def check_round_trip(markup: str, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[bool, list[str]]:
    """Check that parse -> serialize -> parse reproduces the same blocks.

    Returns (stable, diff_lines); diff_lines compares the two serializations and
    is empty when they are byte-identical.
    """
    first = parse(markup, max_depth=max_depth)
    first_markup = serialize(first)
    second = parse(first_markup, max_depth=max_depth)
    second_markup = serialize(second)

    stable = structurally_equal(first, second)
    if not stable:
        logger.info("Round trip changed %d block(s) into %d", len(first), len(second))
    return stable, unified_diff(first_markup, second_markup, "first-pass", "second-pass")
