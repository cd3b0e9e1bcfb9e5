"""Storage markup -> display tree for read-only viewing.

Independent of the editor parser: block boundaries may differ because the goal
is presentation, not round-trip fidelity. Stored markup may arrive
entity-escaped by some producers, so the raw string is normalized once before
tree parsing and extracted code text is never un-escaped again.
"""

import html
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from lessonmark.core.models import DEFAULT_LANGUAGE
from lessonmark.core.render.highlight import highlight as highlight_code
from lessonmark.core.render.nodes import (
    COPY_RESET_SECONDS,
    CalloutView,
    CodeView,
    DisplayNode,
    DisplayTree,
    ElementNode,
    FigureView,
    GalleryItem,
    GalleryView,
    HighlightSpan,
    SnippetView,
    TabbedCodeView,
    TextNode,
)
from lessonmark.core.utils.markup import (
    PARSE_ERRORS,
    has_ancestor,
    is_element,
    parse_body,
    tag_name,
    text_content,
)


logger = logging.getLogger(__name__)

UNESCAPE_MODES = ("auto", "always", "never")

# An entity-escaped opening or closing tag from the storage grammar.
ESCAPED_TAG_RE = re.compile(
    r"&lt;/?(?:h[1-6]|p|ul|ol|li|code|multicode|snippet|note|img|carousel)\b",
    re.IGNORECASE,
)

# A literal grammar tag; its presence means the document itself is not escaped.
RAW_TAG_RE = re.compile(
    r"</?(?:h[1-6]|p|ul|ol|li|code|multicode|snippet|note|img|carousel)\b",
    re.IGNORECASE,
)

STYLES: dict[str, str] = {
    'h1':     'title',
    'h2':     'heading',
    'h3':     'subheading',
    'p':      'body',
    'ul':     'bullet-list',
    'ol':     'numbered-list',
    'li':     'list-item',
    'strong': 'strong',
    'b':      'strong',
    'em':     'emphasis',
    'i':      'emphasis',
}

VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'source', 'track', 'wbr',
})

CALLOUT_ICONS: dict[str, str] = {
    'info':    'info',
    'warning': 'warning',
    'tip':     'lightbulb',
    'success': 'check_circle',
    'error':   'error',
}

DEFAULT_FIGURE_ALT = "Topic illustration"


def normalize_markup(markup: str, mode: str = "auto") -> str:
    """Un-escape HTML entities in the raw string at most once.

    'auto' un-escapes only when the string carries escaped grammar tags and no
    literal ones (an upstream layer escaped the whole document); otherwise the
    tree parser decodes entities itself, so literal '&lt;' inside code survives
    as '<'.
    """
    if mode not in UNESCAPE_MODES:
        raise ValueError(f"Unknown unescape mode {mode!r}; expected one of {UNESCAPE_MODES}")
    if mode == "never":
        return markup
    if mode == "auto" and (RAW_TAG_RE.search(markup) or not ESCAPED_TAG_RE.search(markup)):
        return markup
    logger.debug("Un-escaping entity-encoded markup (mode=%s)", mode)
    return html.unescape(markup)


@dataclass
class _Options:
    max_depth: int
    highlight: bool
    copy_reset: float

    def tokens(self, code: str, language: str) -> list[HighlightSpan]:
        return highlight_code(code, language) if self.highlight else []


def _render_code(el, opts: _Options, depth: int) -> CodeView:
    language = el.get("language") or DEFAULT_LANGUAGE
    code = text_content(el)
    return CodeView(
        language=language,
        code=code,
        tokens=opts.tokens(code.strip(), language),
        copy_reset=opts.copy_reset,
    )


def _render_multicode(el, opts: _Options, depth: int) -> TabbedCodeView:
    snippets = []
    for s in el.iter("snippet"):
        language = s.get("language") or DEFAULT_LANGUAGE
        code = text_content(s)
        snippets.append(SnippetView(
            label=s.get("label") or "Snippet",
            language=language,
            code=code,
            tokens=opts.tokens(code.strip(), language),
        ))
    return TabbedCodeView(snippets=snippets)


def _render_note(el, opts: _Options, depth: int) -> CalloutView:
    kind = (el.get("type") or "").strip().lower()
    if kind not in CALLOUT_ICONS:
        kind = "info"
    return CalloutView(type=kind, icon=CALLOUT_ICONS[kind], children=_render_children(el, opts, depth + 1))


def _render_image(el, opts: _Options, depth: int) -> FigureView | None:
    if has_ancestor(el, "carousel"):
        return None
    alt = el.get("alt")
    return FigureView(src=el.get("src") or "", alt=alt or DEFAULT_FIGURE_ALT, caption=alt or None)


def _render_carousel(el, opts: _Options, depth: int) -> GalleryView | None:
    items = [
        GalleryItem(url=img.get("src") or "", caption=img.get("alt") or "")
        for img in el.iter("img")
    ]
    if not items:
        return None
    return GalleryView(items=items)


COMPONENTS: dict[str, Callable] = {
    'code':      _render_code,
    'multicode': _render_multicode,
    'note':      _render_note,
    'img':       _render_image,
    'carousel':  _render_carousel,
}


def _is_empty_paragraph(el) -> bool:
    return len([c for c in el if is_element(c)]) == 0 and not text_content(el).strip()


def _render_element(el, opts: _Options, depth: int) -> DisplayNode | None:
    tag = tag_name(el)
    if depth >= opts.max_depth:
        logger.warning("Collapsing <%s> nested deeper than %d levels to text", tag, opts.max_depth)
        text = text_content(el)
        return TextNode(text=text) if text else None

    component = COMPONENTS.get(tag)
    if component is not None:
        return component(el, opts, depth)

    attrs = {str(k): str(v) for k, v in el.attrib.items()}
    if tag in VOID_ELEMENTS:
        return ElementNode(tag=tag, style=STYLES.get(tag), attrs=attrs)
    if tag == 'p' and _is_empty_paragraph(el):
        return None
    return ElementNode(tag=tag, style=STYLES.get(tag), attrs=attrs, children=_render_children(el, opts, depth + 1))


def _render_children(el, opts: _Options, depth: int, top_level: bool = False) -> list[DisplayNode]:
    """Render el's text, element children and their tails in document order."""
    nodes: list[DisplayNode] = []

    def _text(value: str | None) -> None:
        if not value or (top_level and not value.strip()):
            return
        nodes.append(TextNode(text=value))

    _text(el.text)
    for child in el:
        if is_element(child):
            node = _render_element(child, opts, depth)
            if node is not None:
                nodes.append(node)
        _text(child.tail)
    return nodes


def render(
    markup: str,
    unescape: str = "auto",
    max_depth: int = 256,
    highlight: bool = True,
    copy_reset: float = COPY_RESET_SECONDS,
    ) -> DisplayTree:
    """Build the display tree for stored markup. Unparseable input renders as plain text."""
    if not markup:
        return DisplayTree()
    source = normalize_markup(markup, unescape)
    opts = _Options(max_depth=max_depth, highlight=highlight, copy_reset=copy_reset)
    try:
        body = parse_body(source)
    except PARSE_ERRORS as e:
        logger.warning("Markup could not be parsed for display: %s", e)
        return DisplayTree(children=[TextNode(text=source)])
    return DisplayTree(children=_render_children(body, opts, 0, top_level=True))
