"""lxml helpers shared by the parser and the display renderer"""

import html

import lxml.html
from lxml import etree


def parse_body(markup: str) -> lxml.html.HtmlElement:
    """Leniently parse markup and return its <body> element.

    The explicit wrapper keeps bare top-level text as text instead of an implied
    <p>. Raises etree.LxmlError or ValueError on input libxml2 refuses outright.
    """
    root = lxml.html.document_fromstring(f"<html><body>{markup}</body></html>")
    body = root.find("body")
    return body if body is not None else root


def is_element(node) -> bool:
    """True for real elements; comments and processing instructions have non-str tags."""
    return isinstance(node.tag, str)


def tag_name(node) -> str:
    return node.tag.lower() if is_element(node) else ""


def inner_markup(el) -> str:
    """Serialized children of el, the equivalent of a DOM element's innerHTML."""
    parts = [html.escape(el.text, quote=False)] if el.text else []
    parts.extend(
        lxml.html.tostring(child, encoding="unicode", with_tail=True)
        for child in el
    )
    return "".join(parts)


def text_content(el) -> str:
    """All descendant text with tags discarded and entities decoded."""
    return str(el.text_content())


def has_ancestor(el, name: str) -> bool:
    return any(tag_name(a) == name for a in el.iterancestors())


PARSE_ERRORS = (etree.LxmlError, ValueError)
