"""Terminal preview of a display tree using Rich."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.tree import Tree

from lessonmark.core.render.nodes import (
    CalloutView,
    CodeView,
    DisplayTree,
    ElementNode,
    FigureView,
    GalleryView,
    TabbedCodeView,
    TextNode,
)


CALLOUT_COLORS = {
    "info": "blue",
    "warning": "yellow",
    "tip": "green",
    "success": "green",
    "error": "red",
}


class TerminalPreview:
    """Print the display tree as a Rich tree, one branch per rendered node."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize terminal preview.

        Args:
            console: Rich console to use (creates new if None)
        """
        self.console = console or Console()

    def show(self, tree: DisplayTree, title: str = "content") -> None:
        """Show the display tree in the terminal.

        Args:
            tree: Rendered display tree
            title: Label for the root of the tree
        """
        root = Tree(f"[bold cyan]{escape(title)}[/bold cyan]")
        for node in tree.children:
            self._add(root, node)
        self.console.print(root)

    def _add(self, parent: Tree, node) -> None:
        if isinstance(node, TextNode):
            parent.add(f"[dim]{escape(repr(node.text.strip()))}[/dim]")
        elif isinstance(node, ElementNode):
            style = f" [magenta]{node.style}[/magenta]" if node.style else ""
            branch = parent.add(f"<{node.tag}>{style}")
            for child in node.children:
                self._add(branch, child)
        elif isinstance(node, CodeView):
            parent.add(Panel(
                Syntax(node.display_code, node.label, theme="monokai"),
                title=f"[bold]{escape(node.label)}[/bold]",
                title_align="left",
            ))
        elif isinstance(node, TabbedCodeView):
            if node.is_empty:
                parent.add("[dim]tabbed code: no snippets[/dim]")
                return
            branch = parent.add(
                "tabs: " + " | ".join(
                    f"[bold]{escape(s.label)}[/bold]" if i == node.active else escape(s.label)
                    for i, s in enumerate(node.snippets)
                )
            )
            active = node.active_snippet
            branch.add(Syntax(active.code.strip(), active.language, theme="monokai"))
        elif isinstance(node, CalloutView):
            color = CALLOUT_COLORS.get(node.type, "blue")
            branch = parent.add(f"[{color}]{node.type} callout[/{color}]")
            for child in node.children:
                self._add(branch, child)
        elif isinstance(node, FigureView):
            caption = f" [italic]{escape(node.caption)}[/italic]" if node.caption else ""
            parent.add(f"image {escape(node.src)}{caption}")
        elif isinstance(node, GalleryView):
            branch = parent.add(f"gallery [bold]{node.position}[/bold]")
            for item in node.items:
                branch.add(f"{escape(item.url)} [italic]{escape(item.caption)}[/italic]")
