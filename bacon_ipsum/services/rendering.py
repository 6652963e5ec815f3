"""HTML rendering for generated paragraphs and saved blocks."""

import html
from collections.abc import Sequence
from dataclasses import dataclass

from bacon_ipsum.services.generation import MeatType

BLOCK_NAME = "bacon-ipsum/generator"
BLOCK_WRAPPER_CLASS = "wp-block-bacon-ipsum-generator"
CONTENT_CLASS = "bacon-ipsum-content"


@dataclass(frozen=True)
class BlockContent:
    """Persisted attributes of one block instance.

    ``content_html`` starts as ``to_html(paragraphs)`` of a generation and
    is free text after the author edits it.
    """

    type: MeatType = MeatType.ALL_MEAT
    paras: int = 3
    start_with_lorem: bool = True
    content_html: str = ""


def to_html(paragraphs: Sequence[str]) -> str:
    """Wrap each paragraph in its own ``<p>`` element, in order, unseparated."""
    return "".join(f"<p>{html.escape(paragraph, quote=False)}</p>" for paragraph in paragraphs)


def render_block(block: BlockContent) -> str:
    """Front-end markup for a saved block; empty blocks render nothing."""
    if not block.content_html.strip():
        return ""
    return (
        f'<div class="{BLOCK_WRAPPER_CLASS}">'
        f'<div class="{CONTENT_CLASS}">{block.content_html}</div>'
        "</div>"
    )
