"""Viewport renderer registry.

WHY: The CLI picks a display mode by name (``--wrap`` selects "wrap",
otherwise "scroll"). A central dict maps those names to renderer classes
so the choice is made in one place.

HOW: RENDERERS maps mode keys to BaseRenderer subclasses (not instances).
create_renderer() instantiates the right one from a TrainerConfig.

RULES:
- Keys match TrainerConfig.render_mode values
- Only the scrolling renderer takes the look-ahead margin
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typc.render.scrolling import ScrollingRenderer
from typc.render.wrapping import WrappingRenderer

if TYPE_CHECKING:
    from typc.config import TrainerConfig
    from typc.render.base import BaseRenderer

RENDERERS: dict[str, type[BaseRenderer]] = {
    "scroll": ScrollingRenderer,
    "wrap": WrappingRenderer,
}


def create_renderer(config: TrainerConfig) -> BaseRenderer:
    """Instantiate the renderer selected by *config*.

    Raises:
        KeyError: if config.render_mode is not a registered mode.
    """
    renderer_cls = RENDERERS[config.render_mode]
    if renderer_cls is ScrollingRenderer:
        return ScrollingRenderer(look_ahead=config.look_ahead)
    return renderer_cls()
