"""Hover/focus style registry shared by the rendered pickers.

Pickers never draw hover or focus state themselves; the window registers
style rules here under generated ids and looks them up when a widget is
hovered or focused. The engine does not use this module.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_id_counter = itertools.count(1)


@dataclass(frozen=True)
class PseudoStyleIds:
    wrapper: str
    prev_month_nav: str
    next_month_nav: str

    def all(self) -> tuple[str, str, str]:
        return (self.wrapper, self.prev_month_nav, self.next_month_nav)


def pseudo_style_ids() -> PseudoStyleIds:
    """Return a fresh, process-unique set of ids for one picker."""
    n = next(_id_counter)
    return PseudoStyleIds(
        wrapper=f"wrapper-style-id{n}",
        prev_month_nav=f"prevMonthNav-style-id{n}",
        next_month_nav=f"nextMonthNav-style-id{n}",
    )


class StyleRegistry:
    """Maps (style id, pseudo class) to a dict of style rules."""

    def __init__(self) -> None:
        self._styles: dict[tuple[str, str], dict] = {}

    def register_hover_style(self, style_id: str, rules: dict,
                             pseudo_class: str = "hover") -> None:
        self._styles[(style_id, pseudo_class)] = dict(rules)

    def unregister(self, style_id: str) -> None:
        """Drop every pseudo-class entry for ``style_id`` (missing ids are fine)."""
        for key in [k for k in self._styles if k[0] == style_id]:
            del self._styles[key]

    def unregister_all(self, style_ids) -> None:
        for style_id in style_ids:
            self.unregister(style_id)

    def lookup(self, style_id: str, pseudo_class: str = "hover") -> dict:
        return dict(self._styles.get((style_id, pseudo_class), {}))

    def __len__(self) -> int:
        return len(self._styles)


def update_pseudo_class_styles(
    registry: StyleRegistry,
    ids: PseudoStyleIds,
    hover_prev_month_nav: dict,
    hover_next_month_nav: dict,
    focus_style: dict,
    prevent_focus_style_for_touch_and_click: bool,
) -> None:
    """(Re)register nav hover styles and the wrapper focus style.

    With ``prevent_focus_style_for_touch_and_click`` the pseudo-class focus
    style is emptied; the window then shows focus only for keyboard focus,
    as reported by the engine's wrapper flags.
    """
    registry.unregister_all(ids.all())
    registry.register_hover_style(ids.prev_month_nav, hover_prev_month_nav)
    registry.register_hover_style(ids.next_month_nav, hover_next_month_nav)
    if prevent_focus_style_for_touch_and_click:
        focus = {}
    else:
        focus = focus_style
    registry.register_hover_style(ids.wrapper, focus, pseudo_class="focus")
    logger.debug("Registered pseudo styles for %s", ids.wrapper)
