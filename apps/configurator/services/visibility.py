"""
Sticky summary visibility.

Three independent signals (hero, form, footer) are updated by separate
observers in no particular order. The show decision is recomputed from the
current snapshot every time, so update order never matters.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

HERO = 'hero'
FORM = 'form'
FOOTER = 'footer'

SIGNAL_DEFAULTS = {
    HERO: True,
    FORM: False,
    FOOTER: False,
}

# Scroll/resize fallback thresholds, in CSS pixels
HERO_MIN_VISIBLE_BOTTOM = 20
FORM_MIN_VISIBLE_BOTTOM = 80
FORM_TOP_VIEWPORT_RATIO = 0.75


def compute_sticky_visibility(hero: bool, form: bool, footer: bool, is_narrow: bool) -> bool:
    return bool(is_narrow) and not hero and not form and not footer


@dataclass(frozen=True)
class StickyVisibility:
    hero: bool = SIGNAL_DEFAULTS[HERO]
    form: bool = SIGNAL_DEFAULTS[FORM]
    footer: bool = SIGNAL_DEFAULTS[FOOTER]

    def with_signal(self, name: str, visible: Optional[bool]) -> 'StickyVisibility':
        """
        Apply one observer update. ``None`` (an observer callback with no
        entry) falls back to the signal's default.
        """
        if name not in SIGNAL_DEFAULTS:
            raise ValueError(f'Unknown visibility signal {name!r}')
        if visible is None:
            visible = SIGNAL_DEFAULTS[name]
        return replace(self, **{name: bool(visible)})

    def should_show(self, is_narrow: bool) -> bool:
        return compute_sticky_visibility(self.hero, self.form, self.footer, is_narrow)

    def to_dict(self, is_narrow: bool) -> Dict[str, Any]:
        show = self.should_show(is_narrow)
        return {
            'hero': self.hero,
            'form': self.form,
            'footer': self.footer,
            'is_narrow': bool(is_narrow),
            'show': show,
            'aria_hidden': not show,
        }

    @classmethod
    def from_geometry(
        cls,
        viewport_height: float,
        hero_bottom: Optional[float] = None,
        form_top: Optional[float] = None,
        form_bottom: Optional[float] = None,
        footer_top: Optional[float] = None,
    ) -> 'StickyVisibility':
        """
        Scroll/resize sampling path for hosts without intersection observers.
        Coordinates are bounding-rect values relative to the viewport.
        """
        hero = SIGNAL_DEFAULTS[HERO] if hero_bottom is None else hero_bottom > HERO_MIN_VISIBLE_BOTTOM

        form = SIGNAL_DEFAULTS[FORM]
        if form_top is not None and form_bottom is not None:
            form = (
                form_top < viewport_height * FORM_TOP_VIEWPORT_RATIO
                and form_bottom > FORM_MIN_VISIBLE_BOTTOM
            )

        footer = False if footer_top is None else footer_top < viewport_height

        return cls(hero=hero, form=form, footer=footer)


def is_narrow_viewport(width: Any, max_width: int) -> bool:
    """Mirrors a ``(max-width: <max_width>px)`` media query."""
    try:
        return float(width) <= max_width
    except (TypeError, ValueError):
        return False
