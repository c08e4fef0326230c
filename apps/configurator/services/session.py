"""
Configurator session: the state of one product page widget.

Holds the single Selection State, the current pack size, the resolved
variant and the active media item. Every mutation path (option pickers,
pack radios, pack "pick" buttons, the sticky pack control, gallery thumbs)
goes through the same steps: update the selection, resolve, reconcile,
project. Nothing is patched incrementally.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence, Tuple

from apps.configurator.conf import WidgetConfig
from apps.configurator.services.catalog import Catalog, Variant
from apps.configurator.services.money import MoneyFormatter
from apps.configurator.services.pack_detection import PackDesignation, PackOptionDetector
from apps.configurator.services.projection import DerivedView, ViewProjector
from apps.configurator.services.resolution import VariantResolver
from apps.configurator.utils import to_int

logger = logging.getLogger(__name__)

EVENT_OPTION = 'option'
EVENT_PACK_RADIO = 'pack_radio'
EVENT_PACK_PICK = 'pack_pick'
EVENT_STICKY_PACK = 'sticky_pack'
EVENT_MEDIA = 'media'

EVENT_TYPES = (
    EVENT_OPTION,
    EVENT_PACK_RADIO,
    EVENT_PACK_PICK,
    EVENT_STICKY_PACK,
    EVENT_MEDIA,
)


@dataclass(frozen=True)
class SelectionState:
    """One slot per option; ``None`` means the slot is unset."""
    slots: Tuple[Optional[str], ...] = ()

    @classmethod
    def empty(cls, option_count: int) -> 'SelectionState':
        return cls(slots=(None,) * option_count)

    @classmethod
    def from_values(cls, values: Optional[Sequence[Any]], option_count: int) -> 'SelectionState':
        """Pad/truncate raw UI values to the option count; blanks become unset."""
        values = list(values or [])[:option_count]
        values += [None] * (option_count - len(values))
        return cls(slots=tuple(
            str(value) if value is not None and str(value) != '' else None
            for value in values
        ))

    @classmethod
    def from_variant(cls, variant: Variant) -> 'SelectionState':
        return cls(slots=tuple(variant.values))

    def with_value(self, index: int, value: Optional[str]) -> 'SelectionState':
        slots = list(self.slots)
        slots[index] = value
        return replace(self, slots=tuple(slots))

    def filled(
        self,
        current: Optional[Variant],
        fallback: Optional[Variant],
    ) -> Tuple[Optional[str], ...]:
        """
        Fill unset slots from the current variant, then the fallback
        (first catalog variant).
        """
        filled = []
        for index, slot in enumerate(self.slots):
            if slot is None and current is not None:
                slot = current.values[index]
            if slot is None and fallback is not None:
                slot = fallback.values[index]
            filled.append(slot)
        return tuple(filled)


class ConfiguratorSession:

    def __init__(
        self,
        catalog: Catalog,
        config: Optional[WidgetConfig] = None,
        pack: Optional[PackDesignation] = None,
        formatter: Optional[MoneyFormatter] = None,
    ):
        self.catalog = catalog
        self.config = config or WidgetConfig()
        self.pack = pack if pack is not None else PackOptionDetector.detect(catalog, self.config)
        self.resolver = VariantResolver(catalog, self.pack)
        self.projector = ViewProjector(
            catalog, self.pack, self.config, formatter=formatter, resolver=self.resolver
        )

        self.selection = SelectionState.empty(catalog.option_count)
        self.variant: Optional[Variant] = None
        self.pack_size = self.normalize_pack_size(self.config.default_pack)
        self.active_media_id = catalog.media[0].id if catalog.media else None
        self.focus_form = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(
        self,
        selection: Optional[Sequence[Any]] = None,
        pack_size: Any = None,
        variant_id: Any = None,
        active_media_id: Any = None,
    ) -> DerivedView:
        """
        Bring the widget to its initial (or restored) state.

        Explicit selection values win; unset slots come from ``variant_id``
        when it names a catalog variant, then from the first variant. When
        the pack slot is left unset the pack size picks it.
        """
        self.pack_size = self.normalize_pack_size(
            to_int(pack_size, self.config.default_pack)
        )
        hinted = self.catalog.get_variant(variant_id)
        slots = SelectionState.from_values(selection, self.catalog.option_count)

        if self.pack.enabled and hinted is None and slots.slots[self.pack.option_index] is None:
            value = self.pack.value_for_size(self.pack_size)
            if value is not None:
                slots = slots.with_value(self.pack.option_index, value)

        view = self._commit(slots, current=hinted)

        # A gallery item the page already shows stays active
        if active_media_id is not None and self.catalog.get_media(active_media_id):
            self.active_media_id = str(active_media_id)
            view = self.view()
        return view

    def view(self) -> DerivedView:
        return self.projector.project(
            self.variant,
            self.selection.slots,
            self.pack_size,
            active_media_id=self.active_media_id,
            focus_form=self.focus_form,
        )

    # =========================================================================
    # Mutation paths
    # =========================================================================

    def select_option(self, index: Any, value: Any) -> DerivedView:
        """Option picker change."""
        self.focus_form = False
        position = to_int(index, -1)
        if not 0 <= position < self.catalog.option_count:
            logger.debug('Ignoring option change for index %r', index)
            return self.view()
        value = str(value) if value is not None and str(value) != '' else None
        return self._commit(self.selection.with_value(position, value))

    def select_pack_radio(self, value: Any) -> DerivedView:
        return self._set_pack(to_int(value, 1))

    def pick_pack(self, value: Any) -> DerivedView:
        """Offer card "pick" button: selects the size and brings the form into view."""
        return self._set_pack(to_int(value, self.pack_size or 1), focus_form=True)

    def select_sticky_pack(self, value: Any) -> DerivedView:
        return self._set_pack(to_int(value, self.pack_size or 1))

    def set_active_media(self, media_id: Any) -> DerivedView:
        """Gallery thumbnail click."""
        self.focus_form = False
        if media_id and self.catalog.get_media(media_id):
            self.active_media_id = str(media_id)
        return self.view()

    def dispatch(self, event_type: str, **payload: Any) -> DerivedView:
        """Route one UI event to its mutation path."""
        if event_type == EVENT_OPTION:
            return self.select_option(payload.get('index'), payload.get('value'))
        if event_type == EVENT_PACK_RADIO:
            return self.select_pack_radio(payload.get('size'))
        if event_type == EVENT_PACK_PICK:
            return self.pick_pack(payload.get('size'))
        if event_type == EVENT_STICKY_PACK:
            return self.select_sticky_pack(payload.get('size'))
        if event_type == EVENT_MEDIA:
            return self.set_active_media(payload.get('media_id'))
        raise ValueError(f'Unknown configurator event {event_type!r}')

    # =========================================================================
    # Read-only lookups
    # =========================================================================

    def resolve(self, selection: Optional[Sequence[Any]] = None) -> Optional[Variant]:
        """Resolve a (possibly partial) selection without committing it."""
        slots = (
            SelectionState.from_values(selection, self.catalog.option_count)
            if selection is not None else self.selection
        )
        return self.resolver.resolve(
            slots.filled(self.variant, self.catalog.first_variant)
        )

    def resolve_for_pack_size(self, size: Any) -> Optional[Variant]:
        """What ``size`` would select right now. The live selection is untouched."""
        live = self.selection.filled(self.variant, self.catalog.first_variant)
        return self.resolver.resolve_for_pack_size(to_int(size, 0), live)

    def normalize_pack_size(self, size: int) -> int:
        allowed = self.pack.sizes if self.pack.enabled else self.config.allowed_quantities
        if size in allowed:
            return size
        return 1 if 1 in allowed else allowed[0]

    # =========================================================================
    # Internals
    # =========================================================================

    def _set_pack(self, size: int, focus_form: bool = False) -> DerivedView:
        self.pack_size = self.normalize_pack_size(size)
        self.focus_form = focus_form

        if not self.pack.enabled:
            return self.view()

        value = self.pack.value_for_size(self.pack_size)
        return self._commit(self.selection.with_value(self.pack.option_index, value))

    def _commit(
        self,
        slots: SelectionState,
        current: Optional[Variant] = None,
    ) -> DerivedView:
        full = slots.filled(current or self.variant, self.catalog.first_variant)
        variant = self.resolver.resolve(full)
        changed = variant != self.variant
        self.variant = variant

        if variant is None:
            self.selection = SelectionState(slots=full)
            return self.view()

        # Reconcile: the controls always show the active variant's own values
        self.selection = SelectionState.from_variant(variant)

        if self.pack.enabled:
            size = self.pack.size_for_value(variant.values[self.pack.option_index])
            if size is not None:
                self.pack_size = size

        if changed:
            self.active_media_id = self.projector.active_media(variant, self.active_media_id)
        return self.view()
