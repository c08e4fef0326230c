"""
Derived view projection.

Everything the page shows (price cluster, sold-out state, offer cards,
active gallery item, call-to-action) is computed here from the resolved
variant and the selection, from scratch, on every change.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from apps.configurator.conf import WidgetConfig
from apps.configurator.services.catalog import Catalog, Variant
from apps.configurator.services.money import MoneyFormatter
from apps.configurator.services.pack_detection import PackDesignation
from apps.configurator.services.resolution import VariantResolver


def compare_price_to_show(price: Optional[int], compare_at_price: Optional[int]) -> Optional[int]:
    """Compare-at price is only shown when it is positive and above the price."""
    if price is None or compare_at_price is None:
        return None
    if compare_at_price > price and compare_at_price > 0:
        return compare_at_price
    return None


@dataclass(frozen=True)
class PriceCluster:
    unit_price: Optional[int] = None
    multiplier: int = 1
    price: Optional[int] = None
    compare_at_price: Optional[int] = None
    formatted_price: str = ''
    formatted_compare_at_price: str = ''

    @property
    def show_compare(self) -> bool:
        return self.compare_at_price is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'unit_price': self.unit_price,
            'multiplier': self.multiplier,
            'price': self.price,
            'compare_at_price': self.compare_at_price,
            'show_compare': self.show_compare,
            'formatted_price': self.formatted_price,
            'formatted_compare_at_price': self.formatted_compare_at_price,
        }


@dataclass(frozen=True)
class OfferCard:
    """One bundle size, priced on its own resolved variant."""
    size: int
    value: Optional[str] = None
    variant_id: Optional[str] = None
    price: Optional[int] = None
    compare_at_price: Optional[int] = None
    formatted_price: str = ''
    formatted_compare_at_price: str = ''
    available: bool = False
    selectable: bool = False
    is_active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'size': self.size,
            'value': self.value,
            'variant_id': self.variant_id,
            'price': self.price,
            'compare_at_price': self.compare_at_price,
            'show_compare': self.compare_at_price is not None,
            'formatted_price': self.formatted_price,
            'formatted_compare_at_price': self.formatted_compare_at_price,
            'available': self.available,
            'selectable': self.selectable,
            'is_active': self.is_active,
        }


@dataclass(frozen=True)
class DerivedView:
    variant: Optional[Variant]
    selection: Tuple[Optional[str], ...]
    pack_size: int
    quantity: int
    price: PriceCluster
    sold_out: bool
    button_label: str
    offers: Tuple[OfferCard, ...] = ()
    active_media_id: Optional[str] = None
    media_ids: Tuple[str, ...] = ()
    focus_form: bool = False

    @property
    def variant_id(self) -> Optional[str]:
        return self.variant.id if self.variant else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'variant_id': self.variant_id,
            'variant': self.variant.to_dict() if self.variant else None,
            'selection': list(self.selection),
            'pack_size': self.pack_size,
            'price': self.price.to_dict(),
            'sold_out': self.sold_out,
            'call_to_action': {
                'label': self.button_label,
                'disabled': self.sold_out,
            },
            'sticky': {
                'formatted_price': self.price.formatted_price,
                'pack_size': self.pack_size,
                'label': self.button_label,
                'disabled': self.sold_out,
            },
            'submission': {
                'variant_id': self.variant_id,
                'quantity': self.quantity,
            },
            'offers': [offer.to_dict() for offer in self.offers],
            'gallery': [
                {'id': media_id, 'is_active': media_id == self.active_media_id}
                for media_id in self.media_ids
            ],
            'active_media_id': self.active_media_id,
            'focus_form': self.focus_form,
        }


class ViewProjector:
    """Pure projection of (variant, selection, pack size) onto display values."""

    def __init__(
        self,
        catalog: Catalog,
        pack: PackDesignation,
        config: Optional[WidgetConfig] = None,
        formatter: Optional[MoneyFormatter] = None,
        resolver: Optional[VariantResolver] = None,
    ):
        self.catalog = catalog
        self.pack = pack
        self.config = config or WidgetConfig()
        self.formatter = formatter or MoneyFormatter.from_config(self.config)
        self.resolver = resolver or VariantResolver(catalog, pack)

    def project(
        self,
        variant: Optional[Variant],
        selection: Sequence[Optional[str]],
        pack_size: int,
        active_media_id: Optional[str] = None,
        focus_form: bool = False,
    ) -> DerivedView:
        sold_out = variant is None or not variant.available
        return DerivedView(
            variant=variant,
            selection=tuple(selection),
            pack_size=pack_size,
            quantity=self.multiplier(pack_size),
            price=self.price_cluster(variant, pack_size),
            sold_out=sold_out,
            button_label=self.config.sold_out_text if sold_out else self.config.add_to_cart_text,
            offers=tuple(self.offers(variant, selection, pack_size)),
            active_media_id=active_media_id,
            media_ids=tuple(item.id for item in self.catalog.media),
            focus_form=focus_form,
        )

    def multiplier(self, pack_size: int) -> int:
        # With pack variants the bundle price already lives on the variant
        if self.pack.enabled:
            return 1
        return max(1, int(pack_size or 1))

    def price_cluster(self, variant: Optional[Variant], pack_size: int) -> PriceCluster:
        if variant is None:
            return PriceCluster()

        multiplier = self.multiplier(pack_size)
        price = variant.price * multiplier
        compare = compare_price_to_show(price, variant.compare_at_price * multiplier)
        return PriceCluster(
            unit_price=variant.price,
            multiplier=multiplier,
            price=price,
            compare_at_price=compare,
            formatted_price=self.formatter.format(price),
            formatted_compare_at_price=self.formatter.format(compare) if compare is not None else '',
        )

    def offers(
        self,
        variant: Optional[Variant],
        selection: Sequence[Optional[str]],
        pack_size: int,
    ) -> List[OfferCard]:
        if self.pack.enabled:
            return [
                self._pack_offer(size, selection, pack_size)
                for size in self.pack.sizes
            ]
        return [
            self._quantity_offer(quantity, variant, pack_size)
            for quantity in self.config.allowed_quantities
        ]

    def _pack_offer(
        self,
        size: int,
        selection: Sequence[Optional[str]],
        pack_size: int,
    ) -> OfferCard:
        value = self.pack.value_for_size(size)
        candidate = self.resolver.resolve_for_pack_size(size, selection)
        is_active = size == pack_size

        # The fallback chain may land on another size: that is an assortment gap
        if candidate is None or self.pack.size_for_value(
            candidate.values[self.pack.option_index]
        ) != size:
            return OfferCard(size=size, value=value, is_active=is_active)

        compare = compare_price_to_show(candidate.price, candidate.compare_at_price)
        return OfferCard(
            size=size,
            value=value,
            variant_id=candidate.id,
            price=candidate.price,
            compare_at_price=compare,
            formatted_price=self.formatter.format(candidate.price),
            formatted_compare_at_price=self.formatter.format(compare) if compare is not None else '',
            available=candidate.available,
            selectable=True,
            is_active=is_active,
        )

    def _quantity_offer(
        self,
        quantity: int,
        variant: Optional[Variant],
        pack_size: int,
    ) -> OfferCard:
        if variant is None:
            return OfferCard(size=quantity, is_active=quantity == pack_size)

        price = variant.price * quantity
        compare = compare_price_to_show(price, variant.compare_at_price * quantity)
        return OfferCard(
            size=quantity,
            variant_id=variant.id,
            price=price,
            compare_at_price=compare,
            formatted_price=self.formatter.format(price),
            formatted_compare_at_price=self.formatter.format(compare) if compare is not None else '',
            available=variant.available,
            selectable=True,
            is_active=quantity == pack_size,
        )

    def active_media(self, variant: Optional[Variant], current: Optional[str]) -> Optional[str]:
        """
        Media for the variant: by declared id first, then by normalized
        source locator. With no match the current media stays active.
        """
        if variant is None:
            return current

        if variant.media_id and self.catalog.get_media(variant.media_id):
            return variant.media_id

        locator = variant.media_locator
        if locator:
            for item in self.catalog.media:
                if item.locator == locator:
                    return item.id

        return current
