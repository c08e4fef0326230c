from .catalog import Catalog, CatalogNormalizer, MediaItem, Option, Variant
from .money import MoneyFormatter, shop_money_format
from .pack_detection import PackDesignation, PackOptionDetector, parse_pack_size
from .projection import DerivedView, OfferCard, PriceCluster, ViewProjector
from .repository import CatalogRepository
from .resolution import VariantResolver
from .session import ConfiguratorSession, SelectionState
from .visibility import StickyVisibility, compute_sticky_visibility

__all__ = [
    'Catalog',
    'CatalogNormalizer',
    'MediaItem',
    'Option',
    'Variant',
    'MoneyFormatter',
    'shop_money_format',
    'PackDesignation',
    'PackOptionDetector',
    'parse_pack_size',
    'DerivedView',
    'OfferCard',
    'PriceCluster',
    'ViewProjector',
    'CatalogRepository',
    'VariantResolver',
    'ConfiguratorSession',
    'SelectionState',
    'StickyVisibility',
    'compute_sticky_visibility',
]
