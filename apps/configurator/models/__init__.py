"""
Configurator models.

Model Hierarchy:
- Product: configurable product (e.g., "Car Seat Cover")
- ProductOption: ordered options of a product (Color, Pack)
- Variant: one SKU per option-value combination, with price and stock
- MediaItem: gallery entries, optionally featured by a variant
"""

from .product import Product, ProductOption
from .variant import Variant, MediaItem

__all__ = [
    'Product',
    'ProductOption',
    'Variant',
    'MediaItem',
]
