from .serializers import (
    ProductListSerializer,
    ProductDetailSerializer,
    ProductOptionSerializer,
    MediaItemSerializer,
    VariantSerializer,
    ConfigureRequestSerializer,
    ResolveRequestSerializer,
    PreviewRequestSerializer,
    StickyVisibilityRequestSerializer,
)

__all__ = [
    'ProductListSerializer',
    'ProductDetailSerializer',
    'ProductOptionSerializer',
    'MediaItemSerializer',
    'VariantSerializer',
    'ConfigureRequestSerializer',
    'ResolveRequestSerializer',
    'PreviewRequestSerializer',
    'StickyVisibilityRequestSerializer',
]
