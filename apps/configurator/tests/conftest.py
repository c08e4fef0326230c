import pytest
from django.core.cache import cache

from apps.configurator.conf import WidgetConfig
from apps.configurator.models import MediaItem, Product, ProductOption, Variant
from apps.configurator.services import (
    Catalog,
    ConfiguratorSession,
    PackOptionDetector,
    VariantResolver,
)


@pytest.fixture(autouse=True)
def clear_catalog_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def catalog_document():
    """Color x Pack assortment with a sold-out 4-pack and no Blue 1/4-pack."""
    return {
        'options': ['Color', 'Pack'],
        'variants': [
            {
                'id': 1, 'options': ['Red', '1-pack'], 'price': 2000,
                'compare_at_price': 0, 'available': True,
                'featured_media': {'id': 10, 'src': 'https://cdn.example.com/files/red.jpg?v=1'},
            },
            {
                'id': 2, 'options': ['Red', '2-pack'], 'price': 3600,
                'compare_at_price': 4000, 'available': True,
                'featured_media': {'id': 999, 'src': '//cdn.example.com/files/red_600x600.jpg'},
            },
            {
                'id': 3, 'options': ['Red', '4-pack'], 'price': 6800,
                'compare_at_price': 0, 'available': False,
            },
            {
                'id': 4, 'options': ['Blue', '2-pack'], 'price': 3800,
                'compare_at_price': 0, 'available': True,
                'featured_image': {'src': 'https://cdn.example.com/files/blue_200x.jpg?v=3'},
            },
        ],
        'media': [
            {'id': 10, 'src': 'https://cdn.example.com/files/red.jpg?v=1', 'alt': 'Red'},
            {'id': 11, 'src': 'https://cdn.example.com/files/blue.jpg', 'alt': 'Blue'},
            {'id': 12, 'src': 'https://cdn.example.com/files/lifestyle.jpg', 'alt': 'In use'},
        ],
    }


@pytest.fixture
def catalog(catalog_document):
    return Catalog.from_document(catalog_document)


@pytest.fixture
def pack(catalog):
    return PackOptionDetector.detect(catalog, WidgetConfig())


@pytest.fixture
def resolver(catalog, pack):
    return VariantResolver(catalog, pack)


@pytest.fixture
def session(catalog):
    return ConfiguratorSession(catalog, WidgetConfig())


@pytest.fixture
def product(db):
    """Stored version of ``catalog_document``."""
    product = Product.objects.create(name='Capa de Banco', description='Capa automotiva')
    ProductOption.objects.create(product=product, name='Color', position=0)
    ProductOption.objects.create(product=product, name='Pack', position=1)

    red = MediaItem.objects.create(
        product=product, src='https://cdn.example.com/files/red.jpg', position=0
    )
    blue = MediaItem.objects.create(
        product=product, src='//cdn.example.com/files/blue.jpg', position=1
    )

    Variant.objects.create(
        product=product, sku='CAPA-RED-1', position=1, option1='Red', option2='1-pack',
        price_cents=2000, stock_quantity=10, featured_media=red
    )
    Variant.objects.create(
        product=product, sku='CAPA-RED-2', position=2, option1='Red', option2='2-pack',
        price_cents=3600, compare_at_price_cents=4000, stock_quantity=10, featured_media=red
    )
    Variant.objects.create(
        product=product, sku='CAPA-RED-4', position=3, option1='Red', option2='4-pack',
        price_cents=6800, stock_quantity=0
    )
    Variant.objects.create(
        product=product, sku='CAPA-BLUE-2', position=4, option1='Blue', option2='2-pack',
        price_cents=3800, stock_quantity=5, featured_media=blue
    )
    return product


@pytest.fixture
def variants(product):
    return {v.sku: v for v in product.variants.all()}
