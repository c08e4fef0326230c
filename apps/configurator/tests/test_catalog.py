import json

import pytest

from apps.configurator.exceptions import CatalogError
from apps.configurator.services.catalog import (
    Catalog,
    CatalogNormalizer,
    normalize_media_locator,
)


def test_normalizes_literal_document(catalog):
    assert catalog.option_names == ['Color', 'Pack']
    assert [v.id for v in catalog.variants] == ['1', '2', '3', '4']
    assert catalog.get_variant(2).values == ('Red', '2-pack')
    assert catalog.get_variant('3').available is False
    assert catalog.first_available_variant.id == '1'
    assert [m.id for m in catalog.media] == ['10', '11', '12']


def test_accepts_json_string(catalog_document):
    catalog = Catalog.from_document(json.dumps(catalog_document))
    assert len(catalog.variants) == 4


@pytest.mark.parametrize('document', [None, '', '   ', '{not json', '[1, 2]', 42])
def test_unusable_document_gives_empty_catalog(document):
    catalog = Catalog.from_document(document)
    assert catalog.is_empty
    assert catalog.option_count == 0
    assert catalog.first_variant is None


def test_positional_option_fields_and_string_prices():
    catalog = Catalog.from_document({
        'options': [{'name': 'Size'}, {'name': 'Color'}],
        'variants': [
            {'id': 'a', 'option1': 'S', 'option2': 'Black', 'price': '1500', 'available': True},
        ],
    })
    variant = catalog.variants[0]
    assert variant.values == ('S', 'Black')
    assert variant.price == 1500
    assert variant.compare_at_price == 0


def test_malformed_variants_are_skipped():
    catalog = Catalog.from_document({
        'options': ['Color', 'Pack'],
        'variants': [
            {'options': ['Red', '1-pack']},
            {'id': 2, 'options': ['Red']},
            'garbage',
            {'id': 4, 'options': ['Blue', '2-pack'], 'price': -50},
        ],
    })
    assert [v.id for v in catalog.variants] == ['4']
    assert catalog.variants[0].price == 0


def test_option_names_are_inferred_from_variants():
    catalog = Catalog.from_document({
        'variants': [{'id': 1, 'values': ['Red', '2-pack']}],
    })
    assert catalog.option_names == ['Option 1', 'Option 2']


def test_normalize_variant_raises_on_missing_id():
    with pytest.raises(CatalogError):
        CatalogNormalizer.normalize_variant({'options': ['Red']}, 1)


def test_featured_image_preview_src():
    catalog = Catalog.from_document({
        'options': ['Color'],
        'variants': [
            {'id': 1, 'options': ['Red'], 'featured_image': {'preview_image': {'src': '//cdn/x.png'}}},
        ],
    })
    assert catalog.variants[0].media_id is None
    assert catalog.variants[0].media_src == '//cdn/x.png'


@pytest.mark.parametrize('src,expected', [
    ('https://cdn.example.com/files/red.jpg?v=1', '//cdn.example.com/files/red.jpg'),
    ('//cdn.example.com/files/red_600x600.jpg', '//cdn.example.com/files/red.jpg'),
    ('//cdn.example.com/files/red_600x.JPG#top', '//cdn.example.com/files/red.jpg'),
    ('http://cdn.example.com/files/Red_2.webp', '//cdn.example.com/files/red.webp'),
    ('', None),
    (None, None),
])
def test_normalize_media_locator(src, expected):
    assert normalize_media_locator(src) == expected
