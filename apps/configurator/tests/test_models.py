import pytest
from django.core.cache import cache

from apps.configurator.models import MediaItem, Product, Variant
from apps.configurator.services import CatalogRepository

pytestmark = pytest.mark.django_db


def test_product_defaults(product):
    assert product.slug == 'capa-de-banco'
    assert product.get_option_names() == ['Color', 'Pack']
    assert product.variant_count == 4
    assert product.active_variant_count == 4


def test_variant_title_and_pricing(variants):
    v2 = variants['CAPA-RED-2']
    assert v2.title == 'Red / 2-pack'
    assert v2.is_on_sale is True
    assert v2.discount_percentage == 10
    assert variants['CAPA-RED-4'].is_available is False
    assert variants['CAPA-RED-1'].get_option_values(2) == ['Red', '1-pack']


def test_variant_availability_rules(product):
    variant = Variant(product=product, sku='X', stock_quantity=0)
    assert variant.is_available is False
    variant.allow_backorder = True
    assert variant.is_available is True
    variant.is_active = False
    assert variant.is_available is False


def test_media_alt_text_defaults_to_product_name(product):
    item = MediaItem.objects.create(product=product, src='//cdn.example.com/x.jpg')
    assert item.alt_text == 'Capa de Banco'


def test_catalog_document(product, variants):
    document = product.to_catalog_document()

    assert document['options'] == ['Color', 'Pack']
    assert [v['id'] for v in document['variants']] == [
        variants[sku].pk for sku in ('CAPA-RED-1', 'CAPA-RED-2', 'CAPA-RED-4', 'CAPA-BLUE-2')
    ]
    red_4 = document['variants'][2]
    assert red_4['options'] == ['Red', '4-pack']
    assert red_4['available'] is False
    assert red_4['compare_at_price'] == 0
    assert red_4['featured_media'] is None
    assert len(document['media']) == 2


def test_inactive_variants_are_left_out(product, variants):
    variants['CAPA-BLUE-2'].is_active = False
    variants['CAPA-BLUE-2'].save()
    skus = [v['sku'] for v in product.to_catalog_document()['variants']]
    assert 'CAPA-BLUE-2' not in skus


def test_history_is_recorded(product, variants):
    v1 = variants['CAPA-RED-1']
    v1.price_cents = 2200
    v1.save()
    assert v1.history.count() == 2
    assert product.history.count() == 1


def test_repository_caches_catalog(product):
    catalog = CatalogRepository.get_catalog(product)
    assert cache.get(CatalogRepository.cache_key(product.pk)) == catalog
    assert CatalogRepository.get_catalog(product) is not None


def test_saving_a_variant_invalidates_the_cache(product, variants):
    CatalogRepository.get_catalog(product)
    v2 = variants['CAPA-RED-2']
    v2.price_cents = 3400
    v2.save()

    assert cache.get(CatalogRepository.cache_key(product.pk)) is None
    catalog = CatalogRepository.get_catalog(product)
    assert catalog.get_variant(v2.pk).price == 3400


def test_deleting_media_invalidates_the_cache(product):
    CatalogRepository.get_catalog(product)
    product.media.first().delete()
    assert len(CatalogRepository.get_catalog(product).media) == 1


def test_session_for_uses_product_overrides(product, variants):
    product.widget_config = {'has_pack_option': False, 'sold_out_text': 'Esgotado'}
    product.save()

    session = CatalogRepository.session_for(product)
    assert session.pack.enabled is False
    view = session.start(variant_id=variants['CAPA-RED-4'].pk)
    assert view.button_label == 'Esgotado'


def test_session_for_detects_pack(product, variants):
    session = CatalogRepository.session_for(product)
    view = session.start()
    assert session.pack.option_index == 1
    assert view.variant_id == str(variants['CAPA-RED-2'].pk)
    assert view.active_media_id == str(product.media.first().pk)


def test_products_are_ordered_by_name(db):
    Product.objects.create(name='Zebra')
    Product.objects.create(name='Alpha')
    assert list(Product.objects.values_list('name', flat=True)) == ['Alpha', 'Zebra']
