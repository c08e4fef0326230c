import pytest
import tablib
from django.contrib import admin
from django.core.cache import cache

from apps.configurator.admin import ProductAdmin, VariantResource
from apps.configurator.models import Product, Variant
from apps.configurator.services import CatalogRepository

pytestmark = pytest.mark.django_db


def test_pack_summary(product):
    model_admin = ProductAdmin(Product, admin.site)
    assert model_admin.pack_summary(product) == 'Pack: 1, 2, 4'

    product.widget_config = {'has_pack_option': False}
    product.save()
    assert model_admin.pack_summary(product) == 'Sem opção de pack (quantidade simples)'


def test_product_change_page(admin_client, product):
    response = admin_client.get(f'/admin/configurator/product/{product.pk}/change/')
    assert response.status_code == 200
    assert b'Pack: 1, 2, 4' in response.content


def test_variant_changelist(admin_client, product):
    response = admin_client.get('/admin/configurator/variant/')
    assert response.status_code == 200
    assert b'CAPA-RED-2' in response.content


def test_deactivate_action_drops_cached_catalog(admin_client, product, variants):
    CatalogRepository.get_catalog(product)
    blue = variants['CAPA-BLUE-2']

    response = admin_client.post('/admin/configurator/variant/', {
        'action': 'deactivate_variants',
        '_selected_action': [blue.pk],
    })

    assert response.status_code == 302
    blue.refresh_from_db()
    assert blue.is_active is False
    assert cache.get(CatalogRepository.cache_key(product.pk)) is None
    assert CatalogRepository.get_catalog(product).get_variant(blue.pk) is None


def test_variant_export(product):
    dataset = VariantResource().export()
    rows = {row['sku']: row for row in dataset.dict}

    assert dataset.headers[:2] == ['sku', 'product']
    assert rows['CAPA-RED-2']['product'] == 'capa-de-banco'
    assert str(rows['CAPA-RED-2']['price_cents']) == '3600'


def test_variant_import_creates_and_updates(product, variants):
    dataset = tablib.Dataset(headers=[
        'sku', 'product', 'title', 'position', 'option1', 'option2', 'option3',
        'price_cents', 'compare_at_price_cents', 'stock_quantity',
        'track_inventory', 'allow_backorder', 'is_active',
    ])
    dataset.append([
        'CAPA-BLUE-4', 'capa-de-banco', '', '5', 'Blue', '4-pack', '',
        '7200', '', '3', '1', '0', '1',
    ])
    dataset.append([
        'CAPA-RED-1', 'capa-de-banco', 'Red / 1-pack', '1', 'Red', '1-pack', '',
        '1900', '', '10', '1', '0', '1',
    ])

    CatalogRepository.get_catalog(product)
    result = VariantResource().import_data(dataset, dry_run=False)

    assert not result.has_errors()
    assert not result.has_validation_errors()
    created = Variant.objects.get(sku='CAPA-BLUE-4')
    assert created.title == 'Blue / 4-pack'
    assert Variant.objects.get(sku='CAPA-RED-1').price_cents == 1900

    catalog = CatalogRepository.get_catalog(product)
    assert catalog.get_variant(created.pk).price == 7200
