"""
Loads the normalized catalog of a stored product.

Normalizing the catalog happens once per product revision; the immutable
``Catalog`` is kept in the Django cache until a model signal drops it.
"""

import logging
from typing import Optional

from django.core.cache import cache

from apps.configurator.conf import WidgetConfig, catalog_cache_timeout
from apps.configurator.services.catalog import Catalog
from apps.configurator.services.money import MoneyFormatter
from apps.configurator.services.session import ConfiguratorSession

logger = logging.getLogger(__name__)

CACHE_KEY = 'configurator:catalog:{product_id}'


class CatalogRepository:

    @staticmethod
    def cache_key(product_id: int) -> str:
        return CACHE_KEY.format(product_id=product_id)

    @staticmethod
    def get_catalog(product) -> Catalog:
        key = CatalogRepository.cache_key(product.pk)
        catalog = cache.get(key)
        if catalog is None:
            catalog = Catalog.from_document(product.to_catalog_document())
            cache.set(key, catalog, catalog_cache_timeout())
            logger.debug(
                'Cached catalog for product %s (%d variants)',
                product.pk, len(catalog.variants),
            )
        return catalog

    @staticmethod
    def invalidate(product_id: Optional[int]) -> None:
        if product_id is None:
            return
        cache.delete(CatalogRepository.cache_key(product_id))

    @staticmethod
    def session_for(product, formatter: Optional[MoneyFormatter] = None) -> ConfiguratorSession:
        config = WidgetConfig.load(product.widget_config)
        return ConfiguratorSession(
            CatalogRepository.get_catalog(product),
            config,
            formatter=formatter,
        )
