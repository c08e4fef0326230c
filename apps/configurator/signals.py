"""
Django signals for the configurator app.
Drops the cached catalog whenever anything it is built from changes.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import MediaItem, Product, ProductOption, Variant
from .services.repository import CatalogRepository


@receiver(post_save, sender=Product)
@receiver(post_delete, sender=Product)
def invalidate_product_catalog(sender, instance, **kwargs):
    CatalogRepository.invalidate(instance.pk)


@receiver(post_save, sender=ProductOption)
@receiver(post_delete, sender=ProductOption)
@receiver(post_save, sender=Variant)
@receiver(post_delete, sender=Variant)
@receiver(post_save, sender=MediaItem)
@receiver(post_delete, sender=MediaItem)
def invalidate_related_catalog(sender, instance, **kwargs):
    """Options, variants and media all feed the product's catalog document."""
    CatalogRepository.invalidate(instance.product_id)
