from django.core.validators import MaxValueValidator
from django.db import models
from django.utils.text import slugify
from simple_history.models import HistoricalRecords

MAX_PRODUCT_OPTIONS = 3


class Product(models.Model):
    """
    A configurable product: ordered options, variants and a media gallery.
    The storefront widget reads it through ``to_catalog_document``.
    """
    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )
    widget_config = models.JSONField(
        null=True,
        blank=True,
        verbose_name='Configuração do widget',
        help_text='Ex: {"default_pack": 2, "currency_code": "USD", "pack_option_index": 1}'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['name']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    @property
    def variant_count(self):
        return self.variants.count()

    @property
    def active_variant_count(self):
        return self.variants.filter(is_active=True).count()

    def get_option_names(self):
        return list(self.options.order_by('position').values_list('name', flat=True))

    def to_catalog_document(self):
        """
        Catalog document for the configurator, in catalog order.
        Inactive variants are left out.
        """
        option_names = self.get_option_names()
        variants = self.variants.filter(is_active=True).select_related(
            'featured_media'
        ).order_by('position', 'id')

        return {
            'options': option_names,
            'variants': [
                variant.to_catalog_entry(len(option_names))
                for variant in variants
            ],
            'media': [
                item.to_catalog_entry()
                for item in self.media.order_by('position', 'id')
            ],
        }


class ProductOption(models.Model):
    """
    Named option of a product (Cor, Pack...). ``position`` is the index of
    its value in every variant (option1 -> 0, option2 -> 1, option3 -> 2).
    """
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='options',
        verbose_name='Produto'
    )
    name = models.CharField(
        max_length=100,
        verbose_name='Nome'
    )
    position = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(MAX_PRODUCT_OPTIONS - 1)],
        verbose_name='Posição'
    )

    class Meta:
        ordering = ['product', 'position']
        unique_together = ['product', 'position']
        verbose_name = 'Opção do Produto'
        verbose_name_plural = 'Opções do Produto'

    def __str__(self):
        return f"{self.product.name}: {self.name}"
