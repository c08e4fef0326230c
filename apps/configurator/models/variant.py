from django.db import models
from simple_history.models import HistoricalRecords


class MediaItem(models.Model):
    """Gallery entry of a product. ``src`` may be protocol-relative."""
    product = models.ForeignKey(
        'configurator.Product',
        on_delete=models.CASCADE,
        related_name='media',
        verbose_name='Produto'
    )
    src = models.CharField(
        max_length=1000,
        verbose_name='URL da mídia'
    )
    alt_text = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Texto alternativo'
    )
    position = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['product', 'position', 'id']
        verbose_name = 'Mídia'
        verbose_name_plural = 'Mídias'

    def __str__(self):
        return f"{self.product.name} - Mídia {self.position}"

    def save(self, *args, **kwargs):
        if not self.alt_text:
            self.alt_text = self.product.name
        super().save(*args, **kwargs)

    def to_catalog_entry(self):
        return {
            'id': self.pk,
            'src': self.src,
            'alt': self.alt_text,
        }


class Variant(models.Model):
    """
    Individual SKU: one value per product option, its own price and stock.
    Prices are stored in cents.
    """
    product = models.ForeignKey(
        'configurator.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Produto'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    title = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Título',
        help_text='Gerado a partir das opções se vazio'
    )
    position = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem no catálogo'
    )

    # Option values, by option position
    option1 = models.CharField(max_length=255, blank=True, verbose_name='Opção 1')
    option2 = models.CharField(max_length=255, blank=True, verbose_name='Opção 2')
    option3 = models.CharField(max_length=255, blank=True, verbose_name='Opção 3')

    # Pricing
    price_cents = models.PositiveIntegerField(
        default=0,
        verbose_name='Preço (centavos)'
    )
    compare_at_price_cents = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Preço comparativo (centavos)',
        help_text='Preço "de" para mostrar desconto'
    )

    # Inventory
    stock_quantity = models.IntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )
    track_inventory = models.BooleanField(
        default=True,
        verbose_name='Rastrear estoque'
    )
    allow_backorder = models.BooleanField(
        default=False,
        verbose_name='Permitir compra sem estoque'
    )

    featured_media = models.ForeignKey(
        MediaItem,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='featured_in',
        verbose_name='Mídia destaque'
    )

    # Status
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
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
        ordering = ['product', 'position', 'id']
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.title or self.sku

    def save(self, *args, **kwargs):
        if not self.title:
            self.title = self._generate_title()
        super().save(*args, **kwargs)

    def _generate_title(self):
        values = [v for v in (self.option1, self.option2, self.option3) if v]
        if not values:
            return self.sku
        return ' / '.join(values)

    def get_option_values(self, option_count):
        """Option values for the first ``option_count`` options."""
        return [self.option1, self.option2, self.option3][:option_count]

    @property
    def is_on_sale(self):
        return bool(self.compare_at_price_cents and self.compare_at_price_cents > self.price_cents)

    @property
    def discount_percentage(self):
        if not self.is_on_sale:
            return 0
        return int(((self.compare_at_price_cents - self.price_cents) / self.compare_at_price_cents) * 100)

    @property
    def is_in_stock(self):
        if not self.track_inventory:
            return True
        return self.stock_quantity > 0 or self.allow_backorder

    @property
    def is_available(self):
        return self.is_active and self.is_in_stock

    def to_catalog_entry(self, option_count):
        media = self.featured_media
        return {
            'id': self.pk,
            'sku': self.sku,
            'title': self.title,
            'options': self.get_option_values(option_count),
            'price': self.price_cents,
            'compare_at_price': self.compare_at_price_cents or 0,
            'available': self.is_available,
            'featured_media': {'id': media.pk, 'src': media.src} if media else None,
        }
