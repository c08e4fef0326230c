from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from simple_history.admin import SimpleHistoryAdmin

from .conf import WidgetConfig
from .models import (
    Product,
    ProductOption,
    Variant,
    MediaItem,
)
from .services import CatalogRepository, PackOptionDetector


# =============================================================================
# Import/Export Resources
# =============================================================================

class VariantResource(resources.ModelResource):
    """Resource for importing/exporting variants."""

    product_slug = fields.Field(
        column_name='product',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'slug')
    )

    class Meta:
        model = Variant
        import_id_fields = ['sku']
        fields = (
            'sku', 'product_slug', 'title', 'position',
            'option1', 'option2', 'option3',
            'price_cents', 'compare_at_price_cents', 'stock_quantity',
            'track_inventory', 'allow_backorder', 'is_active'
        )
        export_order = fields


# =============================================================================
# Inlines
# =============================================================================

class ProductOptionInline(admin.TabularInline):
    model = ProductOption
    extra = 1
    fields = ['name', 'position']


class MediaItemInline(admin.TabularInline):
    model = MediaItem
    extra = 1
    fields = ['src', 'alt_text', 'position', 'media_preview']
    readonly_fields = ['media_preview']

    def media_preview(self, obj):
        if obj.src:
            return format_html(
                '<img src="{}" style="max-height: 50px; max-width: 100px;" />',
                obj.src
            )
        return '-'
    media_preview.short_description = 'Preview'


class VariantInline(admin.TabularInline):
    model = Variant
    extra = 0
    fields = ['sku', 'title', 'option1', 'option2', 'option3', 'price_cents', 'stock_quantity', 'is_active']
    readonly_fields = ['sku', 'title']
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Product)
class ProductAdmin(SimpleHistoryAdmin):
    list_display = ['name', 'slug', 'variant_count', 'active_variant_count', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'slug', 'description']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['variant_count', 'active_variant_count', 'pack_summary', 'created_at', 'updated_at']
    inlines = [ProductOptionInline, VariantInline, MediaItemInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'description', 'is_active')
        }),
        ('Widget', {
            'fields': ('widget_config', 'pack_summary')
        }),
        ('Informações', {
            'fields': ('variant_count', 'active_variant_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def pack_summary(self, obj):
        """Which option the configurator treats as the pack, and its sizes."""
        if not obj.pk:
            return '-'
        catalog = CatalogRepository.get_catalog(obj)
        pack = PackOptionDetector.detect(catalog, WidgetConfig.load(obj.widget_config))
        if not pack.enabled:
            return 'Sem opção de pack (quantidade simples)'
        return format_html(
            '{}: {}',
            catalog.options[pack.option_index].name,
            ', '.join(str(size) for size in pack.sizes)
        )
    pack_summary.short_description = 'Pack detectado'


@admin.register(Variant)
class VariantAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = VariantResource
    list_display = [
        'sku', 'title', 'product', 'price_cents', 'compare_at_price_cents',
        'stock_quantity', 'stock_status', 'is_active'
    ]
    list_filter = ['product', 'is_active', 'track_inventory']
    list_editable = ['price_cents', 'stock_quantity', 'is_active']
    search_fields = ['sku', 'title', 'product__name']
    autocomplete_fields = ['product']
    readonly_fields = [
        'created_at', 'updated_at', 'is_on_sale', 'discount_percentage', 'is_in_stock'
    ]
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('product', 'sku', 'title', 'position', 'is_active')
        }),
        ('Opções', {
            'fields': ('option1', 'option2', 'option3', 'featured_media')
        }),
        ('Preços', {
            'fields': ('price_cents', 'compare_at_price_cents', 'is_on_sale', 'discount_percentage')
        }),
        ('Estoque', {
            'fields': ('stock_quantity', 'track_inventory', 'allow_backorder', 'is_in_stock')
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = [
        'activate_variants', 'deactivate_variants',
        'mark_in_stock', 'mark_out_of_stock'
    ]

    def stock_status(self, obj):
        if not obj.track_inventory:
            return format_html('<span style="color: blue;">Não rastreado</span>')
        if obj.stock_quantity <= 0:
            if obj.allow_backorder:
                return format_html('<span style="color: orange;">Sob encomenda</span>')
            return format_html('<span style="color: red;">Sem estoque</span>')
        return format_html('<span style="color: green;">Em estoque</span>')
    stock_status.short_description = 'Status Estoque'

    # queryset.update() skips post_save, so the cached catalogs are dropped here
    def _invalidate(self, queryset):
        for product_id in set(queryset.values_list('product_id', flat=True)):
            CatalogRepository.invalidate(product_id)

    @admin.action(description='Ativar variantes selecionadas')
    def activate_variants(self, request, queryset):
        count = queryset.update(is_active=True)
        self._invalidate(queryset)
        self.message_user(request, f'{count} variantes ativadas.')

    @admin.action(description='Desativar variantes selecionadas')
    def deactivate_variants(self, request, queryset):
        count = queryset.update(is_active=False)
        self._invalidate(queryset)
        self.message_user(request, f'{count} variantes desativadas.')

    @admin.action(description='Marcar como em estoque (10 unidades)')
    def mark_in_stock(self, request, queryset):
        count = queryset.update(stock_quantity=10)
        self._invalidate(queryset)
        self.message_user(request, f'{count} variantes atualizadas.')

    @admin.action(description='Marcar como sem estoque')
    def mark_out_of_stock(self, request, queryset):
        count = queryset.update(stock_quantity=0)
        self._invalidate(queryset)
        self.message_user(request, f'{count} variantes atualizadas.')


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Configurador Admin'
admin.site.site_title = 'Configurador'
admin.site.index_title = 'Painel de Administração'
