from rest_framework import serializers

from apps.configurator.conf import WidgetConfig
from apps.configurator.models import (
    Product,
    ProductOption,
    Variant,
    MediaItem,
)
from apps.configurator.services import CatalogRepository, PackOptionDetector
from apps.configurator.services.session import EVENT_OPTION, EVENT_TYPES


# =============================================================================
# Product Serializers
# =============================================================================

class ProductOptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductOption
        fields = ['id', 'name', 'position']


class MediaItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = MediaItem
        fields = ['id', 'src', 'alt_text', 'position']


class VariantSerializer(serializers.ModelSerializer):
    is_on_sale = serializers.BooleanField(read_only=True)
    discount_percentage = serializers.IntegerField(read_only=True)
    is_available = serializers.BooleanField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'sku', 'title', 'position',
            'option1', 'option2', 'option3',
            'price_cents', 'compare_at_price_cents',
            'is_on_sale', 'discount_percentage',
            'stock_quantity', 'is_available', 'featured_media',
        ]


class ProductListSerializer(serializers.ModelSerializer):
    option_names = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'is_active',
            'option_names', 'variant_count', 'active_variant_count',
        ]

    def get_option_names(self, obj):
        return obj.get_option_names()


class ProductDetailSerializer(serializers.ModelSerializer):
    options = ProductOptionSerializer(many=True, read_only=True)
    variants = VariantSerializer(many=True, read_only=True)
    media = MediaItemSerializer(many=True, read_only=True)
    option_names = serializers.SerializerMethodField()
    pack = serializers.SerializerMethodField()
    config = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'is_active',
            'option_names', 'options', 'pack', 'config',
            'variants', 'media', 'created_at', 'updated_at',
        ]

    def get_option_names(self, obj):
        return obj.get_option_names()

    def get_pack(self, obj):
        catalog = CatalogRepository.get_catalog(obj)
        return PackOptionDetector.detect(catalog, WidgetConfig.load(obj.widget_config)).to_dict()

    def get_config(self, obj):
        return WidgetConfig.load(obj.widget_config).to_dict()


# =============================================================================
# Configurator Request Serializers
# =============================================================================

class LenientValueField(serializers.CharField):
    """Scalar UI value ("4-pack", 2, "") kept as text for lenient parsing downstream."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('trim_whitespace', False)
        super().__init__(**kwargs)


class ConfiguratorEventSerializer(serializers.Serializer):
    """
    One UI event.

    - option: {"type": "option", "index": 0, "value": "Red"}
    - pack_radio / pack_pick / sticky_pack: {"type": "pack_pick", "size": 4}
    - media: {"type": "media", "media_id": "m2"}
    """
    type = serializers.ChoiceField(choices=EVENT_TYPES)
    index = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    value = LenientValueField()
    size = LenientValueField()
    media_id = LenientValueField()

    def validate(self, attrs):
        if attrs['type'] == EVENT_OPTION and attrs.get('index') is None:
            raise serializers.ValidationError({'index': 'Required for option events.'})
        return attrs


class ConfiguratorStateSerializer(serializers.Serializer):
    """Widget state as the page currently shows it."""
    selection = serializers.ListField(
        child=LenientValueField(), required=False, allow_empty=True
    )
    pack_size = LenientValueField()
    variant_id = LenientValueField()
    active_media_id = LenientValueField()


class ConfigureRequestSerializer(ConfiguratorStateSerializer):
    event = ConfiguratorEventSerializer(required=False, allow_null=True)


class ResolveRequestSerializer(serializers.Serializer):
    selection = serializers.ListField(child=LenientValueField(), allow_empty=True)
    pack_size = LenientValueField()


class PreviewRequestSerializer(ConfigureRequestSerializer):
    """Configure against a catalog document supplied by the caller."""
    catalog = serializers.JSONField(required=False, allow_null=True)
    config = serializers.JSONField(required=False, allow_null=True)


class StickyVisibilityRequestSerializer(serializers.Serializer):
    """
    Either the three observer signals, or the element geometry sampled on
    scroll/resize (``viewport_height`` switches to the geometry path).
    """
    hero = serializers.BooleanField(default=None, allow_null=True)
    form = serializers.BooleanField(default=None, allow_null=True)
    footer = serializers.BooleanField(default=None, allow_null=True)

    viewport_height = serializers.FloatField(required=False, allow_null=True, min_value=0)
    hero_bottom = serializers.FloatField(required=False, allow_null=True)
    form_top = serializers.FloatField(required=False, allow_null=True)
    form_bottom = serializers.FloatField(required=False, allow_null=True)
    footer_top = serializers.FloatField(required=False, allow_null=True)

    is_narrow = serializers.BooleanField(default=None, allow_null=True)
    viewport_width = serializers.FloatField(required=False, allow_null=True, min_value=0)

    def validate(self, attrs):
        if attrs.get('is_narrow') is None and attrs.get('viewport_width') is None:
            raise serializers.ValidationError(
                'Either is_narrow or viewport_width is required.'
            )
        return attrs
