from django.db.models import Count, Q
from django_filters import rest_framework as filters

from apps.configurator.models import Product


class ProductFilter(filters.FilterSet):
    """Filter for configurable products."""

    option = filters.CharFilter(field_name='options__name', lookup_expr='iexact', distinct=True)
    has_variants = filters.BooleanFilter(method='filter_has_variants')

    class Meta:
        model = Product
        fields = ['is_active', 'slug', 'option']

    def filter_has_variants(self, queryset, name, value):
        queryset = queryset.annotate(
            active_variants=Count('variants', filter=Q(variants__is_active=True))
        )
        if value is True:
            return queryset.filter(active_variants__gt=0)
        elif value is False:
            return queryset.filter(active_variants=0)
        return queryset
