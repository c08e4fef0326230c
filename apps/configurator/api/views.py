import logging

from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Prefetch

from apps.configurator.conf import WidgetConfig
from apps.configurator.models import Product, Variant
from apps.configurator.services import (
    Catalog,
    CatalogRepository,
    ConfiguratorSession,
    StickyVisibility,
)
from apps.configurator.services.visibility import FOOTER, FORM, HERO, is_narrow_viewport
from apps.configurator.utils import to_int
from .filters import ProductFilter
from .serializers import (
    ProductListSerializer,
    ProductDetailSerializer,
    ConfigureRequestSerializer,
    ResolveRequestSerializer,
    PreviewRequestSerializer,
    StickyVisibilityRequestSerializer,
)

logger = logging.getLogger(__name__)


def run_configurator(session, data):
    """
    Restore the widget state sent by the page, apply at most one event and
    return the payload the page renders from.
    """
    session.start(
        selection=data.get('selection'),
        pack_size=data.get('pack_size'),
        variant_id=data.get('variant_id'),
        active_media_id=data.get('active_media_id'),
    )
    view = session.view()

    event = data.get('event')
    if event:
        payload = {key: value for key, value in event.items() if key != 'type'}
        view = session.dispatch(event['type'], **payload)

    result = view.to_dict()
    result['option_names'] = session.catalog.option_names
    result['pack'] = session.pack.to_dict()
    return result


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for configurable products.

    list: List products
    retrieve: Product detail with options, variants, media and pack designation
    catalog: Normalized catalog document
    configure: Apply one widget event and return the derived view
    resolve: Resolve a selection to a variant
    """
    queryset = Product.objects.all()
    lookup_field = 'slug'
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        return ProductDetailSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related(
                'options',
                'media',
                Prefetch(
                    'variants',
                    queryset=Variant.objects.filter(is_active=True).order_by('position', 'id')
                ),
            )
        return queryset

    @action(detail=True, methods=['get'])
    def catalog(self, request, slug=None):
        """Catalog document as the configurator sees it, plus the widget config."""
        product = self.get_object()
        session = CatalogRepository.session_for(product)
        return Response({
            'catalog': session.catalog.to_document(),
            'pack': session.pack.to_dict(),
            'config': session.config.to_dict(),
        })

    @action(detail=True, methods=['post'])
    def configure(self, request, slug=None):
        """
        Apply one widget event to the current state.

        Expected payload:
        {
            "selection": ["Red", "2-pack"],
            "pack_size": 2,
            "variant_id": "1",
            "active_media_id": "m1",
            "event": {"type": "pack_pick", "size": 4}
        }
        """
        product = self.get_object()
        serializer = ConfigureRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session = CatalogRepository.session_for(product)
        return Response(run_configurator(session, serializer.validated_data))

    @action(detail=True, methods=['post'])
    def resolve(self, request, slug=None):
        """
        Resolve a (possibly partial) selection.

        With ``pack_size`` the lookup is virtual: what that size would
        select right now, without changing anything.
        """
        product = self.get_object()
        serializer = ResolveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        session = CatalogRepository.session_for(product)
        if data.get('pack_size') not in (None, ''):
            session.start(selection=data['selection'])
            pack_size = session.normalize_pack_size(
                to_int(data['pack_size'], session.config.default_pack)
            )
            variant = session.resolve_for_pack_size(pack_size)
            # Fallback landed on another size: nothing is sold in this one
            if variant is not None and session.pack.enabled:
                value = variant.values[session.pack.option_index]
                if session.pack.size_for_value(value) != pack_size:
                    return Response(
                        {
                            'error': 'No variant for pack size',
                            'variant': None,
                            'sold_out': True,
                            'pack_size': pack_size,
                        },
                        status=status.HTTP_404_NOT_FOUND
                    )
        else:
            variant = session.resolve(data['selection'])
            pack_size = session.pack_size

        if variant is None:
            return Response(
                {'error': 'No variant found', 'variant': None, 'sold_out': True},
                status=status.HTTP_404_NOT_FOUND
            )

        if session.pack.enabled:
            pack_size = session.pack.size_for_value(
                variant.values[session.pack.option_index]
            ) or pack_size
        price = session.projector.price_cluster(variant, pack_size)
        return Response({
            'variant_id': variant.id,
            'variant': variant.to_dict(),
            'selection': list(variant.values),
            'sold_out': not variant.available,
            'pack_size': pack_size,
            'price': price.to_dict(),
        })


class ConfiguratorPreviewView(APIView):
    """
    Run the configurator on a catalog document posted by the caller, for
    storefront hosts that keep their own catalog.
    """

    def post(self, request):
        serializer = PreviewRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        catalog = Catalog.from_document(data.get('catalog'))
        session = ConfiguratorSession(catalog, WidgetConfig.load(data.get('config')))
        if catalog.is_empty:
            logger.info('Preview requested with an empty catalog')
        return Response(run_configurator(session, data))


class StickyVisibilityView(APIView):
    """Show/hide decision for the sticky add-to-cart summary."""

    def post(self, request):
        serializer = StickyVisibilityRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data.get('viewport_height') is not None:
            state = StickyVisibility.from_geometry(
                data['viewport_height'],
                hero_bottom=data.get('hero_bottom'),
                form_top=data.get('form_top'),
                form_bottom=data.get('form_bottom'),
                footer_top=data.get('footer_top'),
            )
        else:
            state = (
                StickyVisibility()
                .with_signal(HERO, data.get('hero'))
                .with_signal(FORM, data.get('form'))
                .with_signal(FOOTER, data.get('footer'))
            )

        is_narrow = data.get('is_narrow')
        if is_narrow is None:
            is_narrow = is_narrow_viewport(
                data['viewport_width'], WidgetConfig.load().narrow_viewport_max_width
            )

        return Response(state.to_dict(is_narrow))
