from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    ProductViewSet,
    ConfiguratorPreviewView,
    StickyVisibilityView,
)

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='product')

urlpatterns = [
    path('', include(router.urls)),
    path('configurator/preview/', ConfiguratorPreviewView.as_view(), name='configurator-preview'),
    path(
        'configurator/sticky-visibility/',
        StickyVisibilityView.as_view(),
        name='configurator-sticky-visibility'
    ),
]
