from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    ProductViewSet,
    AttributeTypeViewSet,
    AttributeOptionViewSet,
    UnitCombinationViewSet,
    VariantViewSet,
)

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='product')
router.register(r'attribute-types', AttributeTypeViewSet, basename='attribute-type')
router.register(r'attribute-options', AttributeOptionViewSet, basename='attribute-option')
router.register(r'unit-combinations', UnitCombinationViewSet, basename='unit-combination')
router.register(r'variants', VariantViewSet, basename='variant')

urlpatterns = [
    path('', include(router.urls)),
]
