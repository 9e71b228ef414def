from .serializers import (
    ProductSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    AttributeTypeSerializer,
    AttributeOptionSerializer,
    UnitCombinationSerializer,
    VariantSerializer,
    VariantListSerializer,
    VariantDetailSerializer,
    AttributeSelectionSerializer,
    UnitSelectionSerializer,
    SelectionValiditySerializer,
)

__all__ = [
    'ProductSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'AttributeTypeSerializer',
    'AttributeOptionSerializer',
    'UnitCombinationSerializer',
    'VariantSerializer',
    'VariantListSerializer',
    'VariantDetailSerializer',
    'AttributeSelectionSerializer',
    'UnitSelectionSerializer',
    'SelectionValiditySerializer',
]
