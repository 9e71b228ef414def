import logging

from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Prefetch

from apps.catalog.models import (
    Product,
    AttributeType,
    AttributeOption,
    UnitCombination,
    Variant,
)
from apps.catalog.services import (
    InconsistentIndexError,
    InvalidTargetError,
    MessageNotifier,
    SessionSelectionStore,
    VariationLoader,
    VariationSelectResolver,
    build_variation_index,
)
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
from .filters import VariantFilter


logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ModelViewSet):
    """
    API endpoint for products.

    list: List all products
    retrieve: Get product detail with variants
    create: Create a new product
    update: Update a product
    delete: Delete a product

    The variation-select actions keep the visitor's attribute/unit
    selection for a product in the session and resolve it to a variant.
    """
    queryset = Product.objects.all()
    lookup_field = 'slug'
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        elif self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related(
                Prefetch(
                    'variants',
                    queryset=Variant.objects.filter(is_active=True).prefetch_related(
                        'images', 'variantattribute_set__attribute_option__attribute_type'
                    )
                ),
                'unit_combinations'
            )
        return queryset

    # -------------------------------------------------------------------------
    # Variation select
    # -------------------------------------------------------------------------

    def _get_resolver(self, request, product):
        """
        Build the resolver for one request: a fresh index (and query cache)
        from the catalog, and the visitor's selection from the session.
        The selection starts at the product's initial variant and is reset
        when it references options that are gone.
        """
        index = build_variation_index(product)
        store = SessionSelectionStore(request.session, product.pk)

        if not store.is_initialized or not index.is_valid_state(
            store.selected_attributes, store.selected_unit
        ):
            initial = product.get_initial_variant()
            attributes, unit_id = index.initial_selection(
                initial.pk if initial else None
            )
            store.reset(attributes, unit_id, variation_id=initial.pk if initial else None)

        loader = VariationLoader(request)
        resolver = VariationSelectResolver(
            index,
            store,
            notifier=MessageNotifier(request._request),
            loader=loader,
        )
        return resolver, store, loader

    def _selection_data(self, resolver, store, loader, result=None):
        return {
            'selected_attributes': store.selected_attributes,
            'selected_unit': store.selected_unit,
            'variation_id': store.resolved_variation,
            'is_variation_selected': store.is_variation_selected,
            'has_empty_option': resolver.has_empty_option,
            'notices': list(result.notices) if result else [],
            'warning': result.warning if result else None,
            'variation': loader.loaded,
        }

    @action(detail=True, methods=['get'], url_path='variation-select')
    def variation_select(self, request, slug=None):
        """
        Get the variation index of a product together with the current
        selection and the variant it resolves to.
        """
        product = self.get_object()
        try:
            resolver, store, loader = self._get_resolver(request, product)
        except InconsistentIndexError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        index = resolver.index
        # reading the state announces nothing
        current = resolver.current_variation
        if current is not None:
            loader.load(current.variation_id)

        data = self._selection_data(resolver, store, loader)
        data['attributes'] = [
            {
                'attribute_id': attribute.attribute_id,
                'name': attribute.name,
                'values': list(index.attribute_values.get(attribute.attribute_id, ())),
            }
            for attribute in index.attributes
        ]
        data['units'] = UnitCombinationSerializer(
            product.unit_combinations.filter(pk__in=index.units), many=True
        ).data
        data['variations'] = [
            {
                'variation_id': variation.variation_id,
                'unit_combination_id': variation.unit_combination_id,
                'attributes': [
                    {
                        'attribute_id': a.attribute_id,
                        'attribute_value_id': a.attribute_value_id,
                    }
                    for a in variation.attributes
                ],
            }
            for variation in index.variations
        ]
        return Response(data)

    @action(detail=True, methods=['post'], url_path='variation-select/attribute')
    def select_attribute(self, request, slug=None):
        """
        Select an attribute value (or clear it with null).

        Expected payload:
        {
            "attribute_id": 1,
            "value_id": 5
        }
        """
        serializer = AttributeSelectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._change_selection(
            request,
            lambda resolver: resolver.select_attribute(
                serializer.validated_data['attribute_id'],
                serializer.validated_data['value_id'],
            ),
        )

    @action(detail=True, methods=['post'], url_path='variation-select/unit')
    def select_unit(self, request, slug=None):
        """
        Select a unit combination.

        Expected payload:
        {
            "unit_id": 2
        }
        """
        serializer = UnitSelectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._change_selection(
            request,
            lambda resolver: resolver.select_unit(serializer.validated_data['unit_id']),
        )

    def _change_selection(self, request, change):
        product = self.get_object()
        try:
            resolver, store, loader = self._get_resolver(request, product)
            result = change(resolver)
        except InvalidTargetError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InconsistentIndexError as e:
            logger.error("Variation index of product %s is inconsistent: %s", product.slug, e)
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(self._selection_data(resolver, store, loader, result))

    @action(detail=True, methods=['get'], url_path='variation-select/validity')
    def selection_validity(self, request, slug=None):
        """
        Check whether a selection change would keep a matching variant.

        Query params:
        - attribute_id and value_id (empty value_id means "no value"), or
        - unit_id
        """
        serializer = SelectionValiditySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        product = self.get_object()
        try:
            resolver, store, loader = self._get_resolver(request, product)
        except InconsistentIndexError:
            return Response({'valid': False})

        if params.get('attribute_id') is not None:
            valid = resolver.is_attribute_selection_valid(
                params['attribute_id'], params.get('value_id')
            )
        else:
            valid = resolver.is_unit_selection_valid(params['unit_id'])

        return Response({'valid': valid})


class AttributeTypeViewSet(viewsets.ModelViewSet):
    """
    API endpoint for attribute types (Color, Length, Number, etc).
    """
    queryset = AttributeType.objects.prefetch_related('options')
    serializer_class = AttributeTypeSerializer
    lookup_field = 'slug'
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['display_order', 'name']


class AttributeOptionViewSet(viewsets.ModelViewSet):
    """
    API endpoint for attribute options.
    """
    queryset = AttributeOption.objects.select_related('attribute_type')
    serializer_class = AttributeOptionSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['attribute_type', 'attribute_type__slug', 'product']
    search_fields = ['value', 'display_value']


class UnitCombinationViewSet(viewsets.ModelViewSet):
    """
    API endpoint for the units/contents products are sold in.
    """
    queryset = UnitCombination.objects.select_related('product')
    serializer_class = UnitCombinationSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['product', 'product__slug', 'unit']
    ordering = ['display_order', 'pk']


class VariantViewSet(viewsets.ModelViewSet):
    """
    API endpoint for variants.

    Supports filtering by product, unit and attribute options.
    """
    queryset = Variant.objects.select_related('product', 'unit_combination').prefetch_related(
        'images', 'variantattribute_set__attribute_option__attribute_type'
    )
    filterset_class = VariantFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['sku', 'name', 'product__name']
    ordering_fields = ['sku', 'sell_price', 'created_at']
    ordering = ['sku']

    def get_serializer_class(self):
        if self.action == 'list':
            return VariantListSerializer
        elif self.action == 'retrieve':
            return VariantDetailSerializer
        return VariantSerializer
