from rest_framework import serializers
from apps.catalog.models import (
    Product,
    AttributeType,
    AttributeOption,
    UnitCombination,
    Variant,
    VariantAttribute,
    VariantImage,
)


# =============================================================================
# Attribute Serializers
# =============================================================================

class AttributeOptionSerializer(serializers.ModelSerializer):
    attribute_type_name = serializers.CharField(
        source='attribute_type.name', read_only=True
    )
    attribute_type_slug = serializers.CharField(
        source='attribute_type.slug', read_only=True
    )

    class Meta:
        model = AttributeOption
        fields = [
            'id', 'attribute_type', 'attribute_type_name', 'attribute_type_slug',
            'product', 'value', 'display_value', 'color_hex', 'display_order'
        ]


class AttributeTypeSerializer(serializers.ModelSerializer):
    options = AttributeOptionSerializer(many=True, read_only=True)

    class Meta:
        model = AttributeType
        fields = ['id', 'name', 'slug', 'display_order', 'options']


# =============================================================================
# Unit Combination Serializer
# =============================================================================

class UnitCombinationSerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = UnitCombination
        fields = [
            'id', 'product', 'name', 'display_name', 'unit', 'content',
            'display_order'
        ]


# =============================================================================
# Variant Image Serializer
# =============================================================================

class VariantImageSerializer(serializers.ModelSerializer):
    thumbnail_url = serializers.SerializerMethodField()

    class Meta:
        model = VariantImage
        fields = [
            'id', 'image', 'thumbnail_url',
            'alt_text', 'display_order', 'is_primary'
        ]

    def get_thumbnail_url(self, obj):
        if obj.thumbnail:
            request = self.context.get('request')
            if request:
                return request.build_absolute_uri(obj.thumbnail.url)
            return obj.thumbnail.url
        return None


# =============================================================================
# Variant Serializers
# =============================================================================

class VariantAttributeSerializer(serializers.ModelSerializer):
    attribute_type_id = serializers.IntegerField(
        source='attribute_option.attribute_type_id', read_only=True
    )
    attribute_type = serializers.CharField(
        source='attribute_option.attribute_type.name', read_only=True
    )
    attribute_slug = serializers.CharField(
        source='attribute_option.attribute_type.slug', read_only=True
    )
    value = serializers.CharField(
        source='attribute_option.value', read_only=True
    )
    display_value = serializers.CharField(
        source='attribute_option.get_display_value', read_only=True
    )
    color_hex = serializers.CharField(
        source='attribute_option.color_hex', read_only=True
    )

    class Meta:
        model = VariantAttribute
        fields = [
            'id', 'attribute_option', 'attribute_type_id', 'attribute_type',
            'attribute_slug', 'value', 'display_value', 'color_hex'
        ]


class VariantSerializer(serializers.ModelSerializer):
    """Base variant serializer."""
    class Meta:
        model = Variant
        fields = [
            'id', 'product', 'unit_combination', 'sku', 'name',
            'sell_price', 'compare_at_price', 'stock_quantity', 'track_inventory',
            'is_active', 'created_at', 'updated_at'
        ]

    def validate(self, attrs):
        product = attrs.get('product') or getattr(self.instance, 'product', None)
        unit = attrs.get('unit_combination') or getattr(self.instance, 'unit_combination', None)
        if product and unit and unit.product_id != product.pk:
            raise serializers.ValidationError({
                'unit_combination': 'Unidade de venda não pertence ao produto.'
            })
        return attrs


class VariantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for variant lists."""
    product_name = serializers.CharField(source='product.name', read_only=True)
    unit_name = serializers.CharField(
        source='unit_combination.get_display_name', read_only=True
    )
    primary_image = serializers.SerializerMethodField()
    attributes = serializers.SerializerMethodField()
    is_in_stock = serializers.BooleanField(read_only=True)
    is_on_sale = serializers.BooleanField(read_only=True)
    discount_percentage = serializers.IntegerField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'sku', 'name', 'product', 'product_name',
            'unit_combination', 'unit_name',
            'sell_price', 'compare_at_price', 'stock_quantity',
            'is_active', 'is_in_stock', 'is_on_sale', 'discount_percentage',
            'primary_image', 'attributes'
        ]

    def get_primary_image(self, obj):
        img = obj.primary_image
        if img:
            request = self.context.get('request')
            if request and img.thumbnail:
                return request.build_absolute_uri(img.thumbnail.url)
            elif img.thumbnail:
                return img.thumbnail.url
        return None

    def get_attributes(self, obj):
        return {
            str(attribute_id): option_id
            for attribute_id, option_id in obj.get_selection().items()
        }


class VariantDetailSerializer(serializers.ModelSerializer):
    """Full variant serializer with all related data."""
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_slug = serializers.CharField(source='product.slug', read_only=True)
    unit = UnitCombinationSerializer(source='unit_combination', read_only=True)
    images = VariantImageSerializer(many=True, read_only=True)
    variant_attributes = VariantAttributeSerializer(
        source='variantattribute_set', many=True, read_only=True
    )
    is_in_stock = serializers.BooleanField(read_only=True)
    is_on_sale = serializers.BooleanField(read_only=True)
    discount_percentage = serializers.IntegerField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'product', 'product_name', 'product_slug',
            'sku', 'name', 'sell_price', 'compare_at_price',
            'stock_quantity', 'track_inventory', 'is_active',
            'is_in_stock', 'is_on_sale',
            'discount_percentage', 'unit', 'images', 'variant_attributes',
            'created_at', 'updated_at'
        ]


# =============================================================================
# Product Serializers
# =============================================================================

class ProductSerializer(serializers.ModelSerializer):
    """Base product serializer."""
    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'is_active',
            'default_variant', 'created_at', 'updated_at'
        ]


class ProductListSerializer(serializers.ModelSerializer):
    """Product list with counts."""
    variant_count = serializers.IntegerField(read_only=True)
    active_variant_count = serializers.IntegerField(read_only=True)
    min_price = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'is_active',
            'variant_count', 'active_variant_count', 'min_price'
        ]

    def get_min_price(self, obj):
        variant = obj.variants.filter(is_active=True).order_by('sell_price').first()
        return variant.sell_price if variant else None


class ProductDetailSerializer(serializers.ModelSerializer):
    """Full product detail with variants, attribute types and units."""
    variants = VariantListSerializer(many=True, read_only=True)
    attribute_types = serializers.SerializerMethodField()
    unit_combinations = UnitCombinationSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'is_active',
            'default_variant', 'variants', 'attribute_types',
            'unit_combinations', 'created_at', 'updated_at'
        ]

    def get_attribute_types(self, obj):
        attr_types = obj.get_attribute_types()
        return AttributeTypeSerializer(attr_types, many=True).data


# =============================================================================
# Variation Select Serializers
# =============================================================================

class AttributeSelectionSerializer(serializers.Serializer):
    """Payload of a single attribute change. `value_id: null` clears it."""
    attribute_id = serializers.IntegerField()
    value_id = serializers.IntegerField(allow_null=True)


class UnitSelectionSerializer(serializers.Serializer):
    unit_id = serializers.IntegerField()


class SelectionValiditySerializer(serializers.Serializer):
    """
    Query of a validity check: either `attribute_id` (+ optional `value_id`)
    or `unit_id`.
    """
    attribute_id = serializers.IntegerField(required=False)
    value_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    unit_id = serializers.IntegerField(required=False)

    def validate(self, attrs):
        has_attribute = attrs.get('attribute_id') is not None
        has_unit = attrs.get('unit_id') is not None
        if has_attribute == has_unit:
            raise serializers.ValidationError(
                'Informe attribute_id ou unit_id.'
            )
        return attrs
