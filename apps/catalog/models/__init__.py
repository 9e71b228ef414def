"""
Catalog models for ecommerce with dynamic product variants.

Model Hierarchy:
- Product: Base product (e.g., "Linha Modelo_X")
- AttributeType: Dynamic attribute types (Color, Length, Number)
- AttributeOption: Values for each attribute type (branco, 230m, 5)
- UnitCombination: Unit/content a product is sold in (1 un, Pacote com 6)
- Variant: Individual SKU with price, stock, images, one unit combination
"""

from .product import Product
from .attribute import AttributeType, AttributeOption
from .unit import UnitCombination
from .variant import Variant, VariantAttribute, VariantImage

__all__ = [
    'Product',
    'AttributeType',
    'AttributeOption',
    'UnitCombination',
    'Variant',
    'VariantAttribute',
    'VariantImage',
]
