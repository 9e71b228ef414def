"""
Loads the full detail of a resolved variation and announces it through the
`variation_changed` signal.
"""

import logging

from apps.catalog.api.serializers import VariantDetailSerializer
from apps.catalog.models import Variant
from apps.catalog.signals import variation_changed


logger = logging.getLogger(__name__)


class VariationLoader:
    """
    Callable handed to the resolver as its `loader`.

    Calling it loads the variation and sends `variation_changed`; `load()`
    only fetches the document, for reads that change nothing. Failures to
    load are logged and reported as None; the resolver never sees them.
    """

    def __init__(self, request=None):
        self.request = request
        self.loaded = None

    def load(self, variation_id):
        try:
            variant = Variant.objects.select_related(
                'product', 'unit_combination'
            ).prefetch_related(
                'images',
                'variantattribute_set__attribute_option__attribute_type',
            ).get(pk=variation_id, is_active=True)
        except Variant.DoesNotExist:
            logger.warning("Variation %s could not be loaded", variation_id)
            return None

        self.loaded = VariantDetailSerializer(
            variant, context={'request': self.request}
        ).data
        return self.loaded

    def __call__(self, variation_id):
        document = self.load(variation_id)
        if document is None:
            return None

        variation_changed.send(
            sender=Variant,
            variation_id=document['id'],
            attributes=document['variant_attributes'],
            documents=[document],
        )
        return document
