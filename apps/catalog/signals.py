"""
Django signals for the catalog app.
`variation_changed` is sent whenever the variation selector has loaded a
newly resolved variation.
"""

from django.db.models.signals import pre_save
from django.dispatch import Signal, receiver

from .models import Variant


# kwargs: variation_id, attributes, documents
variation_changed = Signal()


@receiver(pre_save, sender=Variant)
def check_unit_combination(sender, instance, **kwargs):
    """
    Keep variants on units of their own product.
    """
    if instance.unit_combination_id is None or instance.product_id is None:
        return

    if instance.unit_combination.product_id != instance.product_id:
        raise ValueError(
            f"Unit combination {instance.unit_combination_id} does not belong "
            f"to product {instance.product_id}"
        )
