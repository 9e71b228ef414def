"""
Read-only index of a product's variations, used by the variation selector.

The index is built once per product view, either from the catalog models
(`build_variation_index`) or directly from records, and never changes
afterwards. Anything derived from it (query caches, resolvers) is thrown
away together with it.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .exceptions import InconsistentIndexError, InvalidTargetError


AttributeSelection = Dict[int, Optional[int]]


@dataclass(frozen=True)
class AttributeDefinition:
    attribute_id: int
    name: str


@dataclass(frozen=True)
class VariationAttribute:
    attribute_id: int
    attribute_value_id: int


@dataclass(frozen=True)
class VariationRecord:
    """
    One purchasable combination of attribute values and a unit.
    An empty `attributes` tuple marks the "empty option" variation.
    """
    variation_id: int
    unit_combination_id: int
    attributes: Tuple[VariationAttribute, ...] = field(default_factory=tuple)

    def value_for(self, attribute_id: int) -> Optional[int]:
        """Declared value for an attribute, None if the variation has none."""
        for attribute in self.attributes:
            if attribute.attribute_id == attribute_id:
                return attribute.attribute_value_id
        return None

    def declares(self, attribute_id: int) -> bool:
        return any(a.attribute_id == attribute_id for a in self.attributes)

    def attribute_map(self) -> AttributeSelection:
        return {a.attribute_id: a.attribute_value_id for a in self.attributes}


class VariationIndex:
    """
    The enumerated set of variations of one product plus the catalog of
    attributes, attribute values and units they are built from.
    """

    def __init__(
        self,
        attributes: Iterable[AttributeDefinition],
        variations: Iterable[VariationRecord],
        units: Optional[Iterable[int]] = None,
        attribute_values: Optional[Dict[int, Iterable[int]]] = None,
    ):
        self.attributes: Tuple[AttributeDefinition, ...] = tuple(attributes)
        self.variations: Tuple[VariationRecord, ...] = tuple(variations)

        if units is None:
            units = dict.fromkeys(v.unit_combination_id for v in self.variations)
        self.units: Tuple[int, ...] = tuple(units)

        if attribute_values is None:
            collected: Dict[int, Dict[int, None]] = {
                a.attribute_id: {} for a in self.attributes
            }
            for variation in self.variations:
                for attribute in variation.attributes:
                    collected.setdefault(attribute.attribute_id, {})[
                        attribute.attribute_value_id
                    ] = None
            attribute_values = collected
        self.attribute_values: Dict[int, Tuple[int, ...]] = {
            attribute_id: tuple(values)
            for attribute_id, values in attribute_values.items()
        }

        self._names = {a.attribute_id: a.name for a in self.attributes}
        self._by_id = {v.variation_id: v for v in self.variations}

    def __len__(self):
        return len(self.variations)

    def __repr__(self):
        return (
            f"<VariationIndex attributes={len(self.attributes)} "
            f"units={len(self.units)} variations={len(self.variations)}>"
        )

    @property
    def attribute_ids(self) -> List[int]:
        return [a.attribute_id for a in self.attributes]

    @property
    def has_empty_option(self) -> bool:
        """True if any variation has no attributes."""
        return any(not v.attributes for v in self.variations)

    def has_attribute(self, attribute_id) -> bool:
        return attribute_id in self._names

    def has_unit(self, unit_id) -> bool:
        return unit_id in self.units

    def has_attribute_value(self, attribute_id, value_id) -> bool:
        return value_id in self.attribute_values.get(attribute_id, ())

    def attribute_name(self, attribute_id) -> str:
        return self._names.get(attribute_id, str(attribute_id))

    def get_variation(self, variation_id) -> Optional[VariationRecord]:
        return self._by_id.get(variation_id)

    def empty_selection(self) -> AttributeSelection:
        return {attribute_id: None for attribute_id in self.attribute_ids}

    def selection_for(self, variation: VariationRecord) -> AttributeSelection:
        """Full selection mapping reproducing a variation's attributes."""
        selection = self.empty_selection()
        selection.update(variation.attribute_map())
        return selection

    def initial_selection(
        self, variation_id: Optional[int] = None
    ) -> Tuple[AttributeSelection, int]:
        """
        Default selection state for a fresh product view: the attributes and
        unit of the given variation, or of the first one in the index.
        """
        if not self.variations:
            raise InconsistentIndexError('Variation index is empty')

        if variation_id is None:
            variation = self.variations[0]
        else:
            variation = self.get_variation(variation_id)
            if variation is None:
                raise InvalidTargetError(
                    f'Variation {variation_id} is not part of the index'
                )

        return self.selection_for(variation), variation.unit_combination_id

    def is_valid_state(self, selection, unit_id) -> bool:
        """Whether a stored selection only references known ids."""
        if not self.has_unit(unit_id):
            return False
        if set(selection) != set(self.attribute_ids):
            return False
        return all(
            value is None or self.has_attribute_value(attribute_id, value)
            for attribute_id, value in selection.items()
        )


def build_variation_index(product) -> VariationIndex:
    """
    Load the variation index of a product from the catalog.

    Only active variants take part. Attributes are ordered like the
    storefront shows them (attribute type display order), values by option
    display order, units by unit display order.
    """
    from apps.catalog.models import Variant

    variants = Variant.objects.filter(
        product=product,
        is_active=True,
    ).prefetch_related(
        'variantattribute_set__attribute_option__attribute_type'
    ).order_by('pk')

    attribute_types = {}
    options = {}
    records = []

    for variant in variants:
        variation_attributes = []
        for va in variant.variantattribute_set.all():
            option = va.attribute_option
            attribute_types[option.attribute_type_id] = option.attribute_type
            options[option.pk] = option
            variation_attributes.append(
                VariationAttribute(option.attribute_type_id, option.pk)
            )

        records.append(VariationRecord(
            variation_id=variant.pk,
            unit_combination_id=variant.unit_combination_id,
            attributes=tuple(
                sorted(variation_attributes, key=lambda a: a.attribute_id)
            ),
        ))

    ordered_types = sorted(
        attribute_types.values(), key=lambda t: (t.display_order, t.name, t.pk)
    )
    attribute_values = {t.pk: [] for t in ordered_types}
    for option in sorted(options.values(), key=lambda o: (o.display_order, o.value)):
        attribute_values[option.attribute_type_id].append(option.pk)

    units = product.unit_combinations.order_by('display_order', 'pk').values_list(
        'pk', flat=True
    )

    return VariationIndex(
        attributes=[AttributeDefinition(t.pk, t.name) for t in ordered_types],
        variations=records,
        units=list(units),
        attribute_values=attribute_values,
    )
