"""
Variation selection: resolves a visitor's attribute/unit selection to one
of the product's variations.

When a change leaves the selection without a matching variation, the
selection is repaired towards the variation that needs the fewest changes.
Attributes that had to change are cleared rather than switched to another
value, so the visitor picks them again; the unit is switched directly since
there is no "no unit" state. Every repaired field produces one notice, and
the notices are shown to the visitor as a single warning.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from apps.catalog.conf import get_setting

from .exceptions import InconsistentIndexError, InvalidTargetError
from .selection_store import translate as default_translate
from .variation_index import AttributeSelection, VariationIndex, VariationRecord


logger = logging.getLogger(__name__)


class VariationQueryCache:
    """
    Memoized filter results for one variation index.

    Entries are never evicted; build a new cache together with a new index.
    """

    def __init__(self):
        self._entries: Dict[tuple, Tuple[VariationRecord, ...]] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    @staticmethod
    def make_key(selection: AttributeSelection, unit_id, strict: bool) -> tuple:
        # attribute ids are unique, so sorting never compares the values
        return (tuple(sorted(selection.items())), unit_id, bool(strict))

    def get_or_compute(self, key, compute: Callable[[], Sequence[VariationRecord]]):
        if key in self._entries:
            self.hits += 1
            return self._entries[key]

        self.misses += 1
        result = self._entries[key] = tuple(compute())
        return result


class VariationMatcher:
    """Pure filtering of a variation index against a selection."""

    def __init__(self, index: VariationIndex, cache: Optional[VariationQueryCache] = None):
        self.index = index
        self.cache = cache if cache is not None else VariationQueryCache()

    def filter_variations(
        self,
        selection: AttributeSelection,
        unit_id,
        strict: bool = False,
    ) -> List[VariationRecord]:
        """
        Variations of the given unit that agree with the selection.

        In strict mode every attribute must match exactly; otherwise an
        attribute without a value matches any declared value. Variations
        without attributes only match when no attribute has a value, and
        vice versa.
        """
        key = self.cache.make_key(selection, unit_id, strict)
        snapshot = dict(selection)
        result = self.cache.get_or_compute(
            key, lambda: self._filter(snapshot, unit_id, strict)
        )
        return list(result)

    def _filter(self, selection, unit_id, strict):
        is_empty_option_selected = all(value is None for value in selection.values())

        matches = []
        for variation in self.index.variations:
            if variation.unit_combination_id != unit_id:
                continue
            if bool(variation.attributes) == is_empty_option_selected:
                continue
            if self._conflicts(variation, selection, strict):
                continue
            matches.append(variation)

        logger.debug(
            "Filtered %d/%d variations (unit=%s, strict=%s)",
            len(matches), len(self.index), unit_id, strict,
        )
        return matches

    @staticmethod
    def _conflicts(variation, selection, strict):
        for attribute_id, value in selection.items():
            declared = variation.value_for(attribute_id)
            if declared is None or declared == value:
                continue
            if strict or value is not None:
                return True
        return False

    def exact_match(self, selection: AttributeSelection, unit_id) -> Optional[VariationRecord]:
        """The single variation matching the selection strictly, or None."""
        matches = self.filter_variations(selection, unit_id, strict=True)
        if len(matches) == 1:
            return matches[0]
        return None

    def qualified_variations(
        self,
        attribute_id: Optional[int] = None,
        value_id: Optional[int] = None,
        unit_id: Optional[int] = None,
    ) -> List[VariationRecord]:
        """
        Variations consistent with one field only, ignoring everything else
        that is selected. Clearing an attribute qualifies the variations
        that do not declare it.
        """
        if attribute_id is not None:
            if value_id is None:
                return [v for v in self.index.variations if not v.declares(attribute_id)]
            return [
                v for v in self.index.variations
                if v.value_for(attribute_id) == value_id
            ]
        if unit_id is not None:
            return [v for v in self.index.variations if v.unit_combination_id == unit_id]
        return []


# =============================================================================
# Repair
# =============================================================================

def count_required_changes(variation: VariationRecord, selection: AttributeSelection, unit_id) -> int:
    """
    Number of the variation's own fields (its unit and the attributes it
    declares) the selection has to change to reach it.
    """
    changes = 0
    if variation.unit_combination_id != unit_id:
        changes += 1

    for attribute in variation.attributes:
        if selection.get(attribute.attribute_id) != attribute.attribute_value_id:
            changes += 1

    return changes


def closest_variation(
    qualified: Sequence[VariationRecord],
    selection: AttributeSelection,
    unit_id,
) -> Optional[VariationRecord]:
    """
    The qualified variation reachable with the fewest changes. Ties keep the
    variation that comes first.
    """
    closest = None
    fewest_changes = None

    for variation in qualified:
        changes = count_required_changes(variation, selection, unit_id)
        if fewest_changes is None or changes < fewest_changes:
            closest = variation
            fewest_changes = changes

    return closest


@dataclass(frozen=True)
class Repair:
    attributes: AttributeSelection
    unit_id: int
    notices: Tuple[str, ...]


def apply_repair(
    closest: VariationRecord,
    selection: AttributeSelection,
    unit_id,
    index: VariationIndex,
    translate=default_translate,
) -> Repair:
    """
    Clear every selected attribute the closest variation disagrees with and
    switch to its unit, producing one notice per changed field.
    """
    attributes = dict(selection)
    notices = []

    for attribute_id, current in selection.items():
        if current is None:
            continue
        if closest.value_for(attribute_id) != current:
            attributes[attribute_id] = None
            notices.append(translate(
                'singleItemNotAvailable', {'name': index.attribute_name(attribute_id)}
            ))

    if closest.unit_combination_id != unit_id:
        notices.append(translate(
            'singleItemNotAvailable', {'name': translate('singleItemContent')}
        ))
        unit_id = closest.unit_combination_id

    return Repair(attributes=attributes, unit_id=unit_id, notices=tuple(notices))


def is_complete_for(variation: VariationRecord, selection: AttributeSelection, unit_id) -> bool:
    """
    Whether the selection spells out exactly this variation: same unit,
    every declared attribute selected and nothing else set.
    """
    if variation.unit_combination_id != unit_id:
        return False

    attribute_ids = set(selection)
    attribute_ids.update(a.attribute_id for a in variation.attributes)
    return all(
        variation.value_for(attribute_id) == selection.get(attribute_id)
        for attribute_id in attribute_ids
    )


# =============================================================================
# Resolver
# =============================================================================

@dataclass(frozen=True)
class SelectionResult:
    attributes: AttributeSelection
    unit_id: int
    variation: Optional[VariationRecord] = None
    notices: Tuple[str, ...] = ()
    warning: Optional[str] = None

    @property
    def is_variation_selected(self):
        return self.variation is not None

    @property
    def repaired(self):
        return bool(self.notices)


class VariationSelectResolver:
    """
    Entry point for selection changes of one product view.

    `store` holds the committed selection (see `SelectionStore`),
    `notifier.warn(message)` receives repair warnings and `loader(variation_id)`
    loads the detail of a resolved variation. Selection changes are computed
    on a copy and committed only when they succeed.
    """

    def __init__(
        self,
        index: VariationIndex,
        store,
        translate=default_translate,
        notifier=None,
        loader=None,
        cache: Optional[VariationQueryCache] = None,
    ):
        self.index = index
        self.store = store
        self.matcher = VariationMatcher(index, cache)
        self.translate = translate
        self.notifier = notifier
        self.loader = loader

    @property
    def has_empty_option(self):
        return self.index.has_empty_option

    @property
    def selected_attributes(self) -> AttributeSelection:
        selection = self.index.empty_selection()
        for attribute_id, value in self.store.selected_attributes.items():
            if attribute_id in selection:
                selection[attribute_id] = value
        return selection

    @property
    def current_variation(self) -> Optional[VariationRecord]:
        """The variation the committed selection identifies, if exactly one."""
        return self.matcher.exact_match(self.selected_attributes, self.store.selected_unit)

    def select_attribute(self, attribute_id: int, value_id: Optional[int]) -> SelectionResult:
        if not self.index.has_attribute(attribute_id):
            raise InvalidTargetError(f'Unknown attribute {attribute_id}')
        if value_id is not None and not self.index.has_attribute_value(attribute_id, value_id):
            raise InvalidTargetError(
                f'Unknown value {value_id} for attribute {attribute_id}'
            )

        attributes = self.selected_attributes
        attributes[attribute_id] = value_id
        return self._on_selection_change(
            attributes,
            self.store.selected_unit,
            attribute_id=attribute_id,
            value_id=value_id,
        )

    def select_unit(self, unit_id: int) -> SelectionResult:
        if not self.index.has_unit(unit_id):
            raise InvalidTargetError(f'Unknown unit {unit_id}')

        return self._on_selection_change(self.selected_attributes, unit_id)

    def _on_selection_change(self, attributes, unit_id, attribute_id=None, value_id=None):
        variation = self.matcher.exact_match(attributes, unit_id)
        if variation is not None:
            return self._commit(attributes, unit_id, variation)

        if attribute_id is not None and value_id is None:
            # a cleared attribute is kept as long as some variation is still reachable
            if self.matcher.filter_variations(attributes, unit_id):
                return self._commit(attributes, unit_id, None)

        if attribute_id is not None:
            qualified = self.matcher.qualified_variations(
                attribute_id=attribute_id, value_id=value_id
            )
            changed = f'attribute {attribute_id}={value_id}'
        else:
            qualified = self.matcher.qualified_variations(unit_id=unit_id)
            changed = f'unit {unit_id}'

        if not qualified:
            logger.error("No variation qualifies for %s in %r", changed, self.index)
            raise InconsistentIndexError(f'No variation exists for {changed}')

        return self._repair(qualified, attributes, unit_id)

    def _repair(self, qualified, attributes, unit_id):
        closest = closest_variation(qualified, attributes, unit_id)
        repair = apply_repair(closest, attributes, unit_id, self.index, self.translate)

        variation = self.matcher.exact_match(repair.attributes, repair.unit_id)
        if variation is None and is_complete_for(closest, repair.attributes, repair.unit_id):
            logger.error(
                "Variation %s does not resolve uniquely in %r",
                closest.variation_id, self.index,
            )
            raise InconsistentIndexError(
                f'Selection of variation {closest.variation_id} is ambiguous'
            )

        logger.info(
            "Repaired selection towards variation %s (%d field(s) changed)",
            closest.variation_id, len(repair.notices),
        )

        warning = None
        if repair.notices:
            warning = get_setting('NOTICE_SEPARATOR').join(repair.notices)

        result = self._commit(
            repair.attributes, repair.unit_id, variation, repair.notices, warning
        )
        if warning and self.notifier is not None:
            self.notifier.warn(warning)
        return result

    def _commit(self, attributes, unit_id, variation, notices=(), warning=None):
        self.store.set_selected_attributes(attributes)
        self.store.set_selected_unit(unit_id)
        self.store.set_is_variation_selected(variation is not None)

        if variation is not None:
            self.store.set_resolved_variation(variation.variation_id)
            self.set_variation(variation.variation_id)

        return SelectionResult(
            attributes=dict(attributes),
            unit_id=unit_id,
            variation=variation,
            notices=tuple(notices),
            warning=warning,
        )

    def set_variation(self, variation_id: Optional[int] = None):
        """
        Hand a variation to the loader; defaults to the variation the
        committed selection identifies. Returns whatever the loader returns.
        """
        if variation_id is None:
            current = self.current_variation
            if current is None:
                return None
            variation_id = current.variation_id

        if self.loader is None:
            return None
        return self.loader(variation_id)

    # -------------------------------------------------------------------------
    # Validity checks
    # -------------------------------------------------------------------------

    def is_attribute_selection_valid(self, attribute_id, value_id) -> bool:
        """
        Whether selecting the value would still leave a matching variation.
        Works on a copy of the selection.
        """
        if not self.index.variations or not self.index.has_attribute(attribute_id):
            return False

        attributes = self.selected_attributes
        if attributes[attribute_id] == value_id:
            return True
        if value_id is not None and not self.index.has_attribute_value(attribute_id, value_id):
            return False

        attributes[attribute_id] = value_id
        return bool(self.matcher.filter_variations(
            attributes, self.store.selected_unit, strict=False
        ))

    def is_unit_selection_valid(self, unit_id) -> bool:
        """Whether switching to the unit would still leave a matching variation."""
        if not self.index.variations or not self.index.has_unit(unit_id):
            return False
        if self.store.selected_unit == unit_id:
            return True

        return bool(self.matcher.filter_variations(
            self.selected_attributes, unit_id, strict=False
        ))
