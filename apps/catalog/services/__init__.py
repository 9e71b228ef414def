from .exceptions import (
    VariationSelectError,
    InvalidTargetError,
    InconsistentIndexError,
)
from .variation_index import (
    AttributeDefinition,
    VariationAttribute,
    VariationRecord,
    VariationIndex,
    build_variation_index,
)
from .variation_select import (
    VariationQueryCache,
    VariationMatcher,
    VariationSelectResolver,
    SelectionResult,
    closest_variation,
    apply_repair,
)
from .selection_store import (
    InMemorySelectionStore,
    SessionSelectionStore,
    MessageNotifier,
    translate,
)
from .variation_loader import VariationLoader
from .breakpoints import BreakpointWatcher, breakpoint_for_width

__all__ = [
    'VariationSelectError',
    'InvalidTargetError',
    'InconsistentIndexError',
    'AttributeDefinition',
    'VariationAttribute',
    'VariationRecord',
    'VariationIndex',
    'build_variation_index',
    'VariationQueryCache',
    'VariationMatcher',
    'VariationSelectResolver',
    'SelectionResult',
    'closest_variation',
    'apply_repair',
    'InMemorySelectionStore',
    'SessionSelectionStore',
    'MessageNotifier',
    'translate',
    'VariationLoader',
    'BreakpointWatcher',
    'breakpoint_for_width',
]
