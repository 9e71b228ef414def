"""
Collaborators of the variation selector: where the selection state lives,
how notices are translated and how warnings reach the visitor.
"""

import logging
from typing import Optional, Protocol

from django.contrib import messages
from django.utils.translation import gettext, gettext_noop

from apps.catalog.conf import get_setting

from .variation_index import AttributeSelection


logger = logging.getLogger(__name__)


class SelectionStore(Protocol):
    @property
    def selected_attributes(self) -> AttributeSelection:
        ...

    @property
    def selected_unit(self) -> Optional[int]:
        ...

    def set_selected_attributes(self, attributes: AttributeSelection) -> None:
        ...

    def set_selected_unit(self, unit_id: int) -> None:
        ...

    def set_resolved_variation(self, variation_id: Optional[int]) -> None:
        ...

    def set_is_variation_selected(self, value: bool) -> None:
        ...


class InMemorySelectionStore:
    """Selection state kept on the instance, for one product view."""

    def __init__(self, attributes=None, unit_id=None):
        self._attributes = dict(attributes or {})
        self._unit_id = unit_id
        self.resolved_variation = None
        self.is_variation_selected = False

    @property
    def selected_attributes(self):
        return dict(self._attributes)

    @property
    def selected_unit(self):
        return self._unit_id

    def set_selected_attributes(self, attributes):
        self._attributes = dict(attributes)

    def set_selected_unit(self, unit_id):
        self._unit_id = unit_id

    def set_resolved_variation(self, variation_id):
        self.resolved_variation = variation_id

    def set_is_variation_selected(self, value):
        self.is_variation_selected = bool(value)


class SessionSelectionStore:
    """
    Selection state of one product kept in the visitor's session.

    Session data is JSON serialized, so attribute ids are stored as strings
    and converted back on read.
    """

    def __init__(self, session, product_id):
        self.session = session
        self.key = f"{get_setting('SESSION_KEY_PREFIX')}:{product_id}"

    def _state(self):
        return self.session.get(self.key) or {}

    def _update(self, **values):
        state = dict(self._state())
        state.update(values)
        self.session[self.key] = state

    @property
    def is_initialized(self):
        return self.key in self.session

    @property
    def selected_attributes(self):
        return {
            int(attribute_id): value
            for attribute_id, value in self._state().get('attributes', {}).items()
        }

    @property
    def selected_unit(self):
        return self._state().get('unit')

    @property
    def resolved_variation(self):
        return self._state().get('variation_id')

    @property
    def is_variation_selected(self):
        return self._state().get('is_variation_selected', False)

    def set_selected_attributes(self, attributes):
        self._update(attributes={
            str(attribute_id): value for attribute_id, value in attributes.items()
        })

    def set_selected_unit(self, unit_id):
        self._update(unit=unit_id)

    def set_resolved_variation(self, variation_id):
        self._update(variation_id=variation_id)

    def set_is_variation_selected(self, value):
        self._update(is_variation_selected=bool(value))

    def reset(self, attributes, unit_id, variation_id=None):
        logger.debug("Resetting selection state %s", self.key)
        self.session[self.key] = {}
        self.set_selected_attributes(attributes)
        self.set_selected_unit(unit_id)
        self.set_resolved_variation(variation_id)
        self.set_is_variation_selected(variation_id is not None)


# =============================================================================
# Notices
# =============================================================================

NOTICE_MESSAGES = {
    'singleItemNotAvailable': gettext_noop(
        'The selected %(name)s is not available for this combination.'
    ),
    'singleItemContent': gettext_noop('content'),
}


def translate(key, params=None):
    """Render a notice template; unknown keys are returned unchanged."""
    template = NOTICE_MESSAGES.get(key)
    if template is None:
        return key
    message = gettext(template)
    if params:
        message = message % params
    return message


class MessageNotifier:
    """
    Collects warnings for the API response and forwards them to the
    messages framework when a request is available.
    """

    def __init__(self, request=None):
        self.request = request
        self.warnings = []

    def warn(self, message):
        self.warnings.append(message)
        if self.request is not None:
            messages.warning(self.request, message, fail_silently=True)

    @property
    def last_warning(self):
        return self.warnings[-1] if self.warnings else None
