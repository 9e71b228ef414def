"""
Errors raised by the variation selection service.
"""


class VariationSelectError(Exception):
    """Base class for variation selection errors."""


class InvalidTargetError(VariationSelectError, ValueError):
    """
    A selection change references an attribute, value or unit that is not
    part of the product's variation index.
    """


class InconsistentIndexError(VariationSelectError, RuntimeError):
    """
    The variation index does not hold a variation it is expected to hold:
    a changed value has no variation at all, or a repaired selection does
    not resolve to exactly one variation.
    """
