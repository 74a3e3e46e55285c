"""Exceptions raised by the rblint kernel.

Everything derives from :class:`RblintError`. The CLI maps
:class:`ConfigurationError` and :class:`ResourceNotFoundError` to exit
status 2; :class:`ValidationError` signals a programming error in a rule or
caller (bad location, malformed rule id) and is not caught.
"""

from __future__ import annotations

# ============================================================================
# Base
# ============================================================================


class RblintError(Exception):
    """Root of the rblint exception hierarchy."""


# ============================================================================
# Input errors
# ============================================================================


class ConfigurationError(RblintError):
    """A configuration file or section could not be used.

    Raised before any rule runs, so a lint run never starts half-configured.

    Examples
    --------
    Example usage::

        raise ConfigurationError(".rubocop.yml", "section 'Lint/Debugger' must be a mapping")
    """

    def __init__(self, component: str, reason: str) -> None:
        self.component = component
        self.reason = reason
        super().__init__(f"{component}: {reason}")


class ValidationError(RblintError):
    """A value broke a model invariant.

    Examples
    --------
    Example usage::

        raise ValidationError("column", "must be >= 1", 0)
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Record the offending field.

        Args
        ----
            field: Attribute or argument that was rejected
            constraint: Rule the value violated
            value: The rejected value, shown in the message when given
        """
        self.field = field
        self.constraint = constraint
        self.value = value
        detail = f"{field} {constraint}"
        if value is not None:
            detail += f", got {value!r}"
        super().__init__(detail)


# ============================================================================
# Missing resources
# ============================================================================


class ResourceNotFoundError(RblintError):
    """Something the user named explicitly does not exist.

    Only explicit references raise this; a config file that is merely
    absent from the search path is not an error.
    """

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} not found: {resource_id}")


__all__ = [
    "ConfigurationError",
    "RblintError",
    "ResourceNotFoundError",
    "ValidationError",
]
