"""tidyini-specific exceptions and warnings"""

# ---------- #
# Exceptions
# ---------- #


class IniError(Exception):
    """Base for all tidyini errors."""


class InvalidArgument(IniError, ValueError):
    """Raised when a required argument is missing or of the wrong kind."""


class DuplicateEntityError(IniError):
    """Raised when entities are tried to be added that already exist in their scope."""


class EntityNotFound(IniError, KeyError):
    """Raised when an entity was to be accessed but doesn't exist."""


class MalformedModelError(IniError, TypeError):
    """Raised when a model holds content that is neither text nor an entity."""


# ---------- #
# Warnings
# ---------- #


class IniStructureWarning(Warning):
    """Raised when the ini output violates the line structure."""


class MultilineWarning(IniStructureWarning):
    """Raised when a comment or property value spans multiple lines."""
