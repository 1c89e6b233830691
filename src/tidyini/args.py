from typing import Any, Mapping, Self
from .exceptions_warnings import InvalidArgument
from .globals import (
    DEFAULT_COMMENT_INDICATOR,
    DEFAULT_PROPERTY_DELIMITER,
    LINE_BREAK,
    SECTION_NAME_OPENER,
    VALID_MARKERS,
)
from .utils import _type_name


class _Options:
    """Immutable options. Subclasses list their fields in _fields."""

    _fields: tuple[str, ...] = ()

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(
                f"{_type_name(self)} is immutable, use replace() to change '{name}'."
            )
        super().__setattr__(name, value)

    def _freeze(self) -> None:
        super().__setattr__("_frozen", True)

    @staticmethod
    def verify_flag(value: Any, name: str) -> bool:
        if not isinstance(value, bool):
            raise InvalidArgument(f"{name} must be a bool, got {_type_name(value)}.")
        return value

    def as_dict(self) -> dict[str, Any]:
        return {field: getattr(self, field) for field in self._fields}

    def replace(self, **changes: Any) -> Self:
        """Create a copy of the options with some of them changed.

        Args:
            **changes: Options to change, see __init__ for details.

        Raises:
            InvalidArgument: If an unknown option is passed.

        Returns:
            Self: The new options.
        """
        return self.from_mapping(self.as_dict() | changes)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Self:
        """Create options from a mapping, e.g. a loaded configuration.

        Args:
            mapping (Mapping[str, Any]): Option names as keys. Missing options take
                their defaults.

        Raises:
            InvalidArgument: If mapping holds unknown options.

        Returns:
            Self: The new options.
        """
        if unknown := set(mapping).difference(cls._fields):
            raise InvalidArgument(
                f"Unknown {cls.__name__} option(s): {', '.join(sorted(unknown))}."
            )
        return cls(**mapping)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.as_dict() == other.as_dict()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(tuple(self.as_dict().items()))

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"{_type_name(self)}({args})"


class NormalizationOptions(_Options):
    """Options for normalizing containers and sections."""

    _fields = ("include_empty_comments", "include_empty_properties")

    def __init__(
        self,
        *,
        include_empty_comments: bool = False,
        include_empty_properties: bool = False,
    ) -> None:
        """
        Args:
            include_empty_comments (bool, optional): Whether to keep comments that are
                None, empty or whitespace only. Defaults to False.
            include_empty_properties (bool, optional): Whether to keep properties whose
                value is None, empty or whitespace only. Defaults to False.
        """
        self._include_empty_comments = self.verify_flag(
            include_empty_comments, "include_empty_comments"
        )
        self._include_empty_properties = self.verify_flag(
            include_empty_properties, "include_empty_properties"
        )
        self._freeze()

    @property
    def include_empty_comments(self) -> bool:
        return self._include_empty_comments

    @property
    def include_empty_properties(self) -> bool:
        return self._include_empty_properties


class SerializationOptions(_Options):
    """Options for writing containers as ini text."""

    _fields = (
        "normalize_before_serialization",
        "include_empty_sections",
        "include_empty_properties",
        "comment_indicator",
        "property_delimiter",
    )

    def __init__(
        self,
        *,
        normalize_before_serialization: bool = False,
        include_empty_sections: bool = False,
        include_empty_properties: bool = False,
        comment_indicator: VALID_MARKERS | str = DEFAULT_COMMENT_INDICATOR,
        property_delimiter: VALID_MARKERS | str = DEFAULT_PROPERTY_DELIMITER,
    ) -> None:
        """
        Args:
            normalize_before_serialization (bool, optional): Whether to normalize the
                container in place before writing it. Defaults to False.
            include_empty_sections (bool, optional): Whether to write sections without
                comments and properties. Defaults to False.
            include_empty_properties (bool, optional): Whether to write properties
                whose value is None, empty or whitespace only. Defaults to False.
            comment_indicator (VALID_MARKERS | str, optional): Prefix written in front
                of every comment. Defaults to ";".
            property_delimiter (VALID_MARKERS | str, optional): Written between property
                name and value, e.g. "=" or " = ". Defaults to "=".

        Markers must be non-empty strings without line breaks and must not start
        with "[" (leading whitespace ignored), since such lines read back as section
        headers. Comment indicator and property delimiter must differ once
        surrounding whitespace is stripped, since comments and properties couldn't be
        told apart otherwise.

        Raises:
            InvalidArgument: If an option has the wrong type or a marker breaks the
                rules above.
        """
        self._normalize_before_serialization = self.verify_flag(
            normalize_before_serialization, "normalize_before_serialization"
        )
        self._include_empty_sections = self.verify_flag(
            include_empty_sections, "include_empty_sections"
        )
        self._include_empty_properties = self.verify_flag(
            include_empty_properties, "include_empty_properties"
        )
        self._comment_indicator = self.verify_marker(
            comment_indicator, "comment indicator"
        )
        self._property_delimiter = self.verify_marker(
            property_delimiter, "property delimiter"
        )
        self.verify_between_markers()
        self._freeze()

    @property
    def normalize_before_serialization(self) -> bool:
        return self._normalize_before_serialization

    @property
    def include_empty_sections(self) -> bool:
        return self._include_empty_sections

    @property
    def include_empty_properties(self) -> bool:
        return self._include_empty_properties

    @property
    def comment_indicator(self) -> str:
        return self._comment_indicator

    @property
    def property_delimiter(self) -> str:
        return self._property_delimiter

    @staticmethod
    def verify_marker(marker: Any, name: str) -> str:
        if not isinstance(marker, str) or not marker:
            raise InvalidArgument(f"The {name} must be a non-empty string.")
        if LINE_BREAK in marker or "\r" in marker:
            raise InvalidArgument(f"The {name} must not contain line breaks.")
        if marker.lstrip().startswith(SECTION_NAME_OPENER):
            raise InvalidArgument(
                f"'{SECTION_NAME_OPENER}' (section name identifier) is not allowed"
                f" at the start of a {name}."
            )
        return marker

    def verify_between_markers(self) -> None:
        if self._comment_indicator.strip() == self._property_delimiter.strip():
            raise InvalidArgument(
                "Comment indicator and property delimiter have to be distinct"
                " from each other."
            )
