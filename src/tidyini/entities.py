"""Ini entities are properties, sections and the container holding them."""

import operator
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Self, SupportsIndex, TypeAlias, TypeVar, overload
from .exceptions_warnings import (
    DuplicateEntityError,
    EntityNotFound,
    InvalidArgument,
    MalformedModelError,
)
from .utils import _is_blank, _type_name

PropertyValue: TypeAlias = str | None
"""A property's value. None and "" are both valid and kept apart."""
CommentContent: TypeAlias = str | None
"""A comment line without its indicator."""


def _verify_name(name: Any, entity: str) -> str:
    """Make sure a name is a non-blank string.

    Args:
        name (Any): The name to verify.
        entity (str): Kind of the entity (for the error message).

    Raises:
        InvalidArgument: If name is not a string or blank.

    Returns:
        str: The verified name.
    """
    if not isinstance(name, str) or _is_blank(name):
        raise InvalidArgument(f"{entity} name must be a non-empty string, got {name!r}.")
    return name


class Property:
    """Property object holding a name and an (opaque text) value."""

    __slots__ = ("_name", "_value")

    def __init__(self, name: str, value: PropertyValue = None) -> None:
        """
        Args:
            name (str): The property name. Can't be changed afterwards.
            value (PropertyValue, optional): The property value. Defaults to None.
        """
        self._name = _verify_name(name, "Property")
        self.value = value

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> PropertyValue:
        return self._value

    @value.setter
    def value(self, value: PropertyValue) -> None:
        if value is not None and not isinstance(value, str):
            raise InvalidArgument(
                f"Value of property '{self._name}' must be a string or None,"
                f" got {_type_name(value)}."
            )
        self._value = value

    @property
    def is_empty(self) -> bool:
        """Whether the value is None, empty or whitespace only."""
        return _is_blank(self._value)

    def copy(self) -> Self:
        return type(self)(self._name, self._value)

    def to_string(self, delimiter: str) -> str:
        """Convert the Property into an ini line (without line break).

        Args:
            delimiter (str): The delimiter between name and value.

        Returns:
            str: The ini string. A None value is written as empty string.
        """
        return f"{self._name}{delimiter}{self._value or ''}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Property):
            return NotImplemented
        return (self._name, self._value) == (other._name, other._value)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{_type_name(self)}(name={self._name!r}, value={self._value!r})"


class CommentGroup(list[CommentContent]):
    """Group of comment lines. Order is kept and duplicates are allowed."""

    @staticmethod
    def verify(comment: Any) -> CommentContent:
        """Make sure a comment is text (or None).

        Raises:
            MalformedModelError: If comment is anything else.
        """
        if comment is not None and not isinstance(comment, str):
            raise MalformedModelError(
                f"Comments must be strings or None, got {_type_name(comment)}."
            )
        return comment

    def to_lines(self, indicator: str) -> list[str]:
        """Convert the comments to ini lines.

        Args:
            indicator (str): Prefix for every comment.

        Returns:
            list[str]: One line per comment (without line breaks).
        """
        return [f"{indicator}{self.verify(comment) or ''}" for comment in self]


T = TypeVar("T")


class _NamedGroup(list[T], Generic[T]):
    """List of named entities whose names are unique within the list. Names are
    indexed, thus membership checks and lookups by name don't scan the list."""

    _item_type: type
    _entity: str

    def __init__(self, items: Iterable[T] = ()) -> None:
        super().__init__()
        self._index: dict[str, T] = {}
        self.extend(items)

    def _verify_type(self, item: Any) -> T:
        if not isinstance(item, self._item_type):
            raise InvalidArgument(
                f"Can only add {self._item_type.__name__} objects, got {_type_name(item)}."
            )
        return item

    def _duplicate(self, name: str) -> DuplicateEntityError:
        return DuplicateEntityError(f"{self._entity} with name '{name}' already exists.")

    def _verify_item(self, item: Any) -> T:
        self._verify_type(item)
        if item.name in self._index:
            raise self._duplicate(item.name)
        return item

    def _verify_all(self, items: list[Any]) -> None:
        seen: set[str] = set()
        for item in items:
            self._verify_type(item)
            if item.name in seen:
                raise self._duplicate(item.name)
            seen.add(item.name)

    def _reindex(self) -> None:
        self._index = {item.name: item for item in self}  # type: ignore[attr-defined]

    def append(self, item: T) -> None:
        super().append(self._verify_item(item))
        self._index[item.name] = item  # type: ignore[attr-defined]

    def insert(self, index: SupportsIndex, item: T) -> None:
        super().insert(index, self._verify_item(item))
        self._index[item.name] = item  # type: ignore[attr-defined]

    def extend(self, items: Iterable[T]) -> None:
        items = list(items)
        self._verify_all([*self, *items])
        super().extend(items)
        self._index.update((item.name, item) for item in items)  # type: ignore[attr-defined]

    def __iadd__(self, items: Iterable[T]) -> Self:  # type: ignore[override]
        self.extend(items)
        return self

    def __imul__(self, factor: SupportsIndex) -> Self:  # type: ignore[override]
        factor = operator.index(factor)
        if factor > 1 and self:
            raise self._duplicate(self[0].name)  # type: ignore[attr-defined]
        if factor < 1:
            self.clear()
        return self

    @overload
    def __setitem__(self, index: SupportsIndex, value: T) -> None: ...
    @overload
    def __setitem__(self, index: slice, value: Iterable[T]) -> None: ...

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            value = list(value)
        candidate = list(self)
        candidate[index] = value
        self._verify_all(candidate)
        super().__setitem__(index, value)
        self._reindex()

    def __delitem__(self, index: SupportsIndex | slice) -> None:
        super().__delitem__(index)
        self._reindex()

    def pop(self, index: SupportsIndex = -1) -> T:
        item = super().pop(index)
        del self._index[item.name]  # type: ignore[attr-defined]
        return item

    def remove(self, item: T) -> None:
        super().remove(item)
        self._reindex()

    def clear(self) -> None:
        super().clear()
        self._index.clear()

    def copy(self) -> Self:  # type: ignore[override]
        return type(self)(self)

    __copy__ = copy

    def get(self, name: str, default: T | None = None) -> T | None:
        """Get an entity by name.

        Args:
            name (str): Name of the entity.
            default (T | None, optional): Returned if no entity has that name.
                Defaults to None.

        Returns:
            T | None: The entity or default.
        """
        return self._index.get(name, default)

    def names(self) -> list[str]:
        return [item.name for item in self]  # type: ignore[attr-defined]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._index
        return super().__contains__(item)


class PropertyGroup(_NamedGroup[Property]):
    """Ordered properties with unique names."""

    _item_type = Property
    _entity = "Property"


class _Scope(ABC):
    """Helpers shared by everything that owns comments and properties."""

    @abstractmethod
    def _scope_comments(self) -> CommentGroup: ...

    @abstractmethod
    def _scope_properties(self) -> PropertyGroup: ...

    def add_comment(self, comment: CommentContent) -> None:
        """Append a comment line."""
        self._scope_comments().append(comment)

    def add_property(self, name: str, value: PropertyValue = None) -> Property:
        """Append a new property.

        Args:
            name (str): Name of the property. Must not exist in this scope.
            value (PropertyValue, optional): Value of the property. Defaults to None.

        Raises:
            DuplicateEntityError: If a property with that name already exists.

        Returns:
            Property: The new property.
        """
        prop = Property(name, value)
        self._scope_properties().append(prop)
        return prop

    def get_property(self, name: str) -> Property:
        """Get a property by name.

        Raises:
            EntityNotFound: If no property has that name.
        """
        prop = self._scope_properties().get(name)
        if prop is None:
            raise EntityNotFound(f"'{name}' is not a known property name in {self}.")
        return prop

    def set_property(self, name: str, value: PropertyValue) -> Property:
        """Set a property's value. Appends a new property if it doesn't exist yet.

        Returns:
            Property: The updated or created property.
        """
        prop = self._scope_properties().get(name)
        if prop is None:
            return self.add_property(name, value)
        prop.value = value
        return prop


class Section(_Scope):
    """A configuration section. Holds comments and properties."""

    def __init__(
        self,
        name: str,
        comments: Iterable[CommentContent] | None = None,
        properties: Iterable[Property] | None = None,
    ) -> None:
        """
        Args:
            name (str): Name of the section. Can't be changed afterwards.
            comments (Iterable[CommentContent] | None, optional): Initial comments.
                Defaults to None.
            properties (Iterable[Property] | None, optional): Initial properties.
                Names must be unique. Defaults to None.
        """
        self._name = _verify_name(name, "Section")
        self.comments = comments  # type: ignore[assignment]
        self.properties = properties  # type: ignore[assignment]

    @property
    def name(self) -> str:
        return self._name

    @property
    def comments(self) -> CommentGroup:
        return self._comments

    @comments.setter
    def comments(self, value: Iterable[CommentContent] | None) -> None:
        self._comments = CommentGroup(value or ())

    @property
    def properties(self) -> PropertyGroup:
        return self._properties

    @properties.setter
    def properties(self, value: Iterable[Property] | None) -> None:
        self._properties = PropertyGroup(value or ())

    @property
    def is_empty(self) -> bool:
        """Whether the section has neither comments nor properties."""
        return not self._comments and not self._properties

    def _scope_comments(self) -> CommentGroup:
        return self._comments

    def _scope_properties(self) -> PropertyGroup:
        return self._properties

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return (
            self._name == other._name
            and self._comments == other._comments
            and self._properties == other._properties
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{_type_name(self)}(name={self._name!r}, comments={list(self._comments)!r},"
            f" properties={list(self._properties)!r})"
        )

    def __str__(self) -> str:
        return f"section '{self._name}'"


class SectionGroup(_NamedGroup[Section]):
    """Ordered sections with unique names."""

    _item_type = Section
    _entity = "Section"


class Container(_Scope):
    """A whole ini document: global comments, global properties and sections."""

    def __init__(
        self,
        global_comments: Iterable[CommentContent] | None = None,
        global_properties: Iterable[Property] | None = None,
        sections: Iterable[Section] | None = None,
    ) -> None:
        self.global_comments = global_comments  # type: ignore[assignment]
        self.global_properties = global_properties  # type: ignore[assignment]
        self.sections = sections  # type: ignore[assignment]

    @property
    def global_comments(self) -> CommentGroup:
        return self._global_comments

    @global_comments.setter
    def global_comments(self, value: Iterable[CommentContent] | None) -> None:
        self._global_comments = CommentGroup(value or ())

    @property
    def global_properties(self) -> PropertyGroup:
        return self._global_properties

    @global_properties.setter
    def global_properties(self, value: Iterable[Property] | None) -> None:
        self._global_properties = PropertyGroup(value or ())

    @property
    def sections(self) -> SectionGroup:
        return self._sections

    @sections.setter
    def sections(self, value: Iterable[Section] | None) -> None:
        self._sections = SectionGroup(value or ())

    @property
    def is_empty(self) -> bool:
        """Whether the container has no global comments, global properties or
        sections."""
        return not (self._global_comments or self._global_properties or self._sections)

    def _scope_comments(self) -> CommentGroup:
        return self._global_comments

    def _scope_properties(self) -> PropertyGroup:
        return self._global_properties

    def add_section(self, name: str) -> Section:
        """Append a new, empty section.

        Raises:
            DuplicateEntityError: If a section with that name already exists.

        Returns:
            Section: The new section.
        """
        section = Section(name)
        self._sections.append(section)
        return section

    def get_section(self, name: str) -> Section:
        """Get a section by name.

        Raises:
            EntityNotFound: If no section has that name.
        """
        section = self._sections.get(name)
        if section is None:
            raise EntityNotFound(f"'{name}' is not a known section name.")
        return section

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Container):
            return NotImplemented
        return (
            self._global_comments == other._global_comments
            and self._global_properties == other._global_properties
            and self._sections == other._sections
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{_type_name(self)}(global_comments={list(self._global_comments)!r},"
            f" global_properties={list(self._global_properties)!r},"
            f" sections={list(self._sections)!r})"
        )

    def __str__(self) -> str:
        return "global scope"
