"""Normalization creates cleaned copies of containers and sections. Comments and
properties are dropped according to NormalizationOptions, everything else (order,
section structure) is kept."""

import logging
from typing import Any, TypeAlias, overload
from .args import NormalizationOptions
from .entities import (
    CommentContent,
    CommentGroup,
    Container,
    Property,
    Section,
)
from .exceptions_warnings import InvalidArgument, MalformedModelError
from .utils import _is_blank, _type_name

logger = logging.getLogger(__name__)

Normalizable: TypeAlias = Container | Section


class Normalizer:
    """Normalizes containers and sections. Holds no state besides its options, thus
    one instance can be shared as long as every call works on its own model."""

    def __init__(self, options: NormalizationOptions | None = None) -> None:
        """
        Args:
            options (NormalizationOptions | None, optional): Options to normalize with.
                If None, will use default options. Defaults to None.
        """
        if options is None:
            options = NormalizationOptions()
        elif not isinstance(options, NormalizationOptions):
            raise InvalidArgument(
                f"options must be NormalizationOptions, got {_type_name(options)}."
            )
        self._options = options

    @property
    def options(self) -> NormalizationOptions:
        return self._options

    def normalize_into(self, source: Normalizable, destination: Normalizable) -> None:
        """Normalize source and save the result in destination. The previous content
        of destination is replaced (a destination section keeps its name). Source and
        destination may be the same object to normalize in place, otherwise source is
        left untouched.

        Args:
            source (Container | Section): The container or section to normalize.
            destination (Container | Section): Receives the result. Must be of the same
                kind as source.

        Raises:
            InvalidArgument: If source or destination is missing or they are not of
                the same kind.
            MalformedModelError: If source holds content that isn't a comment,
                property or section.
        """
        self._verify_pair(source, destination)
        if isinstance(source, Container):
            self._normalize_container(source, destination)  # type: ignore[arg-type]
        else:
            self._normalize_section(source, destination)  # type: ignore[arg-type]

    def try_normalize_into(
        self, source: Normalizable, destination: Normalizable
    ) -> bool:
        """Like normalize_into, but reports failures during normalization by returning
        False instead of raising. The content of destination is undefined in that
        case. Missing or mismatching arguments still raise InvalidArgument.

        Returns:
            bool: Whether normalization succeeded.
        """
        self._verify_pair(source, destination)
        try:
            self.normalize_into(source, destination)
        except Exception:
            logger.debug("Normalization of %s failed.", source, exc_info=True)
            return False
        return True

    def normalize_in_place(self, target: Normalizable) -> None:
        """Normalize a container or section in place."""
        self.normalize_into(target, target)

    @overload
    def normalize(self, source: Container) -> Container: ...
    @overload
    def normalize(self, source: Section) -> Section: ...

    def normalize(self, source: Normalizable) -> Normalizable:
        """Normalize into a new container or section (with the name of source).

        Args:
            source (Container | Section): The container or section to normalize.

        Returns:
            Container | Section: The normalized copy.
        """
        return normalize(source, self)

    @overload
    def try_normalize(self, source: Container) -> tuple[bool, Container | None]: ...
    @overload
    def try_normalize(self, source: Section) -> tuple[bool, Section | None]: ...

    def try_normalize(self, source: Normalizable) -> tuple[bool, Normalizable | None]:
        """Normalize into a new container or section without raising on failure.

        Returns:
            tuple[bool, Container | Section | None]: (True, normalized copy) or
                (False, None).
        """
        return try_normalize(source, self)

    def _verify_pair(self, source: Any, destination: Any) -> None:
        if source is None:
            raise InvalidArgument("source must not be None.")
        if destination is None:
            raise InvalidArgument("destination must not be None.")
        for kind in (Container, Section):
            if isinstance(source, kind):
                if not isinstance(destination, kind):
                    raise InvalidArgument(
                        f"Can't normalize a {kind.__name__} into a"
                        f" {_type_name(destination)}."
                    )
                return
        raise InvalidArgument(
            f"Can only normalize a Container or Section, got {_type_name(source)}."
        )

    def _normalize_container(self, source: Container, destination: Container) -> None:
        # build everything first, source may be destination
        comments = self._filter_comments(source.global_comments, source)
        properties = self._filter_properties(source.global_properties, source)
        sections = []
        for section in source.sections:
            if not isinstance(section, Section):
                raise MalformedModelError(
                    f"Sections must be Section objects, got {_type_name(section)}."
                )
            normalized = Section(section.name)
            self._normalize_section(section, normalized)
            sections.append(normalized)

        destination.global_comments = comments
        destination.global_properties = properties
        destination.sections = sections

    def _normalize_section(self, source: Section, destination: Section) -> None:
        comments = self._filter_comments(source.comments, source)
        properties = self._filter_properties(source.properties, source)
        destination.comments = comments
        destination.properties = properties

    def _filter_comments(
        self, comments: list[CommentContent], scope: Normalizable
    ) -> list[CommentContent]:
        keep_empty = self._options.include_empty_comments
        kept = [
            comment
            for comment in map(CommentGroup.verify, comments)
            if keep_empty or not _is_blank(comment)
        ]
        if dropped := len(comments) - len(kept):
            logger.debug("Dropped %d empty comment(s) of %s.", dropped, scope)
        return kept

    def _filter_properties(
        self, properties: list[Property], scope: Normalizable
    ) -> list[Property]:
        # plain list, wrapped once by the destination's setter
        keep_empty = self._options.include_empty_properties
        kept = []
        for prop in properties:
            if not isinstance(prop, Property):
                raise MalformedModelError(
                    f"Properties must be Property objects, got {_type_name(prop)}."
                )
            if keep_empty or not prop.is_empty:
                kept.append(prop.copy())
        if dropped := len(properties) - len(kept):
            logger.debug("Dropped %d empty property(ies) of %s.", dropped, scope)
        return kept


def _new_destination(source: Any) -> Normalizable:
    if isinstance(source, Container):
        return Container()
    if isinstance(source, Section):
        return Section(source.name)
    raise InvalidArgument(
        "source must be a Container or Section, got"
        f" {'None' if source is None else _type_name(source)}."
    )


def _default_normalizer(normalizer: Normalizer | None) -> Normalizer:
    if normalizer is None:
        return Normalizer()
    if not isinstance(normalizer, Normalizer):
        raise InvalidArgument(
            f"normalizer must be a Normalizer, got {_type_name(normalizer)}."
        )
    return normalizer


@overload
def normalize(source: Container, normalizer: Normalizer | None = ...) -> Container: ...
@overload
def normalize(source: Section, normalizer: Normalizer | None = ...) -> Section: ...


def normalize(
    source: Normalizable, normalizer: Normalizer | None = None
) -> Normalizable:
    """Normalize into a new container or section (with the name of source).

    Args:
        source (Container | Section): The container or section to normalize.
        normalizer (Normalizer | None, optional): The normalizer to use. If None, will
            use one with default options. Defaults to None.

    Raises:
        InvalidArgument: If source is missing or not a container or section.

    Returns:
        Container | Section: The normalized copy.
    """
    normalizer = _default_normalizer(normalizer)
    destination = _new_destination(source)
    normalizer.normalize_into(source, destination)
    return destination


def try_normalize(
    source: Normalizable, normalizer: Normalizer | None = None
) -> tuple[bool, Normalizable | None]:
    """Normalize into a new container or section without raising on failures during
    normalization.

    Args:
        source (Container | Section): The container or section to normalize.
        normalizer (Normalizer | None, optional): The normalizer to use. If None, will
            use one with default options. Defaults to None.

    Raises:
        InvalidArgument: If source is missing or not a container or section.

    Returns:
        tuple[bool, Container | Section | None]: (True, normalized copy) or
            (False, None).
    """
    normalizer = _default_normalizer(normalizer)
    destination = _new_destination(source)
    if normalizer.try_normalize_into(source, destination):
        return True, destination
    return False, None
