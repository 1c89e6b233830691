"""Serialization writes containers as ini text."""

import inspect
import logging
import warnings
from typing import Any, Iterable, Protocol
from .args import SerializationOptions
from .entities import CommentGroup, Container, Property, Section
from .exceptions_warnings import InvalidArgument, MalformedModelError, MultilineWarning
from .globals import LINE_BREAK, SECTION_NAME_CLOSER, SECTION_NAME_OPENER
from .normalizer import Normalizer
from .utils import _type_name

logger = logging.getLogger(__name__)

# frames between warnings.warn and the caller of a public method
_CALLER_STACKLEVEL = 5


class TextSink(Protocol):
    """Anything text can be written to, e.g. an open file or io.StringIO."""

    def write(self, text: str, /) -> Any: ...

    def flush(self) -> Any: ...


class Serializer:
    """Writes containers as ini text."""

    def __init__(
        self,
        options: SerializationOptions | None = None,
        normalizer: Normalizer | None = None,
    ) -> None:
        """
        Args:
            options (SerializationOptions | None, optional): Options to write with. If
                None, will use default options. Defaults to None.
            normalizer (Normalizer | None, optional): Used if
                options.normalize_before_serialization is set. Configured independently
                of options. If None, will use a Normalizer with default options.
                Defaults to None.
        """
        if options is None:
            options = SerializationOptions()
        elif not isinstance(options, SerializationOptions):
            raise InvalidArgument(
                f"options must be SerializationOptions, got {_type_name(options)}."
            )
        if normalizer is None:
            normalizer = Normalizer()
        elif not isinstance(normalizer, Normalizer):
            raise InvalidArgument(
                f"normalizer must be a Normalizer, got {_type_name(normalizer)}."
            )
        self._options = options
        self._normalizer = normalizer

    @property
    def options(self) -> SerializationOptions:
        return self._options

    @property
    def normalizer(self) -> Normalizer:
        return self._normalizer

    def serialize(self, container: Container) -> str:
        """Convert a container into an ini string. If normalize_before_serialization is
        set, the container is normalized in place first.

        Args:
            container (Container): The container to convert.

        Raises:
            InvalidArgument: If container is missing or no Container.

        Returns:
            str: The ini string. Empty if the container is empty.
        """
        self._verify_container(container)
        return self._render(container, _CALLER_STACKLEVEL)

    def _render(self, container: Container, stacklevel: int) -> str:
        """Build the ini string. stacklevel points warnings at the caller of the
        public method."""
        if container.is_empty:
            return ""

        if self._options.normalize_before_serialization:
            logger.debug("Normalizing container in place before serialization.")
            self._normalizer.normalize_in_place(container)

        lines = self._scope_lines(
            container.global_comments, container.global_properties, stacklevel
        )

        for section in container.sections:
            if not isinstance(section, Section):
                raise MalformedModelError(
                    f"Sections must be Section objects, got {_type_name(section)}."
                )
            if section.is_empty and not self._options.include_empty_sections:
                logger.debug("Skipping empty %s.", section)
                continue
            lines.append(f"{SECTION_NAME_OPENER}{section.name}{SECTION_NAME_CLOSER}")
            lines.extend(
                self._scope_lines(section.comments, section.properties, stacklevel)
            )

        out = "".join(f"{line}{LINE_BREAK}" for line in lines)
        logger.debug("Serialized %d line(s) (%d characters).", len(lines), len(out))
        return out

    def serialize_to_sink(self, container: Container, sink: TextSink) -> None:
        """Write a container as ini text into a sink and flush it. The sink is
        neither opened nor closed.

        Args:
            container (Container): The container to write.
            sink (TextSink): Destination providing write and flush, e.g. an open file.

        Raises:
            InvalidArgument: If container or sink is missing.
        """
        self._verify_sink(sink)
        self._verify_container(container)
        out = self._render(container, _CALLER_STACKLEVEL)
        sink.write(out)
        sink.flush()

    async def serialize_to_sink_async(self, container: Container, sink: Any) -> None:
        """Write a container as ini text into a sink and flush it, for use within
        asyncio. write and flush may be plain methods or coroutines (e.g. aiofiles
        files). Sinks with a drain coroutine (asyncio.StreamWriter) are drained and
        don't need flush. The sink is neither opened nor closed.

        Args:
            container (Container): The container to write.
            sink (Any): Destination providing write and flush or drain.

        Raises:
            InvalidArgument: If container or sink is missing.
        """
        self._verify_sink(sink, drain_allowed=True)
        self._verify_container(container)
        # rendering isn't interruptible, only writing and flushing are awaited
        out = self._render(container, _CALLER_STACKLEVEL)
        await _maybe_await(sink.write(out))
        if _has_method(sink, "flush"):
            await _maybe_await(sink.flush())
        if _has_method(sink, "drain"):
            await _maybe_await(sink.drain())

    def _verify_container(self, container: Any) -> None:
        if not isinstance(container, Container):
            raise InvalidArgument(
                "container must be a Container, got"
                f" {'None' if container is None else _type_name(container)}."
            )

    def _verify_sink(self, sink: Any, drain_allowed: bool = False) -> None:
        if sink is None:
            raise InvalidArgument("sink must not be None.")
        flushable = _has_method(sink, "flush") or (
            drain_allowed and _has_method(sink, "drain")
        )
        if not (_has_method(sink, "write") and flushable):
            raise InvalidArgument(
                f"sink must provide write and flush, got {_type_name(sink)}."
            )

    def _scope_lines(
        self, comments: CommentGroup, properties: Iterable[Property], stacklevel: int
    ) -> list[str]:
        """Get the lines for comments and properties of one scope."""
        lines = []
        for comment in comments:
            self._warn_multiline(CommentGroup.verify(comment), "Comment", stacklevel)
        lines.extend(comments.to_lines(self._options.comment_indicator))

        for prop in properties:
            if not isinstance(prop, Property):
                raise MalformedModelError(
                    f"Properties must be Property objects, got {_type_name(prop)}."
                )
            if prop.is_empty and not self._options.include_empty_properties:
                continue
            self._warn_multiline(
                prop.value, f"Value of property '{prop.name}'", stacklevel
            )
            lines.append(prop.to_string(self._options.property_delimiter))
        return lines

    @staticmethod
    def _warn_multiline(text: str | None, what: str, stacklevel: int) -> None:
        if text is not None and (LINE_BREAK in text or "\r" in text):
            warnings.warn(
                f"{what} spans multiple lines and won't be read back as one line.",
                MultilineWarning,
                stacklevel=stacklevel,
            )


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


def _has_method(obj: Any, name: str) -> bool:
    return callable(getattr(obj, name, None))
