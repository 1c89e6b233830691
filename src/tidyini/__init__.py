import logging
from .entities import (
    Property,
    Section,
    Container,
    CommentGroup,
    PropertyGroup,
    SectionGroup,
)
from .args import NormalizationOptions, SerializationOptions
from .normalizer import Normalizer, normalize, try_normalize
from .serializer import Serializer
from .exceptions_warnings import (
    IniError,
    InvalidArgument,
    DuplicateEntityError,
    EntityNotFound,
    MalformedModelError,
)
from .globals import VALID_MARKERS

logging.getLogger(__name__).addHandler(logging.NullHandler())
