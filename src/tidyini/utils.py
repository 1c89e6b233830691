import re
from typing import Any


def _is_blank(text: str | None) -> bool:
    """Check whether text is None, empty or whitespace only.

    Args:
        text (str | None): The text to check.

    Returns:
        bool
    """
    return text is None or bool(re.fullmatch(r"\s*", text))


def _type_name(obj: Any) -> str:
    return type(obj).__name__
