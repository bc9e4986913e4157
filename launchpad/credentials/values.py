"""Classification of known credential values.

Values come from YAML, local storage or command-line flags and can be
strings, booleans, ``None`` or, occasionally, numbers. Instead of relying
on truthiness, every value is classified into a ``ValueState`` before the
gatherer decides whether to prompt for it.
"""

from enum import Enum
from typing import Any

CredentialValue = str | bool | None

PLACEHOLDER_PREFIX = "{"


class ValueState(str, Enum):
    """Tagged state of a credential value."""

    ABSENT = "absent"
    EMPTY = "empty"
    STRING = "string"
    FALSE = "false"
    TRUE = "true"


def is_placeholder(value: Any) -> bool:
    """Whether a value is an unresolved template reference such as ``{host}``."""
    return isinstance(value, str) and value.startswith(PLACEHOLDER_PREFIX)


def classify(value: Any) -> ValueState:
    """Classify a credential value.

    Booleans are checked first since ``bool`` is a subclass of ``int``.
    Other non-string values (numbers from YAML) count as strings when truthy.
    """
    if value is None:
        return ValueState.ABSENT
    if isinstance(value, bool):
        return ValueState.TRUE if value else ValueState.FALSE
    if isinstance(value, str):
        return ValueState.STRING if value else ValueState.EMPTY
    return ValueState.STRING if value else ValueState.ABSENT


def is_usable(value: Any) -> bool:
    """Whether a value counts as already supplied (a non-empty string or ``True``)."""
    return classify(value) in (ValueState.STRING, ValueState.TRUE)


def should_prompt_for(value: Any) -> bool:
    """Whether a value by itself forces a prompt.

    Only an empty string does: it was meant to be filled in. An explicit
    ``False`` is a deliberate "off" and is never re-asked, and an absent
    value only triggers a prompt when its field is required.
    """
    return classify(value) is ValueState.EMPTY


def is_missing(value: Any) -> bool:
    """Whether a required field holding this value still needs an answer."""
    return classify(value) in (ValueState.ABSENT, ValueState.EMPTY)


def normalize(value: Any) -> CredentialValue:
    """Coerce a stored value into a ``CredentialValue``."""
    if value is None or isinstance(value, (str, bool)):
        return value
    return str(value)
