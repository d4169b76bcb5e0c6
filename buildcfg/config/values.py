"""Value kinds the merge engine dispatches on."""

from enum import Enum
from typing import Any

from buildcfg.utils.share import is_array, is_object


class ValueKind(Enum):
    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def classify(value: Any) -> ValueKind:
    """
    Tag a config value with its kind.

    Strings and bytes are primitives even though they are iterable.
    """
    if is_object(value):
        return ValueKind.MAPPING
    if is_array(value):
        return ValueKind.SEQUENCE
    return ValueKind.PRIMITIVE
