"""Reduce a document set to a compact label map."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

_SCALARS = (str, int, float, bool)


def flatten(document: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys."""

    flat: dict[str, Any] = {}
    for key, value in document.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, name))
        else:
            flat[name] = value
    return flat


def _label_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def common_key_value_pairs(documents: Sequence[Mapping[str, Any]], exclude: Iterable[str] = ()) -> dict[str, str]:
    """Keys present in every document with the same scalar value become labels."""

    if not documents:
        return {}

    excluded = set(exclude)
    common = {
        key: value
        for key, value in flatten(documents[0]).items()
        if key not in excluded and isinstance(value, _SCALARS)
    }
    for document in documents[1:]:
        if not common:
            break
        flat = flatten(document)
        for key in list(common):
            # 1 == True in Python; compare types too.
            if key not in flat or type(flat[key]) is not type(common[key]) or flat[key] != common[key]:
                del common[key]
    return {key: _label_value(value) for key, value in sorted(common.items())}
