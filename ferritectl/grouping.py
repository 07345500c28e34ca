from typing import Iterable

from ferritectl.model.key import KeyRecord
from ferritectl.model.namespace import NamespaceGroup

DELIMITER = ":"


def namespace_of(key: str, delimiter: str = DELIMITER) -> str | None:
    """
    Return the namespace prefix of ``key``, delimiter included.

    Only the first delimiter counts, and only when it has at least one
    character on each side: ``user:1`` -> ``user:``, while ``:x``, ``x:`` and
    ``plain`` have no namespace.
    """
    idx = key.find(delimiter)
    if 0 < idx < len(key) - len(delimiter):
        return key[:idx + len(delimiter)]
    return None


def group_keys(keys: Iterable[str], delimiter: str = DELIMITER) -> list[NamespaceGroup | KeyRecord]:
    """
    Organize a flat key listing into namespaces.

    Namespaces with at least two members come first, in first-seen order.
    Every other key follows as a standalone record: keys without a namespace
    in input order, then the sole members of single-key namespaces.
    """
    buckets: dict[str, list[str]] = {}
    ungrouped: list[str] = []

    for key in keys:
        prefix = namespace_of(key, delimiter)
        if prefix is None:
            ungrouped.append(key)
        else:
            buckets.setdefault(prefix, []).append(key)

    groups: list[NamespaceGroup | KeyRecord] = []
    for prefix, members in buckets.items():
        if len(members) > 1:
            groups.append(NamespaceGroup(prefix=prefix, keys=members))
        else:
            ungrouped.extend(members)

    return groups + [KeyRecord(key=key) for key in ungrouped]
