from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


def deduplicate(records: Iterable[tuple[str, T]]) -> list[T]:
    """Keep one record per key.

    A later record replaces an earlier one with the same key but keeps the
    earlier one's position in the output.
    """
    by_key: dict[str, T] = {}
    for key, record in records:
        by_key[key] = record
    return list(by_key.values())
