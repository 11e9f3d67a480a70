from typing import List, Sequence, TypeVar

from resume_schema import Entry

T = TypeVar("T")


def move_item(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """Returns a new list with the item at `from_index` moved to `to_index`."""
    result = list(items)
    result.insert(to_index, result.pop(from_index))
    return result


def reorder(order: Sequence[str], moving_id: str, target_id: str) -> List[str]:
    """
    Moves `moving_id` into `target_id`'s position, shifting the entries in
    between by one. Returns an unchanged copy when the ids are equal or
    either one is absent.
    """
    if moving_id == target_id or moving_id not in order or target_id not in order:
        return list(order)
    return move_item(order, order.index(moving_id), order.index(target_id))


def reorder_entries(entries: Sequence[Entry], moving_id: str, target_id: str) -> List[Entry]:
    """Same contract as `reorder`, keyed by entry id. Entries themselves are untouched."""
    ids = [entry.id for entry in entries]
    if moving_id == target_id or moving_id not in ids or target_id not in ids:
        return list(entries)
    return move_item(entries, ids.index(moving_id), ids.index(target_id))


def neighbour_id(ids: Sequence[str], current_id: str, step: int):
    """Id `step` places away from `current_id`, or None at either end."""
    if current_id not in ids:
        return None
    index = ids.index(current_id) + step
    if index < 0 or index >= len(ids):
        return None
    return ids[index]
