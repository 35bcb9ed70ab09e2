from typing import List, Sequence, TypeVar

T = TypeVar("T")

def paginate(items: Sequence[T], page: int, limit: int) -> List[T]:
    """1-based page slicing; pages past the end are empty."""
    start = (page - 1) * limit
    return list(items[start:start + limit])
