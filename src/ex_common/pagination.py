"""Page-number pagination shared by the storage repositories.

Pages are 1-based. page_count comes from the node database and is passed
through to clients unchanged.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Page:
    records: list[Any] = field(default_factory=list)
    page_count: int = 0


def page_offset(page: int, page_size: int) -> int:
    """OFFSET for a 1-based page number; pages below 1 read the first page."""
    return (max(page, 1) - 1) * page_size


def page_count(total_rows: int, page_size: int) -> int:
    return (total_rows + page_size - 1) // page_size
