"""
Page window bookkeeping for the directory view.
"""

import math
from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 10


@dataclass
class Paginator:
    page_size: int = DEFAULT_PAGE_SIZE
    page: int = 1
    total: int = 0

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def page_count(self) -> int:
        if self.total <= 0:
            return 0
        return math.ceil(self.total / self.page_size)

    def page_numbers(self) -> list[int]:
        return list(range(1, self.page_count + 1))

    def go_to(self, page: int) -> None:
        # No bounds check: a page past the data is legal and simply empty.
        self.page = page
