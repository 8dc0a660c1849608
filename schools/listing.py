"""
Search, filter, sort and paginate the public schools listing.

Everything here is a pure function of (records, state): views rebuild the
page on every request and nothing is cached.
"""
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple

from django.conf import settings
from django.core.paginator import Paginator

from .records import SchoolRecord

ALL = 'all'
DEFAULT_PAGE_SIZE = 6

SORT_RATING = 'rating'
SORT_NAME = 'name'
SORT_CITY = 'city'
SORT_ESTABLISHED = 'established'
SORT_CHOICES = [
    (SORT_RATING, 'Highest Rated'),
    (SORT_NAME, 'Name (A-Z)'),
    (SORT_CITY, 'City'),
    (SORT_ESTABLISHED, 'Newest First'),
]
SORT_KEYS = {key for key, _ in SORT_CHOICES}

# Changing any of these sends the user back to the first page
FILTER_FIELDS = ('search_query', 'selected_city', 'selected_board', 'sort_key')


def page_size():
    return getattr(settings, 'SCHOOLS_PAGE_SIZE', DEFAULT_PAGE_SIZE)


def _positive_int(value, default=1):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class ListingState:
    search_query: str = ''
    selected_city: str = ALL
    selected_board: str = ALL
    sort_key: str = SORT_RATING
    current_page: int = 1

    @classmethod
    def from_params(cls, params):
        """Build a state from request query parameters."""
        query = params.get('q')
        if query is None:
            query = params.get('search', '')
        sort_key = params.get('sort') or SORT_RATING
        return cls(
            search_query=query or '',
            selected_city=(params.get('city') or '').strip() or ALL,
            selected_board=(params.get('board') or '').strip() or ALL,
            sort_key=sort_key if sort_key in SORT_KEYS else SORT_RATING,
            current_page=_positive_int(params.get('page')),
        )

    def update(self, **changes):
        state = replace(self, **changes)
        if any(getattr(state, f) != getattr(self, f) for f in FILTER_FIELDS):
            state = replace(state, current_page=1)
        return state

    @property
    def is_filtered(self):
        return bool(self.search_query) or not _is_all(self.selected_city) or not _is_all(self.selected_board)

    def as_params(self, page=None):
        """Query parameters that reproduce this state, for pagination links."""
        params = {}
        if self.search_query:
            params['q'] = self.search_query
        if not _is_all(self.selected_city):
            params['city'] = self.selected_city
        if not _is_all(self.selected_board):
            params['board'] = self.selected_board
        if self.sort_key != SORT_RATING:
            params['sort'] = self.sort_key
        params['page'] = page if page is not None else self.current_page
        return params


@dataclass(frozen=True)
class ListingPage:
    page_records: Tuple[SchoolRecord, ...]
    total_filtered: int
    total_pages: int
    current_page: int
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def start_index(self):
        if not self.page_records:
            return 0
        return (self.current_page - 1) * self.page_size + 1

    @property
    def end_index(self):
        if not self.page_records:
            return 0
        return self.start_index + len(self.page_records) - 1

    @property
    def has_previous(self):
        return self.current_page > 1

    @property
    def has_next(self):
        return self.current_page < self.total_pages

    @property
    def page_range(self):
        return range(1, self.total_pages + 1)


def _is_all(value):
    return not value or value == ALL


def _fold(value):
    return (value or '').casefold()


def matches(record: SchoolRecord, state: ListingState) -> bool:
    query = _fold(state.search_query)
    if query and query not in _fold(record.name) and query not in _fold(record.city):
        return False
    if not _is_all(state.selected_city) and _fold(record.city) != _fold(state.selected_city):
        return False
    if not _is_all(state.selected_board) and _fold(record.board) != _fold(state.selected_board):
        return False
    return True


def filter_records(records: Iterable[SchoolRecord], state: ListingState) -> List[SchoolRecord]:
    return [r for r in records if matches(r, state)]


def sort_records(records: Iterable[SchoolRecord], sort_key: str) -> List[SchoolRecord]:
    # sorted() is stable, reverse=True included, so ties keep fetch order
    if sort_key == SORT_NAME:
        return sorted(records, key=lambda r: _fold(r.name))
    if sort_key == SORT_CITY:
        return sorted(records, key=lambda r: _fold(r.city))
    if sort_key == SORT_ESTABLISHED:
        return sorted(records, key=lambda r: r.established_year, reverse=True)
    return sorted(records, key=lambda r: r.overall_rating, reverse=True)


def build_listing(records: Sequence[SchoolRecord], state: ListingState, per_page=None) -> ListingPage:
    per_page = per_page or page_size()
    ordered = sort_records(filter_records(records, state), state.sort_key)

    paginator = Paginator(ordered, per_page, allow_empty_first_page=True)
    number = min(max(1, state.current_page), paginator.num_pages)
    page = paginator.page(number)

    return ListingPage(
        page_records=tuple(page.object_list),
        total_filtered=paginator.count,
        total_pages=paginator.num_pages,
        current_page=number,
        page_size=per_page,
    )


def available_boards(records: Iterable[SchoolRecord]) -> List[str]:
    seen = []
    for record in records:
        if record.board and record.board not in seen:
            seen.append(record.board)
    return seen
