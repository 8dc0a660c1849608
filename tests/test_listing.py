"""Tests for the schools listing search/filter/sort/paginate logic."""

import pytest

from schools.listing import (
    ListingState, build_listing, filter_records, sort_records, matches, available_boards,
)


@pytest.fixture
def alpha_beta(make_record):
    return [
        make_record("Alpha", city="X", board="CBSE", rating=4.5),
        make_record("Beta", city="Y", board="ICSE", rating=3.0),
    ]


@pytest.fixture
def mixed(make_record):
    return [
        make_record("Stewart School", city="Cuttack", board="ICSE", rating=4.0, established=1881),
        make_record("DAV Public School", city="Bhubaneswar", board="CBSE", rating=4.5, established=1989),
        make_record("Blind School", city="Puri", board="State Board", established=1972),
        make_record("KIIT International", city="Bhubaneswar", board="IB", rating=4.8),
        make_record("Cuttack Model School", city="Rourkela", board="CBSE", rating=3.2, established=2001),
    ]


def names(records):
    return [r.name for r in records]


def test_default_state_shows_all_sorted_by_rating(alpha_beta):
    page = build_listing(alpha_beta, ListingState())

    assert names(page.page_records) == ["Alpha", "Beta"]
    assert page.total_filtered == 2
    assert page.total_pages == 1


def test_board_filter_keeps_only_matching_board(alpha_beta):
    page = build_listing(alpha_beta, ListingState(selected_board="ICSE"))

    assert names(page.page_records) == ["Beta"]


def test_seventh_record_lands_alone_on_page_two(make_record):
    records = [make_record(f"School {i}", rating=5 - i * 0.5) for i in range(7)]

    page = build_listing(records, ListingState(current_page=2))

    assert len(page.page_records) == 1
    assert page.page_records[0].name == "School 6"
    assert page.total_pages == 2


def test_search_matches_name_or_city_case_insensitively(mixed):
    state = ListingState(search_query="cuttack")

    result = filter_records(mixed, state)

    assert names(result) == ["Stewart School", "Cuttack Model School"]
    for record in mixed:
        expected = "cuttack" in record.name.lower() or "cuttack" in record.city.lower()
        assert matches(record, state) == expected


def test_empty_query_matches_everything(mixed):
    assert filter_records(mixed, ListingState(search_query="")) == mixed


def test_city_filter_is_case_insensitive_equality(mixed):
    result = filter_records(mixed, ListingState(selected_city="bhubaneswar"))

    assert names(result) == ["DAV Public School", "KIIT International"]


def test_filters_combine_with_and(mixed):
    state = ListingState(search_query="school", selected_city="Bhubaneswar", selected_board="CBSE")

    assert names(filter_records(mixed, state)) == ["DAV Public School"]


def test_filtering_is_idempotent(mixed):
    state = ListingState(search_query="s", selected_board="CBSE")

    once = filter_records(mixed, state)

    assert filter_records(once, state) == once


def test_rating_sort_is_non_increasing_with_missing_as_zero(mixed):
    result = sort_records(mixed, "rating")
    ratings = [r.overall_rating for r in result]

    assert ratings == sorted(ratings, reverse=True)
    assert result[-1].name == "Blind School"


def test_rating_sort_keeps_fetch_order_on_ties(make_record):
    records = [make_record("B", rating=4), make_record("A", rating=4), make_record("C", rating=5)]

    assert names(sort_records(records, "rating")) == ["C", "B", "A"]


def test_name_and_city_sort_ascending(mixed):
    assert names(sort_records(mixed, "name")) == [
        "Blind School", "Cuttack Model School", "DAV Public School", "KIIT International", "Stewart School",
    ]
    cities = [r.city for r in sort_records(mixed, "city")]
    assert cities == sorted(cities)


def test_established_sort_newest_first_missing_last(mixed):
    result = sort_records(mixed, "established")

    assert [r.established_year for r in result] == [2001, 1989, 1972, 1881, 0]


def test_every_page_full_except_last(make_record):
    records = [make_record(f"School {i:02d}") for i in range(17)]

    sizes = [len(build_listing(records, ListingState(current_page=n)).page_records) for n in (1, 2, 3)]

    assert sizes == [6, 6, 5]


def test_no_results_still_has_one_page(mixed):
    page = build_listing(mixed, ListingState(search_query="nowhere"))

    assert page.page_records == ()
    assert page.total_filtered == 0
    assert page.total_pages == 1
    assert page.current_page == 1
    assert (page.start_index, page.end_index) == (0, 0)


def test_page_number_is_clamped(make_record):
    records = [make_record(f"School {i}") for i in range(8)]

    page = build_listing(records, ListingState(current_page=99))

    assert page.current_page == 2
    assert names(page.page_records) == ["School 6", "School 7"]
    assert (page.start_index, page.end_index) == (7, 8)
    assert page.has_previous and not page.has_next


def test_pages_are_contiguous_slices(make_record):
    records = [make_record(f"School {i:02d}", rating=i % 5) for i in range(14)]
    ordered = sort_records(records, "rating")

    shown = []
    for n in (1, 2, 3):
        shown.extend(build_listing(records, ListingState(current_page=n)).page_records)

    assert shown == ordered


def test_state_from_params():
    state = ListingState.from_params({'search': 'dav', 'city': 'Puri', 'sort': 'name', 'page': '3'})

    assert state == ListingState(
        search_query='dav', selected_city='Puri', selected_board='all', sort_key='name', current_page=3,
    )


@pytest.mark.parametrize("params", [
    {'page': '0'},
    {'page': '-2'},
    {'page': 'abc'},
    {'sort': 'popularity'},
    {'city': '', 'board': ''},
])
def test_state_from_bad_params_falls_back_to_defaults(params):
    assert ListingState.from_params(params) == ListingState()


def test_search_query_is_kept_verbatim(make_record):
    records = [make_record("Alpha"), make_record("Beta School")]
    state = ListingState.from_params({'q': ' '})

    assert state.search_query == ' '
    assert names(filter_records(records, state)) == ["Beta School"]


def test_changing_a_filter_resets_page():
    state = ListingState(current_page=4)

    assert state.update(selected_board="IB").current_page == 1
    assert state.update(sort_key="name").current_page == 1
    assert state.update(current_page=2).current_page == 2
    assert state.update(search_query="").current_page == 4
    assert state.update(selected_board="IB", current_page=3).current_page == 1
    assert state.update(sort_key="rating", current_page=3).current_page == 3


def test_is_filtered_and_params():
    assert not ListingState().is_filtered
    assert not ListingState(sort_key="name").is_filtered

    state = ListingState(search_query="kiit", selected_city="Bhubaneswar", sort_key="city")
    assert state.is_filtered
    assert state.as_params(page=2) == {'q': 'kiit', 'city': 'Bhubaneswar', 'sort': 'city', 'page': 2}


def test_available_boards_first_seen_order(mixed, make_record):
    assert available_boards(mixed + [make_record("No Board", board="")]) == ["ICSE", "CBSE", "State Board", "IB"]
