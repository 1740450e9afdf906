"""Catalog query engine: filtering, search and pagination"""
from decimal import Decimal

import pytest

from eshop.domain.schemas import Part
from eshop.services.catalog_service import (
    PartQuery,
    distinct_values,
    filter_parts,
    paginate,
    query_parts,
    search_parts,
)
from tests.conftest import SAMPLE_PARTS, write_catalog


@pytest.fixture
def parts():
    return [Part.model_validate(p) for p in SAMPLE_PARTS]


def ids(parts):
    return [p.id for p in parts]


def test_empty_catalog_gives_empty_page():
    page, meta = query_parts([], PartQuery.from_params(search="brake", min_price="10", in_stock="true"))

    assert page == []
    assert meta.total_pages == 0
    assert meta.total_items == 0
    assert meta.has_next_page is False
    assert meta.has_previous_page is False


def test_search_matches_name_description_or_manufacturer(parts):
    assert ids(filter_parts(parts, PartQuery(search="BOSCH"))) == [3, 7]
    assert ids(filter_parts(parts, PartQuery(search="rotor"))) == [2]
    assert ids(filter_parts(parts, PartQuery(search="synthetic"))) == [3]


def test_manufacturer_and_category_are_case_insensitive_substrings(parts):
    assert ids(filter_parts(parts, PartQuery(manufacturer="brem"))) == [1, 2]
    assert ids(filter_parts(parts, PartQuery(category="FILT"))) == [3, 4]


def test_price_bounds_are_inclusive(parts):
    query = PartQuery.from_params(min_price="24.75", max_price="89.50")

    assert ids(filter_parts(parts, query)) == [1, 2, 4, 6]


def test_filters_combine_as_conjunction(parts):
    query = PartQuery.from_params(search="brake", max_price="70", in_stock="true")

    assert ids(filter_parts(parts, query)) == [1]


def test_in_stock_filter(parts):
    assert ids(filter_parts(parts, PartQuery.from_params(in_stock="false"))) == [6]
    assert ids(filter_parts(parts, PartQuery.from_params(in_stock="True"))) == [1, 2, 3, 4, 5, 7]


@pytest.mark.parametrize("raw", ["abc", "NaN", "Infinity", "", "   "])
def test_malformed_price_bound_is_not_applied(parts, raw):
    query = PartQuery.from_params(min_price=raw, max_price=raw)

    assert query.min_price is None
    assert query.max_price is None
    assert len(filter_parts(parts, query)) == len(parts)


def test_unknown_in_stock_value_is_not_applied(parts):
    query = PartQuery.from_params(in_stock="maybe")

    assert query.in_stock is None
    assert len(filter_parts(parts, query)) == len(parts)


@pytest.mark.parametrize("raw", [None, "abc", "0", "-3", "2.5"])
def test_malformed_page_and_limit_fall_back_to_defaults(raw):
    query = PartQuery.from_params(page=raw, limit=raw)

    assert query.page == 1
    assert query.limit == 10


def test_parsed_values():
    query = PartQuery.from_params(min_price="19.99", page="3", limit="5")

    assert query.min_price == Decimal("19.99")
    assert query.page == 3
    assert query.limit == 5


@pytest.mark.parametrize("limit", [1, 2, 3, 5, 7, 10])
def test_pages_reconstruct_filtered_set(parts, limit):
    _, first = paginate(parts, 1, limit)

    collected = []
    for page_no in range(1, first.total_pages + 1):
        page, meta = paginate(parts, page_no, limit)
        assert len(page) <= limit
        assert meta.current_page == page_no
        collected.extend(page)

    assert ids(collected) == ids(parts)


def test_pagination_flags(parts):
    page, meta = paginate(parts, 2, 3)

    assert ids(page) == [4, 5, 6]
    assert meta.total_pages == 3
    assert meta.total_items == 7
    assert meta.items_per_page == 3
    assert meta.has_next_page is True
    assert meta.has_previous_page is True

    _, last = paginate(parts, 3, 3)
    assert last.has_next_page is False


def test_page_past_the_end_is_empty(parts):
    page, meta = paginate(parts, 9, 5)

    assert page == []
    assert meta.total_pages == 2
    assert meta.has_previous_page is True
    assert meta.has_next_page is False


def test_search_parts_ignores_other_filters(parts):
    page, meta = search_parts(parts, "filter", page=1, limit=1)

    assert ids(page) == [3]
    assert meta.total_items == 2
    assert meta.has_next_page is True


def test_distinct_values_keep_first_seen_order(parts):
    assert distinct_values(parts, "category") == ["Brakes", "Filters", "Ignition", "Electrical"]
    assert distinct_values(parts, "manufacturer") == ["Brembo", "Bosch", "Mann-Filter", "NGK", "Denso", "Varta"]


def test_service_reads_catalog_on_every_call(catalog_service, catalog_file):
    assert catalog_service.get_part(1).price == Decimal("64.99")

    changed = [dict(p) for p in SAMPLE_PARTS]
    changed[0]["price"] = 70.00
    write_catalog(catalog_file, changed)

    assert catalog_service.get_part(1).price == Decimal("70.00")


def test_service_get_part_unknown_id(catalog_service):
    assert catalog_service.get_part(999) is None


def test_service_search_parses_paging(catalog_service):
    page, meta = catalog_service.search("brembo", page="x", limit="1")

    assert ids(page) == [1]
    assert meta.current_page == 1
    assert meta.total_pages == 2
