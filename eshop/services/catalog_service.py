# eshop/services/catalog_service.py
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Sequence, Tuple

from eshop.domain.schemas import Pagination, Part
from eshop.services.catalog_reader import CatalogReader
from eshop.utils.logging import get_logger
from eshop.utils.settings import DEFAULT_PAGE_LIMIT

logger = get_logger(__name__)

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def _text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_decimal(value: str | None) -> Decimal | None:
    value = _text(value)
    if value is None:
        return None
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        logger.debug(f"Ignoring non-numeric price bound {value!r}")
        return None
    #NaN and Infinity parse fine but are not usable bounds
    return parsed if parsed.is_finite() else None


def _parse_bool(value: str | None) -> bool | None:
    value = _text(value)
    if value is None:
        return None
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return None


def _parse_positive_int(value: str | None, default: int) -> int:
    value = _text(value)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class PartQuery:
    """
    Parsed catalog query. Missing or malformed values mean "filter not applied"
    (or the default, for page and limit); parsing never fails.
    """

    search: str | None = None
    manufacturer: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    in_stock: bool | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def from_params(
        cls,
        search: str | None = None,
        manufacturer: str | None = None,
        category: str | None = None,
        min_price: str | None = None,
        max_price: str | None = None,
        in_stock: str | None = None,
        page: str | None = None,
        limit: str | None = None,
    ) -> "PartQuery":
        return cls(
            search=_text(search),
            manufacturer=_text(manufacturer),
            category=_text(category),
            min_price=_parse_decimal(min_price),
            max_price=_parse_decimal(max_price),
            in_stock=_parse_bool(in_stock),
            page=_parse_positive_int(page, 1),
            limit=_parse_positive_int(limit, DEFAULT_PAGE_LIMIT),
        )


def matches_search(part: Part, term: str) -> bool:
    needle = term.lower()
    return (
        needle in part.name.lower()
        or needle in part.description.lower()
        or needle in part.manufacturer.lower()
    )


def filter_parts(parts: Sequence[Part], query: PartQuery) -> List[Part]:
    result = list(parts)

    if query.search:
        result = [p for p in result if matches_search(p, query.search)]

    if query.manufacturer:
        needle = query.manufacturer.lower()
        result = [p for p in result if needle in p.manufacturer.lower()]

    if query.category:
        needle = query.category.lower()
        result = [p for p in result if needle in p.category.lower()]

    if query.min_price is not None:
        result = [p for p in result if p.price >= query.min_price]

    if query.max_price is not None:
        result = [p for p in result if p.price <= query.max_price]

    if query.in_stock is not None:
        result = [p for p in result if p.in_stock == query.in_stock]

    return result


def paginate(items: Sequence[Part], page: int, limit: int) -> Tuple[List[Part], Pagination]:
    start = (page - 1) * limit
    end = page * limit
    total = len(items)

    return list(items[start:end]), Pagination(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        items_per_page=limit,
        has_next_page=end < total,
        has_previous_page=start > 0,
    )


def query_parts(parts: Sequence[Part], query: PartQuery) -> Tuple[List[Part], Pagination]:
    return paginate(filter_parts(parts, query), query.page, query.limit)


def search_parts(
    parts: Sequence[Part],
    term: str,
    page: int = 1,
    limit: int = DEFAULT_PAGE_LIMIT,
) -> Tuple[List[Part], Pagination]:
    """Free-text search only; manufacturer, category and price filters do not apply."""
    matched = [p for p in parts if matches_search(p, term)]
    return paginate(matched, page, limit)


def distinct_values(parts: Sequence[Part], attr: str) -> List[str]:
    #first-seen order
    return list(dict.fromkeys(getattr(p, attr) for p in parts))


class CatalogService:
    """
    Read-only use cases for the parts catalog.
    Each call reads the catalog again, so file edits are visible immediately.
    """

    def __init__(self, reader: CatalogReader):
        self.reader = reader

    def list_parts(self, query: PartQuery) -> Tuple[List[Part], Pagination]:
        parts = self.reader.load_parts()
        page, meta = query_parts(parts, query)
        logger.info(
            f"Catalog query matched {meta.total_items} of {len(parts)} parts, "
            f"page {meta.current_page}/{meta.total_pages}"
        )
        return page, meta

    def get_part(self, part_id: int) -> Part | None:
        return next((p for p in self.reader.load_parts() if p.id == part_id), None)

    def search(self, term: str, page: str | None = None, limit: str | None = None) -> Tuple[List[Part], Pagination]:
        return search_parts(
            self.reader.load_parts(),
            term,
            _parse_positive_int(page, 1),
            _parse_positive_int(limit, DEFAULT_PAGE_LIMIT),
        )

    def categories(self) -> List[str]:
        return distinct_values(self.reader.load_parts(), "category")

    def manufacturers(self) -> List[str]:
        return distinct_values(self.reader.load_parts(), "manufacturer")
