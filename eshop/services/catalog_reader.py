# eshop/services/catalog_reader.py
import json
from decimal import Decimal
from pathlib import Path
from typing import List, Protocol

import requests
from pydantic import TypeAdapter, ValidationError
from requests import RequestException

from eshop.domain.errors import CatalogUnavailableError
from eshop.domain.schemas import Part
from eshop.utils.logging import get_logger
from eshop.utils.retry import file_retry, http_retry
from eshop.utils.settings import CATALOG_PATH, CATALOG_TIMEOUT, CATALOG_URL

logger = get_logger(__name__)

_PARTS = TypeAdapter(List[Part])


class CatalogReader(Protocol):
    """Source of catalog records. Every call is a fresh read."""

    def load_parts(self) -> List[Part]:
        ...


def _to_parts(data, source: str) -> List[Part]:
    if not isinstance(data, list):
        logger.error(f"Catalog {source} is not a JSON array")
        raise CatalogUnavailableError("Catalog data is unavailable")
    try:
        return _PARTS.validate_python(data)
    except ValidationError as e:
        logger.error(f"Catalog {source} has invalid records: {e.error_count()} errors")
        raise CatalogUnavailableError("Catalog data is unavailable") from e


class FileCatalogReader:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or CATALOG_PATH)

    @file_retry()
    def _read(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def load_parts(self) -> List[Part]:
        try:
            raw = self._read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error loading parts data from {self.path}: {e}")
            raise CatalogUnavailableError("Catalog data is unavailable") from e

        try:
            data = json.loads(raw, parse_float=Decimal)
        except json.JSONDecodeError as e:
            logger.error(f"Catalog file {self.path} is not valid JSON: {e}")
            raise CatalogUnavailableError("Catalog data is unavailable") from e

        return _to_parts(data, str(self.path))


class HttpCatalogReader:
    def __init__(self, url: str | None = None, timeout: int | None = None):
        self.url = url or CATALOG_URL
        self.timeout = timeout or CATALOG_TIMEOUT

    @http_retry()
    def _fetch(self):
        logger.info(f"HttpCatalogReader GET {self.url}")
        resp = requests.get(self.url, timeout=self.timeout)
        resp.raise_for_status()
        return resp

    def load_parts(self) -> List[Part]:
        try:
            #a malformed body is not transient, so it is decoded outside the retry
            data = self._fetch().json(parse_float=Decimal)
        except (RequestException, ValueError) as e:
            logger.error(f"Error fetching parts data from {self.url}: {e}")
            raise CatalogUnavailableError("Catalog data is unavailable") from e

        return _to_parts(data, self.url)


def build_catalog_reader() -> CatalogReader:
    if CATALOG_URL:
        return HttpCatalogReader(CATALOG_URL)
    return FileCatalogReader(CATALOG_PATH)
