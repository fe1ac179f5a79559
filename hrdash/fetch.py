from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from hrdash.payload import RosterPayload


logger = logging.getLogger(__name__)


class FetchOrParseFailure(Exception):
    """The roster payload could not be fetched, decoded or validated."""


def parse_payload(data: Any) -> RosterPayload:
    try:
        return RosterPayload.model_validate(data)
    except ValidationError as exc:
        raise FetchOrParseFailure(f"malformed roster payload: {exc.error_count()} error(s)") from exc


def fetch_payload(url: str, *, client: Optional[httpx.Client] = None, timeout: Optional[float] = None) -> RosterPayload:
    """GET the roster once. No retry, no backoff."""
    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        logger.info("Fetching roster from %s", url)
        response = http.get(url)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as exc:
        raise FetchOrParseFailure(f"request to {url} failed: {exc}") from exc
    except ValueError as exc:
        raise FetchOrParseFailure(f"response from {url} is not valid JSON") from exc
    finally:
        if owns_client:
            http.close()
    return parse_payload(data)
