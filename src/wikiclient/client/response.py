"""Checks applied to every MediaWiki API response envelope."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..errors import InvalidResponseError, error_from_response

logger = logging.getLogger(__name__)


def parse_json(text: str) -> Any:
    """Decode a response body, raising :class:`InvalidResponseError` for anything but JSON."""

    try:
        return json.loads(text)
    except ValueError as exc:
        if text.startswith("MediaWiki API is not enabled for this site."):
            raise InvalidResponseError("MediaWiki API is disabled on this site", text) from exc
        raise InvalidResponseError(f"Response is not valid JSON: {exc}", text[:500]) from exc


def check_response(data: Any) -> Any:
    """
    Raise the matching :class:`~wikiclient.errors.OperationFailedError` when the
    envelope carries an ``error`` node; otherwise return ``data`` unchanged.

    See https://www.mediawiki.org/wiki/API:Errors_and_warnings .
    """
    # MW 1.19 answers some actions with [] instead of {}
    if not isinstance(data, dict):
        return data

    error = data.get("error")
    if error is None:
        return data
    if not isinstance(error, dict):
        raise InvalidResponseError(f"Malformed error node: {error!r}")
    # Semantic MediaWiki does not follow the standard error format
    if "code" not in error and "query" in error:
        error = {"code": None, "info": error["query"]}

    exc = error_from_response(error)
    logger.warning(f"API error: {exc.code} - {exc.info}")
    raise exc
