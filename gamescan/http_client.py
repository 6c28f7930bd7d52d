from __future__ import annotations

import asyncio
import logging
from typing import Optional

import requests

from gamescan.errors import HttpError

logger = logging.getLogger(__name__)

_MAX_BODY_CHARS = 500


def get_json(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: float = 20.0,
) -> object:
    logger.debug("GET %s params=%s", url, params)
    try:
        resp = requests.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise HttpError(url, None, str(exc)) from exc
    if not 200 <= resp.status_code < 300:
        raise HttpError(resp.url or url, resp.status_code, _body_excerpt(resp))
    try:
        return resp.json()
    except ValueError as exc:
        raise HttpError(resp.url or url, resp.status_code, "response is not JSON") from exc


async def get_json_async(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: float = 20.0,
) -> object:
    return await asyncio.to_thread(get_json, url, params, headers, timeout)


def _body_excerpt(resp: requests.Response) -> str:
    try:
        text = resp.text or ""
    except (UnicodeDecodeError, requests.RequestException):
        return ""
    return text[:_MAX_BODY_CHARS]
