from __future__ import annotations
import json
import logging
import os
from typing import Any, Iterable, List, Tuple

import requests

from . import config as CFG
from .errors import BuildFailure, MalformedRecord
from .models import DictionaryEntry, Meaning

log = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_records(source: str | None = None, *, timeout: float | None = None) -> List[Any]:
    """
    Fetch the raw dictionary payload once and return the decoded JSON list.

    source: an http(s) URL (default: config.DICTIONARY_URL) or a local JSON
    file path. There is no retry and no cache; any failure of the whole
    payload is reported as BuildFailure.
    """
    source = source or CFG.DICTIONARY_URL
    timeout = CFG.FETCH_TIMEOUT if timeout is None else timeout

    if _is_url(source):
        log.info("Fetching dictionary from %s", source)
        try:
            resp = requests.get(source, timeout=timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as exc:
            raise BuildFailure(f"dictionary fetch failed: {exc}") from exc
        except ValueError as exc:  # body is not JSON
            raise BuildFailure(f"dictionary payload is not valid JSON: {exc}") from exc
    else:
        log.info("Reading dictionary from %s", source)
        try:
            with open(os.path.expanduser(source), "r", encoding="utf-8") as f:
                payload = json.load(f)
        except OSError as exc:
            raise BuildFailure(f"cannot read dictionary file {source!r}: {exc}") from exc
        except ValueError as exc:
            raise BuildFailure(f"dictionary file {source!r} is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise BuildFailure(f"expected a JSON list of records, got {type(payload).__name__}")
    return payload


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ("" if value is None else str(value))


def decode_record(raw: Any) -> DictionaryEntry:
    """One JSON object -> DictionaryEntry. Raises MalformedRecord if unusable."""
    if isinstance(raw, DictionaryEntry):
        if not isinstance(raw.script_form, str) or not raw.script_form:
            raise MalformedRecord(f"entry {raw.id!r} has no Limbu form")
        return raw
    if not isinstance(raw, dict):
        raise MalformedRecord(f"record is not an object: {type(raw).__name__}")

    limbu = raw.get("limbu", raw.get("script_form"))
    if not isinstance(limbu, str) or not limbu:
        raise MalformedRecord(f"record {raw.get('id')!r} has no Limbu form")

    meaning = raw.get("meaning", raw.get("meanings")) or {}
    if not isinstance(meaning, dict):
        meaning = {}
    group = raw.get("group")

    return DictionaryEntry(
        id=_text(raw.get("id")),
        script_form=limbu,
        phonetic=_text(raw.get("phonetic")),
        meanings=Meaning(en=_text(meaning.get("en")), ne=_text(meaning.get("ne"))),
        group=None if group is None else _text(group),
        status=_text(raw.get("status")),
    )


def decode_records(raw_records: Iterable[Any]) -> Tuple[List[DictionaryEntry], int]:
    """
    Decode every record, dropping the malformed ones.
    Returns (entries, dropped_count); never raises on an individual record.
    """
    entries: List[DictionaryEntry] = []
    dropped = 0
    for raw in raw_records:
        try:
            entries.append(decode_record(raw))
        except MalformedRecord as exc:
            dropped += 1
            log.debug("Dropping record: %s", exc)
    if dropped:
        log.info("Dropped %d malformed dictionary records", dropped)
    return entries, dropped
