from __future__ import annotations
import os
from typing import Optional

_DEFAULT_RECURSION_LIMIT = 10_000


def _int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def get_recursion_limit() -> int:
    return _int_from_env('PERA_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def get_number_format() -> Optional[str]:
    # format() spec for non-integral numbers, e.g. ".6g"
    raw = os.environ.get('PERA_NUMBER_FORMAT')
    return raw.strip() if raw and raw.strip() else None
