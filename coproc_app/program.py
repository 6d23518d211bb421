"""The program: builds circuit witnesses and handles entrypoint commands."""

from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping
from typing import Any

from .circuit import Witness

_log = logging.getLogger(__name__)

_U64_MAX = (1 << 64) - 1


class ProgramError(Exception):
    """Raised when a program request carries invalid arguments."""


def _field(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _to_log(args: Any) -> str:
    try:
        return json.dumps(args, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError):
        return ""


def _serialize(args: Any) -> bytes:
    return json.dumps(
        args, separators=(",", ":"), sort_keys=True, ensure_ascii=False
    ).encode("utf-8")


def get_witnesses(args: Any) -> list[Witness]:
    """Turn the request's ``value`` (an unsigned 64-bit integer) into one data witness."""
    _log.info("received a proof request with arguments %s", _to_log(args))
    value = _field(args, "value")
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise ProgramError("argument 'value' must be an unsigned 64-bit integer")
    return [Witness(data=value.to_bytes(8, "little"))]


def entrypoint(args: Any, storage: MutableMapping[str, bytes]) -> Any:
    """Run the command in ``args["payload"]`` and return ``args`` unchanged.

    The only command is ``store``, which writes the JSON-encoded arguments
    to ``storage`` under ``payload.path``.
    """
    _log.info("received an entrypoint request with arguments %s", _to_log(args))
    payload = _field(args, "payload")
    cmd = _field(payload, "cmd")
    if not isinstance(cmd, str):
        raise ProgramError("payload 'cmd' must be a string")

    if cmd == "store":
        path = _field(payload, "path")
        if not isinstance(path, str):
            raise ProgramError("payload 'path' must be a string")
        storage[path] = _serialize(args)
    else:
        raise ProgramError(f"unknown entrypoint command: {cmd}")

    return args