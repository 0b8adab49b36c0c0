"""Command and response frames for the Yeelight JSON protocol.

One frame is one JSON object on its own line. Requests end with ``\\r\\n``;
responses are read up to and including ``\\n``.
"""
from __future__ import annotations

import json
import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from yeelight_lan import const
from yeelight_lan.exceptions import YeelightDecodingError, YeelightEncodingError

_LOGGER = logging.getLogger(__name__)

# Values a command may carry in its params list.
Param = Union[int, float, str, Sequence["Param"], Mapping[str, "Param"]]

_ID_MAX = 2**31 - 1


@dataclass(slots=True)
class Command:
    """A single request to the device."""

    method: str
    params: list[Param] = field(default_factory=list)
    id: int = 0

    def generate_id(self) -> int:
        """Assign a random non-zero 31-bit id if none is set yet."""
        if self.id == 0:
            rng = random.Random(time.time_ns())
            self.id = rng.randint(1, _ID_MAX)
        return self.id

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation."""
        return {
            const.KEY_ID: self.id,
            const.KEY_METHOD: self.method,
            const.KEY_PARAMS: [_check_param(param) for param in self.params],
        }

    def to_json(self) -> bytes:
        """Serialize to compact JSON."""
        try:
            payload = self.to_dict()
            return json.dumps(
                payload, separators=(",", ":"), allow_nan=False
            ).encode()
        except (TypeError, ValueError) as err:
            raise YeelightEncodingError(
                f"Cannot encode {self.method} params: {err}"
            ) from err

    def to_frame(self) -> bytes:
        """Serialize to a newline-terminated wire frame."""
        return self.to_json() + const.LINE_TERMINATOR


@dataclass(slots=True)
class Response:
    """A single answer from the device.

    ``timed_out`` is set when no line arrived before the deadline. Such a
    response is otherwise empty: no result, no error and id 0.
    """

    id: int = 0
    result: list[Any] | None = None
    error: Any = None
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """Return whether the device answered with a result."""
        return self.result is not None and self.error is None

    @property
    def is_empty(self) -> bool:
        """Return whether nothing was received."""
        return self.id == 0 and self.result is None and self.error is None

    @classmethod
    def from_json(cls, data: bytes | str) -> Response:
        """Decode one response line.

        A blank line decodes to an empty response.
        """
        if isinstance(data, bytes):
            try:
                data = data.decode()
            except UnicodeDecodeError as err:
                raise YeelightDecodingError(
                    f"Response is not valid UTF-8: {data!r}"
                ) from err
        if not data.strip():
            return cls()
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as err:
            raise YeelightDecodingError(f"Malformed response: {data!r}") from err
        if not isinstance(payload, dict):
            raise YeelightDecodingError(f"Response is not an object: {data!r}")

        response_id = payload.get(const.KEY_ID, 0)
        if not isinstance(response_id, int) or isinstance(response_id, bool):
            raise YeelightDecodingError(f"Invalid response id: {response_id!r}")
        result = payload.get(const.KEY_RESULT)
        if result is not None and not isinstance(result, list):
            _LOGGER.debug("Wrapping non-list result %r", result)
            result = [result]
        return cls(
            id=response_id,
            result=result,
            error=payload.get(const.KEY_ERROR),
        )


def build_command(method: str, params: Sequence[Param] | None = None) -> Command:
    """Build a command whose id is assigned at send time."""
    return Command(method=method, params=list(params or []))


def _check_param(value: Any) -> Param:
    if isinstance(value, bool) or isinstance(value, (int, str)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"non-finite number {value!r}")
        return value
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"object keys must be strings, got {key!r}")
        return {key: _check_param(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_check_param(item) for item in value]
    raise TypeError(f"unsupported param type {type(value).__name__}")
