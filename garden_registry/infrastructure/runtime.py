import getpass
import os
import time
import uuid


def new_garden_id() -> str:
    """Random 128-bit identifier; uniqueness is probabilistic."""
    return str(uuid.uuid4())


class MonotonicClock:
    """
    Nanosecond wall-clock time that never goes backwards between calls.
    """

    def __init__(self, source=time.time_ns):
        self._source = source
        self._last = 0

    def __call__(self) -> int:
        self._last = max(self._last, self._source())
        return self._last


class StaticIdentity:
    """Returns the same caller token on every call."""

    def __init__(self, token: str):
        if not token:
            raise ValueError("Caller identity token must not be empty.")
        self.token = token

    def __call__(self) -> str:
        return self.token

    def __repr__(self) -> str:
        return f"StaticIdentity({self.token!r})"


def identity_from_env() -> StaticIdentity:
    """Caller identity from GARDEN_CALLER, falling back to the OS login name."""
    return StaticIdentity(os.getenv("GARDEN_CALLER") or getpass.getuser())
