"""Per-user mutual exclusion for cart operations.

Each user id gets its own lock for the whole read-validate-mutate-persist
sequence, so concurrent requests on one cart cannot lose each other's
updates while different users never wait on each other. Entries are
discarded as soon as nobody holds or waits on them.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from shopping.cart.errors import CartBusy


@dataclass
class _Slot:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class UserLocks:
    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout
        self._guard = threading.Lock()
        self._slots: dict[str, _Slot] = {}

    @contextmanager
    def hold(self, user_id) -> Iterator[None]:
        key = str(user_id)
        with self._guard:
            slot = self._slots.setdefault(key, _Slot())
            slot.users += 1

        try:
            if not slot.lock.acquire(timeout=self.timeout):
                raise CartBusy(key, self.timeout)
            try:
                yield
            finally:
                slot.lock.release()
        finally:
            with self._guard:
                slot.users -= 1
                if slot.users == 0:
                    del self._slots[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._slots)
