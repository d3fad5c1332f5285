from __future__ import annotations

import logging
import os
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager

from gemtext.domain.errors import AccessGrantDenied
from gemtext.domain.interfaces import IAccessBroker
from gemtext.domain.models import FileReference

_LOGGER = logging.getLogger(__name__)


class LocalAccessBroker(IAccessBroker):
    """
    Desktop stand-in for security-scoped resource access.

    A grant is given when the file's directory exists and the process may read
    and write there. Outstanding grants are counted per path so callers (and
    tests) can check that every grant was released.
    """

    def __init__(self) -> None:
        self._active: Counter[str] = Counter()

    def start_accessing(self, ref: FileReference) -> bool:
        parent = ref.path.parent
        if not parent.is_dir():
            return False
        target = ref.path if ref.path.exists() else parent
        if not os.access(target, os.R_OK | os.W_OK):
            return False
        self._active[str(ref.path)] += 1
        return True

    def stop_accessing(self, ref: FileReference) -> None:
        key = str(ref.path)
        if self._active[key] <= 1:
            self._active.pop(key, None)
        else:
            self._active[key] -= 1

    @property
    def outstanding(self) -> int:
        return sum(self._active.values())


@contextmanager
def scoped_access(broker: IAccessBroker, ref: FileReference) -> Iterator[FileReference]:
    """Hold an access grant on ref for the duration of the block."""
    if not broker.start_accessing(ref):
        raise AccessGrantDenied(ref.path)
    _LOGGER.debug("Access granted: %s", ref.path)
    try:
        yield ref
    finally:
        broker.stop_accessing(ref)
        _LOGGER.debug("Access released: %s", ref.path)
