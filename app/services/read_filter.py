from threading import Lock

from .scanner import normalize_code


class ConsecutiveReadFilter:
    """Drops camera reads that repeat the last accepted code.

    The decoder keeps streaming frames while a QR symbol stays in view, so the
    same text arrives many times in a row. Only a change of code is a new scan.
    """

    def __init__(self) -> None:
        self._last_code: str | None = None
        self._lock = Lock()

    def accept(self, code: str) -> bool:
        normalized = normalize_code(code)
        if not normalized:
            return False
        with self._lock:
            if normalized == self._last_code:
                return False
            self._last_code = normalized
            return True

    def forget(self, code: str) -> None:
        normalized = normalize_code(code)
        with self._lock:
            if self._last_code == normalized:
                self._last_code = None

    def reset(self) -> None:
        with self._lock:
            self._last_code = None


class ReadFilterRegistry:
    def __init__(self) -> None:
        self._filters: dict[int, ConsecutiveReadFilter] = {}
        self._lock = Lock()

    def for_scanner(self, scanner_id: int) -> ConsecutiveReadFilter:
        with self._lock:
            read_filter = self._filters.get(scanner_id)
            if read_filter is None:
                read_filter = ConsecutiveReadFilter()
                self._filters[scanner_id] = read_filter
            return read_filter

    def reset(self, scanner_id: int) -> None:
        with self._lock:
            self._filters.pop(scanner_id, None)
