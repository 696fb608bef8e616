"""Line-oriented comma-separated reader with peek and skip."""

from __future__ import annotations

from typing import IO


def parse_row(line: str) -> list[str]:
    """Split a line on commas; no quoting is recognised."""
    return line.split(",")


class CSVReader:
    """Reads comma-separated rows from a file one line at a time."""

    def __init__(self, path: str | None = None) -> None:
        self._file: IO[str] | None = None
        self._eof = False
        if path is not None:
            self.open(path)

    def open(self, path: str) -> None:
        self.close()
        self._file = open(path, "r", newline="\n")
        self._eof = False

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def is_open(self) -> bool:
        return self._file is not None

    def has_data(self) -> bool:
        """False once a read has reached the end of the file."""
        return self._file is not None and not self._eof

    def _read_line(self) -> tuple[str, bool]:
        if self._file is None:
            raise ValueError("no file is open")
        line = self._file.readline()
        if line.endswith("\n"):
            return line[:-1], False
        return line, True

    def next_row(self) -> list[str]:
        line, hit_end = self._read_line()
        if hit_end:
            self._eof = True
        return parse_row(line)

    def peek(self) -> list[str]:
        """Return the next row without consuming it."""
        if self._file is None:
            raise ValueError("no file is open")
        position = self._file.tell()
        line, _ = self._read_line()
        self._file.seek(position)
        return parse_row(line)

    def skip(self, n_lines: int = 1) -> None:
        for _ in range(n_lines):
            _, hit_end = self._read_line()
            if hit_end:
                self._eof = True
                return

    def __enter__(self) -> CSVReader:
        return self

    def __exit__(self, *args) -> None:
        self.close()