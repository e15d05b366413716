"""Multi-file archives built on the LZ codec.

An archive starts with a single header line that lists every stored file as
``||start||size||directory||name``. Offsets are relative to the first byte
after the header line. The compressed file bodies follow, back to back.
Directories are stored relative to the working directory with every
``../`` removed, and always start with ``./``.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from lzarchive import lz

DEFAULT_NAME = "zipped.myzip"
SEPARATOR = "||"

log = logging.getLogger(__name__)


class ArchiveError(Exception):
    """Raised when an archive cannot be written, read or unpacked."""


@dataclass
class _Entry:
    name: str
    start: int = 0
    size: int = 0


def _tmp(path: str) -> str:
    return path + lz.TMP_SUFFIX


def _relative_dir(directory: str) -> str:
    try:
        rel = os.path.relpath(directory)
    except ValueError:
        rel = directory
    rel = rel.replace("\\", "/")
    if rel:
        rel += "/"
    while "../" in rel:
        rel = rel.replace("../", "")
    if "./" not in rel:
        rel = "./" + rel
    return rel


def _parse_archive(raw: bytes) -> tuple[dict[str, list[_Entry]], int]:
    """Return the file table and the offset where file bodies start."""
    if not raw.startswith(SEPARATOR.encode()):
        raise ArchiveError("Invalid archive file.")
    newline = raw.find(b"\n")
    if newline < 0:
        raise ArchiveError("Invalid archive file.")
    try:
        line = raw[:newline].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ArchiveError("Invalid archive file.") from exc
    if "\r" in line:
        line = line[: line.index("\r")]
    if len(re.findall(r"\|(?=\|)", line)) % 4:
        raise ArchiveError("Invalid archive file.")
    parts = line.split(SEPARATOR)[1:]
    if len(parts) % 4:
        raise ArchiveError("Invalid archive file.")

    files: dict[str, list[_Entry]] = {}
    records = iter(parts)
    for start_text, size_text, directory, name in zip(records, records, records, records):
        try:
            start, size = int(start_text), int(size_text)
        except ValueError as exc:
            raise ArchiveError("Invalid archive file.") from exc
        if start < 0 or size < 0:
            raise ArchiveError("Invalid archive file.")
        files.setdefault(directory, []).append(_Entry(name, start, size))
    return files, newline + 1


class Zipper:
    """Packs files into a single archive and unpacks them again."""

    def __init__(self, out_path: str | os.PathLike[str]) -> None:
        self.out_path = os.fspath(out_path)
        self._files: dict[str, list[_Entry]] = {}

    def _entries(self) -> Iterator[tuple[str, _Entry]]:
        for directory in sorted(self._files):
            for entry in self._files[directory]:
                yield directory, entry

    # ------------------------------------------------------------------ create

    def create(self, dir_paths: Iterable[str], file_paths: Iterable[str]) -> Path:
        """Archive every file under ``dir_paths`` plus ``file_paths``.

        Returns the path of the archive written, which falls back to
        ``zipped.myzip`` in the working directory when the requested
        output cannot be created.
        """
        self._files = {}
        self._collect(dir_paths, file_paths)
        self._verify_output()
        self._encode_all()
        self._measure()
        self._write_archive()
        return Path(self.out_path)

    def _collect(self, dir_paths: Iterable[str], file_paths: Iterable[str]) -> None:
        for directory in dir_paths:
            if not os.path.exists(directory):
                log.info("Directory: %s doesn't exist. Excluding from archive", directory)
                continue
            for root, subdirs, names in os.walk(directory):
                subdirs.sort()
                for name in sorted(names):
                    self._add_file(os.path.join(root, name))
        for file_path in file_paths:
            if os.path.isfile(file_path):
                self._add_file(file_path)
            else:
                log.info("File: %s doesn't exist. Excluding from archive", file_path)

    def _add_file(self, path: str) -> None:
        absolute = os.path.abspath(path)
        directory = os.path.join(os.path.dirname(absolute), "")
        self._files.setdefault(directory, []).append(
            _Entry(os.path.basename(absolute), 0, os.path.getsize(absolute))
        )

    def _verify_output(self) -> None:
        parent = Path(os.path.abspath(self.out_path)).parent
        first_missing = None
        probe = parent
        while not probe.exists() and probe != probe.parent:
            first_missing = probe
            probe = probe.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            pass
        try:
            with open(self.out_path, "w", encoding="utf-8"):
                pass
        except OSError:
            self.out_path = os.path.join(os.getcwd(), DEFAULT_NAME)
            log.info("Cannot resolve output filename. Default filename set:\n%s", self.out_path)
            if first_missing is not None:
                shutil.rmtree(first_missing, ignore_errors=True)
        else:
            os.remove(self.out_path)

    def _encode_all(self) -> None:
        for directory, entry in self._entries():
            path = directory + entry.name
            log.info("Encrypting %s", path)
            try:
                lz.encode(path)
            except OSError as exc:
                raise ArchiveError(f"Cannot open files: {path}") from exc

    def _measure(self) -> None:
        offset = 0
        for directory, entry in self._entries():
            entry.start = offset
            entry.size = os.path.getsize(_tmp(directory + entry.name))
            offset += entry.size

    def _write_archive(self) -> None:
        header = "".join(
            f"{SEPARATOR}{entry.start}{SEPARATOR}{entry.size}"
            f"{SEPARATOR}{_relative_dir(directory)}{SEPARATOR}{entry.name}"
            for directory, entry in self._entries()
        )
        try:
            with open(self.out_path, "wb") as out:
                out.write(header.encode("utf-8") + b"\n")
                for directory, entry in self._entries():
                    tmp = _tmp(directory + entry.name)
                    try:
                        with open(tmp, "rb") as chunk:
                            shutil.copyfileobj(chunk, out)
                    except OSError as exc:
                        raise ArchiveError("Cannot open input file.") from exc
                    os.remove(tmp)
        except ArchiveError:
            raise
        except OSError as exc:
            raise ArchiveError("Cannot open output file.") from exc

    # ----------------------------------------------------------------- extract

    def extract(self) -> list[Path]:
        """Unpack the archive into the working directory.

        Returns the paths of the restored files.
        """
        try:
            raw = Path(self.out_path).read_bytes()
        except OSError as exc:
            raise ArchiveError("Cannot open archive file.") from exc
        self._files, body_start = _parse_archive(raw)
        self._make_hierarchy(raw[body_start:])
        return self._decode_all()

    def _make_hierarchy(self, body: bytes) -> None:
        for directory in self._files:
            try:
                Path(directory).mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ArchiveError("Cannot create directory.") from exc
        for directory, entry in self._entries():
            chunk = body[entry.start : entry.start + entry.size]
            if len(chunk) != entry.size:
                raise ArchiveError(f"Archive is truncated at {directory + entry.name}")
            try:
                Path(_tmp(directory + entry.name)).write_bytes(chunk)
            except OSError as exc:
                raise ArchiveError("Cannot open output file.") from exc

    def _decode_all(self) -> list[Path]:
        restored = []
        for directory, entry in self._entries():
            path = directory + entry.name
            log.info("Decrypting %s", path)
            try:
                restored.append(lz.decode(path))
            except ValueError as exc:
                raise ArchiveError(f"Corrupt data for {path}: {exc}") from exc
            except OSError as exc:
                raise ArchiveError(f"Cannot open files: {path}") from exc
            os.remove(_tmp(path))
        return restored