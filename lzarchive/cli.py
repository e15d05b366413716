"""Command line entry point for the archiver.

Options: ``--dirs DIR...``, ``--files FILE...``, ``--out ARCHIVE`` and
``--unpack``. Without ``--unpack`` an archive is created.
"""

from __future__ import annotations

import logging
import sys
from typing import Sequence

from lzarchive.archive import ArchiveError, Zipper


def find_value(text: str, what: str, delim: str) -> str:
    """Return the text after ``what`` up to ``delim`` or the end, or ``""``."""
    index = text.find(what)
    if index < 0:
        return ""
    start = index + len(what)
    end = text.find(delim, start)
    return text[start:] if end < 0 else text[start:end]


def vectorize(text: str, what: str, delim: str) -> list[str]:
    """Split the value of option ``what`` into its space-separated items."""
    return [item for item in find_value(text, what, delim).split(" ") if item]


def main(argv: Sequence[str] | None = None) -> int:
    """Create or unpack an archive according to ``argv``."""
    if argv is None:
        argv = sys.argv[1:]
    args = "".join(f"{arg} " for arg in argv)
    dirs = vectorize(args, "--dirs ", " --")
    files = vectorize(args, "--files ", " --")
    out = find_value(args, "--out ", " --").strip()
    unpack = "--unpack" in args

    logger = logging.getLogger("lzarchive")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        zipper = Zipper(out)
        if unpack:
            zipper.extract()
        else:
            zipper.create(dirs, files)
    except ArchiveError as exc:
        print(exc)
        return 1
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())