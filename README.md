# lzarchive

A small archiver that compresses each file with an LZ78-style dictionary coder
and packs the results into one archive file with a plain-text index line.
It uses only the Python standard library.

## Install

```
pip install .
```

## Command line

Pack directories (recursively) and individual files into an archive:

```
lzarchive --dirs photos notes --files todo.txt --out backup.myzip
```

Unpack an archive into the current directory, recreating the recorded
directories:

```
lzarchive --unpack --out backup.myzip
```

Options:

- `--dirs DIR ...`: directories whose files are added recursively
- `--files FILE ...`: single files to add
- `--out PATH`: archive path to write or read
- `--unpack`: extract instead of create

Without `--unpack` an archive is created. Progress messages and paths that
do not exist (which are left out of the archive) are reported on standard
output. If the output path cannot be written, or `--out` is not given when
creating, the archive is written as `zipped.myzip` in the current directory.
On a failure such as an unreadable or malformed archive the command prints
the error and exits with status 1.

## Library

```python
from lzarchive.lz import encode_bytes, decode_bytes
from lzarchive.archive import Zipper, ArchiveError

packed = encode_bytes(b"abracadabra")
assert decode_bytes(packed) == b"abracadabra"

archive_path = Zipper("backup.myzip").create(["photos"], ["todo.txt"])

try:
    restored = Zipper("backup.myzip").extract()
except ArchiveError as exc:
    print(exc)
```

- `lzarchive.lz.encode_bytes(data)` compresses bytes; `decode_bytes(data)`
  reverses it and raises `ValueError` on a malformed stream.
- `lzarchive.lz.encode(name)` compresses `name` to `name.tmp` and returns
  that path; `lzarchive.lz.decode(name)` restores `name` from `name.tmp` and
  returns the restored path.
- `Zipper(out_path).create(dir_paths, file_paths)` writes the archive and
  returns its path (which may be the `zipped.myzip` fallback).
- `Zipper(out_path).extract()` unpacks into the current directory and
  returns the list of restored file paths. Problems are raised as
  `ArchiveError`.

Messages go to the `lzarchive` logger at INFO level.

## Archive layout

The first line holds one `||start||size||dir||name` record per file, where
`start` and `size` locate the file's compressed bytes in the data that
follows the line. Directories are stored relative to the working directory
at packing time, with every `../` removed and a leading `./`. Everything
after the line is the compressed data of every file, one after another.

Each compressed stream begins with one header byte giving the number of
meaningful bits in its final byte (0 when that byte is full), followed by
codes of a dictionary index and one literal byte. The index width starts at
one bit and grows with the dictionary, which is reset before the width
reaches 17 bits.

## Limitations

- Only file contents are stored: no permissions, timestamps or empty
  directories.
- Extraction always writes into the current directory and overwrites files
  of the same name; there is no option to list an archive or choose a
  destination.
- There is no checksum; damage is only noticed when a stream cannot be
  decoded.

## Tests

```
pip install .[test]
pytest
```