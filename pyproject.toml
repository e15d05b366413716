[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lzarchive"
version = "0.1.0"
description = "A small LZ78 file compressor and single-file archiver"
requires-python = ">=3.10"
keywords = ["lz78", "compression", "archive", "archiver"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lzarchive = "lzarchive.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lzarchive"]

[tool.pytest.ini_options]
addopts = "-ra"
