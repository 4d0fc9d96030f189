"""Filesystem access: listing receipt PDFs and writing reports."""

import os
from pathlib import Path

from kirjanpito.domain.parser import filter_filenames


def list_filenames(path: Path) -> list[str]:
    """List filenames in a directory that follow the naming convention.

    Args:
        path: Directory to scan.

    Returns:
        Matching bare filenames, sorted by name.

    Raises:
        OSError: If the directory cannot be read.
    """
    return sorted(filter_filenames(os.listdir(path)))


def write_output(path: Path, text: str) -> None:
    """Write a rendered report as UTF-8.

    Raises:
        OSError: If the file cannot be written.
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
