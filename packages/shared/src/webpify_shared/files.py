"""
Output file handling for the converter and server.

Converted images are written as ``output-image-<N>.webp``. The next N is
``max(existing N) + 1``; gaps left by deleted files are never reused.
"""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "output-image-"
OUTPUT_SUFFIX = ".webp"
OUTPUT_NAME_RE = re.compile(r"^output-image-(\d+)\.webp$")

MAX_ALLOCATE_TRIES = 100


def output_name(index: int) -> str:
    return f"{OUTPUT_PREFIX}{index}{OUTPUT_SUFFIX}"


def highest_output_index(folder: Path) -> int:
    """Largest N among ``output-image-<N>.webp`` files in folder, 0 if none."""
    highest = 0
    if not folder.exists():
        return highest

    for entry in folder.iterdir():
        match = OUTPUT_NAME_RE.match(entry.name)
        if match is None or not entry.is_file():
            continue
        highest = max(highest, int(match.group(1)))
    return highest


class OutputSequence:
    """
    Allocates sequential output paths in a single directory.

    Allocation is serialized with a lock, so two conversions in this process
    never pick the same index. Each allocated file is created with exclusive
    mode, so a file another process wrote first is skipped instead of being
    overwritten.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self._lock = threading.Lock()
        self._last_index = 0

    def ensure_directory(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, data: bytes) -> Path:
        """
        Write data to the next free ``output-image-<N>.webp`` and return its path.

        Raises:
            OSError: If the directory can't be created or the file can't be written
        """
        with self._lock:
            self.ensure_directory()
            index = max(self._last_index, highest_output_index(self.output_dir))

            for _ in range(MAX_ALLOCATE_TRIES):
                index += 1
                out_path = self.output_dir / output_name(index)
                try:
                    fh = open(out_path, "xb")
                except FileExistsError:
                    logger.debug("%s already exists, trying next index", out_path.name)
                    continue
                self._last_index = index
                break
            else:
                raise FileExistsError(
                    f"No free output name after {MAX_ALLOCATE_TRIES} tries in {self.output_dir}"
                )

        with fh:
            fh.write(data)

        logger.debug("Wrote %d bytes to %s", len(data), out_path)
        return out_path
