"""
Async filesystem helpers for reading and writing NLS JSON files.

Blocking calls run in worker threads via asyncio.to_thread() so that
localizing a plugin never stalls the event loop of the deployment host.
"""

from __future__ import annotations

import asyncio
import json
import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


async def path_exists(path: Path) -> bool:
    """Check whether a file or directory exists."""
    return await asyncio.to_thread(path.exists)


def _read_json_sync(path: Path) -> object:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


async def read_json(path: Path) -> object:
    """
    Read and decode a JSON file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the content is not valid JSON
    """
    return await asyncio.to_thread(_read_json_sync, path)


def _write_json_sync(path: Path, data: object) -> None:
    content = json.dumps(data, ensure_ascii=False)

    # Readers only check for existence, so the target must never be partial
    temp_file = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as temp_file:
            _ = temp_file.write(content)
            temp_file.flush()
            temp_path = Path(temp_file.name)

        _ = temp_path.replace(path)

    except Exception:
        if temp_file is not None:
            Path(temp_file.name).unlink(missing_ok=True)
        raise


async def write_json(path: Path, data: object) -> None:
    """
    Serialize data as JSON and atomically write it to path.

    The content goes to a temporary file in the same directory which then
    replaces the target, so a failed write leaves no file behind.

    Raises:
        OSError: If the temporary file cannot be written or moved into place
    """
    await asyncio.to_thread(_write_json_sync, path, data)
    logger.debug(f"Wrote {path}")


async def read_dir_recursive(directory: Path) -> list[Path]:
    """
    List every file below a directory.

    Sibling subdirectories are walked concurrently and the call returns once
    the whole tree has been visited. Directories are not part of the result
    and the order of the returned paths is unspecified.

    Args:
        directory: Root directory to walk

    Returns:
        Absolute paths of all files found
    """
    paths: list[Path] = []
    await _collect_files(directory.resolve(), paths)
    return paths


def _scan_directory(directory: Path) -> tuple[list[Path], list[Path]]:
    """Split the entries of a directory into files and subdirectories to walk."""
    files: list[Path] = []
    subdirectories: list[Path] = []
    for entry in directory.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            subdirectories.append(entry)
        else:
            files.append(entry)
    return files, subdirectories


async def _collect_files(directory: Path, paths: list[Path]) -> None:
    files, subdirectories = await asyncio.to_thread(_scan_directory, directory)
    paths.extend(files)

    _ = await asyncio.gather(
        *(_collect_files(subdirectory, paths) for subdirectory in subdirectories)
    )
