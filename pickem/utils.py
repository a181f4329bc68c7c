"""Utility functions for file I/O and common operations."""

import json
import logging
import re
import shutil
import time
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from .constants import WEEK_IN_FILENAME

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('pickem.utils')


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with optional schema validation.

    Args:
        path: Path to JSON file (str or Path object)
        schema: Optional Pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        data = load_json('data/games_week_1.json')

        from pickem.schemas import StandingsFile
        standings = load_json('data/standings.json', schema=StandingsFile)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        try:
            validated = schema(**data) if isinstance(data, dict) else schema(data)  # type: ignore[call-arg]
            logger.debug(f'Schema validation passed for: {path}')
            return validated
        except (ValidationError, TypeError) as e:
            logger.error(f'Schema validation failed for {path}: {e}')
            raise ValueError(f'Schema validation failed for {path}:\n{e}') from e

    return data


def save_json(
    path: Path | str,
    data: Any,
    indent: int = 2,
    create_dirs: bool = True,
) -> None:
    """
    Save data as JSON file.

    Args:
        path: Path to write to (str or Path object)
        data: Data to serialize (must be JSON-serializable or Pydantic model)
        indent: Indentation level (default: 2 spaces)
        create_dirs: Create parent directories if they don't exist (default: True)

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)

    logger.debug(f'Saving JSON to: {path}')

    if create_dirs:
        path.parent.mkdir(parents=True, exist_ok=True)

    json_data = data.model_dump() if isinstance(data, BaseModel) else data

    # Serialize first so a bad payload never truncates the existing file
    try:
        text = json.dumps(json_data, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e

    tmp_path = path.with_suffix(path.suffix + '.tmp')
    try:
        tmp_path.write_text(text, encoding='utf-8')
        tmp_path.replace(path)
        logger.debug(f'Successfully saved JSON to: {path}')
    except OSError as e:
        logger.error(f'Failed to write file {path}: {e}')
        raise


def load_json_safe(
    path: Path | str,
    default: Any = None,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with safe fallback to default value.

    Like load_json, but returns default value instead of raising
    exceptions for missing or invalid files.

    Example:
        totals = load_json_safe('data/totals.json', default={})
    """
    try:
        return load_json(path, schema=schema)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        return default


def backup_file(path: Path | str, backup_dir: Path | str) -> Optional[Path]:
    """
    Copy a file into the backup directory before it is overwritten.

    Backups are named '<epoch-ms>_<original name>'.

    Returns:
        Path of the backup, or None if the source does not exist
    """
    path = Path(path)
    if not path.exists():
        return None

    backup_dir = Path(backup_dir)
    backup_dir.mkdir(parents=True, exist_ok=True)
    backup_path = backup_dir / f'{int(time.time() * 1000)}_{path.name}'
    shutil.copyfile(path, backup_path)
    logger.info(f'Backed up {path.name} -> {backup_path}')
    return backup_path


def week_from_filename(filename: str) -> int:
    """
    Extract the week number from an uploaded file name.

    Examples:
        "Spreads_Week3.xlsx" -> 3
        "scores-week_12.xlsx" -> 12

    Raises:
        ValueError: If the name has no week number
    """
    match = re.search(WEEK_IN_FILENAME, Path(filename).name, re.IGNORECASE)
    if not match:
        raise ValueError(f'Filename must contain week number: {filename}')
    return int(match.group(1))
