"""File loading and money rounding shared by the engine."""

import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('golftrip.utils')


def load_json(path: Path | str, schema: type[T]) -> T:
    """
    Read a round or engine-config file and validate it.

    Args:
        path: Path to the JSON file
        schema: Pydantic model the file must match (RoundFile, EngineConfig)

    Returns:
        The validated model

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not JSON
        ValueError: If the data does not match the schema
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'{schema.__name__} file not found: {path}')

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        logger.error(f'{path} is not valid JSON: {e.msg} at position {e.pos}')
        raise

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__}: {e.error_count()} errors')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def round_money(amount: float, places: int = 2) -> float:
    """Round a money amount, normalising -0.0 to 0.0."""
    return round(amount, places) + 0.0
