import logging

from logadapter.core.logging.levels import parse_level


def to_level_name(value: str | int | None) -> str | None:
    """
    Normalize a level given as an alias ("warn", "fatal"), a name in any case,
    or a number ("30", 40) to the canonical name `logging` uses ("WARNING",
    "CRITICAL"). Numbers without a registered name come back as "Level N".

    Raises ValueError for unknown names; pydantic reports it as a validation error.
    """
    if value is None:
        return None
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, int):
        return logging.getLevelName(value)
    return logging.getLevelName(parse_level(value))


def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()
