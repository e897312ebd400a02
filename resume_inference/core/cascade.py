"""
Strategy cascade: an ordered list of extraction heuristics tried until one
produces a valid result.
"""

import logging
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

Strategy = Callable[[str], Optional[str]]


def run_cascade(
    text: str,
    strategies: Sequence[Strategy],
    validate: Optional[Callable[[str], bool]] = None,
    transform: Optional[Callable[[str], str]] = None,
    field: str = "field",
) -> Optional[str]:
    """
    Run strategies in priority order and return the first acceptable value.

    Each raw candidate is passed through `transform` (cleanup/repair) and then
    `validate`. A strategy returning None, or a candidate that fails
    validation, passes control to the next strategy. Returns None when every
    strategy fails.
    """
    for strategy in strategies:
        value = strategy(text)
        if not value:
            continue
        if transform is not None:
            value = transform(value)
        if validate is not None and not validate(value):
            logger.debug(f"{field}: {strategy.__name__} candidate rejected: {value!r}")
            continue
        logger.debug(f"{field}: {strategy.__name__} -> {value!r}")
        return value
    logger.debug(f"{field}: no strategy matched")
    return None
