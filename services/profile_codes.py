"""Profile code generation.

A profile code is a 4-digit number between 1000 and 9999 that users share
instead of their email. Codes are drawn uniformly at random and redrawn on
collision, with a fixed attempt budget: once the table gets crowded the
caller gets a `CodeGenerationError` instead of an endless loop.
"""

import os
import random
from typing import Callable, Iterator, Optional

from core.exceptions import CodeGenerationError, ConfigurationError
from core.logger import get_logger

logger = get_logger("services.profile_codes")

CODE_MIN = 1000
CODE_MAX = 9999
DEFAULT_MAX_ATTEMPTS = 10


def max_attempts_from_env() -> int:
    """Read PROFILE_CODE_MAX_ATTEMPTS, defaulting to 10."""
    raw = os.getenv("PROFILE_CODE_MAX_ATTEMPTS")
    if raw is None:
        return DEFAULT_MAX_ATTEMPTS
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        raise ConfigurationError(
            "PROFILE_CODE_MAX_ATTEMPTS must be a positive integer",
            config_key="PROFILE_CODE_MAX_ATTEMPTS",
        )
    return value


class ProfileCodeGenerator:
    """Draws profile codes that are not yet taken.

    Args:
        rng: Random source; pass a seeded `random.Random` for repeatable draws.
        max_attempts: Total number of draws allowed per generation.
    """

    def __init__(self, rng: Optional[random.Random] = None, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def draw(self) -> str:
        return str(self.rng.randint(CODE_MIN, CODE_MAX))

    def candidates(self, is_taken: Callable[[str], bool]) -> Iterator[str]:
        """Yield codes that `is_taken` reports free, sharing one attempt budget.

        A caller whose insert still conflicts (another request claimed the
        code in between) simply asks for the next candidate. Every draw,
        free or not, counts against `max_attempts`.

        Raises:
            CodeGenerationError: When the budget is spent.
        """
        for attempt in range(1, self.max_attempts + 1):
            code = self.draw()
            if is_taken(code):
                logger.info("Profile code collision (attempt %s/%s)", attempt, self.max_attempts)
                continue
            yield code
        logger.error("No free profile code after %s attempts", self.max_attempts)
        raise CodeGenerationError(self.max_attempts)

    def generate(self, is_taken: Callable[[str], bool]) -> str:
        """Return the first free code.

        Raises:
            CodeGenerationError: If every draw collides.
        """
        return next(iter(self.candidates(is_taken)))


__all__ = ["ProfileCodeGenerator", "max_attempts_from_env", "CODE_MIN", "CODE_MAX"]
