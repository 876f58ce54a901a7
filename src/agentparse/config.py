"""
Configuration for the User-Agent parser.
"""
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class InvalidConfigError(ValueError):
    """Raised when a ParserConfig value is out of range."""
    pass


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for a Parser instance.

    Usage:
        config = ParserConfig(max_length=1024)
        parser = Parser(config)
    """

    # Run the bot check on user-agents the engine heuristics can't classify
    detect_bots: bool = True

    # Headers longer than this are truncated before tokenizing (None = no limit)
    max_length: int | None = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_max_length()

    def _validate_max_length(self) -> None:
        if self.max_length is None:
            return
        if isinstance(self.max_length, bool) or not isinstance(self.max_length, int):
            raise InvalidConfigError(
                f"max_length must be an integer or None. Got {self.max_length!r}."
            )
        if self.max_length <= 0:
            logger.warning(f"Rejecting non-positive max_length: {self.max_length}")
            raise InvalidConfigError(
                f"max_length must be positive. Got {self.max_length}."
            )


DEFAULT_CONFIG = ParserConfig()
