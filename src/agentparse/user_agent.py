"""
User-Agent parsing into browser, engine, OS and device information.

Parsing runs as a fixed pipeline over a mutable builder:

    tokenize -> detect_browser -> detect_os -> check_bot -> build()

The order is significant. The OS heuristics depend on the rendering engine
picked by the browser detection, and the bot check only looks at records
the OS detection couldn't classify (flagged as undecided).

Parsing never fails. Unknown or truncated user-agents just produce records
with fewer fields filled in.
"""

import logging
from dataclasses import dataclass, field

from .bots import check_bot
from .browser import Browser, Compat, detect_browser
from .config import DEFAULT_CONFIG, ParserConfig
from .operating_systems import OSInfo, detect_os, os_info
from .tokenizer import has_mobile_token, tokenize

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class UserAgent:
    """
    Parsed user-agent information.

    Attributes:
        ua: The User-Agent string that was parsed
        mozilla: Mozilla compatibility version ("5.0"), if any
        platform: Platform family (Windows, Linux, iPhone, Macintosh, ...)
        os: Raw OS string (e.g. "Intel Mac OS X 10_6_8"), see os_info
        localization: Language tag when the user-agent carries one
        browser: Browser and rendering engine
        is_bot: Whether this is a crawler
        is_mobile: Whether this is a mobile device
        undecided: The OS detection couldn't classify this client
    """
    ua: str = ""
    mozilla: str = ""
    platform: str = ""
    os: str = ""
    localization: str = ""
    browser: Browser = field(default_factory=Browser)
    is_bot: bool = False
    is_mobile: bool = False
    undecided: bool = False

    @property
    def engine(self) -> tuple[str, str]:
        """Rendering engine as (name, version)."""
        return self.browser.engine, self.browser.engine_version

    @property
    def browser_name(self) -> tuple[str, str]:
        """Browser as (name, version)."""
        return self.browser.name, self.browser.version

    @property
    def os_info(self) -> OSInfo:
        """Name and version of the OS, derived from the raw OS string."""
        return os_info(self.os)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "mozilla": self.mozilla,
            "platform": self.platform,
            "os": self.os,
            "localization": self.localization,
            "browser": {
                "engine": self.browser.engine,
                "engine_version": self.browser.engine_version,
                "name": self.browser.name,
                "version": self.browser.version,
            },
            "is_bot": self.is_bot,
            "is_mobile": self.is_mobile,
        }


@dataclass
class UserAgentBuilder:
    """Mutable record the detection stages fill in, frozen by build()."""
    ua: str = ""
    detect_bots: bool = True
    mozilla: str = ""
    platform: str = ""
    os: str = ""
    localization: str = ""
    browser: Browser = field(default_factory=Browser)
    is_bot: bool = False
    is_mobile: bool = False
    undecided: bool = False

    def build(self) -> UserAgent:
        """Freeze the collected fields into a UserAgent."""
        return UserAgent(
            ua=self.ua,
            mozilla=self.mozilla,
            platform=self.platform,
            os=self.os,
            localization=self.localization,
            browser=self.browser,
            is_bot=self.is_bot,
            is_mobile=self.is_mobile,
            undecided=self.undecided,
        )


class Parser:
    """Reusable User-Agent parser.

    Parsers hold nothing but their configuration, so one instance can be
    shared between threads.
    """

    def __init__(self, config: ParserConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def parse(self, user_agent: str | None) -> UserAgent:
        """
        Parse a User-Agent header.

        Args:
            user_agent: The User-Agent header value (None is treated as empty)

        Returns:
            UserAgent with whatever could be detected

        Raises:
            TypeError: If user_agent is neither a string nor None
        """
        if user_agent is None:
            user_agent = ""
        if not isinstance(user_agent, str):
            raise TypeError(f"User-Agent must be a string, got {type(user_agent).__name__}")

        max_length = self.config.max_length
        if max_length is not None and len(user_agent) > max_length:
            logger.debug(f"Truncating User-Agent from {len(user_agent)} to {max_length} characters")
            user_agent = user_agent[:max_length]

        p = UserAgentBuilder(ua=user_agent, detect_bots=self.config.detect_bots)
        if not user_agent.strip():
            return p.build()

        sections = tokenize(user_agent)
        if has_mobile_token(sections):
            p.is_mobile = True

        first = sections[0]
        if first.name == Compat.MOZILLA:
            p.mozilla = first.version

        result = detect_browser(sections)
        p.browser = result.browser
        if result.mozilla is not None:
            p.mozilla = result.mozilla

        detect_os(p, first)

        if p.undecided:
            logger.debug(f"Undecided User-Agent: {user_agent!r}")
            if self.config.detect_bots:
                check_bot(p, sections)

        return p.build()


_default_parser = Parser()


def parse(user_agent: str | None) -> UserAgent:
    """
    Parse a User-Agent header with the default configuration.

    Examples:
        >>> agent = parse("Mozilla/5.0 (Windows NT 6.1; WOW64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/41.0.2228.0 Safari/537.36")
        >>> agent.browser.name, agent.platform, agent.os
        ('Chrome', 'Windows', 'Windows 7')
    """
    return _default_parser.parse(user_agent)


def get_browser_summary(agents: list[UserAgent]) -> dict[str, int]:
    """
    Get browser usage breakdown.

    Args:
        agents: List of UserAgent from parse()

    Returns:
        Dict mapping browser name to count
    """
    counts: dict[str, int] = {}
    for agent in agents:
        key = agent.browser.name or UNKNOWN
        counts[key] = counts.get(key, 0) + 1
    return dict(sorted(counts.items(), key=lambda x: x[1], reverse=True))


def get_os_summary(agents: list[UserAgent]) -> dict[str, int]:
    """
    Get OS usage breakdown, by OS name without version.

    Args:
        agents: List of UserAgent from parse()

    Returns:
        Dict mapping OS name to count
    """
    counts: dict[str, int] = {}
    for agent in agents:
        key = agent.os_info.name or UNKNOWN
        counts[key] = counts.get(key, 0) + 1
    return dict(sorted(counts.items(), key=lambda x: x[1], reverse=True))


def get_device_summary(agents: list[UserAgent]) -> dict[str, int]:
    """
    Get bot/mobile/desktop breakdown.

    Args:
        agents: List of UserAgent from parse()

    Returns:
        Dict mapping device kind to count
    """
    counts: dict[str, int] = {}
    for agent in agents:
        if agent.is_bot:
            key = "bot"
        elif agent.is_mobile:
            key = "mobile"
        else:
            key = "desktop"
        counts[key] = counts.get(key, 0) + 1
    return dict(sorted(counts.items(), key=lambda x: x[1], reverse=True))
