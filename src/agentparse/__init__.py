"""
User-Agent header parsing.

Usage:
    from agentparse import parse

    agent = parse(request.headers.get("User-Agent"))
    agent.browser.name      # "Chrome"
    agent.browser.engine    # "AppleWebKit"
    agent.platform          # "Windows"
    agent.os                # "Windows 7"
    agent.os_info.version   # "7"
    agent.is_mobile         # False

    # Storage rows
    UserAgentRecord.from_user_agent(agent).model_dump()
"""

from .browser import Browser
from .config import InvalidConfigError, ParserConfig
from .models import UserAgentRecord
from .operating_systems import OSInfo, normalize_os, os_info
from .user_agent import (
    Parser,
    UserAgent,
    get_browser_summary,
    get_device_summary,
    get_os_summary,
    parse,
)

__version__ = "0.1.0"
__all__ = [
    "parse",
    "Parser",
    "ParserConfig",
    "InvalidConfigError",
    "UserAgent",
    "UserAgentRecord",
    "Browser",
    "OSInfo",
    "os_info",
    "normalize_os",
    "get_browser_summary",
    "get_os_summary",
    "get_device_summary",
]
