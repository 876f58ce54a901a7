"""Pydantic models for storing parsed user-agents."""

from pydantic import BaseModel

from .user_agent import UserAgent


class UserAgentRecord(BaseModel):
    """A parsed User-Agent, flattened into a single storage row."""

    user_agent: str = ""
    mozilla: str = ""

    # Operating system
    platform: str = ""
    os: str = ""        # Raw OS string (e.g. "Intel Mac OS X 10_6_8")
    os_name: str = ""   # e.g. "Mac OS X"
    os_version: str = ""  # e.g. "10.6.8"
    localization: str = ""

    # Browser
    browser: str = ""
    browser_version: str = ""
    engine: str = ""
    engine_version: str = ""

    # Classification
    is_bot: bool = False
    is_mobile: bool = False

    @classmethod
    def from_user_agent(cls, agent: UserAgent) -> "UserAgentRecord":
        """Build a record from a parsed UserAgent."""
        info = agent.os_info
        return cls(
            user_agent=agent.ua,
            mozilla=agent.mozilla,
            platform=agent.platform,
            os=agent.os,
            os_name=info.name,
            os_version=info.version,
            localization=agent.localization,
            browser=agent.browser.name,
            browser_version=agent.browser.version,
            engine=agent.browser.engine,
            engine_version=agent.browser.engine_version,
            is_bot=agent.is_bot,
            is_mobile=agent.is_mobile,
        )
