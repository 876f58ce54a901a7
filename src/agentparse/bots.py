"""
Bot and crawler detection for undecided user-agents.

Browsers follow the "Mozilla/5.0 (...) Engine/x Browser/y" layout closely
enough for the engine heuristics to make sense of them. Whatever falls
through is flagged as undecided, and this module decides whether it is a
crawler or just an unusual client:

    Googlebot/2.1 (+http://www.google.com/bot.html)     -> bot "Googlebot"
    Mozilla/5.0 (compatible; Yahoo! Slurp; http://...)  -> bot "Yahoo! Slurp"
    curl/7.88.1                                         -> client "curl" 7.88.1

Crawlers either say so in their product name or link to a page explaining
themselves, so those are the two things we look for.
"""

import logging
import re
from dataclasses import replace
from typing import TYPE_CHECKING

from .browser import Browser
from .tokenizer import Section

if TYPE_CHECKING:
    from .user_agent import UserAgentBuilder

logger = logging.getLogger(__name__)

# Product names that give a crawler away
BOT_NAME_PATTERNS = [
    r"bot",
    r"crawler",
    r"sp(i|y)der",
    r"search",
    r"worm",
    r"fetch",
    r"nutch",
]

# Compiled once at module load
_BOT_NAME_REGEX = re.compile("(" + "|".join(BOT_NAME_PATTERNS) + ")", re.IGNORECASE)

# Website a crawler links to in its comment
_SITE_REGEX = re.compile(r"http[s]?://.+\.\w+")


def get_from_site(comment: tuple[str, ...]) -> str:
    """
    Get the name of a bot from the website mentioned in its comment.

    Short comments hold the website in the first token. In longer ones it
    is the third token (fourth if there are exactly four) and the name is
    the token right before it.

    Returns:
        The bot name, or "" if the comment doesn't mention a website
    """
    if not comment:
        return ""

    index = 2
    if len(comment) < 3:
        index = 0
    elif len(comment) == 4:
        index = 3

    match = _SITE_REGEX.search(comment[index])
    if not match:
        return ""
    if index == 0:
        return match.group(0)
    return comment[index - 1].strip()


def google_bot(p: "UserAgentBuilder") -> bool:
    """
    Check for Google's mobile crawlers (Googlebot, AdsBot-Google-Mobile, ...).

    They disguise themselves as an Android or iPhone browser, so the only
    hint is "Google" somewhere in the header. A match clears the platform
    and defers the record to the bot check.

    Returns:
        Whether the record is undecided
    """
    if p.detect_bots and "Google" in p.ua:
        p.platform = ""
        p.undecided = True
    return p.undecided


def set_simple(p: "UserAgentBuilder", name: str, version: str, bot: bool) -> None:
    """Reset the record to a plain name/version client."""
    p.is_bot = bot
    if not bot:
        p.mozilla = ""
    p.browser = Browser(name=name, version=version)
    p.os = ""
    p.localization = ""


def fix_other(p: "UserAgentBuilder", sections: list[Section]) -> None:
    """Treat the first product as the browser of an unknown client."""
    if sections:
        p.browser = replace(p.browser, name=sections[0].name, version=sections[0].version)
        p.mozilla = ""


def check_bot(p: "UserAgentBuilder", sections: list[Section]) -> None:
    """
    Decide whether an undecided record is a bot or some other client.

    Args:
        p: Record being built, flagged as undecided
        sections: Tokenized User-Agent
    """
    # A lone product without the Mozilla token
    if len(sections) == 1 and sections[0].name != "Mozilla":
        section = sections[0]
        p.mozilla = ""

        if _BOT_NAME_REGEX.search(section.name):
            logger.debug(f"Bot detected from product name: {section.name}")
            set_simple(p, section.name, "", True)
            return

        if get_from_site(section.comment):
            logger.debug(f"Bot detected from website in comment: {section.name}")
            set_simple(p, section.name, section.version, True)
            return

        # Not a bot, just some weird client
        set_simple(p, section.name, section.version, False)
        return

    for section in sections:
        name = get_from_site(section.comment)
        if name:
            bot_name, _, version = name.partition("/")
            logger.debug(f"Bot detected from website in comment: {bot_name}")
            set_simple(p, bot_name, version, True)
            return

    fix_other(p, sections)
