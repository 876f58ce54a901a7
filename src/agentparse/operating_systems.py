"""
Operating system, platform and localization detection.

The OS lives in the comment of the first section, but every engine family
lays that comment out differently:

    Mozilla/5.0 (Windows NT 6.1; WOW64; rv:40.0) Gecko/20100101 Firefox/40.1
    Mozilla/5.0 (Linux; U; Android 4.0.3; ko-kr; LG-L160L Build/IML74K) AppleWebKit/534.30
    Opera/9.80 (Windows NT 6.1; U; es-ES) Presto/2.9.181 Version/12.00

so there is one heuristic per family. They index into fixed comment
positions and always check the length first; short or truncated comments
simply leave fields unset.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .bots import google_bot
from .browser import Compat, Engine
from .tokenizer import Section

if TYPE_CHECKING:
    from .user_agent import UserAgentBuilder


@dataclass(frozen=True)
class OSInfo:
    """
    Combined information on the operating system.

    Attributes:
        full_name: The raw OS string, as found in UserAgent.os
        name: OS name, e.g. "Mac OS X" rather than "Intel Mac OS X"
        version: OS version, e.g. "7" for Windows 7 or "10.8" for Mac OS X
    """
    full_name: str = ""
    name: str = ""
    version: str = ""


# =============================================================================
# NORMALIZATION
# =============================================================================

WINDOWS_NT_VERSIONS = {
    "5.0": "Windows 2000",
    "5.01": "Windows 2000, Service Pack 1 (SP1)",
    "5.1": "Windows XP",
    "5.2": "Windows XP x64 Edition",
    "6.0": "Windows Vista",
    "6.1": "Windows 7",
    "6.2": "Windows 8",
    "6.3": "Windows 8.1",
    "10.0": "Windows 10",
}


def normalize_os(name: str) -> str:
    """
    Normalize the name of the operating system.

    Only Windows NT names are rewritten, to their marketing name:

        >>> normalize_os("Windows NT 6.1")
        'Windows 7'
        >>> normalize_os("Intel Mac OS X 10_6_8")
        'Intel Mac OS X 10_6_8'
    """
    parts = name.split(" ", 2)
    if len(parts) != 3 or parts[1] != "NT":
        return name
    return WINDOWS_NT_VERSIONS.get(parts[2], name)


def os_name(parts: list[str]) -> tuple[str, str]:
    """
    Split the words of an OS string into its name and version.

    The version is assumed to be the last word, unless it turns out to be
    an architecture (x86_64, i686) or the "X" of "Mac OS X".
    """
    if len(parts) == 1:
        return parts[0], ""

    name_parts = parts[:-1]
    version = parts[-1]

    # Nicer looking Mac OS X
    if len(name_parts) >= 2 and name_parts[0] == "Intel" and name_parts[1] == "Mac":
        name_parts = name_parts[1:]
    name = " ".join(name_parts)

    if "x86" in version or "i686" in version:
        version = ""
    elif version == "X" and name == "Mac OS":
        name = f"{name} {version}"
        version = ""

    return name, version.replace("_", ".")


def os_info(os: str) -> OSInfo:
    """
    Break a raw OS string into name and version.

    Examples:
        >>> os_info("Intel Mac OS X 10_6_8")
        OSInfo(full_name='Intel Mac OS X 10_6_8', name='Mac OS X', version='10.6.8')
        >>> os_info("CPU iPhone OS 7_0_2 like Mac OS X")
        OSInfo(full_name='CPU iPhone OS 7_0_2 like Mac OS X', name='iPhone OS', version='7.0.2')
    """
    # iOS puts "CPU" and "like Mac OS X" around the actual name
    cleaned = os.replace("like Mac OS X", "", 1).replace("CPU", "", 1).strip(" ")
    parts = cleaned.split(" ")

    # The x64 suffix is an architecture, not part of the version
    if cleaned == "Windows XP x64 Edition":
        parts = parts[:-2]

    name, version = os_name(parts)

    # Some names carry their version after a slash, e.g. "Android/4.1"
    if "/" in name:
        slash_parts = name.split("/")
        name, version = slash_parts[0], slash_parts[1]

    return OSInfo(full_name=os, name=name, version=version.replace("_", "."))


# =============================================================================
# PLATFORM DETECTION
# =============================================================================

PLATFORM_PREFIXES = [
    ("Windows", "Windows"),
    ("Symbian", "Symbian"),
    ("webOS", "webOS"),
]


def get_platform(comment: tuple[str, ...]) -> str:
    """Get the platform from the comment of the first section."""
    if not comment or comment[0] == "compatible":
        return ""
    token = comment[0]
    for prefix, platform in PLATFORM_PREFIXES:
        if token.startswith(prefix):
            return platform
    if token == "BB10":
        return "BlackBerry"
    return token


# =============================================================================
# PER-ENGINE HEURISTICS
# =============================================================================

def webkit(p: "UserAgentBuilder", comment: tuple[str, ...]) -> None:
    """Guess OS, localization and mobility for WebKit browsers."""
    if p.platform == "webOS":
        p.browser = replace(p.browser, name=p.platform)
        p.os = "Palm"
        if len(comment) > 2:
            p.localization = comment[2]
        p.is_mobile = True
    elif p.platform == "Symbian":
        p.is_mobile = True
        p.browser = replace(p.browser, name=p.platform)
        p.os = comment[0]
    elif p.platform == "Linux":
        p.is_mobile = True
        # Plain WebKit on Linux without any other browser token is Android
        if p.browser.name == "Safari":
            p.browser = replace(p.browser, name="Android")
        if len(comment) > 1:
            if comment[1] == "U":
                if len(comment) > 2:
                    p.os = comment[2]
                else:
                    # "(Linux; U)" is a desktop build
                    p.is_mobile = False
                    p.os = comment[0]
            else:
                p.os = comment[1]
        if len(comment) > 3:
            p.localization = comment[3]
        elif len(comment) == 3:
            google_bot(p)
    elif comment:
        if len(comment) > 3:
            p.localization = comment[3]
        if comment[0].startswith("Windows NT"):
            p.os = normalize_os(comment[0])
        elif len(comment) < 2:
            p.localization = comment[0]
        elif len(comment) < 3:
            if not google_bot(p):
                p.os = normalize_os(comment[1])
        else:
            p.os = normalize_os(comment[2])
        if p.platform == "BlackBerry":
            p.browser = replace(p.browser, name=p.platform)
            if p.os == "Touch":
                p.os = p.platform


def gecko(p: "UserAgentBuilder", comment: tuple[str, ...]) -> None:
    """Guess OS, localization and mobility for Gecko browsers."""
    if len(comment) < 2:
        return

    if comment[1] == "U":
        if len(comment) > 2:
            p.os = normalize_os(comment[2])
        else:
            p.os = normalize_os(comment[1])
    else:
        if p.platform == "Android":
            # Firefox for Android swaps platform and OS
            p.is_mobile = True
            p.platform, p.os = normalize_os(comment[1]), p.platform
        elif comment[0] in ("Mobile", "Tablet"):
            p.is_mobile = True
            p.os = "FirefoxOS"
        elif not p.os:
            p.os = normalize_os(comment[1])

    # Firefox on Ubuntu puts "rv:XX.X" where the localization usually is
    if len(comment) > 3 and not comment[3].startswith("rv:"):
        p.localization = comment[3]


def trident(p: "UserAgentBuilder", comment: tuple[str, ...]) -> None:
    """Guess OS and mobility for Internet Explorer."""
    # Internet Explorer only runs on Windows
    p.platform = "Windows"

    # IE 11 gets its OS assigned together with the platform
    if not p.os:
        if len(comment) > 2:
            p.os = normalize_os(comment[2])
        else:
            p.os = "Windows NT 4.0"

    if any(token.startswith("IEMobile") for token in comment):
        p.is_mobile = True


def opera(p: "UserAgentBuilder", comment: tuple[str, ...]) -> None:
    """Guess OS, localization and mobility for Presto-based Opera."""
    if comment[0].startswith("Windows"):
        p.platform = "Windows"
        p.os = normalize_os(comment[0])
        if len(comment) > 2:
            if len(comment) > 3 and comment[2].startswith("MRA"):
                p.localization = comment[3]
            else:
                p.localization = comment[2]
    else:
        if comment[0].startswith("Android"):
            p.is_mobile = True
        p.platform = comment[0]
        if len(comment) > 1:
            p.os = comment[1]
            if len(comment) > 3:
                p.localization = comment[3]
        else:
            p.os = comment[0]


def dalvik(p: "UserAgentBuilder", comment: tuple[str, ...]) -> None:
    """Guess the OS of Android apps, which send the Dalvik VM as user-agent."""
    if comment[0].startswith("Linux"):
        p.platform = comment[0]
        if len(comment) > 2:
            p.os = comment[2]
        p.is_mobile = True


# Other engines (EdgeHTML, Presto, KHTML, ...) keep what the platform gave
ENGINE_HEURISTICS = {
    Engine.GECKO.value: gecko,
    Engine.WEBKIT.value: webkit,
    Engine.TRIDENT.value: trident,
}


def detect_os(p: "UserAgentBuilder", section: Section) -> None:
    """
    Detect platform, OS, localization and mobility from the first section.

    The browser engine must already be known. Clients that can't be
    classified are flagged as undecided so the bot check can look at them.
    """
    comment = section.comment

    if section.name == Compat.MOZILLA:
        # IE 11 breaks the old layout, its OS is the first comment token
        p.platform = get_platform(comment)
        if p.platform == "Windows" and comment:
            p.os = normalize_os(comment[0])

        if not p.browser.engine:
            p.undecided = True
            return
        heuristic = ENGINE_HEURISTICS.get(p.browser.engine)
        if heuristic:
            heuristic(p, comment)
    elif section.name == Compat.OPERA:
        if comment:
            opera(p, comment)
    elif section.name == Compat.DALVIK:
        if comment:
            dalvik(p, comment)
    else:
        # Either a bot or just a weird browser
        p.undecided = True
