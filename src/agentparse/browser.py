"""
Browser and rendering engine detection.

The browser is derived from the section sequence as a whole. Position
matters: the first section is the compatibility token, the second one is
usually the rendering engine and the ones after it carry the real browser
identity. Every WebKit browser also claims to be Safari and IE 11 claims to
be "like Gecko", so the rules below are evaluated in a fixed order and the
first one that applies wins.
"""

import re
from dataclasses import dataclass
from enum import Enum

from .tokenizer import Section


class Compat(str, Enum):
    """Names of the first section that select a detection strategy."""
    MOZILLA = "Mozilla"
    OPERA = "Opera"
    DALVIK = "Dalvik"


class Engine(str, Enum):
    """Rendering engine identities."""
    WEBKIT = "AppleWebKit"
    GECKO = "Gecko"
    TRIDENT = "Trident"
    PRESTO = "Presto"
    EDGE_HTML = "EdgeHTML"
    # IE 11 sends "like Gecko" where the engine usually goes
    LIKE = "like"


# IE 11 reports its version as "rv:11.0" inside the first comment
IE11_VERSION_REGEX = re.compile(r"^rv:(.+)$")

# For IE 8 through 10 the Trident token is more accurate than the MSIE one,
# which may report the compatibility version instead.
TRIDENT_VERSIONS = {
    "4.0": "8.0",
    "5.0": "9.0",
    "6.0": "10.0",
}

INTERNET_EXPLORER = "Internet Explorer"


@dataclass(frozen=True)
class Browser:
    """
    Browser information extracted from a User-Agent.

    Attributes:
        engine: Rendering engine (AppleWebKit, Gecko, Trident, Presto, ...)
        engine_version: Version of the rendering engine
        name: Browser name (Chrome, Firefox, Internet Explorer, ...)
        version: Browser version
    """
    engine: str = ""
    engine_version: str = ""
    name: str = ""
    version: str = ""


@dataclass(frozen=True)
class BrowserResult:
    """Outcome of browser detection.

    `mozilla` is only set when detection overrides the compatibility
    version taken from the first section (Dalvik clients).
    """
    browser: Browser
    mozilla: str | None = None


def _webkit_browser(sections: list[Section], version_section: Section, version: str) -> tuple[str, str, str]:
    """Return (name, version, engine override) for AppleWebKit user-agents."""
    last = sections[-1]
    if last.name == "Edge":
        return "Edge", last.version, Engine.EDGE_HTML.value
    if last.name == "OPR":
        return "Opera", last.version, ""
    if version_section.name == "Chrome":
        return "Chrome", version, ""
    if version_section.name == "Chromium":
        return "Chromium", version, ""
    return "Safari", version, ""


def _ie11_version(comment: tuple[str, ...]) -> str:
    for token in comment:
        match = IE11_VERSION_REGEX.match(token)
        if match:
            return match.group(1)
    return ""


def _legacy_ie_version(comment: tuple[str, ...]) -> str:
    """Version of IE 10 and older from "compatible; MSIE x.y; ...; Trident/z"."""
    version = ""
    for token in comment:
        if token.startswith("Trident/"):
            # Tokens outside the table fall back to the MSIE token
            version = TRIDENT_VERSIONS.get(token[len("Trident/"):], "")
            break
    if not version:
        version = comment[1][len("MSIE"):].strip()
    return version


def _detect_engine_browser(sections: list[Section]) -> Browser:
    """Detection for user-agents with an engine section after the first one."""
    engine = sections[1]
    browser = Browser(engine=engine.name, engine_version=engine.version)
    if len(sections) <= 2:
        return browser

    # On some platforms (e.g. Ubuntu) the section after the engine comment
    # has no version, in that case the next one carries it.
    version_index = 2
    if sections[2].version == "" and len(sections) > 3:
        version_index = 3
    version_section = sections[version_index]
    version = version_section.version

    if engine.name == Engine.WEBKIT:
        name, version, engine_override = _webkit_browser(sections, version_section, version)
        if engine_override:
            return Browser(engine=engine_override, name=name, version=version)
        return Browser(engine=engine.name, engine_version=engine.version, name=name, version=version)

    if engine.name == Engine.GECKO:
        name = sections[2].name
        # Mail.Ru agent builds inject an "MRA" section before the browser
        if name == "MRA" and len(sections) > 4:
            name = sections[4].name
            version = sections[4].version
        return Browser(engine=engine.name, engine_version=engine.version, name=name, version=version)

    if engine.name == Engine.LIKE and sections[2].name == Engine.GECKO:
        return Browser(
            engine=Engine.TRIDENT.value,
            engine_version=engine.version,
            name=INTERNET_EXPLORER,
            version=_ie11_version(sections[0].comment),
        )

    return Browser(engine=engine.name, engine_version=engine.version, version=version)


def detect_browser(sections: list[Section]) -> BrowserResult:
    """
    Detect the browser and its rendering engine.

    Args:
        sections: Tokenized User-Agent, must not be empty

    Returns:
        BrowserResult with the detected Browser. Unrecognized layouts leave
        the fields empty.
    """
    first = sections[0]

    if first.name == Compat.OPERA:
        engine_version = sections[1].version if len(sections) > 1 else ""
        return BrowserResult(Browser(
            engine=Engine.PRESTO.value,
            engine_version=engine_version,
            name="Opera",
            version=first.version,
        ))

    if first.name == Compat.DALVIK:
        # Dalvik VM requests carry no browser, but are still Mozilla/5.0 compatible
        return BrowserResult(Browser(), mozilla="5.0")

    if len(sections) > 1:
        return BrowserResult(_detect_engine_browser(sections))

    comment = first.comment
    if len(comment) > 1 and comment[0] == "compatible" and comment[1].startswith("MSIE"):
        return BrowserResult(Browser(
            engine=Engine.TRIDENT.value,
            name=INTERNET_EXPLORER,
            version=_legacy_ie_version(comment),
        ))

    return BrowserResult(Browser())
