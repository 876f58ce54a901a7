"""
Tokenizer for User-Agent headers.

A User-Agent header is a space separated list of products, each optionally
followed by a parenthesized comment:

    Mozilla/5.0 (Windows NT 6.1; WOW64) AppleWebKit/537.36 (KHTML, like Gecko)

Every product/comment pair becomes a Section. Sections keep the order in
which they appear, since the classifiers give meaning to positions (the
first section is the compatibility token, the second is usually the engine,
trailing sections override the browser identity).

Comments may contain balanced parentheses of their own, e.g.
"(KHTML, like Gecko (compatible))", so the comment reader tracks depth.
"""

from dataclasses import dataclass

COMMENT_SEPARATOR = "; "


@dataclass(frozen=True)
class Section:
    """
    One product token of a User-Agent header.

    Attributes:
        name: Product name (e.g. "Mozilla", "AppleWebKit")
        version: Text after the first "/", or "" if there is none
        comment: Comment tokens split on "; ", in their original order
    """
    name: str
    version: str = ""
    comment: tuple[str, ...] = ()


def read_until(ua: str, index: int, delimiter: str, nested: bool) -> tuple[str, int]:
    """
    Read from `index` until `delimiter` or the end of the string.

    When `nested` is set, every "(" opens a group and the delimiter only
    terminates the read once all groups are closed; delimiters that close a
    group are kept in the returned text.

    Returns:
        (text read, index one past the delimiter). If the string ends before
        the delimiter is found the index is len(ua) + 1.
    """
    depth = 0
    i = index
    while i < len(ua):
        char = ua[i]
        if char == delimiter:
            if depth == 0:
                return ua[index:i], i + 1
            depth -= 1
        elif nested and char == "(":
            depth += 1
        i += 1
    return ua[index:], i + 1


def parse_product(product: str) -> tuple[str, str]:
    """Split a "Name/Version" product into its name and version."""
    name, _, version = product.partition("/")
    return name, version


def parse_section(ua: str, index: int) -> tuple[Section, int]:
    """
    Parse the section starting at `index`.

    Returns:
        (section, index of the next section)
    """
    product, index = read_until(ua, index, " ", False)
    name, version = parse_product(product)

    comment: tuple[str, ...] = ()
    if index < len(ua) and ua[index] == "(":
        text, index = read_until(ua, index + 1, ")", True)
        comment = tuple(text.split(COMMENT_SEPARATOR))
        # Skip the space separating the comment from the next product
        index += 1

    return Section(name=name, version=version, comment=comment), index


def tokenize(ua: str) -> list[Section]:
    """
    Split a User-Agent header into its ordered sections.

    Examples:
        >>> tokenize("Opera/9.80 (Windows NT 6.1; U; en) Presto/2.12.388")
        [Section(name='Opera', version='9.80', comment=('Windows NT 6.1', 'U', 'en')),
         Section(name='Presto', version='2.12.388', comment=())]
    """
    sections: list[Section] = []
    index = 0
    while index < len(ua):
        section, index = parse_section(ua, index)
        sections.append(section)
    return sections


def has_mobile_token(sections: list[Section]) -> bool:
    """Check for a bare "Mobile" product, e.g. "... Mobile Safari/537.36"."""
    return any(section.name == "Mobile" for section in sections)
