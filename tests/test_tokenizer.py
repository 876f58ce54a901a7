"""Tests for User-Agent tokenization."""

from agentparse.tokenizer import (
    Section,
    has_mobile_token,
    parse_product,
    parse_section,
    read_until,
    tokenize,
)


class TestReadUntil:
    """Test reading up to a delimiter."""

    def test_stops_at_delimiter(self):
        assert read_until("Mozilla/5.0 (X11)", 0, " ", False) == ("Mozilla/5.0", 12)

    def test_end_of_string(self):
        """Index lands one past the end when the delimiter is missing."""
        assert read_until("curl/7.88.1", 0, " ", False) == ("curl/7.88.1", 12)

    def test_nested_parentheses_kept(self):
        """Inner groups don't close the outer one."""
        text, index = read_until("(a (b) c) rest", 1, ")", True)
        assert text == "a (b) c"
        assert index == 9

    def test_deeply_nested(self):
        ua = "(x (y (z)) w) tail"
        text, index = read_until(ua, 1, ")", True)
        assert text == "x (y (z)) w"
        assert ua[index - 1] == ")"
        assert ua[index:] == " tail"

    def test_nesting_ignored_when_disabled(self):
        assert read_until("a(b)c d", 0, " ", False) == ("a(b)c", 6)


class TestParseProduct:
    """Test product name/version splitting."""

    def test_name_and_version(self):
        assert parse_product("Chrome/41.0.2228.0") == ("Chrome", "41.0.2228.0")

    def test_name_only(self):
        assert parse_product("Mobile") == ("Mobile", "")

    def test_splits_on_first_slash(self):
        assert parse_product("Foo/1.0/beta") == ("Foo", "1.0/beta")


class TestParseSection:
    """Test reading a single section."""

    def test_section_with_comment(self):
        section, index = parse_section("Mozilla/5.0 (X11; Linux) Gecko/1", 0)
        assert section == Section("Mozilla", "5.0", ("X11", "Linux"))
        assert index == 25

    def test_section_without_comment(self):
        section, index = parse_section("Gecko/20100101 Firefox/40.1", 0)
        assert section == Section("Gecko", "20100101")
        assert index == 15

    def test_comment_with_nested_parentheses(self):
        ua = "Opera/9.80 (Windows NT 5.1; U; MRA 5.5 (build 02842); ru) Presto/2.7.62"
        section, index = parse_section(ua, 0)
        assert section.comment == ("Windows NT 5.1", "U", "MRA 5.5 (build 02842)", "ru")
        assert ua[index:] == "Presto/2.7.62"

    def test_unterminated_comment(self):
        section, index = parse_section("Mozilla/5.0 (Windows NT 6.1; WOW64", 0)
        assert section.comment == ("Windows NT 6.1", "WOW64")
        assert index > len("Mozilla/5.0 (Windows NT 6.1; WOW64")


class TestTokenize:
    """Test tokenizing full headers."""

    def test_empty(self):
        assert tokenize("") == []

    def test_order_preserved(self):
        ua = "Mozilla/5.0 (Windows NT 6.1; WOW64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/41.0.2228.0 Safari/537.36"
        sections = tokenize(ua)
        assert [s.name for s in sections] == ["Mozilla", "AppleWebKit", "Chrome", "Safari"]
        assert sections[0].comment == ("Windows NT 6.1", "WOW64")
        assert sections[1].comment == ("KHTML, like Gecko",)
        assert sections[2].version == "41.0.2228.0"

    def test_duplicates_kept(self):
        sections = tokenize("A/1 A/1 A/2")
        assert [(s.name, s.version) for s in sections] == [("A", "1"), ("A", "1"), ("A", "2")]

    def test_mobile_token(self):
        sections = tokenize("Mozilla/5.0 (Linux) AppleWebKit/537.36 Mobile Safari/537.36")
        assert has_mobile_token(sections) is True

    def test_mobile_in_comment_is_not_a_token(self):
        sections = tokenize("Mozilla/5.0 (Mobile; rv:26.0) Gecko/26.0 Firefox/26.0")
        assert has_mobile_token(sections) is False
