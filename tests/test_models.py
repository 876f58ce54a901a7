"""Tests for the storage model."""

from agentparse import UserAgentRecord, parse


class TestUserAgentRecord:
    """Test flattening a parsed UserAgent."""

    def test_from_user_agent(self):
        ua = (
            "Mozilla/5.0 (Macintosh; U; Intel Mac OS X 10_6_3; en-us) AppleWebKit/531.22.7 "
            "(KHTML, like Gecko) Version/4.0.5 Safari/531.22.7"
        )
        record = UserAgentRecord.from_user_agent(parse(ua))
        assert record.user_agent == ua
        assert record.platform == "Macintosh"
        assert record.os == "Intel Mac OS X 10_6_3"
        assert record.os_name == "Mac OS X"
        assert record.os_version == "10.6.3"
        assert record.localization == "en-us"
        assert record.browser == "Safari"
        assert record.browser_version == "4.0.5"
        assert record.engine == "AppleWebKit"
        assert record.engine_version == "531.22.7"
        assert record.is_bot is False
        assert record.is_mobile is False

    def test_dump(self):
        record = UserAgentRecord.from_user_agent(parse("Googlebot/2.1 (+http://www.google.com/bot.html)"))
        data = record.model_dump()
        assert data["browser"] == "Googlebot"
        assert data["is_bot"] is True
        assert data["os_name"] == ""

    def test_empty_defaults(self):
        record = UserAgentRecord()
        assert record.browser == ""
        assert record.is_mobile is False
