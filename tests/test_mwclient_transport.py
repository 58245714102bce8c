"""Unit tests for the mwclient-backed transport."""
from unittest.mock import MagicMock, patch

import pytest

from wikiclient.client import MwclientTransport, build_site
from wikiclient.config import OAuthConfig
from wikiclient.errors import BadTokenError
from wikiclient.lists import CategoryMembersGenerator

OAUTH = OAuthConfig(
    consumer_key="ck",
    consumer_secret="cs",
    access_token="at",
    access_secret="as",
    api_host="commons.wikimedia.org",
    api_path="/w/",
)


class TestBuildSite:
    @patch("wikiclient.client.mwclient_transport.mwclient.Site")
    def test_builds_oauth_site(self, mock_site_class):
        site = build_site(OAUTH, user_agent="test-agent/1.0")

        assert site is mock_site_class.return_value
        mock_site_class.assert_called_once_with(
            "commons.wikimedia.org",
            path="/w/",
            scheme="https",
            clients_useragent="test-agent/1.0",
            consumer_token="ck",
            consumer_secret="cs",
            access_token="at",
            access_secret="as",
        )

    @patch("wikiclient.client.mwclient_transport.settings")
    def test_requires_oauth(self, mock_settings):
        mock_settings.oauth = None
        with pytest.raises(RuntimeError):
            build_site()


class TestMwclientTransport:
    def test_send_uses_raw_api(self):
        site = MagicMock()
        site.raw_api.return_value = {"query": {"categorymembers": []}}
        transport = MwclientTransport(site)

        data = transport.send({"action": "query", "list": "categorymembers", "cmlimit": 20, "cmnamespace": None})

        assert data == {"query": {"categorymembers": []}}
        site.raw_api.assert_called_once_with(
            "query", "POST", list="categorymembers", cmlimit="20", formatversion="2",
        )

    @patch("wikiclient.client.mwclient_transport.build_site")
    def test_from_settings(self, mock_build_site):
        transport = MwclientTransport.from_settings()

        mock_build_site.assert_called_once_with()
        assert transport.site is mock_build_site.return_value
        assert transport.http_method == "POST"

    def test_api_error_mapped(self):
        site = MagicMock()
        site.raw_api.return_value = {"error": {"code": "badtoken", "info": "Invalid CSRF token."}}

        with pytest.raises(BadTokenError):
            MwclientTransport(site).send({"action": "query"})

    def test_drives_a_list(self):
        site = MagicMock()
        site.raw_api.side_effect = [
            {
                "query": {"categorymembers": [{"pageid": 1, "ns": 6, "title": "File:A.svg"}]},
                "continue": {"cmcontinue": "file|42|43", "continue": "-||"},
            },
            {"query": {"categorymembers": [{"pageid": 2, "ns": 6, "title": "File:B.svg"}]}},
        ]
        members = CategoryMembersGenerator(MwclientTransport(site), "Pictures", pagination_size=1)

        assert [stub.title for stub in members] == ["File:A.svg", "File:B.svg"]
        second_call = site.raw_api.call_args_list[1]
        assert second_call.kwargs["cmcontinue"] == "file|42|43"
        assert second_call.kwargs["cmtitle"] == "Category:Pictures"
