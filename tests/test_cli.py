"""Tests for the wikiclient command line, driven through click's CliRunner."""
import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from wikiclient.cli import cli
from wikiclient.errors import OperationFailedError

ALLPAGES = [
    {"query": {"allpages": [{"pageid": 1, "ns": 0, "title": "A"}, {"pageid": 2, "ns": 0, "title": "B"}]},
     "continue": {"apcontinue": "C", "continue": "-||"}},
    {"query": {"allpages": [{"pageid": 3, "ns": 0, "title": "C"}]}},
]


@pytest.fixture
def runner(wiki_logger):
    return CliRunner()


@pytest.fixture
def transport():
    with patch("wikiclient.cli.RequestsTransport") as mock_transport_class:
        instance = MagicMock()
        mock_transport_class.return_value = instance
        yield instance


def output_lines(result):
    return [json.loads(line) for line in result.stdout.splitlines() if line.startswith("{")]


class TestCli:
    def test_allpages_json_lines(self, runner, transport):
        transport.send.side_effect = ALLPAGES

        result = runner.invoke(cli, ["--batch-size", "2", "allpages", "--namespace", "0"])

        assert result.exit_code == 0, result.output
        assert output_lines(result) == [
            {"page_id": 1, "title": "A", "namespace": 0},
            {"page_id": 2, "title": "B", "namespace": 0},
            {"page_id": 3, "title": "C", "namespace": 0},
        ]
        assert transport.send.call_args_list[1].args[0]["apcontinue"] == "C"
        transport.close.assert_called_once_with()

    def test_limit_avoids_extra_requests(self, runner, transport):
        transport.send.side_effect = ALLPAGES

        result = runner.invoke(cli, ["--limit", "2", "allpages"])

        assert result.exit_code == 0, result.output
        assert len(output_lines(result)) == 2
        assert transport.send.call_count == 1

    def test_categorymembers(self, runner, transport):
        transport.send.return_value = {"query": {"categorymembers": [{"pageid": 5, "ns": 14, "title": "Category:X"}]}}

        result = runner.invoke(cli, ["categorymembers", "Maps", "--type", "subcat"])

        assert result.exit_code == 0, result.output
        params = transport.send.call_args.args[0]
        assert params["cmtitle"] == "Category:Maps"
        assert params["cmtype"] == "subcat"

    def test_search(self, runner, transport):
        transport.send.return_value = {"query": {"search": [{"ns": 0, "title": "Wiki", "pageid": 5}]}}

        result = runner.invoke(cli, ["search", "wiki"])

        assert result.exit_code == 0, result.output
        assert output_lines(result)[0]["title"] == "Wiki"

    def test_continuation_loop_exit_code(self, runner, transport):
        stuck = {"query": {"logevents": [{"logid": 1, "type": "delete", "action": "delete"}]},
                 "continue": {"lecontinue": "20120101000000|1", "continue": "-||"}}
        transport.send.return_value = stuck

        result = runner.invoke(cli, ["logevents", "--type", "delete"])

        assert result.exit_code == 2
        assert "--fetch-more" in result.output
        assert transport.send.call_count == 2

    def test_fetch_more_flag(self, runner, transport):
        stuck = {"query": {"logevents": [{"logid": 1, "type": "delete", "action": "delete"}]},
                 "continue": {"lecontinue": "20120101000000|1", "continue": "-||"}}
        transport.send.side_effect = [stuck, stuck, {"query": {"logevents": []}}]

        result = runner.invoke(cli, ["--fetch-more", "--batch-size", "10", "logevents"])

        assert result.exit_code == 0, result.output
        assert [call.args[0]["lelimit"] for call in transport.send.call_args_list] == [10, 10, 100]

    def test_keyboard_interrupt(self, runner, transport):
        transport.send.side_effect = KeyboardInterrupt

        result = runner.invoke(cli, ["recentchanges"])

        assert result.exit_code == 130
        transport.close.assert_called_once_with()

    def test_api_error(self, runner, transport):
        transport.send.side_effect = OperationFailedError("readapidenied", "You need read permission.")

        result = runner.invoke(cli, ["allpages"])

        assert result.exit_code == 1
        assert "readapidenied" in result.output

    def test_progress_bar(self, runner, transport):
        transport.send.side_effect = ALLPAGES

        result = runner.invoke(cli, ["--progress", "allpages"])

        assert result.exit_code == 0, result.output
        assert result.stdout.count("\"page_id\"") == 3
