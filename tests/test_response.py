"""Unit tests for response decoding and error mapping."""
import pytest

from wikiclient.client.response import check_response, parse_json
from wikiclient.errors import (
    AccountAssertionFailureError,
    BadTokenError,
    InvalidActionError,
    InvalidResponseError,
    MaxLagError,
    OperationConflictError,
    OperationFailedError,
    UnauthorizedOperationError,
    WikiClientError,
    error_from_response,
)


class TestParseJson:
    def test_valid(self):
        assert parse_json('{"batchcomplete": true}') == {"batchcomplete": True}

    def test_invalid(self):
        with pytest.raises(InvalidResponseError) as exc_info:
            parse_json("<html>Gateway timeout</html>")
        assert exc_info.value.body.startswith("<html>")

    def test_api_disabled(self):
        with pytest.raises(InvalidResponseError, match="disabled"):
            parse_json("MediaWiki API is not enabled for this site. Add the following line...")


class TestCheckResponse:
    def test_passes_data_through(self):
        data = {"query": {"allpages": []}}
        assert check_response(data) is data

    def test_non_dict_passes_through(self):
        assert check_response([]) == []

    def test_raises_on_error_node(self):
        with pytest.raises(OperationFailedError) as exc_info:
            check_response({"error": {"code": "badvalue", "info": "Unrecognized value for parameter list."}})
        assert exc_info.value.code == "badvalue"
        assert "Unrecognized value" in str(exc_info.value)

    def test_semantic_mediawiki_error(self):
        with pytest.raises(OperationFailedError) as exc_info:
            check_response({"error": {"query": "Query was empty."}})
        assert exc_info.value.code is None
        assert exc_info.value.info == "Query was empty."

    def test_malformed_error_node(self):
        with pytest.raises(InvalidResponseError):
            check_response({"error": "oops"})


class TestErrorFromResponse:
    @pytest.mark.parametrize(
        "code, cls",
        [
            ("permissiondenied", UnauthorizedOperationError),
            ("readapidenied", UnauthorizedOperationError),
            ("badtoken", BadTokenError),
            ("unknown_action", InvalidActionError),
            ("assertbotfailed", AccountAssertionFailureError),
            ("editconflict", OperationConflictError),
            ("maxlag", MaxLagError),
            ("internal_api_error_DBQueryError", OperationFailedError),
        ],
    )
    def test_mapping(self, code, cls):
        error = error_from_response({"code": code, "info": "text"})
        assert type(error) is cls
        assert isinstance(error, WikiClientError)

    def test_permissions_detail(self):
        error = error_from_response({"code": "permissions", "info": "Denied.", "permissions": ["edit"]})
        assert "Desired permissions" in error.info

    def test_maxlag_lag(self):
        error = error_from_response({"code": "maxlag", "info": "Waiting for db1: 7 seconds lagged.", "lag": 7})
        assert error.retry_after == 7
