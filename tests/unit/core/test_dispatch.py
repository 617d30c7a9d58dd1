import pytest

from content_delivery.core.dispatch import CallbackDispatcher
from content_delivery.core.mapping import assets_from_response, entry_from_response
from content_delivery.core.request import TransportResponse
from content_delivery.exceptions import ResponseTypeError
from content_delivery.models import ErrorResponse


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, result, error):
        self.calls.append((result, error))


@pytest.fixture
def recorder():
    return Recorder()


class TestDispatch:
    def test_success(self, recorder):
        dispatcher = CallbackDispatcher(recorder, "entry.fetch")
        response = TransportResponse(200, '{"entry":{"uid":"a"}}')

        result = dispatcher.dispatch(response, entry_from_response)

        assert result.uid == "a"
        assert recorder.calls == [(result, None)]
        assert dispatcher.completed

    def test_non_finite_numbers_still_succeed(self, recorder):
        dispatcher = CallbackDispatcher(recorder)
        response = TransportResponse(200, '{"entry":{"uid":"a","_version":1e400,"count":NaN}}')

        result = dispatcher.dispatch(response, entry_from_response)

        assert result.version == 1
        assert recorder.calls == [(result, None)]

    def test_api_error(self, recorder):
        dispatcher = CallbackDispatcher(recorder)
        response = TransportResponse(404, '{"error_message":"Not found","error_code":141}')

        assert dispatcher.dispatch(response, entry_from_response) is None
        assert recorder.calls == [(None, ErrorResponse("Not found", 141))]

    def test_transport_failure(self, recorder):
        dispatcher = CallbackDispatcher(recorder)
        response = TransportResponse(0, "Network error: connection refused")

        dispatcher.dispatch(response, entry_from_response)

        assert recorder.calls == [(None, ErrorResponse("Network error: connection refused", 0))]

    def test_invalid_json_on_success(self, recorder):
        dispatcher = CallbackDispatcher(recorder)

        dispatcher.dispatch(TransportResponse(200, "<html>"), entry_from_response)

        _, error = recorder.calls[0]
        assert error.message == (
            "Invalid JSON response. Check the server response format and try again."
        )
        assert error.code == 200

    def test_empty_success_body(self, recorder):
        dispatcher = CallbackDispatcher(recorder)
        dispatcher.dispatch(TransportResponse(200, ""), entry_from_response)

        assert recorder.calls[0][1].message.startswith("Invalid JSON response")

    def test_parser_returning_none_uses_missing_message(self, recorder):
        dispatcher = CallbackDispatcher(recorder)
        dispatcher.dispatch(
            TransportResponse(200, "{}"), lambda payload: None, missing_message="Nothing here"
        )

        assert recorder.calls == [(None, ErrorResponse("Nothing here", 200))]

    def test_response_type_error_propagates(self, recorder):
        dispatcher = CallbackDispatcher(recorder)

        with pytest.raises(ResponseTypeError):
            dispatcher.dispatch(TransportResponse(200, '{"assets":12345}'), assets_from_response)

        assert recorder.calls == []
        assert not dispatcher.completed


class TestCompletion:
    def test_second_completion_raises(self, recorder):
        dispatcher = CallbackDispatcher(recorder, "query.find")
        dispatcher.succeed("first")

        with pytest.raises(RuntimeError, match="query.find already completed"):
            dispatcher.fail(ErrorResponse("late"))

        assert recorder.calls == [("first", None)]

    def test_empty_message_replaced(self, recorder):
        CallbackDispatcher(recorder).fail(ErrorResponse("", 5))

        assert recorder.calls == [(None, ErrorResponse("An unknown error occurred.", 5))]

    def test_no_callback(self):
        dispatcher = CallbackDispatcher(None)
        dispatcher.succeed(1)

        assert dispatcher.completed
