"""Unit tests for typed tool requests."""

import pytest

from nvim_bridge.errors import InvalidRangeError, MalformedRequestError
from nvim_bridge.models.requests import (
    BufferRequest,
    CommandRequest,
    EditMode,
    EditRequest,
    StatusRequest,
)


class TestEditRequest:
    def test_valid(self):
        request = EditRequest.from_arguments({"startLine": 2, "mode": "insert", "lines": "x"})
        assert request == EditRequest(start_line=2, mode=EditMode.INSERT, lines="x")

    def test_integral_float_accepted(self):
        request = EditRequest.from_arguments({"startLine": 3.0, "mode": "replace", "lines": ""})
        assert request.start_line == 3
        assert request.mode is EditMode.REPLACE

    def test_zero_start_line_is_well_formed(self):
        # Range checks belong to the editing service, not the request shape
        request = EditRequest.from_arguments({"startLine": 0, "mode": "insert", "lines": "x"})
        assert request.start_line == 0

    @pytest.mark.parametrize("arguments", [
        {"mode": "insert", "lines": "x"},
        {"startLine": "2", "mode": "insert", "lines": "x"},
        {"startLine": 2.5, "mode": "insert", "lines": "x"},
        {"startLine": True, "mode": "insert", "lines": "x"},
        {"startLine": 2, "mode": "append", "lines": "x"},
        {"startLine": 2, "mode": None, "lines": "x"},
        {"startLine": 2, "mode": "insert"},
        {"startLine": 2, "mode": "insert", "lines": ["x"]},
    ])
    def test_malformed(self, arguments):
        with pytest.raises(MalformedRequestError) as exc_info:
            EditRequest.from_arguments(arguments)
        assert exc_info.value.operation == "edit"
        assert not isinstance(exc_info.value, InvalidRangeError)


class TestCommandRequest:
    def test_valid(self):
        assert CommandRequest.from_arguments({"command": "dd"}).command == "dd"

    @pytest.mark.parametrize("arguments", [{}, {"command": 1}, {"command": ""}])
    def test_malformed(self, arguments):
        with pytest.raises(MalformedRequestError):
            CommandRequest.from_arguments(arguments)


class TestFilenameHints:
    def test_hint_optional(self):
        assert BufferRequest.from_arguments({}).filename is None
        assert StatusRequest.from_arguments({"filename": ""}).filename is None

    def test_hint_kept(self):
        assert BufferRequest.from_arguments({"filename": "a.py"}).filename == "a.py"

    def test_hint_must_be_string(self):
        with pytest.raises(MalformedRequestError):
            StatusRequest.from_arguments({"filename": 3})
