"""Unit tests for request id resolution."""

import pytest

from src.bt_gateway.middleware.request_log import resolve_request_id


def test_well_formed_incoming_id_is_kept() -> None:
    assert resolve_request_id("trace-0123456789") == "trace-0123456789"


@pytest.mark.parametrize("incoming", [None, "", "short", "x" * 65, "bad id with spaces"])
def test_unusable_incoming_id_is_replaced(incoming: str | None) -> None:
    request_id = resolve_request_id(incoming)

    assert request_id.startswith("req_")
    assert len(request_id) == 16
