"""Tests for the latest-request-wins gate."""

from src.application.use_cases.latest_request import LatestRequestGate


def test_only_latest_ticket_is_accepted() -> None:
    """A slow earlier computation must not overwrite a newer one."""
    gate = LatestRequestGate()

    first = gate.begin(("owner-1", "2024-01-01", "2024-01-31"))
    second = gate.begin(("owner-1", "2024-02-01", "2024-02-29"))

    assert gate.accept(second, "february") == "february"
    assert gate.accept(first, "january") is None
    assert gate.is_current(second)
    assert not gate.is_current(first)


def test_tickets_keep_their_parameters() -> None:
    gate = LatestRequestGate()

    ticket = gate.begin(("owner-1", None, None))

    assert ticket.params == ("owner-1", None, None)
    assert ticket.serial == 1
    assert gate.begin(("owner-1", None, None)).serial == 2
