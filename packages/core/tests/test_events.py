"""Tests for building ChangeEvents from webhook payloads."""

import pytest

from diffscout_core.events import ChangeEvent
from diffscout_core.exceptions import InvalidEventError


def make_payload(action="opened", state="open", locked=False):
    return {
        "action": action,
        "number": 7,
        "pull_request": {
            "number": 7,
            "state": state,
            "locked": locked,
            "html_url": "https://github.com/octo/app/pull/7",
            "base": {"sha": "b" * 40},
            "head": {"sha": "h" * 40},
        },
        "repository": {"name": "app", "owner": {"login": "octo"}},
    }


def test_from_payload_reads_fields():
    event = ChangeEvent.from_payload(make_payload())
    assert event.action == "opened"
    assert event.owner == "octo"
    assert event.repo == "app"
    assert event.full_repo_name == "octo/app"
    assert event.pr_number == 7
    assert event.state == "open"
    assert event.locked is False
    assert event.base_sha == "b" * 40
    assert event.head_sha == "h" * 40
    assert event.html_url.endswith("/pull/7")
    assert event.commits == ()


def test_action_override():
    event = ChangeEvent.from_payload(make_payload(action="opened"), action="synchronize")
    assert event.action == "synchronize"


def test_closed_and_locked_flags_kept():
    event = ChangeEvent.from_payload(make_payload(state="closed", locked=True))
    assert event.state == "closed"
    assert event.locked is True


def test_number_falls_back_to_pull_request():
    payload = make_payload()
    del payload["number"]
    assert ChangeEvent.from_payload(payload).pr_number == 7


def test_missing_pull_request_raises():
    with pytest.raises(InvalidEventError):
        ChangeEvent.from_payload({"action": "opened", "repository": {}})


def test_missing_head_sha_raises():
    payload = make_payload()
    del payload["pull_request"]["head"]
    with pytest.raises(InvalidEventError):
        ChangeEvent.from_payload(payload)


def test_event_is_immutable():
    event = ChangeEvent.from_payload(make_payload())
    with pytest.raises(AttributeError):
        event.state = "closed"
