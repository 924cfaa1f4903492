"""Tests for the Socket.IO draw event handlers with a mocked server."""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from luckydraw.connection.socketio_broadcaster import SocketIOBroadcaster
from luckydraw.connection.socketio_server import DrawEventHandlers

pytestmark = [pytest.mark.asyncio, pytest.mark.integration]


def emitted(sio) -> List[Tuple[str, Dict[str, Any], Optional[str]]]:
    """(event, payload, target sid or None for broadcast) for every emit."""
    calls = []
    for call in sio.emit.await_args_list:
        event, payload = call.args[0], call.args[1]
        calls.append((event, payload, call.kwargs.get("to")))
    return calls


def events(sio) -> List[Tuple[str, Optional[str]]]:
    return [(event, to) for event, _, to in emitted(sio)]


@pytest.fixture
def handlers(session, mock_sio):
    return DrawEventHandlers(session, SocketIOBroadcaster(mock_sio))


@pytest.fixture
def removing_handlers(session, mock_sio):
    return DrawEventHandlers(session, SocketIOBroadcaster(mock_sio), remove_on_disconnect=True)


class TestJoinRequest:

    async def test_new_join_replies_and_broadcasts_list(self, handlers, mock_sio):
        reply = await handlers.join_request("sid-1", {"name": "Alice"})

        assert reply["success"] is True
        assert reply["name"] == "Alice"
        assert reply["no"] == "No. 001"
        assert reply["reconnected"] is False
        assert events(mock_sio) == [
            ("login_success", "sid-1"),
            ("update_participant_list", None),
        ]
        _, payload, _ = emitted(mock_sio)[1]
        assert payload["participants"] == ["Alice"]
        assert payload["players"] == [{"no": "No. 001", "name": "Alice"}]
        assert payload["type"] == "update_participant_list"
        assert "timestamp" in payload

    async def test_bare_string_payload_accepted(self, handlers, session):
        reply = await handlers.join_request("sid-1", "  Bob ")

        assert reply["name"] == "Bob"
        assert session.participant_names() == ["Bob"]

    async def test_empty_name_reports_error_to_requester_only(self, handlers, session, mock_sio):
        reply = await handlers.join_request("sid-1", {"name": "   "})

        assert reply["success"] is False
        assert reply["code"] == "empty_name"
        assert events(mock_sio) == [("login_error", "sid-1")]
        assert session.participant_names() == []

    async def test_duplicate_name_is_refused(self, handlers, session, mock_sio):
        await handlers.join_request("sid-1", {"name": "Alice"})
        mock_sio.emit.reset_mock()

        reply = await handlers.join_request("sid-2", {"name": "Alice"})

        assert reply["code"] == "name_taken"
        assert events(mock_sio) == [("login_error", "sid-2")]
        assert session.registry.get("Alice").connection_id == "sid-1"

    async def test_reconnect_with_token_skips_broadcast(self, handlers, session, mock_sio):
        await handlers.join_request("sid-1", {"name": "Alice", "identityToken": "tok"})
        mock_sio.emit.reset_mock()

        reply = await handlers.join_request("sid-2", {"name": "Alice", "identityToken": "tok"})

        assert reply["reconnected"] is True
        assert events(mock_sio) == [("login_success", "sid-2")]
        assert session.registry.get("Alice").connection_id == "sid-2"
        assert len(session.registry) == 1

    async def test_malformed_payload(self, handlers, mock_sio):
        reply = await handlers.join_request("sid-1", ["Alice"])

        assert reply["code"] == "invalid_payload"
        assert events(mock_sio) == [("login_error", "sid-1")]


class TestAdminEvents:

    async def test_admin_init_is_point_to_point(self, handlers, mock_sio):
        await handlers.join_request("sid-1", {"name": "Alice"})
        await handlers.join_request("sid-2", {"name": "Bob"})
        await handlers.admin_perform_draw("admin")
        mock_sio.emit.reset_mock()

        reply = await handlers.admin_init("admin")

        assert events(mock_sio) == [("admin_init_data", "admin")]
        assert reply["participants"] == ["Alice", "Bob"]
        assert reply["winners"] == ["Alice"]
        assert reply["phase"] == "drawn"

    async def test_start_rolling_broadcasts_without_state_change(self, handlers, session, mock_sio):
        await handlers.join_request("sid-1", {"name": "Alice"})
        mock_sio.emit.reset_mock()

        await handlers.admin_start_rolling("admin")

        assert events(mock_sio) == [("start_rolling", None)]
        assert session.participant_names() == ["Alice"]
        assert session.winner_names() == []

    async def test_draw_broadcasts_result_and_notifies_winner(self, handlers, mock_sio):
        await handlers.join_request("sid-alice", {"name": "Alice"})
        await handlers.join_request("sid-bob", {"name": "Bob"})
        mock_sio.emit.reset_mock()

        reply = await handlers.admin_perform_draw("admin")

        assert reply["winner"] == "Alice"
        assert reply["no"] == "No. 001"
        assert reply["winners"] == ["Alice"]
        assert reply["remaining"] == 1
        assert events(mock_sio) == [("draw_result", None), ("you_win", "sid-alice")]

    async def test_exhausted_pool_is_broadcast(self, handlers, session, mock_sio):
        await handlers.join_request("sid-1", {"name": "Alice"})
        await handlers.admin_perform_draw("admin")
        mock_sio.emit.reset_mock()

        reply = await handlers.admin_perform_draw("admin")

        assert reply["code"] == "no_candidates"
        assert events(mock_sio) == [("draw_error", None)]
        assert session.winner_names() == ["Alice"]

    async def test_toggle_exclude_replies_only_to_requester(self, handlers, session, mock_sio):
        await handlers.join_request("sid-1", {"name": "Alice"})
        mock_sio.emit.reset_mock()

        reply = await handlers.admin_toggle_exclude("admin", {"name": "Alice"})

        assert reply["excluded"] is True
        assert reply["excluded_names"] == ["Alice"]
        assert events(mock_sio) == [("exclude_toggled", "admin")]

        reply = await handlers.admin_toggle_exclude("admin", "Alice")
        assert reply["excluded"] is False
        assert session.exclusions.snapshot() == []

    async def test_toggle_exclude_blank_name(self, handlers, mock_sio):
        reply = await handlers.admin_toggle_exclude("admin", {"name": ""})

        assert reply["code"] == "empty_name"
        assert events(mock_sio) == [("exclude_error", "admin")]

    async def test_exclude_then_draw_scenario(self, handlers):
        await handlers.join_request("sid-1", {"name": "Alice"})
        await handlers.admin_toggle_exclude("admin", {"name": "Alice"})

        assert (await handlers.admin_perform_draw("admin"))["code"] == "no_candidates"

        await handlers.admin_toggle_exclude("admin", {"name": "Alice"})
        assert (await handlers.admin_perform_draw("admin"))["winner"] == "Alice"

    async def test_reset_then_init_is_empty(self, handlers, mock_sio):
        await handlers.join_request("sid-1", {"name": "Alice"})
        await handlers.admin_perform_draw("admin")
        mock_sio.emit.reset_mock()

        await handlers.admin_reset("admin")

        assert events(mock_sio) == [("event_reset", None), ("update_participant_list", None)]
        assert emitted(mock_sio)[1][1]["participants"] == []

        reply = await handlers.admin_init("admin")
        assert reply["participants"] == []
        assert reply["winners"] == []
        assert reply["phase"] == "empty"


class TestConnectionLifecycle:

    async def test_connect_replays_participant_list(self, handlers, session, mock_sio):
        session.register("Alice", None, "sid-1")

        await handlers.connect("sid-new", {})

        assert events(mock_sio) == [("update_participant_list", "sid-new")]
        assert emitted(mock_sio)[0][1]["participants"] == ["Alice"]

    async def test_disconnect_keeps_registration_by_default(self, handlers, session, mock_sio):
        await handlers.join_request("sid-1", {"name": "Alice", "identityToken": "tok"})
        mock_sio.emit.reset_mock()

        await handlers.disconnect("sid-1")

        assert session.participant_names() == ["Alice"]
        assert mock_sio.emit.await_count == 0

        reply = await handlers.join_request("sid-2", {"name": "Alice", "identityToken": "tok"})
        assert reply["reconnected"] is True

    async def test_disconnect_removes_when_configured(self, removing_handlers, session, mock_sio):
        await removing_handlers.join_request("sid-1", {"name": "Alice"})
        await removing_handlers.join_request("sid-2", {"name": "Bob"})
        mock_sio.emit.reset_mock()

        await removing_handlers.disconnect("sid-1", "client disconnect")

        assert session.participant_names() == ["Bob"]
        assert events(mock_sio) == [("update_participant_list", None)]

    async def test_disconnect_after_reconnect_onto_shared_socket_removes_both(
        self, removing_handlers, session, mock_sio
    ):
        await removing_handlers.join_request("sid-a", {"name": "Alice", "identityToken": "tok"})
        await removing_handlers.join_request("sid-x", {"name": "Bob"})
        await removing_handlers.join_request("sid-x", {"name": "Alice", "identityToken": "tok"})
        mock_sio.emit.reset_mock()

        await removing_handlers.disconnect("sid-x")

        assert session.participant_names() == []
        assert events(mock_sio) == [("update_participant_list", None)]
        assert emitted(mock_sio)[0][1]["participants"] == []

    async def test_second_name_from_same_socket_is_added(self, handlers, session):
        await handlers.join_request("sid-1", {"name": "Alice"})
        reply = await handlers.join_request("sid-1", {"name": "Bob"})

        assert reply["success"] is True
        assert session.participant_names() == ["Alice", "Bob"]

    async def test_disconnect_of_unregistered_socket_does_not_broadcast(self, removing_handlers, mock_sio):
        await removing_handlers.disconnect("admin")

        assert mock_sio.emit.await_count == 0


class TestFaultIsolation:

    async def test_broadcast_failure_is_contained(self, handlers, session, mock_sio):
        mock_sio.emit.side_effect = RuntimeError("transport down")

        reply = await handlers.admin_reset("admin")

        assert reply["code"] == "internal_error"
        assert session.participant_names() == []

        mock_sio.emit.side_effect = None
        reply = await handlers.join_request("sid-1", {"name": "Alice"})
        assert reply["success"] is True


class TestRegister:

    async def test_register_attaches_all_events(self, handlers, mock_sio):
        handlers.register(mock_sio)

        registered = {call.args[0] for call in mock_sio.on.call_args_list}
        assert registered == {
            "connect",
            "disconnect",
            "join_request",
            "join-request",
            "admin_init",
            "admin-init",
            "admin_start_rolling",
            "admin-start-rolling",
            "admin_perform_draw",
            "admin-perform-draw",
            "admin_toggle_exclude",
            "admin-toggle-exclude",
            "admin_reset",
            "admin-reset",
        }

    async def test_hyphenated_alias_uses_same_handler(self, handlers, mock_sio):
        handlers.register(mock_sio)

        bound = {call.args[0]: call.args[1] for call in mock_sio.on.call_args_list}
        assert bound["join-request"] == bound["join_request"] == handlers.join_request
        assert bound["admin-perform-draw"] == handlers.admin_perform_draw
