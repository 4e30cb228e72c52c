"""End-to-end console scenarios over the fake API."""

import io
import locale

import pytest
from httpx import ASGITransport

from handoff_console import main as console_main
from handoff_console.config import Settings
from handoff_console.main import ConsoleApp


@pytest.fixture
async def app(fake_api):
    frames = []
    console = ConsoleApp(
        Settings(_env_file=None, api_base_url="http://test", poll_interval=60.0),
        transport=ASGITransport(app=fake_api.app),
        write=frames.append,
    )
    console.frames = frames
    yield console
    await console.shutdown()


class TestConsoleFlow:
    """Scenarios spanning poller, stores, dispatcher and view."""

    async def test_selected_conversation_removed_by_poll(self, fake_api, app):
        """Selecting 2, then a poll without 2: selection clears and the chat shows the empty state."""
        fake_api.add_conversation(1)
        fake_api.add_conversation(2)
        fake_api.add_message(2, "user", "anyone?")

        await app.startup()
        assert await app.handle_command("open 2") is True
        assert app.conversations.selected_id == 2
        assert [m.text for m in app.messages.messages] == ["anyone?"]

        fake_api.remove_conversation(2)
        await app.poller.tick()

        assert app.conversations.selection is None
        assert app.messages.messages == ()
        assert "Select a conversation to start chatting" in app.frames[-1]

    async def test_commands(self, fake_api, app):
        fake_api.add_conversation(1, is_bot_active=True)
        await app.startup()

        await app.handle_command("open 1")
        await app.handle_command("send   need an order number  ")
        assert fake_api.messages[1][-1]["message_text"] == "need an order number"

        await app.handle_command("toggle")
        assert fake_api.conversations[1]["is_bot_active"] is False
        assert "[Activate Bot]" in app.frames[-1]

        await app.handle_command("kb save Return window is 30 days")
        assert fake_api.knowledge_base == "Return window is 30 days"
        assert "Knowledge base updated successfully" in app.frames[-1]

    async def test_draft_then_send(self, fake_api, app):
        fake_api.add_conversation(1)
        await app.startup()
        await app.handle_command("open 1")
        await app.handle_command("draft hello there")
        await app.handle_command("send")
        assert fake_api.messages[1][-1]["message_text"] == "hello there"
        assert app.ui.draft == ""

    async def test_bad_input(self, app):
        await app.startup()
        await app.handle_command("open abc")
        assert app.ui.last_notification.text == "Usage: open <id>"
        await app.handle_command("frobnicate")
        assert app.ui.last_notification.text.startswith("Unknown command")
        assert await app.handle_command("   ") is True

    async def test_quit(self, app):
        assert await app.handle_command("quit") is False

    async def test_startup_survives_unreachable_api(self, fake_api, app):
        fake_api.fail("list_conversations", 503)
        await app.startup()
        assert app.poller.is_running()
        assert "No conversations yet" in app.frames[-1]


class TestRun:
    """SUT: ConsoleApp.run, main"""

    async def test_runs_commands_until_end_of_input(self, fake_api, app):
        fake_api.add_conversation(1)
        await app.run(io.StringIO("open 1\nsend hello from stdin\n"))

        assert fake_api.messages[1][-1]["message_text"] == "hello from stdin"
        assert not app.poller.is_running()

    async def test_quit_skips_remaining_input(self, fake_api, app):
        fake_api.add_conversation(1)
        await app.run(io.StringIO("open 1\nquit\nsend never sent\n"))

        assert fake_api.calls_to("send") == []
        assert not app.poller.is_running()

    def test_main_applies_system_locale(self, monkeypatch):
        calls = []

        class StubApp:
            def __init__(self, config):
                pass

            async def run(self):
                pass

        def fake_run(coro):
            coro.close()

        monkeypatch.setattr(console_main, "init_app_logger", lambda config: None)
        monkeypatch.setattr(console_main, "ConsoleApp", StubApp)
        monkeypatch.setattr(console_main.asyncio, "run", fake_run)
        monkeypatch.setattr(console_main.locale, "setlocale", lambda category, value: calls.append((category, value)))

        console_main.main()
        assert calls == [(locale.LC_TIME, "")]
