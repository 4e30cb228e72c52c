"""Operator console application."""

import asyncio
import locale
import sys
import threading
from typing import Callable, Optional, TextIO

import httpx

from .config import Settings, settings
from .api import RemoteClient
from .services import (
    ActionDispatcher,
    ConsoleUiState,
    ConversationStore,
    MessageStore,
    Poller,
    Synchronizer,
)
from .views import ConsoleRenderer
from .utils.logger import init_app_logger, get_app_logger

HELP_TEXT = """Commands:
  list                 show conversations
  open <id>            open a conversation
  close                close the open conversation
  draft <text>         set the message draft
  send [text]          send text (or the draft) to the open conversation
  toggle               take over / hand back to the bot
  kb                   open the knowledge base editor
  kb save [text]       save the knowledge base
  kb load <path>       load editor content from a file
  kb export <path>     write editor content to a file
  kb close             close the editor
  help                 show this help
  quit                 exit"""


class ConsoleApp:
    """Wires the client, stores, poller and dispatcher together."""

    def __init__(
        self,
        config: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        write: Callable[[str], None] = print,
    ):
        self.config = config
        self.logger = get_app_logger()
        self._write = write

        self.client = RemoteClient.from_settings(config, transport=transport)
        self.conversations = ConversationStore()
        self.messages = MessageStore(self.conversations)
        self.ui = ConsoleUiState(max_notifications=config.max_notifications)
        self.synchronizer = Synchronizer(self.client, self.conversations, self.messages)
        self.poller = Poller(self.synchronizer, interval=config.poll_interval)
        self.dispatcher = ActionDispatcher(self.client, self.conversations, self.synchronizer, self.ui)
        self.renderer = ConsoleRenderer(self.conversations, self.messages, self.ui, write=write)
        self.renderer.attach()

    async def startup(self) -> None:
        """Load the first snapshot immediately, then keep polling."""
        self.logger.info("=" * 70)
        self.logger.info("Starting Handoff Console...")
        self.logger.info(f"  API: {self.config.get_api_base_url()}")
        self.logger.info(f"  Poll Interval: {self.config.poll_interval}s")
        self.logger.info(f"  Request Timeout: {self.config.request_timeout or 'none'}")
        self.logger.info(f"  Log Level: {self.config.log_level}")
        self.logger.info("=" * 70)

        await self.poller.tick()
        self.renderer.refresh()
        self.poller.start()

    async def shutdown(self) -> None:
        self.logger.info("Shutting down Handoff Console...")
        self.poller.stop()
        await self.poller.drain()
        await self.client.aclose()
        self.logger.info("Handoff Console shut down")

    async def handle_command(self, line: str) -> bool:
        """
        Execute one operator command.

        Returns:
            False when the console should exit
        """
        parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        rest = line.strip()[len(parts[0]):].strip()

        if command in ("quit", "exit"):
            return False
        if command == "help":
            self._write(HELP_TEXT)
        elif command == "list":
            self.renderer.last_frame = None
            self.renderer.refresh()
        elif command == "open":
            await self._open(args)
        elif command == "close":
            self.dispatcher.close_conversation()
        elif command == "draft":
            self.dispatcher.update_draft(rest)
        elif command == "send":
            await self.dispatcher.send(rest if rest else None)
        elif command == "toggle":
            await self.dispatcher.toggle_bot_control()
        elif command == "kb":
            await self._knowledge_base(args, rest)
        else:
            self.ui.error(f"Unknown command: {command} (type 'help')")
        return True

    async def _open(self, args) -> None:
        if len(args) != 1 or not args[0].isdigit():
            self.ui.error("Usage: open <id>")
            return
        await self.dispatcher.select_conversation(int(args[0]))

    async def _knowledge_base(self, args, rest: str) -> None:
        if not args:
            await self.dispatcher.open_knowledge_base()
            return

        action = args[0].lower()
        if action == "save":
            text = rest[len(args[0]):].strip()
            await self.dispatcher.save_knowledge_base(text if text else None)
        elif action == "close":
            self.dispatcher.close_knowledge_base()
        elif action in ("load", "export") and len(args) == 2:
            if action == "load":
                await self.dispatcher.load_knowledge_base_file(args[1])
            else:
                await self.dispatcher.export_knowledge_base_file(args[1])
        else:
            self.ui.error("Usage: kb [save [text] | load <path> | export <path> | close]")

    def _read_lines(self, stream: TextIO) -> asyncio.Queue:
        """Feed lines from a blocking stream into a queue from a daemon thread; "" marks end of input."""
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        def pump() -> None:
            try:
                for line in iter(stream.readline, ""):
                    loop.call_soon_threadsafe(queue.put_nowait, line)
                loop.call_soon_threadsafe(queue.put_nowait, "")
            except RuntimeError:
                # Event loop already closed
                pass

        threading.Thread(target=pump, name="stdin-reader", daemon=True).start()
        return queue

    async def run(self, stream: Optional[TextIO] = None) -> None:
        await self.startup()
        lines = self._read_lines(stream or sys.stdin)
        try:
            while True:
                line = await lines.get()
                if not line:
                    break
                if not await self.handle_command(line):
                    break
        finally:
            await self.shutdown()


def main() -> None:
    init_app_logger(settings)
    try:
        # Dates older than a week follow the operator's locale
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        get_app_logger().warning(f"Could not apply system locale: {e}")
    app = ConsoleApp(settings)
    try:
        asyncio.run(app.run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
