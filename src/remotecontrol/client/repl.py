"""Interactive REPL for the remote-control client."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory, InMemoryHistory

from remotecontrol import __version__
from remotecontrol.client.commands import ClientCommands

if TYPE_CHECKING:
    from pathlib import Path


class InteractiveRepl:
    """Reads one line at a time and resolves it before reading the next."""

    def __init__(
        self,
        commands: ClientCommands,
        history_file: Path | None = None,
    ) -> None:
        self.commands = commands
        self.console = commands.console

        history = FileHistory(str(history_file)) if history_file else InMemoryHistory()
        self.session: PromptSession[str] = PromptSession(
            history=history,
            auto_suggest=AutoSuggestFromHistory(),
        )

    def _read_line(self) -> str:
        completer = WordCompleter(self.commands.registry.names(), sentence=True)
        return self.session.prompt(self.commands.session.prompt, completer=completer)

    async def run(self, connect_url: str | None = None) -> None:
        """Run until ``exit`` or end of input."""
        self.console.print(f"[bold]remote-control[/bold] v{__version__}")
        self.console.print("Type [bold]help[/bold] for commands, [bold]exit[/bold] to quit.\n")

        if connect_url:
            await self.commands.handle(f"connect {connect_url}")

        loop = asyncio.get_running_loop()
        while not self.commands.exit_requested:
            try:
                line = await loop.run_in_executor(None, self._read_line)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            line = line.strip()
            if line:
                await self.commands.handle(line)
