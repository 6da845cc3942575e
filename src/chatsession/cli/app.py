"""Main CLI application using Typer."""
import asyncio
import logging
import os

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import DEFAULT_ERROR_MESSAGE, ENV_LOG_LEVEL
from ..models import Message
from ..store import SessionStore
from .providers import get_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chatsession",
    help="Chat with a conversation backend and manage the current session",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_EXIT_WORDS = ("exit", "quit", "q")


@app.callback()
def configure(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning or error (default: warning)"
    )
):
    """Configure logging for every command."""
    level_name = (log_level or os.getenv(ENV_LOG_LEVEL, "warning")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        console.print(f"[red]Error: unknown log level {level_name.lower()}[/red]")
        raise typer.Exit(code=1)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_message(message: Message) -> None:
    if message.role == "user":
        console.print(f"[bold yellow]You:[/bold yellow] {message.content}")
    else:
        console.print(f"[bold green]Assistant:[/bold green] {message.content}")


def _print_conversations(store: SessionStore) -> None:
    if not store.has_conversations:
        console.print("[dim]No conversations yet.[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("", width=1)
    table.add_column("Title", style="bold")
    table.add_column("Last message")
    table.add_column("Active", style="dim")
    table.add_column("ID", style="dim")

    for conversation in store.conversations:
        marker = "*" if conversation.id == store.current_conversation_id else ""
        table.add_row(
            marker,
            conversation.title,
            conversation.description,
            conversation.timestamp,
            conversation.id,
        )

    console.print(table)


@app.command()
def conversations():
    """List conversations, most recently active first."""
    async def _conversations():
        store = get_store(console)
        async with store.repository:
            await store.load_conversations()
            _print_conversations(store)

    asyncio.run(_conversations())


@app.command()
def new():
    """Start a new chat. The conversation is created on the next send."""
    store = get_store(console)
    store.new_chat()
    console.print("[green]Started a new chat.[/green]")


@app.command()
def status():
    """Show backend configuration and the current conversation."""
    store = get_store(console)
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    table.add_row("Backend", store.repository.backend_type)
    table.add_row("Current conversation", store.current_conversation_id or "None")
    console.print(table)


@app.command()
def history(
    conversation_id: str = typer.Argument(
        None,
        help="Conversation to show (default: the current one)"
    )
):
    """Show the messages of a conversation and make it current."""
    async def _history():
        store = get_store(console)
        target = conversation_id or store.current_conversation_id
        if target is None:
            console.print("[yellow]No current conversation. Pass an ID or send a message first.[/yellow]")
            raise typer.Exit(code=1)

        changes: list[frozenset[str]] = []
        unsubscribe = store.subscribe(lambda _store, fields: changes.append(fields))
        async with store.repository:
            await store.load_conversation(target)
        unsubscribe()

        if not any("messages" in fields for fields in changes):
            console.print(f"[red]Error: could not load conversation {target}[/red]")
            raise typer.Exit(code=1)

        if not store.has_messages:
            console.print("[dim]No messages yet.[/dim]")
        for message in store.messages:
            _print_message(message)

    asyncio.run(_history())


@app.command()
def send(
    message: str = typer.Argument(..., help="Message to send"),
):
    """Send a message to the current conversation (creating one if needed)."""
    async def _send():
        store = get_store(console)
        store.set_input_value(message)
        if not store.can_submit:
            console.print("[yellow]Nothing to send.[/yellow]")
            raise typer.Exit(code=1)

        async with store.repository:
            await store.send_message()

        if store.input_value:
            # Input is only kept when no conversation could be created
            console.print("[red]Error: could not create a conversation[/red]")
            raise typer.Exit(code=1)

        reply = store.messages[-1]
        if reply.content == DEFAULT_ERROR_MESSAGE:
            console.print(f"[red]Error: {reply.content}[/red]")
            raise typer.Exit(code=1)

        _print_message(reply)
        console.print(f"[dim]Conversation: {store.current_conversation_id}[/dim]")

    asyncio.run(_send())


@app.command()
def chat():
    """Interactive chat mode."""
    async def _chat():
        store = get_store(console)

        async with store.repository:
            if store.current_conversation_id is not None:
                await store.load_conversation(store.current_conversation_id)
                for message in store.messages:
                    _print_message(message)

            console.print("[bold cyan]chatsession interactive chat[/bold cyan]")
            console.print("[dim]Commands: /new, /list, /open ID. Type 'exit', 'quit', or 'q' to leave[/dim]\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                text = user_input.strip()
                if not text:
                    continue
                if text.lower() in _EXIT_WORDS:
                    console.print("[dim]Goodbye![/dim]")
                    break

                if text == "/new":
                    store.new_chat()
                    console.print("[dim]Started a new chat.[/dim]")
                    continue
                if text == "/list":
                    await store.load_conversations()
                    _print_conversations(store)
                    continue
                if text.startswith("/open "):
                    await store.load_conversation(text[len("/open "):].strip())
                    for message in store.messages:
                        _print_message(message)
                    continue

                store.set_input_value(text)
                await store.send_message()
                if store.input_value:
                    console.print("[red]Error: could not create a conversation[/red]")
                    store.clear_input()
                    continue
                _print_message(store.messages[-1])
                console.print()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command():
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        store = get_store(console)
        async with store.repository:
            await run_textual_tui(store)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
