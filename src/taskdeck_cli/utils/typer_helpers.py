"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from taskdeck_cli.utils.ui.console import get_console


def suggest_commands(attempted: str, available: list[str], limit: int = 3) -> list[str]:
    """Known command names close enough to ``attempted`` to be a typo of it."""
    return get_close_matches(attempted, available, n=limit, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Command group that answers an unknown command with close matches.

    ``taskdeck taks`` prints "Did you mean ...?" and exits 1 instead of
    Click's generic usage error.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            suggestions = suggest_commands(args[0], sorted(self.commands)) if args else []
            if not suggestions:
                raise

            console = get_console()
            console.print(f'[red]Error:[/red] unknown command "{args[0]}" for "{ctx.command_path}"')
            if len(suggestions) == 1:
                console.print("\n[yellow]Did you mean this?[/yellow]")
            else:
                console.print("\n[yellow]Did you mean one of these?[/yellow]")
            for name in suggestions:
                console.print(f"    {ctx.command_path} {name}")
            raise typer.Exit(1) from e
