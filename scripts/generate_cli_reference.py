#!/usr/bin/env python3
"""Write docs/reference/cli-commands.md from the fintrack Typer app.

Walks the Click command tree that Typer builds, so global options declared
on the app callback (such as --verbose) are documented alongside each
command's own arguments and options.
"""

import sys
from pathlib import Path

import click
import typer

# Run from a checkout without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fintrack.cli import app

OUTPUT_PATH = Path(__file__).resolve().parent.parent / "docs" / "reference" / "cli-commands.md"


def describe_param(param: click.Parameter) -> str:
    """One Markdown bullet for an argument or option."""
    if isinstance(param, click.Argument):
        return f"- `{param.human_readable_name}` (required)"

    flags = ", ".join(f"`{opt}`" for opt in [*param.opts, *param.secondary_opts])
    line = f"- {flags}"
    help_text = getattr(param, "help", None)
    if help_text:
        line += f": {help_text}"
    if param.default not in (None, False, "") and not param.is_flag:
        line += f" (default: {param.default})"
    return line


def describe_params(title: str, params: list[click.Parameter]) -> list[str]:
    visible = [p for p in params if p.name != "help"]
    if not visible:
        return []
    return [f"**{title}:**", "", *(describe_param(p) for p in visible), ""]


def describe_command(name: str, command: click.Command) -> list[str]:
    usage = " ".join(["fintrack", name, *(f"{p.human_readable_name}" for p in command.params if isinstance(p, click.Argument))])
    lines = [f"### {name}", "", (command.help or "").strip(), "", "```bash", usage + " [OPTIONS]", "```", ""]
    lines += describe_params("Arguments", [p for p in command.params if isinstance(p, click.Argument)])
    lines += describe_params("Options", [p for p in command.params if isinstance(p, click.Option)])
    return lines


def build_reference() -> str:
    group = typer.main.get_command(app)
    assert isinstance(group, click.Group)

    lines = [
        "# fintrack CLI reference",
        "",
        (group.help or "").strip(),
        "",
        "```bash",
        "fintrack [GLOBAL OPTIONS] COMMAND [ARGS] [OPTIONS]",
        "```",
        "",
        "## Global options",
        "",
    ]
    lines += [describe_param(p) for p in group.params if p.name != "help"]
    lines += ["", "## Commands", ""]

    ctx = click.Context(group)
    for name in group.list_commands(ctx):
        command = group.get_command(ctx, name)
        if command is not None:
            lines += describe_command(name, command)

    return "\n".join(lines)


def main() -> None:
    OUTPUT_PATH.parent.mkdir(parents=True, exist_ok=True)
    OUTPUT_PATH.write_text(build_reference())
    print(f"Wrote {OUTPUT_PATH}")


if __name__ == "__main__":
    main()
