#!/usr/bin/env python3
"""
Arquivo - Text File Utility

Main entry point for the Arquivo CLI application.
"""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typing import Optional

from core import ArquivoConfig, AuditLogger, ErrorPolicy, FileOperationError, OperationResult
from core.config import DEFAULT_CONFIG_PATH
from modules.text_files import TextFileOperator


console = Console()
err_console = Console(stderr=True)

POLICY_CHOICE = click.Choice([p.value for p in ErrorPolicy], case_sensitive=False)


def get_config(ctx: click.Context) -> ArquivoConfig:
    """Get the configuration loaded for this invocation."""
    return ctx.obj["config"]


def get_operator(ctx: click.Context) -> TextFileOperator:
    """Get a file operator bound to the loaded configuration."""
    config = get_config(ctx)
    return TextFileOperator(config=config, logger=AuditLogger(log_path=config.audit_log))


def _policy(value: Optional[str]) -> Optional[ErrorPolicy]:
    return ErrorPolicy.from_value(value) if value else None


def _warn_audit(result: OperationResult) -> None:
    """Tell the user when the audit entry for an operation was lost."""
    if "audit_error" in result.metadata:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(result.metadata['audit_error'])}")


@click.group()
@click.version_option(version="0.1.0", prog_name="Arquivo")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to the YAML configuration file.")
@click.pass_context
def arquivo(ctx, config_path):
    """
    Arquivo - read, append, write and create text files.

    Every operation is recorded in an append-only audit log.
    """
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = ArquivoConfig.load(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))


@arquivo.command()
@click.argument("path", required=False)
@click.option("--policy", type=POLICY_CHOICE, help="Override the read error policy.")
@click.pass_context
def read(ctx, path, policy):
    """Print every line of a text file."""
    try:
        result = get_operator(ctx).read_lines(path, policy=_policy(policy))
    except FileOperationError as e:
        raise click.ClickException(str(e))

    _warn_audit(result)

    if not result.success:
        err_console.print(f"[red]Error reading file:[/red] {escape(result.message)}")
        return

    for line in result.data:
        click.echo(line)


@arquivo.command()
@click.argument("path", required=False)
@click.option("--line", "lines", multiple=True, help="Line to append (repeatable).")
@click.option("--policy", type=POLICY_CHOICE, help="Override the write error policy.")
@click.pass_context
def append(ctx, path, lines, policy):
    """Append lines to the end of a file."""
    try:
        result = get_operator(ctx).append_lines(list(lines) or None, path=path, policy=_policy(policy))
    except FileOperationError as e:
        raise click.ClickException(str(e))

    _warn_audit(result)

    if result.success:
        console.print(f"[green]File written again successfully[/green] ({result.data} lines)")
    else:
        err_console.print(f"[red]Error writing to file:[/red] {escape(result.message)}")


@arquivo.command()
@click.argument("path", required=False)
@click.option("--line", "lines", multiple=True, help="Line to write (repeatable).")
@click.option("--policy", type=POLICY_CHOICE, help="Override the write error policy.")
@click.pass_context
def write(ctx, path, lines, policy):
    """Write lines one by one, truncating the file first."""
    try:
        result = get_operator(ctx).write_sequential(list(lines) or None, path=path, policy=_policy(policy))
    except FileOperationError as e:
        raise click.ClickException(str(e))

    _warn_audit(result)

    if result.success:
        console.print(f"[green]File written successfully[/green] ({result.data} lines)")
    else:
        console.print(f"[red]Error writing to file:[/red] {escape(result.message)}")
        console.print(f"   Lines written before the failure: {result.metadata['lines_written']}")


@arquivo.command("create-home")
@click.argument("name", required=False)
@click.option("--policy", type=POLICY_CHOICE, help="Override the write error policy.")
@click.pass_context
def create_home(ctx, name, policy):
    """Create an empty file in the home directory."""
    try:
        result = get_operator(ctx).create_in_home(name, policy=_policy(policy))
    except FileOperationError as e:
        raise click.ClickException(str(e))

    _warn_audit(result)

    if result.success:
        console.print(f"[green]Created:[/green] {escape(result.path)}")
    else:
        console.print(f"[red]Error creating file:[/red] {escape(result.message)}")


@arquivo.command()
@click.argument("path", required=False)
@click.option("--policy", type=POLICY_CHOICE, help="Override the write error policy.")
@click.pass_context
def create(ctx, path, policy):
    """Create an empty file unless it already exists."""
    try:
        result = get_operator(ctx).create_if_absent(path, policy=_policy(policy))
    except FileOperationError as e:
        raise click.ClickException(str(e))

    _warn_audit(result)

    if result.success:
        console.print(f"New file created: {result.data}")
    else:
        console.print(f"[red]Error creating new file:[/red] {escape(result.message)}")


@arquivo.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.option("--failed", is_flag=True, help="Only show failed operations.")
@click.pass_context
def audit(ctx, limit, failed):
    """View the audit log."""
    logger = AuditLogger(log_path=get_config(ctx).audit_log)
    entries = logger.get_failed_actions(limit=limit) if failed else logger.get_recent(limit=limit)

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Failed Operations" if failed else "Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Operation", no_wrap=True)
    table.add_column("Target", overflow="fold")
    table.add_column("Status", no_wrap=True)
    table.add_column("Policy")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        status_str = entry.status
        if entry.status == "executed":
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == "failed":
            status_str = f"[red]{entry.status}[/red]"

        table.add_row(time_str, entry.operation, escape(entry.target), status_str, entry.policy)

    console.print(table)


@arquivo.group("config")
def config_group():
    """Show or initialize the configuration file."""
    pass


@config_group.command("show")
@click.pass_context
def config_show(ctx):
    """Show the effective settings."""
    config = get_config(ctx)

    table = Table(title="Arquivo Settings")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("local_file", config.local_file)
    table.add_row("home_file", config.home_file)
    table.add_row("append_lines", "\n".join(config.append_lines))
    table.add_row("sequential_lines", "\n".join(config.sequential_lines))
    table.add_row("read policy", config.read_policy.value)
    table.add_row("write policy", config.write_policy.value)
    table.add_row("audit_log", config.audit_log)
    table.add_row("encoding", config.encoding)

    console.print(table)


@config_group.command("init")
@click.pass_context
def config_init(ctx):
    """Write the effective settings to the configuration file."""
    path = get_config(ctx).save_config()
    console.print(f"[green]Configuration written:[/green] {escape(str(path))}")


if __name__ == "__main__":
    arquivo()
