import json
import sys
from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from workbench import __version__
from workbench.config import PROVIDERS, WORKBENCHCONFIG, init_config
from workbench.credentials import CREDENTIALS_FILE, load_credentials, save_credential
from workbench.dispatcher import dispatch, run_workbench_action
from workbench.errors import WorkbenchError
from workbench.log import read_logs
from workbench.models import ActionPayload
from workbench.paths import resolve_project_path
from workbench.snapshot import STORE_DIRNAME, create_snapshot_store

project_option = click.option(
    "-p", "--project", "project", default=".", show_default=True,
    help="Project directory (~/ is expanded).",
)
provider_option = click.option(
    "--provider", type=click.Choice(PROVIDERS), default=None,
    help="AI CLI to use. Defaults to the configured provider.",
)
learning_option = click.option(
    "--learning/--no-learning", "learning_mode", default=None,
    help="Explain results in very easy language.",
)


def _text(value):
    """Option value, or the contents of a file when given as @path."""
    if value and value.startswith("@"):
        path = Path(value[1:]).expanduser()
        try:
            return path.read_text()
        except OSError as e:
            raise click.BadParameter(f"Cannot read {path}: {e.strerror or e}")
    return value or ""


def _run(action, project, style=None, **fields):
    """Dispatch an action and print its output. Exits 1 on any failure."""
    console = Console()
    payload = ActionPayload(project_path=project, **fields)
    try:
        result = dispatch(action, payload)
    except (WorkbenchError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    text = result.output.rstrip("\n")
    if text.strip() and style:
        console.print(f"[{style}]{escape(text)}[/{style}]")
    elif text.strip():
        console.print(text, markup=False, highlight=False)
    if not result.success:
        console.print(f"[red]{action} failed.[/red]")
        raise SystemExit(1)
    return result


@click.group()
@click.version_option(version=__version__)
def main():
    """Workbench: snapshot, AI-edit and roll back a project directory."""
    load_credentials()


@main.command()
@project_option
@provider_option
def init(project, provider):
    """Create a .workbenchconfig in the project with default settings."""
    target = resolve_project_path(project)
    if (target / WORKBENCHCONFIG).exists():
        click.echo(f"{WORKBENCHCONFIG} already exists.")
        return
    config_path = init_config(target, provider=provider)
    click.echo(f"Created {config_path}")


@main.command()
@click.argument("key")
@click.argument("value")
def auth(key, value):
    """Save a credential for the AI CLIs. Stored in ~/.workbench/credentials.

    Examples:
        workbench auth ANTHROPIC_API_KEY sk-ant-...
        workbench auth OPENAI_API_KEY sk-...
    """
    save_credential(key, value)
    click.echo(f"Saved {key} to {CREDENTIALS_FILE}")


@main.command("action")
@click.argument("name")
@click.option("--payload", "payload_json", default="-",
              help="Payload as a JSON object, or - to read it from stdin.")
def action_cmd(name, payload_json):
    """Run one action from a JSON payload and print a JSON response.

    Example:
        workbench action snapshot --payload '{"projectPath": "~/mod", "snapshotName": "v1"}'
    """
    raw = sys.stdin.read() if payload_json == "-" else payload_json
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        response = {"ok": False, "error": f"Invalid payload JSON: {e}", "kind": "ValidationError"}
    else:
        if isinstance(payload, dict):
            response = run_workbench_action(name, payload)
        else:
            response = {"ok": False, "error": "Payload must be a JSON object", "kind": "ValidationError"}

    click.echo(json.dumps(response, ensure_ascii=False))
    if not response["ok"]:
        raise SystemExit(1)


@main.command()
@project_option
@click.option("--prompt", required=True, help="The idea, or @file.")
@click.option("--spec", default="", help="Spec text, or @file.")
def generate(project, prompt, spec):
    """Write the mod spec, prompt and README scaffold into the project."""
    _run("generate", project, prompt=_text(prompt), spec=_text(spec))


@main.command()
@project_option
@provider_option
@learning_option
@click.argument("prompt")
def plan(project, provider, learning_mode, prompt):
    """Ask the AI for a plan (no code changes)."""
    _run("ai_plan", project, prompt=_text(prompt), provider=provider or "",
         learning_mode=learning_mode)


@main.command()
@project_option
@provider_option
@learning_option
@click.option("--spec", default="", help="Spec text, or @file.")
@click.option("--plan-draft", default="", help="Draft plan text, or @file.")
@click.argument("prompt")
def refine(project, provider, learning_mode, spec, plan_draft, prompt):
    """Ask the AI to turn a draft plan into a checklist (no code changes)."""
    _run("ai_refine", project, prompt=_text(prompt), spec=_text(spec),
         plan_draft=_text(plan_draft), provider=provider or "", learning_mode=learning_mode)


@main.command()
@project_option
@provider_option
@learning_option
@click.option("--spec", default="", help="Spec text, or @file.")
@click.option("--approved-plan", default="", help="Approved plan text, or @file.")
@click.argument("prompt")
def execute(project, provider, learning_mode, spec, approved_plan, prompt):
    """Let the AI apply the approved plan to the project's code.

    Take a snapshot first if you may want to undo the edit.
    """
    _run("ai_execute", project, prompt=_text(prompt), spec=_text(spec),
         approved_plan=_text(approved_plan), provider=provider or "",
         learning_mode=learning_mode)


@main.command()
@project_option
def build(project):
    """Run the build task."""
    _run("build", project)


@main.command("run-client")
@project_option
def run_client(project):
    """Run the runClient task."""
    _run("run_client", project)


@main.command()
@project_option
@click.argument("name")
def snapshot(project, name):
    """Copy the project into a named snapshot, replacing one of the same name."""
    _run("snapshot", project, style="green", snapshot_name=name)


@main.command()
@project_option
@click.argument("name")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation prompt.")
def rollback(project, name, yes):
    """Replace the project's contents with a named snapshot."""
    console = Console()
    if not yes:
        console.print(f"Roll back [bold]{escape(str(resolve_project_path(project)))}[/bold] "
                      f"to snapshot [bold]{escape(name)}[/bold]?")
        console.print(f"[dim]Everything except {STORE_DIRNAME}/ will be replaced.[/dim]")
        if not click.confirm("Are you sure?", default=False):
            console.print("[dim]Cancelled.[/dim]")
            return
    _run("rollback", project, style="green", snapshot_name=name)


@main.command()
@project_option
def snapshots(project):
    """List the project's snapshots."""
    console = Console()
    target = resolve_project_path(project)
    snapshot_list = create_snapshot_store().list(target)

    if not snapshot_list:
        console.print("[dim]No snapshots found.[/dim]")
        return

    table = Table(title="Snapshots")
    table.add_column("Name", style="bold cyan", no_wrap=True)
    table.add_column("Created", style="dim")
    table.add_column("Path", style="dim")

    for s in snapshot_list:
        table.add_row(s["name"], s["created"], s["path"])

    console.print(table)


@main.command()
@project_option
@click.option("-n", "--limit", default=20, help="Number of log entries to show.")
@click.option("--all", "show_all", is_flag=True, help="Show logs for all projects.")
def logs(project, limit, show_all):
    """Show the action audit log."""
    console = Console()
    project_filter = None if show_all else resolve_project_path(project)
    entries = read_logs(project_filter)

    if not entries:
        console.print("[dim]No logs found.[/dim]")
        return

    table = Table(title="Action Log")
    table.add_column("Time", style="dim")
    table.add_column("Action", style="bold", no_wrap=True)
    table.add_column("Snapshot", style="cyan")
    table.add_column("Result", style="bold")
    table.add_column("Error", max_width=60)
    if show_all:
        table.add_column("Project", style="dim")

    for entry in entries[-limit:]:
        ts = entry.get("timestamp", "")
        if ts:
            try:
                ts = datetime.fromisoformat(ts).strftime("%m-%d %H:%M")
            except ValueError:
                pass
        result = entry.get("result", "")
        result_style = {
            "ok": "[green]ok[/green]",
            "failed": "[yellow]failed[/yellow]",
            "error": "[red]error[/red]",
        }.get(result, escape(result))
        row = [
            ts,
            entry.get("event", ""),
            entry.get("snapshot", ""),
            result_style,
            escape(entry.get("error", "")),
        ]
        if show_all:
            row.append(entry.get("project", ""))
        table.add_row(*row)

    console.print(table)
