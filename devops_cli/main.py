import logging
from typing import List, Optional, Sequence

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from devops_tools import constants as C
from devops_tools.backends import get_backend
from devops_tools.catalog import MODULE_NAMES, MODULES
from devops_tools.config import Settings, load_settings
from devops_tools.errors import UnsupportedPlatformError
from devops_tools.ledger import RunLedger
from devops_tools.os_utils import detect_platform
from devops_tools.tool_manager import INFO, Action, ActionDispatcher, run_request
from devops_tools.version_checker import VersionProber

# Initialize Rich console
console = Console()

logger = logging.getLogger(__name__)

USAGE = """\
Usage: devops-setup [options] [packages...]
Options:
  --install            Install packages or modules (default).
  --update             Update packages or modules.
  --remove, -rm        Remove packages or modules.
  --all                Apply action to all modules.
  --essentials         Apply action to DevOps Essentials.
  --infrastructure     Apply action to Infrastructure Tools.
  --additional         Apply action to Additional Tools.
  --list               Show the modules and the tools they contain.
  --verbose, -v        Enable verbose output.
  --help               Display this help message.

Examples:
  devops-setup --install --all                   # Install all modules.
  devops-setup --update terraform                # Update Terraform.
  devops-setup --remove ansible docker           # Remove Ansible and Docker.
  devops-setup --install --essentials            # Install DevOps Essentials.
"""

# ctx.meta keys filled by the option callbacks, in command-line order
ACTION_FLAGS = "action_flags"
MODULE_FLAGS = "module_flags"
ALL_FLAG = "all_modules"

STATUS_STYLES = {
    C.SUCCESS: ("✓", "green"),
    C.ERROR: ("✗", "red"),
    C.WARNING: ("!", "yellow"),
}

app = typer.Typer(
    name="devops-setup",
    help="Install, update or remove DevOps tools with the host's package manager.",
    add_completion=False,
)


def print_usage() -> None:
    console.print(USAGE, markup=False, highlight=False)


def format_status(status: str, message: str) -> Text:
    """Render one status line: ✓ for success, ✗ for errors, ! for warnings."""
    if status == INFO:
        return Text(f"\n==> {message}", style="bold blue")
    glyph, style = STATUS_STYLES.get(status, ("", ""))
    return Text(f"{glyph} {message}" if glyph else message, style=style)


def print_status(status: str, message: str) -> None:
    console.print(format_status(status, message))


def display_summary(ledger: RunLedger) -> None:
    """Print the action summary table followed by anything that went wrong."""
    if len(ledger):
        table = Table(title="Action Summary", show_lines=False)
        table.add_column("Package", style="green")
        table.add_column("Status")
        for package, status in ledger.items():
            style = "red" if status == C.FAILED else ""
            table.add_row(package, Text(status or "unknown"), style=style)
        console.print(table)

    if ledger.warnings:
        console.print(Text(f"{len(ledger.warnings)} warning(s):", style="yellow"))
        for message in ledger.warnings:
            console.print(Text(f"  - {message}", style="yellow"))
    if ledger.errors:
        console.print(Text(f"{len(ledger.errors)} error(s):", style="red"))
        for message in ledger.errors:
            console.print(Text(f"  - {message}", style="red"))


def display_catalog() -> None:
    table = Table(title="Available Modules", show_lines=True)
    table.add_column("Flag", style="cyan")
    table.add_column("Module", style="bold")
    table.add_column("Tools")
    for module in MODULES:
        table.add_row(f"--{module.name}", module.title, ", ".join(module.tools))
    console.print(table)


def setup_logging(settings: Settings, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _record_flag(key: str):
    """Option callback that appends the flag's name to ``ctx.meta[key]`` in command-line order."""
    def callback(ctx: typer.Context, param: typer.CallbackParam, value: bool) -> bool:
        if value:
            ctx.meta.setdefault(key, []).append(param.name)
        return value
    return callback


def choose_action(flags: Sequence[str]) -> Action:
    """The last action flag given wins; install when there is none."""
    return Action(flags[-1]) if flags else Action.INSTALL


def selected_modules(flags: Sequence[str]) -> List[str]:
    """Modules in the order their flags were given, without repeats; --all adds the rest in catalog order."""
    modules: List[str] = []
    for flag in flags:
        for name in (MODULE_NAMES if flag == ALL_FLAG else [flag]):
            if name not in modules:
                modules.append(name)
    return modules


def _help_callback(value: bool) -> None:
    if value:
        print_usage()
        raise typer.Exit(code=1)


@app.command(context_settings={"help_option_names": [], "ignore_unknown_options": True})
def setup(
    ctx: typer.Context,
    packages: Optional[List[str]] = typer.Argument(None, help="Individual tools to act on, e.g. 'terraform docker'", show_default=False),
    install: bool = typer.Option(False, "--install", expose_value=False, callback=_record_flag(ACTION_FLAGS),
                                 help="Install packages or modules (default)"),
    update: bool = typer.Option(False, "--update", expose_value=False, callback=_record_flag(ACTION_FLAGS),
                                help="Update packages or modules"),
    remove: bool = typer.Option(False, "--remove", "-rm", expose_value=False, callback=_record_flag(ACTION_FLAGS),
                                help="Remove packages or modules"),
    all_modules: bool = typer.Option(False, "--all", expose_value=False, callback=_record_flag(MODULE_FLAGS),
                                     help="Apply action to all modules"),
    essentials: bool = typer.Option(False, "--essentials", expose_value=False, callback=_record_flag(MODULE_FLAGS),
                                    help="Apply action to DevOps Essentials"),
    infrastructure: bool = typer.Option(False, "--infrastructure", expose_value=False, callback=_record_flag(MODULE_FLAGS),
                                        help="Apply action to Infrastructure Tools"),
    additional: bool = typer.Option(False, "--additional", expose_value=False, callback=_record_flag(MODULE_FLAGS),
                                    help="Apply action to Additional Tools"),
    list_modules: bool = typer.Option(False, "--list", help="Show the modules and their tools"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    help_: bool = typer.Option(False, "--help", is_eager=True, expose_value=False, callback=_help_callback,
                               help="Display this help message"),
):
    settings = load_settings()
    setup_logging(settings, verbose)

    if list_modules:
        display_catalog()
        return

    modules = selected_modules(ctx.meta.get(MODULE_FLAGS, []))
    names = list(packages or [])
    if not modules and not names:
        print_usage()
        raise typer.Exit(code=1)

    action = choose_action(ctx.meta.get(ACTION_FLAGS, []))

    try:
        os_type = detect_platform()
    except UnsupportedPlatformError as e:
        console.print(Text(str(e), style="red"))
        raise typer.Exit(code=1)
    logger.info("Detected platform %s, action %s", os_type.value, action.value)

    dispatcher = ActionDispatcher(
        get_backend(os_type, settings),
        VersionProber(timeout=settings.probe_timeout),
        report=print_status,
    )
    ledger = run_request(dispatcher, action, modules, names)

    console.print()
    display_summary(ledger)
    console.print(Text("\nAll done!", style="green"))


def main():
    """Main entry point"""
    app()

if __name__ == "__main__":
    main()
