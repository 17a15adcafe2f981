"""enigma_sim.cli.

Command-line interface for **enigma-sim**.

This module exposes a small Typer-based CLI that can:

- Run a message stream (setup lines and messages) through a configured machine.
- Convert a single message with an inline setup line.
- List the rotors a configuration file provides.

Design notes
- Domain errors are raised as :class:`~enigma_sim.errors.EnigmaError` and converted
  to exit code 1 after printing ``Error: <message>`` on stderr.
- A malformed line aborts the whole run; nothing is written to an output file.
- Options are defined as module-level constants to keep defaults static.
- ``--verbose`` turns on debug logging through a Rich log handler on stderr.

Commands
- `run`: `enigma-sim run CONFIG [INPUT] [OUTPUT]`; input defaults to stdin and
  output to stdout. Each converted line is printed in groups of five symbols.
- `encode`: `enigma-sim encode --config CONFIG --setting "* B Beta III IV I AXLE" --text "..."`.
- `rotors`: `enigma-sim rotors --config CONFIG`.

"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import MachineConfig, apply_setup, parse_config, parse_setup
from .errors import EnigmaError
from .messages import format_groups, process_lines

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("enigma_sim")


VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")
CONFIG_ARG = typer.Argument(..., help="Machine configuration file.")
INPUT_ARG = typer.Argument(None, help="Message file (default: stdin).")
OUTPUT_ARG = typer.Argument(None, help="Output file (default: stdout).")
CONFIG_OPT = typer.Option(..., "--config", "-c", help="Machine configuration file.")
SETTING_OPT = typer.Option(
    ..., "--setting", "-s", help='Setup line, e.g. "* B Beta III IV I AXLE (HQ) (EX)".'
)
TEXT_OPT = typer.Option(..., "--text", help="Message to convert.")


def _configure_logging(verbose: bool) -> None:
    """Route package logs to stderr through Rich.

    Args:
        verbose: Log at DEBUG when True, WARNING otherwise.

    """
    handler = RichHandler(console=err_console, show_path=False)
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _fail(exc: Exception) -> typer.Exit:
    err_console.print(f"Error: {exc}", markup=False, highlight=False, soft_wrap=True)
    return typer.Exit(code=1)


def _load_config(path: Path) -> MachineConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EnigmaError(f"could not open {path}") from exc
    return parse_config(text)


def _write_text(path: Path, content: str) -> None:
    """Write UTF-8 text to disk, ensuring parent directories exist.

    Args:
        path: Target file path.
        content: Text content to write.

    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="\n")


@app.callback()
def main(verbose: bool = VERBOSE_OPT) -> None:
    """Rotor cipher machine simulator."""
    _configure_logging(verbose)


@app.command("run")
def run(
    config: Path = CONFIG_ARG,
    input_file: Path | None = INPUT_ARG,
    output_file: Path | None = OUTPUT_ARG,
) -> None:
    """Process setup lines and messages, printing converted groups.

    Lines starting with ``*`` set the machine up; every other line is
    converted and written out in groups of five.

    Raises:
        typer.Exit: Exit code 1 on domain errors or unreadable files.

    """
    try:
        machine = _load_config(config).build_machine()

        if input_file is not None:
            try:
                lines = input_file.read_text(encoding="utf-8").splitlines()
            except OSError as exc:
                raise EnigmaError(f"could not open {input_file}") from exc
        else:
            lines = sys.stdin.read().splitlines()

        if output_file is None:
            for converted in process_lines(machine, lines):
                console.out(format_groups(converted), highlight=False)
        else:
            out = [format_groups(converted) for converted in process_lines(machine, lines)]
            try:
                _write_text(output_file, "".join(f"{ln}\n" for ln in out))
            except OSError as exc:
                raise EnigmaError(f"could not open {output_file}") from exc

    except EnigmaError as exc:
        raise _fail(exc) from exc


@app.command("encode")
def encode(
    config: Path = CONFIG_OPT,
    setting: str = SETTING_OPT,
    text: str = TEXT_OPT,
) -> None:
    """Convert one message with an inline setup line.

    Encoding and decoding are the same operation: feeding the output back in
    with the same setting restores the message.

    Raises:
        typer.Exit: Exit code 1 on domain errors.

    """
    try:
        machine = _load_config(config).build_machine()
        if not setting.startswith("*"):
            setting = "* " + setting
        apply_setup(machine, parse_setup(setting, machine.num_rotors()))
        converted = machine.convert(text)
        console.print(Panel.fit(format_groups(converted), title="converted"))
    except EnigmaError as exc:
        raise _fail(exc) from exc


@app.command("rotors")
def rotors(config: Path = CONFIG_OPT) -> None:
    """List the rotors available in a configuration file."""
    try:
        cfg = _load_config(config)
    except EnigmaError as exc:
        raise _fail(exc) from exc

    table = Table(title=f"{cfg.num_rotors} slots, {cfg.pawls} pawls")
    table.add_column("Name", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Notches")
    table.add_column("Wiring")
    for rotor in cfg.rotors:
        table.add_row(
            rotor.name,
            rotor.kind.name.lower(),
            "".join(sorted(rotor.notches)),
            " ".join(f"({c})" for c in rotor.permutation().cycles),
        )
    console.print(table)
