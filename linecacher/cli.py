"""Command line interface for linecacher."""

from __future__ import annotations

import logging
import os
from datetime import datetime

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__, config as config_module
from .api import get_cache
from .config import SUPPORTED_THEMES, load_config
from .services.highlight_service import FORMAT_PLAIN, available_formats
from .text import Messages, Styles

console = Console()

app = typer.Typer(
    help=Messages.APP_HELP,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"linecacher v{__version__}")
        raise typer.Exit()


def _validate_format(fmt: str) -> str:
    normalized = fmt.strip().lower()
    if normalized not in available_formats():
        allowed = ", ".join(available_formats())
        raise typer.BadParameter(
            Messages.ERROR_FORMAT_INVALID.format(value=fmt, allowed=allowed)
        )
    return normalized


def _parse_boolean(value: str) -> bool:
    token = value.strip().lower()
    if token in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if token in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(Messages.ERROR_BOOLEAN_INVALID.format(value=value))


def _styled(text: str, style: str) -> str:
    return f"[{style}]{escape(text)}[/{style}]"


def _fail(message: str) -> None:
    console.print(_styled(message, Styles.ERROR), soft_wrap=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help=Messages.HELP_VERBOSE,
    ),
) -> None:
    """Global Typer callback for shared options."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    return None


@app.command()
def show(
    file: str = typer.Argument(..., help=Messages.HELP_FILE),
    line: int | None = typer.Argument(None, help=Messages.HELP_LINE),
    end: int | None = typer.Option(None, "--end", "-e", help=Messages.HELP_END),
    fmt: str = typer.Option(FORMAT_PLAIN, "--format", "-f", help=Messages.HELP_FORMAT),
) -> None:
    """Print cached lines of FILE with line numbers."""
    fmt = _validate_format(fmt)
    lines = get_cache().getlines(file, reload_on_change=True, fmt=fmt)
    if lines is None:
        _fail(Messages.ERROR_FILE_NOT_FOUND.format(name=file))
    if not lines:
        return
    first = 1 if line is None else line
    if not 1 <= first <= len(lines):
        _fail(Messages.ERROR_LINE_OUT_OF_RANGE.format(name=file, line=first, count=len(lines)))
    if end is not None:
        last = end
    elif line is not None:
        last = first
    else:
        last = len(lines)
    last = max(first, min(last, len(lines)))
    width = len(str(last))
    color = None if fmt == FORMAT_PLAIN else True
    for number in range(first, last + 1):
        typer.echo(f"{number:>{width}}  {lines[number - 1]}", color=color)


@app.command()
def info(
    file: str = typer.Argument(..., help=Messages.HELP_FILE),
) -> None:
    """Show where FILE was found and what the cache knows about it."""
    cache = get_cache()
    path = cache.cache_file(file, reload_on_change=True)
    if path is None:
        _fail(Messages.ERROR_FILE_NOT_FOUND.format(name=file))
    stat = cache.stat(file)
    if stat is None:
        size = mtime = "n/a"
    else:
        size = str(stat.size)
        mtime = datetime.fromtimestamp(stat.mtime).isoformat(timespec="seconds")
    console.print(
        Messages.INFO_FILE_SUMMARY.format(
            path=path,
            lines=cache.size(file),
            size=size,
            mtime=mtime,
            sha1=cache.sha1(file),
        ),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def lnums(
    file: str = typer.Argument(..., help=Messages.HELP_FILE),
) -> None:
    """List the line numbers a tracer can stop at in FILE."""
    result = get_cache().trace_line_numbers(file, reload_on_change=True)
    if result is None:
        _fail(Messages.ERROR_FILE_NOT_FOUND.format(name=file))
    if not result.available:
        console.print(_styled(Messages.INFO_LNUMS_UNAVAILABLE.format(name=file), Styles.WARNING))
        return
    typer.echo(" ".join(str(number) for number in result.numbers))


@app.command()
def config(
    show: bool = typer.Option(
        False,
        "--show",
        help=Messages.HELP_SHOW_CONFIG,
    ),
    add_path_option: str | None = typer.Option(
        None,
        "--add-path",
        help=Messages.HELP_ADD_PATH,
    ),
    remove_path_option: str | None = typer.Option(
        None,
        "--remove-path",
        help=Messages.HELP_REMOVE_PATH,
    ),
    clear_path: bool = typer.Option(
        False,
        "--clear-path",
        help=Messages.HELP_CLEAR_PATH,
    ),
    set_theme_option: str | None = typer.Option(
        None,
        "--set-theme",
        help=Messages.HELP_SET_THEME,
    ),
    set_reload_option: str | None = typer.Option(
        None,
        "--set-reload",
        help=Messages.HELP_SET_RELOAD,
    ),
) -> None:
    """Manage linecacher configuration stored in ~/.linecacher/config.json."""
    if set_theme_option is not None:
        normalized_theme = set_theme_option.strip().lower()
        if normalized_theme not in SUPPORTED_THEMES:
            allowed = ", ".join(SUPPORTED_THEMES)
            raise typer.BadParameter(
                Messages.ERROR_THEME_INVALID.format(value=set_theme_option, allowed=allowed)
            )
        set_theme_option = normalized_theme
    reload_value: bool | None = None
    if set_reload_option is not None:
        try:
            reload_value = _parse_boolean(set_reload_option)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    changed = False
    if clear_path:
        config_module.clear_search_path()
        console.print(_styled(Messages.INFO_PATH_CLEARED, Styles.SUCCESS))
        changed = True
    if add_path_option is not None:
        config_module.add_search_path(add_path_option)
        console.print(
            _styled(Messages.INFO_PATH_ADDED.format(path=add_path_option), Styles.SUCCESS)
        )
        changed = True
    if remove_path_option is not None:
        if config_module.remove_search_path(remove_path_option):
            console.print(
                _styled(Messages.INFO_PATH_REMOVED.format(path=remove_path_option), Styles.SUCCESS)
            )
            changed = True
        else:
            console.print(
                _styled(
                    Messages.INFO_PATH_NOT_CONFIGURED.format(path=remove_path_option),
                    Styles.WARNING,
                ),
                soft_wrap=True,
            )
    if set_theme_option is not None:
        config_module.set_theme(set_theme_option)
        console.print(
            _styled(Messages.INFO_THEME_SET.format(value=set_theme_option), Styles.SUCCESS)
        )
        changed = True
    if reload_value is not None:
        config_module.set_reload_on_change(reload_value)
        console.print(
            _styled(Messages.INFO_RELOAD_SET.format(value=reload_value), Styles.SUCCESS)
        )
        changed = True

    if show:
        cfg = load_config()
        console.print(
            Messages.INFO_CONFIG_SUMMARY.format(
                search_path=os.pathsep.join(cfg.search_path) or "(none)",
                use_sys_path="yes" if cfg.use_sys_path else "no",
                reload="yes" if cfg.reload_on_change else "no",
                script_lines="yes" if cfg.use_script_lines else "no",
                theme=cfg.theme,
            ),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    elif not changed:
        console.print(_styled(Messages.INFO_NO_CONFIG_CHANGES, Styles.INFO))


def run(argv: list[str] | None = None) -> None:
    """Entry point wrapper allowing optional argument override."""
    if argv is None:
        app()
    else:
        app(args=list(argv))
