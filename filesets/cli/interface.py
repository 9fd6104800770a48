# filesets/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import click
from click_option_group import optgroup
import logging as stdlib_logging

from filesets import __version__ as app_version
from filesets.config.loader import load_and_merge_configs, resolve_profile_options
from filesets.config.settings import INFINITE, LinksPolicy
from filesets.core.fileset import Fileset
from filesets.core.merge import merge
from filesets.cli.console_output import print_file_list, print_merge_result, print_summary
from filesets.exceptions import FilesetError
from filesets.logging_setup import configure_logging, get_logger

log = get_logger(__name__)

# cli parameter name -> fileset option key
CLI_PARAM_TO_OPTION_MAP: Dict[str, str] = {
    "recurse": "recurse",
    "recurselimit": "recurselimit",
    "ignore_patterns": "ignore",
    "links": "links",
    "checksum_type": "checksum_type",
}

def _parse_recurselimit(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Any:
    if value is None:
        return None
    if value.lower() == INFINITE.value:
        return INFINITE
    if value.isdigit():
        return int(value)
    raise click.BadParameter(f"expected a non-negative integer or '{INFINITE.value}', got '{value}'")

def fileset_options(cmd: Callable) -> Callable:
    """Applies the shared traversal options to a Click command."""
    decorators = [
        optgroup.group("Traversal Options", help="Control how far and how the tree is walked."),
        optgroup.option("-r", "--recurse/--no-recurse", "recurse", default=None, help="Recurse into subdirectories. Default: off."),
        optgroup.option("--recurselimit", "recurselimit", default=None, metavar="N|infinite", callback=_parse_recurselimit, help="Deepest level still listed when recursing (root is 0). Default: infinite."),
        optgroup.option("-L", "--links", "links", type=click.Choice([p.value for p in LinksPolicy]), default=None, help="'manage' treats symlinks as leaves, 'follow' walks into them. Default: manage."),
        optgroup.group("Filtering Options", help="Control which entries are pruned."),
        optgroup.option("-i", "--ignore", "ignore_patterns", multiple=True, help="Glob matched against entry names; matches and their subtrees are skipped."),
        optgroup.group("Application Behavior", help="Configuration profiles and console feedback."),
        optgroup.option("--checksum-type", "checksum_type", default=None, help="Checksum type carried on the fileset for downstream consumers."),
        optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s)."),
        optgroup.option("--summary", "show_summary", is_flag=True, default=False, help="Print an entry count summary on stderr."),
    ]
    for decorator in reversed(decorators):
        cmd = decorator(cmd)
    return cmd

def _effective_options(ctx: click.Context, cli_params: Dict[str, Any]) -> Dict[str, Any]:
    # config file < profile < options given on the command line.
    raw_configs_from_toml_files = load_and_merge_configs()
    options = resolve_profile_options(raw_configs_from_toml_files, cli_params.get("active_config_profile_name"))

    for cli_param, option_key in CLI_PARAM_TO_OPTION_MAP.items():
        if ctx.get_parameter_source(cli_param) != click.core.ParameterSource.COMMANDLINE:
            continue
        value = cli_params[cli_param]
        if isinstance(value, tuple):
            value = list(value)
        options[option_key] = value

    log.debug("effective_fileset_options", options={k: str(v) for k, v in options.items()})
    return options

def _build_filesets(paths: Tuple[Path, ...], options: Dict[str, Any]) -> List[Fileset]:
    return [Fileset(str(p.absolute()), options) for p in paths]

def _run_guarded(action: Callable[[], None]) -> None:
    try:
        action()
    except click.exceptions.Exit as e:
        raise e
    except FilesetError as e:
        log.error(
            "cli_execution_error",
            error_type=type(e).__name__,
            message=str(e),
            is_debug=(stdlib_logging.getLogger("filesets").getEffectiveLevel() <= stdlib_logging.DEBUG),
        )
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except click.ClickException:
        raise
    except Exception as e:
        log.critical("cli_unexpected_critical_error", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)

@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@click.option("--force-json-logs", "force_json_logs", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="filesets", prog_name="filesets", help="Show version and exit.")
def main_cli_group(verbosity_level: int, force_json_logs: bool):
    """filesets: enumerate a directory tree as root-relative paths,
    with depth limits, ignore globs and symlink policy."""
    log_level = "warning"
    if verbosity_level == 1:
        log_level = "info"
    elif verbosity_level >= 2:
        log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs)

@main_cli_group.command("list")
@click.argument("path", type=click.Path(path_type=Path))
@fileset_options
@click.pass_context
def list_command(ctx: click.Context, path: Path, **cli_params: Any):
    """Print the files of the fileset rooted at PATH, one per line."""
    log.debug("cli_command_invoked", command="list", path=str(path))

    def _list():
        fileset = Fileset(str(path.absolute()), _effective_options(ctx, cli_params))
        files = fileset.files()
        print_file_list(files)
        if cli_params.get("show_summary"):
            print_summary(len(files), [fileset.path])

    _run_guarded(_list)

@main_cli_group.command("merge")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@fileset_options
@click.option("--format", "output_format", type=click.Choice(["plain", "table"]), default="plain", help="Output layout. Default: plain.")
@click.pass_context
def merge_command(ctx: click.Context, paths: Tuple[Path, ...], output_format: str, **cli_params: Any):
    """Merge the filesets rooted at PATHS; earlier paths win on collisions."""
    log.debug("cli_command_invoked", command="merge", paths=[str(p) for p in paths])

    def _merge():
        filesets = _build_filesets(paths, _effective_options(ctx, cli_params))
        merged = merge(*filesets)
        print_merge_result(merged, output_format)
        if cli_params.get("show_summary"):
            print_summary(len(merged), [fs.path for fs in filesets])

    _run_guarded(_merge)

