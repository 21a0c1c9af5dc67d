from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, logging bootstrap, loading
of the repository config, dispatch to the command handler and translation of
the outcome into a process exit code.

Exit codes:
    0   success
    1   generation, collision or tool failure
    2   usage error
    130 interrupted by the user
    other values are propagated from external tools (127: tool not installed)
"""

import argparse
import json
import os
import sys
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

from woolly.core.pipeline.engine import run_generation
from woolly.core.services import scaffolder, toolchain
from woolly.core.services.places import list_places, list_systems
from woolly.domain.config import load_config, set_default_place
from woolly.domain.errors import UsageError, WoollyError
from woolly.domain.layout import place_manifest_path, validate_place_name
from woolly.domain.manifest_models import GenerationResult
from woolly.infra.editor import open_in_editor
from woolly.infra.fs import relative_posix
from woolly.infra.logging import configure_logging, for_cli, get_logger
from woolly.interface.cli import args as cli_args
from woolly.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

Handler = Callable[[argparse.Namespace, str, Dict[str, Any]], int]

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute one woolly command.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(for_cli(args.debug, args.log_file))

    repo_root = os.path.abspath(args.repo_root)
    logger.debug(f"Command '{args.command}' in {repo_root}")
    cfg = load_config(repo_root)

    handler = _COMMANDS[args.command]
    try:
        return handler(args, repo_root, cfg)
    except UsageError as e:
        logger.debug(f"Usage error: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except WoollyError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except OSError as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _resolve_place(args: argparse.Namespace, cfg: Dict[str, Any]) -> str:
    return validate_place_name(getattr(args, "place", None) or cfg["defaultPlace"])


def _cmd_gen(args: argparse.Namespace, repo_root: str, cfg: Dict[str, Any]) -> int:
    options = {"config": cfg, "dry_run": args.dry_run, "preview": args.print_tree}

    if args.single:
        results = [run_generation(repo_root, single=True, **options)]
    elif args.all_places:
        places = list_places(repo_root, cfg["placesDir"]) or [cfg["defaultPlace"]]
        results = [run_generation(repo_root, place, **options) for place in places]
    else:
        results = [run_generation(repo_root, args.place, **options)]

    if args.json_output:
        payload = [asdict(r) for r in results]
        print(json.dumps(payload if args.all_places else payload[0], ensure_ascii=False, indent=2))
    else:
        for result in results:
            _print_human_summary(result, repo_root)

    return max(_result_exit_code(r) for r in results)


def _cmd_create(args: argparse.Namespace, repo_root: str, cfg: Dict[str, Any]) -> int:
    result = scaffolder.create(
        repo_root,
        args.kind,
        args.name,
        at=args.at,
        place=args.place,
        system=args.system,
        target=args.target,
        both=args.both,
    )

    for path in result.created:
        print(i18n.t("cli.status.created", path=relative_posix(path, repo_root)))
    for path in result.skipped:
        print(i18n.t("cli.status.skipped", path=relative_posix(path, repo_root)))
    if not result.created and not result.directories:
        print(i18n.t("cli.status.nothing_created"))

    if args.kind == "place":
        place = validate_place_name(args.name)
    else:
        place = _resolve_place(args, cfg)
        if result.first_created and not args.no_open:
            open_in_editor(result.first_created)

    if args.no_gen:
        return EXIT_OK
    gen = run_generation(repo_root, place, config=cfg)
    if not gen.ok:
        print(i18n.t("cli.errors.generation_failed", error=gen.error), file=sys.stderr)
    return _result_exit_code(gen)


def _cmd_list(args: argparse.Namespace, repo_root: str, cfg: Dict[str, Any]) -> int:
    default_place = cfg["defaultPlace"]
    places = list_places(repo_root, cfg["placesDir"])
    if default_place not in places:
        places = sorted(places + [default_place])

    print(i18n.t("cli.status.places_header"))
    for place in places:
        marker = f" {i18n.t('cli.status.default_marker')}" if place == default_place else ""
        print(f"  {place}{marker}")

    for root_label, systems in list_systems(repo_root).items():
        print(i18n.t("cli.status.systems_header", root=root_label))
        if not systems:
            print(i18n.t("cli.status.none"))
        for system in systems:
            print(f"  {system}")
    return EXIT_OK


def _cmd_open(args: argparse.Namespace, repo_root: str, cfg: Dict[str, Any]) -> int:
    place = _resolve_place(args, cfg)
    manifest = place_manifest_path(repo_root, place, cfg["placesDir"])

    if not os.path.isfile(manifest):
        result = run_generation(repo_root, place, config=cfg)
        if not result.ok:
            _print_human_summary(result, repo_root)
            return _result_exit_code(result)

    if open_in_editor(manifest):
        print(i18n.t("cli.status.opened", path=relative_posix(manifest, repo_root)))
        return EXIT_OK
    print(i18n.t("cli.errors.editor_failed", path=manifest), file=sys.stderr)
    return EXIT_FAILURE


def _cmd_switch(args: argparse.Namespace, repo_root: str, cfg: Dict[str, Any]) -> int:
    place = validate_place_name(args.place)
    set_default_place(repo_root, place)
    print(i18n.t("cli.status.default_place", place=place))
    return EXIT_OK


def _cmd_setup(args: argparse.Namespace, repo_root: str, cfg: Dict[str, Any]) -> int:
    return toolchain.setup_place(repo_root, _resolve_place(args, cfg), cfg)


def _cmd_build(args: argparse.Namespace, repo_root: str, cfg: Dict[str, Any]) -> int:
    return toolchain.build_place(repo_root, _resolve_place(args, cfg), cfg)


def _cmd_serve(args: argparse.Namespace, repo_root: str, cfg: Dict[str, Any]) -> int:
    return toolchain.serve_place(repo_root, _resolve_place(args, cfg), cfg)


_COMMANDS: Dict[str, Handler] = {
    "gen": _cmd_gen,
    "create": _cmd_create,
    "list": _cmd_list,
    "open": _cmd_open,
    "switch": _cmd_switch,
    "setup": _cmd_setup,
    "build": _cmd_build,
    "serve": _cmd_serve,
}

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _result_exit_code(result: GenerationResult) -> int:
    if result.ok:
        return EXIT_OK
    return EXIT_USAGE if result.error_type == UsageError.__name__ else EXIT_FAILURE


def _print_human_summary(result: GenerationResult, repo_root: str) -> None:
    """
    Print a generation result for a terminal reader.

    Args:
        result: The generation result to render.
        repo_root: Base directory for displayed paths.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    display_path = relative_posix(result.output_path, repo_root)

    if result.tree_lines:
        print("\n".join(result.tree_lines))

    if result.written:
        print(i18n.t("cli.status.wrote", path=display_path, name=result.project_name))
    else:
        print(i18n.t("cli.status.dry_run", path=display_path, size=result.summary.get("bytes", 0)))

    if result.systems:
        print(i18n.t("cli.status.systems", systems=", ".join(result.systems)))
    logger.debug(i18n.t("cli.status.nodes", count=result.node_count))
