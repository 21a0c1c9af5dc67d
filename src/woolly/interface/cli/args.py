from __future__ import annotations

"""
CLI Argument Definition.

Defines the `woolly` command-line schema: global options plus one subparser
per command. Help strings come from the locale catalog.
"""

import argparse
import os

from woolly.core.services.scaffolder import KINDS, TARGETS
from woolly.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the woolly CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="woolly",
        description=i18n.t("app.description"),
    )

    # --- Global options ---
    p.add_argument(
        "--repo",
        dest="repo_root",
        default=os.getcwd(),
        help=i18n.t("cli.args.repo"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )

    sub = p.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    # --- gen ---
    gen = sub.add_parser("gen", help=i18n.t("cli.commands.gen"))
    gen.add_argument("place", nargs="?", default=None, help=i18n.t("cli.args.place"))
    gen.add_argument("--single", action="store_true", help=i18n.t("cli.args.single"))
    gen.add_argument("--all", dest="all_places", action="store_true", help=i18n.t("cli.args.all"))
    gen.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))
    gen.add_argument("--print-tree", action="store_true", help=i18n.t("cli.args.print_tree"))
    gen.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))

    # --- create ---
    create = sub.add_parser("create", help=i18n.t("cli.commands.create"))
    create.add_argument("kind", choices=KINDS, help=i18n.t("cli.args.kind"))
    create.add_argument("name", help=i18n.t("cli.args.name"))
    create.add_argument("--at", default=None, help=i18n.t("cli.args.at"))
    create.add_argument("--place", default=None, help=i18n.t("cli.args.create_place"))
    create.add_argument("--system", default=None, help=i18n.t("cli.args.system"))
    create.add_argument("--target", choices=TARGETS, default=None, help=i18n.t("cli.args.target"))
    create.add_argument("--both", action="store_true", help=i18n.t("cli.args.both"))
    create.add_argument("--no-open", action="store_true", help=i18n.t("cli.args.no_open"))
    create.add_argument("--no-gen", action="store_true", help=i18n.t("cli.args.no_gen"))

    # --- list ---
    sub.add_parser("list", help=i18n.t("cli.commands.list"))

    # --- place-scoped commands ---
    for name in ("open", "setup", "build", "serve"):
        cmd = sub.add_parser(name, help=i18n.t(f"cli.commands.{name}"))
        cmd.add_argument("place", nargs="?", default=None, help=i18n.t("cli.args.place"))

    switch = sub.add_parser("switch", help=i18n.t("cli.commands.switch"))
    switch.add_argument("place", help=i18n.t("cli.args.place"))

    return p
