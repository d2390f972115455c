from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from varsync.app import (
    clear_prompt_variables,
    duplicate_prompt_variables,
    list_prompt_variables,
    plan_prompt_variables,
    reconcile_prompt_variables,
)
from varsync.config import configure_logging
from varsync.domain.templates import detect_variable_names, missing_variables
from varsync.ui.schema import VariableDocument, dump_variables

if TYPE_CHECKING:
    from collections.abc import Sequence

    from varsync.domain.model import DesiredVariable

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage prompt variables")
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply = subparsers.add_parser("apply", help="Reconcile a prompt's variables with a file")
    apply.add_argument("--prompt-id", type=str, required=True, help="Prompt to update")
    apply.add_argument(
        "--file",
        type=Path,
        required=True,
        help="JSON list of variables, or an object with a 'variables' list",
    )
    apply.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report the inserts, updates and deletions that would happen",
    )
    apply.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip name/limit checks before reconciling",
    )

    show = subparsers.add_parser("show", help="Print a prompt's variables as JSON")
    show.add_argument("--prompt-id", type=str, required=True, help="Prompt to read")

    copy = subparsers.add_parser("copy", help="Copy variables from one prompt to another")
    copy.add_argument("--from", dest="source", type=str, required=True, help="Source prompt")
    copy.add_argument("--to", dest="target", type=str, required=True, help="Target prompt")

    clear = subparsers.add_parser("clear", help="Remove every variable of a prompt")
    clear.add_argument("--prompt-id", type=str, required=True, help="Prompt to clear")

    detect = subparsers.add_parser("detect", help="List {{placeholders}} used in a prompt text")
    detect.add_argument("--file", type=Path, required=True, help="Prompt content file")
    detect.add_argument(
        "--prompt-id",
        type=str,
        help="Also report placeholders without a stored definition for this prompt",
    )

    return parser.parse_args(list(argv))


def _load_variables(path: Path) -> list[DesiredVariable]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read variables from {path}: {exc}") from exc
    return VariableDocument.model_validate(raw).to_domain()


def _emit(payload: object) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def _run(args: argparse.Namespace) -> None:
    if args.command == "apply":
        variables = _load_variables(args.file)
        validate = False if args.no_validate else None
        if args.dry_run:
            diff = plan_prompt_variables(args.prompt_id, variables, validate=validate)
            _emit(
                {
                    "insert": [record.name for record in diff.inserts],
                    "update": [record.name for record in diff.updates],
                    "delete": list(diff.to_delete_ids),
                }
            )
            return
        persisted = reconcile_prompt_variables(
            args.prompt_id,
            variables,
            validate=validate,
        )
        _emit(dump_variables(persisted))
    elif args.command == "show":
        _emit(dump_variables(list_prompt_variables(args.prompt_id)))
    elif args.command == "copy":
        copied = duplicate_prompt_variables(args.source, args.target)
        log.info("Copied %s variables", len(copied))
    elif args.command == "clear":
        clear_prompt_variables(args.prompt_id)
    elif args.command == "detect":
        content = args.file.read_text(encoding="utf-8")
        names = detect_variable_names(content)
        result: dict[str, object] = {"detected": names}
        if args.prompt_id:
            result["missing"] = missing_variables(content, list_prompt_variables(args.prompt_id))
        _emit(result)
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        _run(parsed_args)
    except ValueError:
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while managing variables")
        sys.exit(1)
