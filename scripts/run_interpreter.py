#!/usr/bin/env python3
"""TokenSim output interpreter CLI — interpret a project's simulation results.

Usage:
    python scripts/run_interpreter.py output --customer acme --project ring-expansion
    python scripts/run_interpreter.py output --customer acme --project ring-expansion --save model.json
    python scripts/run_interpreter.py report --stdout-file run.out --stderr-file run.err
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path for consistent import resolution
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config.defaults import DEFAULT_LOG_LEVEL  # noqa: E402
from config.settings import InterpreterConfig  # noqa: E402
from tokensim.io.artifact_store import ArtifactNotFoundError  # noqa: E402
from tokensim.io.persistence import save_json, to_json  # noqa: E402
from tokensim.utils.logging_utils import configure_logging  # noqa: E402


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with the ``output``, ``report`` and ``file`` commands."""
    parser = argparse.ArgumentParser(
        prog="run_interpreter",
        description="TokenSim output interpreter — structure simulation artifacts and console output",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # ── Shared options ──────────────────────────────────────────────────────────
    parser.add_argument(
        "--log-level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write log records to this file",
    )
    parser.add_argument(
        "--save",
        type=str,
        default=None,
        metavar="PATH",
        help="Write the JSON result to PATH instead of stdout",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    # ── Project output ──────────────────────────────────────────────────────────
    output = commands.add_parser("output", help="Build the unified model for a project")
    output.add_argument("--customer", type=str, required=True, help="Customer folder name")
    output.add_argument("--project", type=str, required=True, help="Project folder name")
    output.add_argument(
        "--volume-path",
        type=str,
        default=None,
        help="Root of the shared volume (defaults to VOLUME_PATH)",
    )
    output.add_argument(
        "--stdout-file",
        type=str,
        default=None,
        help="Simulator stdout transcript to interpret alongside the artifacts",
    )
    output.add_argument(
        "--stderr-file",
        type=str,
        default=None,
        help="Simulator stderr transcript to interpret alongside the artifacts",
    )

    # ── Console report ──────────────────────────────────────────────────────────
    report = commands.add_parser("report", help="Structure a saved simulator console transcript")
    report.add_argument(
        "--stdout-file", type=str, required=True, help="Simulator stdout transcript"
    )
    report.add_argument(
        "--stderr-file", type=str, default=None, help="Simulator stderr transcript"
    )

    # ── Single artifact ─────────────────────────────────────────────────────────
    single = commands.add_parser("file", help="Print the raw text of one artifact")
    single.add_argument("--customer", type=str, required=True, help="Customer folder name")
    single.add_argument("--project", type=str, required=True, help="Project folder name")
    single.add_argument("--filename", type=str, required=True, help="Artifact file name")
    single.add_argument(
        "--volume-path",
        type=str,
        default=None,
        help="Root of the shared volume (defaults to VOLUME_PATH)",
    )

    return parser


def args_to_config(args: argparse.Namespace) -> InterpreterConfig:
    """Convert parsed CLI arguments to an InterpreterConfig instance.

    Args:
        args: Parsed argparse Namespace.

    Returns:
        InterpreterConfig with CLI overrides applied on top of the environment.
    """
    config = InterpreterConfig(log_level=args.log_level)
    volume_path = getattr(args, "volume_path", None)
    if volume_path:
        config.volume_path = volume_path
    return config


def _read_optional(path: str | None) -> str | None:
    if path is None:
        return None
    return Path(path).read_text(encoding="utf-8", errors="replace")


def _emit(data: object, save_path: str | None) -> None:
    if save_path:
        save_json(data, save_path)
    else:
        sys.stdout.write(to_json(data) + "\n")


def main() -> None:
    """CLI entrypoint — parse arguments, build config, run the selected command."""
    parser = build_arg_parser()
    args = parser.parse_args()

    configure_logging(log_level=args.log_level, log_file=args.log_file)
    logger = logging.getLogger("tokensim.run_interpreter")

    config = args_to_config(args)

    try:
        import tokensim.pipeline as pipeline

        if args.command == "output":
            stdout = _read_optional(args.stdout_file)
            stderr = _read_optional(args.stderr_file)
            context = pipeline.run(config, args.customer, args.project, stdout, stderr)
            if context.output_result is None:
                logger.error("Output interpretation failed: %s", "; ".join(context.errors))
                sys.exit(1)
            payload = context.output_result.to_dict()
            if context.console_result is not None:
                payload["consoleReport"] = context.console_result.to_dict()
            _emit(payload, args.save)

        elif args.command == "report":
            report = pipeline.extract_console_report(
                _read_optional(args.stdout_file), _read_optional(args.stderr_file)
            )
            _emit(report, args.save)

        else:
            sys.stdout.write(
                pipeline.get_output_file(args.customer, args.project, args.filename, config)
            )

    except ArtifactNotFoundError as exc:
        logger.error("%s", exc)
        sys.exit(2)
    except ValueError as exc:
        logger.error("Invalid request: %s", exc)
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Interpreter interrupted by user")
        sys.exit(0)
    except Exception as exc:
        logger.exception("Interpreter failed with unhandled exception: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
