"""Command-line interface: render trace reports and post them to GitHub."""

import argparse
import logging
import sys

from .config import CommandConfig, ConfigError, RenderOptions
from .tools.clients import GitHubClient, GitHubError
from .tools.common.telemetry import setup_telemetry
from .tools.trace import (
    DecodeError,
    compare_multiple_traces,
    compare_traces,
    generate_info_comment,
    load_trace_file,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="otel-compare",
        description=(
            "Read JSON files with OpenTelemetry traces, render Markdown reports "
            "and compare them in GitHub pull requests."
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_publish_flags(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "-p", "--pr", type=int, default=0, help="Pull request number to comment on"
        )
        sub.add_argument("--owner", default="", help="GitHub repository owner")
        sub.add_argument("--repo", default="", help="GitHub repository name")
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the comment to stdout without posting to GitHub",
        )
        sub.add_argument(
            "--id-length",
            type=int,
            default=RenderOptions.id_length,
            help="Number of characters shown for trace and span ids",
        )

    info = subparsers.add_parser(
        "info", help="Generate trace information for a GitHub PR"
    )
    info.add_argument(
        "-i", "--input", required=True, help="Input JSON file containing traces"
    )
    add_publish_flags(info)

    compare = subparsers.add_parser(
        "compare",
        help="Compare traces between different files",
        description=(
            "Compare traces between different files and generate a markdown report.\n"
            "For example:\n"
            "  otel-compare compare -i file1.json -i file2.json -i file3.json\n"
            "  otel-compare compare -i file1.json -i file2.json -a http.url"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    compare.add_argument(
        "-i",
        "--input",
        action="append",
        required=True,
        help="Input JSON files to compare (repeat for each file)",
    )
    compare.add_argument(
        "-a",
        "--attribute",
        default="trace_id",
        help="Attribute used to identify traces: trace_id, name or any attribute key",
    )
    compare.add_argument(
        "--pairwise",
        action="store_true",
        help="Render a two-file comparison matched by root span name",
    )
    add_publish_flags(compare)

    return parser


def config_from_args(args: argparse.Namespace) -> CommandConfig:
    inputs = args.input if isinstance(args.input, list) else [args.input]
    return CommandConfig.from_env(
        inputs=inputs,
        attribute=getattr(args, "attribute", "trace_id"),
        pairwise=getattr(args, "pairwise", False),
        pr_number=args.pr,
        owner=args.owner,
        repo=args.repo,
        dry_run=args.dry_run,
        render=RenderOptions(id_length=args.id_length),
    )


def run_info(config: CommandConfig) -> str:
    config.validate(min_inputs=1)
    trace_set = load_trace_file(config.inputs[0])
    return generate_info_comment(trace_set.traces, config.render)


def run_compare(config: CommandConfig) -> str:
    config.validate(min_inputs=2)
    trace_sets = [load_trace_file(path) for path in config.inputs]
    if config.pairwise:
        return compare_traces(
            trace_sets[0].traces, trace_sets[1].traces, options=config.render
        )
    return compare_multiple_traces(trace_sets, config.attribute, config.render)


def publish(config: CommandConfig, markdown: str) -> None:
    """Prints the report in dry-run mode, otherwise posts it as a PR comment."""
    if config.dry_run:
        sys.stdout.write(markdown)
        return

    with GitHubClient(
        config.token or "", base_url=config.api_url, timeout=config.timeout
    ) as client:
        client.comment_pr(config.owner, config.repo, config.pr_number, markdown)


COMMANDS = {
    "info": run_info,
    "compare": run_compare,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_telemetry(logging.WARNING)

    try:
        config = config_from_args(args)
        markdown = COMMANDS[args.command](config)
        publish(config, markdown)
    except (ConfigError, DecodeError, GitHubError) as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"error reading input file: {e}")
        return 1
    return 0
