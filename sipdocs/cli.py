#!/usr/bin/env python3
"""sipdocs CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from sipdocs.lib.config import ConfigError, load_sync_config
from sipdocs.lib.github import check_gh_available
from sipdocs.lib.validate import ValidationError
from sipdocs.proposals.classify import classify_labels
from sipdocs.proposals.frontmatter import proposal_filename, render_document
from sipdocs.sync.updater import SyncError, run_sync


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )


def cmd_sync(args):
    """Regenerate the docs repository's proposal pages and publish them."""
    try:
        config = load_sync_config(env_file=args.env_file)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    ok, error = check_gh_available()
    if not ok:
        print(f"ERROR: {error}", file=sys.stderr)
        return 2

    try:
        report = run_sync(config, push=not args.no_push)
    except (SyncError, ValidationError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Merged SIPs copied:      {report.merged_copied}")
    print(f"Pull request SIPs:       {report.pull_requests_written}")
    if report.skipped:
        skipped = ", ".join(f"#{n}" for n in report.skipped)
        print(f"Skipped pull requests:   {skipped}")
    if report.pushed:
        print("Changes pushed.")
    elif report.changed:
        print("Changes staged but not pushed.")
    else:
        print("No changes to push.")
    return 0


def cmd_classify(args):
    """Print the state a label set decodes to."""
    state = classify_labels(args.labels)
    if state is None:
        print("Unable to decode a state from these labels.")
        return 1
    print(state.describe())
    return 0


def cmd_render(args):
    """Print the file name and document a pull request would get."""
    state = classify_labels(args.labels)
    if state is None:
        print("Unable to decode a state from these labels.")
        return 1
    try:
        filename = proposal_filename(args.title)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    try:
        document = render_document(args.title, args.number, state)
    except ValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    print(f"# {filename}")
    print(document, end="")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='sipdocs',
        description='Mirror SIP states into the documentation site repository',
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # sipdocs sync
    p_sync = subparsers.add_parser('sync', help='Regenerate and publish proposal pages')
    p_sync.add_argument('--env-file', type=Path, help='KEY=value settings file')
    p_sync.add_argument('--no-push', action='store_true',
                        help='Stage changes in the temporary clone but do not commit or push')
    p_sync.set_defaults(func=cmd_sync)

    # sipdocs classify
    p_classify = subparsers.add_parser('classify', help='Decode a set of issue labels')
    p_classify.add_argument('labels', nargs='+', help='Labels, e.g. stage:design status:under-review')
    p_classify.set_defaults(func=cmd_classify)

    # sipdocs render
    p_render = subparsers.add_parser('render', help='Preview the page for a pull request')
    p_render.add_argument('--title', required=True, help='Pull request title')
    p_render.add_argument('--number', type=int, required=True, help='Pull request number')
    p_render.add_argument('labels', nargs='+', help='Pull request labels')
    p_render.set_defaults(func=cmd_render)

    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
