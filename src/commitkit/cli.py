# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""CLI entry point for commitkit.

Provides the ``commitkit`` command with subcommands:

- ``lint``: Validate commit message files (use as a ``commit-msg`` hook).
- ``bump``: Compute the next version from commit messages.
- ``changelog``: Group commit messages into changelog sections.
- ``branch``: Validate a branch name.
- ``explain``: Explain an error code.

``bump`` and ``changelog`` read NUL-separated messages, which is what
``git log -z --format=%B <last-tag>..HEAD`` produces::

    git log -z --format=%B v1.2.3..HEAD | commitkit bump 1.2.3
    commitkit lint .git/COMMIT_EDITMSG --strip-comments
    commitkit branch "$(git rev-parse --abbrev-ref HEAD)"

Exit codes: 0 on success, 1 for errors and rejected input, 2 for usage
errors, 130 when interrupted.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from rich_argparse import RichHelpFormatter

from commitkit import __version__
from commitkit.branch import ValidationFailure, validate_branch
from commitkit.changelog import Changelog
from commitkit.commit_parsing import ConventionalCommitParser, ParsedCommit, ParseFailure
from commitkit.config import CommitKitConfig, load_config, load_config_file
from commitkit.errors import CommitKitError, E, explain, render_error
from commitkit.logging import bind_config_path, configure_logging, get_logger, run_context
from commitkit.plan import plan_release
from commitkit.versioning import SemanticVersion

logger = get_logger(__name__)

# Line "git commit -v" writes above the diff; git discards it and everything below.
SCISSORS_LINE = '# ------------------------ >8 ------------------------'


def _load_config(args: argparse.Namespace) -> CommitKitConfig:
    """Load the config from ``--config`` or the current directory."""
    if args.config:
        config = load_config_file(Path(args.config))
    else:
        config = load_config(Path.cwd())
    bind_config_path(config.config_path)
    return config


def _strip_comment_lines(text: str) -> str:
    """Drop lines starting with ``#`` and cut at the scissors line, as git does."""
    kept: list[str] = []
    for line in text.split('\n'):
        if line.rstrip() == SCISSORS_LINE:
            break
        if not line.startswith('#'):
            kept.append(line)
    return '\n'.join(kept)


def _read_text(path: str) -> str:
    """Read a UTF-8 message file, raising :class:`CommitKitError` on failure."""
    try:
        return Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise CommitKitError(
            code=E.INPUT_UNREADABLE,
            message=f'Cannot read {path}: {exc}',
            hint='Check that the path exists and that the file is UTF-8 text.',
        ) from exc


def _read_messages(args: argparse.Namespace) -> list[str]:
    """Read NUL-separated commit messages from ``--messages`` or stdin.

    Messages are returned oldest-first; ``--newest-first`` input (the
    ``git log`` default) is reversed.
    """
    if args.messages:
        text = _read_text(args.messages)
    else:
        text = sys.stdin.read()
    messages = [chunk for chunk in text.split('\0') if chunk.strip()]
    if args.newest_first:
        messages.reverse()
    return messages


def _commit_to_dict(commit: ParsedCommit) -> dict[str, Any]:  # noqa: ANN401
    """Serialize a commit for JSON output."""
    return {
        'type': commit.type,
        'scope': commit.scope,
        'description': commit.description,
        'breaking': commit.breaking,
        'sha': commit.sha,
    }


def _changelog_to_dict(changelog: Changelog) -> dict[str, list[dict[str, Any]]]:  # noqa: ANN401
    """Serialize a changelog as ``{heading: [commit, ...]}``."""
    return {heading: [_commit_to_dict(c) for c in commits] for heading, commits in changelog.as_dict().items()}


def _format_changelog_text(changelog: Changelog) -> str:
    """Render a changelog as plain Markdown-ish text."""
    lines: list[str] = []
    for section in changelog.sections:
        if lines:
            lines.append('')
        lines.append(f'## {section.heading}')
        lines.append('')
        for commit in section.commits:
            scope = f'**{commit.scope}**: ' if commit.scope else ''
            lines.append(f'- {scope}{commit.description}')
    return '\n'.join(lines)


def _cmd_lint(args: argparse.Namespace) -> int:
    """Handle the ``lint`` subcommand."""
    config = _load_config(args)
    parser = ConventionalCommitParser(config.types)

    sources: list[tuple[str, str]] = []
    if args.stdin:
        sources.append(('<stdin>', sys.stdin.read()))
    for path in args.files:
        sources.append((path, _read_text(path)))

    if not sources:
        print('commitkit lint: no input (pass FILE or --stdin)', file=sys.stderr)  # noqa: T201 - CLI output
        return 2

    failed = 0
    for name, text in sources:
        if args.strip_comments:
            text = _strip_comment_lines(text)
        result = parser.parse(text)
        if isinstance(result, ParseFailure):
            failed += 1
            logger.debug('lint_failed', source=name, code=result.code.value)
            print(f'{name}:', file=sys.stderr)  # noqa: T201 - CLI output
            render_error(result.to_error())
        else:
            logger.debug('lint_ok', source=name, type=result.type, breaking=result.breaking)

    logger.info('lint_complete', checked=len(sources), failed=failed)
    return 1 if failed else 0


def _cmd_bump(args: argparse.Namespace) -> int:
    """Handle the ``bump`` subcommand."""
    config = _load_config(args)
    current = SemanticVersion.parse(args.version)
    plan = plan_release(_read_messages(args), current, config)
    if args.strict:
        plan.raise_for_failures()

    if args.format == 'json':
        data = {
            'current': str(plan.current),
            'next_version': str(plan.next_version),
            'impact': plan.impact.value,
            'commits': len(plan.commits),
            'skipped': len(plan.skipped),
            'failures': [{'code': f.code.value, 'subject': f.subject, 'reason': f.reason} for f in plan.failures],
        }
        print(json.dumps(data, indent=2))  # noqa: T201 - CLI output
    else:
        print(plan.next_version)  # noqa: T201 - CLI output
    return 0


def _cmd_changelog(args: argparse.Namespace) -> int:
    """Handle the ``changelog`` subcommand."""
    config = _load_config(args)
    plan = plan_release(_read_messages(args), SemanticVersion(0, 0, 0), config)
    if args.strict:
        plan.raise_for_failures()

    if args.format == 'json':
        print(json.dumps(_changelog_to_dict(plan.changelog), indent=2))  # noqa: T201 - CLI output
    elif plan.changelog:
        print(_format_changelog_text(plan.changelog))  # noqa: T201 - CLI output
    else:
        logger.info('changelog_empty', commits=len(plan.commits))
    return 0


def _cmd_branch(args: argparse.Namespace) -> int:
    """Handle the ``branch`` subcommand."""
    config = _load_config(args)
    result = validate_branch(args.name, categories=config.branch_categories)
    if isinstance(result, ValidationFailure):
        render_error(result.to_error())
        return 1
    print(f'category={result.category} slug={result.slug}')  # noqa: T201 - CLI output
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def _add_message_args(parser: argparse.ArgumentParser) -> None:
    """Add the message-input flags shared by ``bump`` and ``changelog``."""
    parser.add_argument(
        '--messages',
        metavar='FILE',
        default=None,
        help='File with NUL-separated commit messages (default: stdin).',
    )
    parser.add_argument(
        '--newest-first',
        action='store_true',
        help='Input is newest-first, as plain "git log" prints it.',
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on the first message that is not a Conventional Commit.',
    )
    parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default='text',
        help='Output format (default: text).',
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='commitkit',
        description='Conventional Commits linting, version bumps, and changelogs.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        default=None,
        help='Path to commitkit.toml (default: ./commitkit.toml if present).',
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Enable debug logging.',
    )
    parser.add_argument(
        '--quiet',
        '-q',
        action='store_true',
        help='Only log warnings and errors.',
    )
    parser.add_argument(
        '--json-log',
        action='store_true',
        help='Emit logs as JSON lines on stderr.',
    )

    subparsers = parser.add_subparsers(dest='command')

    lint_parser = subparsers.add_parser(
        'lint',
        help='Validate commit message files.',
        formatter_class=RichHelpFormatter,
    )
    lint_parser.add_argument(
        'files',
        nargs='*',
        metavar='FILE',
        help='Commit message files (e.g. .git/COMMIT_EDITMSG).',
    )
    lint_parser.add_argument(
        '--stdin',
        action='store_true',
        help='Also read one commit message from stdin.',
    )
    lint_parser.add_argument(
        '--strip-comments',
        action='store_true',
        help='Ignore lines starting with "#" and anything below the scissors line, as git does.',
    )

    bump_parser = subparsers.add_parser(
        'bump',
        help='Compute the next version from commit messages.',
        formatter_class=RichHelpFormatter,
    )
    bump_parser.add_argument(
        'version',
        metavar='VERSION',
        help='The last released version (e.g. 1.2.3 or v1.2.3).',
    )
    _add_message_args(bump_parser)

    changelog_parser = subparsers.add_parser(
        'changelog',
        help='Group commit messages into changelog sections.',
        formatter_class=RichHelpFormatter,
    )
    _add_message_args(changelog_parser)

    branch_parser = subparsers.add_parser(
        'branch',
        help='Validate a branch name (category/slug).',
        formatter_class=RichHelpFormatter,
    )
    branch_parser.add_argument(
        'name',
        metavar='NAME',
        help='Branch name, e.g. feature/add-login.',
    )

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code.',
        formatter_class=RichHelpFormatter,
    )
    explain_parser.add_argument(
        'code',
        metavar='CODE',
        help='Error code (e.g. CK-COMMIT-UNKNOWN-TYPE).',
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments to parse (defaults to ``sys.argv[1:]``).

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    with run_context(args.command):
        try:
            command = args.command
            if command == 'lint':
                return _cmd_lint(args)
            if command == 'bump':
                return _cmd_bump(args)
            if command == 'changelog':
                return _cmd_changelog(args)
            if command == 'branch':
                return _cmd_branch(args)
            if command == 'explain':
                return _cmd_explain(args)

            parser.print_help()  # noqa: T201 - CLI output
            print(  # noqa: T201 - CLI output
                f'\n{parser.prog}: error: please provide a command',
                file=sys.stderr,
            )
            return 2

        except CommitKitError as exc:
            render_error(exc)
            return 1
        except KeyboardInterrupt:
            logger.info('interrupted')
            return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
]
