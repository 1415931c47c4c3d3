# PYTHON_ARGCOMPLETE_OK
"""CLI Main Entry Point"""

import time

from gy.config import get_manager, resolve_model
from gy.git import GitRepository, GitError, StagedChanges
from gy.llm import ClaudeClient, LLMError
from gy.output import success, info, dim, bold, rule, print_error, CHECK, Status, colorize_commit_type

from gy.cli.args import parse_args
from gy.cli.commands import display_config, ensure_api_key, run_install_completion, run_setup
from gy.cli.utils import clean_commit_message, edit_message

MAX_FILES_SHOWN = 8

ACTION_PROMPT = 'Commit with this message? [y]es / [e]dit / [n]o: '


def _display_file_list(changes: StagedChanges, max_shown: int = MAX_FILES_SHOWN):
    """Show which files are staged, collapsing long lists."""
    if not changes.files:
        return
    print(bold("Staged changes:"))
    shown = changes.files[:max_shown]
    remaining = len(changes.files) - len(shown)
    for f in shown:
        print(dim(f"  {f.path} (+{f.additions} -{f.deletions})"))
    if remaining > 0:
        print(dim(f"  ... and {remaining} more files"))


def _display_message(message):
    """Display commit message with horizontal rules and colored type."""
    colored = colorize_commit_type(message)
    lines = colored.split('\n')
    # Width from the raw message, the colored one carries ANSI codes
    width = max((len(line) for line in message.split('\n')), default=40)
    print(f"\n{rule(width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(rule(width))


def _generate_message(client, changes, timings):
    """Draft the message under a status line.

    Returns:
        tuple: (response, cleaned message)
    """
    label = f"Analyzing {bold(str(changes.total_files))} files using {info(client.name)}... "
    t0 = time.time()
    with Status(label):
        response = client.generate(changes.diff)
        message = clean_commit_message(response.content)
        if not message.strip():
            raise LLMError("Failed to generate commit message.")
    timings['generate'] = time.time() - t0
    return response, message


def _print_verbose_stats(diff, response, timings):
    print(dim(f"  Diff: ~{len(diff)//4} tokens ({len(diff)} chars)"))
    print(dim(f"  Response: {response.tokens_used} tokens"))
    print(dim(f"  Timings: git={timings['git']:.2f}s, generate={timings['generate']:.2f}s"))


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.show_config:
        return display_config(get_manager()), True
    if args.setup:
        return run_setup(get_manager()), True
    return 0, False


def _report_unstaged(repo, client):
    """Nothing staged: summarize the working tree changes, if any.

    Returns:
        int: Exit code (always 1, nothing was committed)
    """
    unstaged = repo.get_unstaged_diff()
    if not unstaged.strip():
        print_error("Nothing staged. Use git add first.")
        return 1

    print_error("No changes are staged. Here's what's unstaged:\n")
    try:
        with Status("Summarizing unstaged changes... "):
            summary = client.generate(unstaged).content
    except LLMError:
        # The hint below is enough when generation fails
        summary = ""
    if summary:
        print(f"{clean_commit_message(summary)}\n")
    print_error("Use 'git add' to stage changes.")
    return 1


def _ask_action() -> str:
    """Read y/e/n. EOF and Ctrl-C count as 'n'."""
    while True:
        try:
            choice = input(f"\n{dim(ACTION_PROMPT)}").strip().lower()
        except (KeyboardInterrupt, EOFError):
            print()
            return 'n'
        if choice in ('', 'y', 'yes'):
            return 'y'
        if choice in ('e', 'edit'):
            return 'e'
        if choice in ('n', 'no'):
            return 'n'
        print("Enter y, e or n")


def _commit(repo, message) -> int:
    try:
        repo.commit(message)
    except GitError as e:
        print_error(str(e))
        return 1
    return 0


def _generate_commit_flow(args, repo, client):
    """Diff, draft, confirm, commit.

    Returns:
        int: Exit code
    """
    timings = {}
    t0 = time.time()
    try:
        changes = repo.get_staged_changes()
        timings['git'] = time.time() - t0
        if changes.is_empty:
            return _report_unstaged(repo, client)
    except GitError as e:
        print_error(str(e))
        return 1

    _display_file_list(changes)

    try:
        response, message = _generate_message(client, changes, timings)
    except LLMError as e:
        print_error(str(e))
        return 1

    if args.verbose:
        _print_verbose_stats(changes.diff, response, timings)

    _display_message(message)

    action = _ask_action()
    if action == 'n':
        print_error("Aborted.")
        return 1

    if action == 'e':
        edited = edit_message(message)
        if not edited:
            print_error("Commit message cannot be empty")
            return 1
        message = edited
        _display_message(message)

    code = _commit(repo, message)
    if code == 0:
        print(f"{success(CHECK)} Committed.")
    return code


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    try:
        repo = GitRepository()
    except GitError as e:
        print_error(str(e))
        return 1

    manager = get_manager()
    api_key = ensure_api_key(manager)
    if not api_key:
        print_error("No API key provided.")
        return 1

    model = resolve_model(args.model, manager.load())
    try:
        client = ClaudeClient(api_key=api_key, model=model)
    except LLMError as e:
        print_error(str(e))
        return 1

    return _generate_commit_flow(args, repo, client)
