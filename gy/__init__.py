"""
gy

AI-drafted conventional commit messages for staged git changes.
"""

__version__ = "0.1.0"

# Ordered as listed in the system prompt; descriptions feed the --help epilog.
# Used by: llm/base.py (prompt), cli/args.py (help), cli/utils.py and output (subject matching)
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'refactor': 'Code restructuring without behavior change',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'test': 'Adding or updating tests',
    'chore': 'Maintenance tasks, dependencies, tooling',
    'perf': 'Performance improvement',
    'ci': 'CI/CD configuration changes',
    'build': 'Build system or external dependency changes',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())
