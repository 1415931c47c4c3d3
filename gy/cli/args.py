"""CLI Argument Parsing"""

import argparse
import argcomplete

from gy import COMMIT_TYPES, __version__


def _types_epilog() -> str:
    width = max(len(name) for name in COMMIT_TYPES)
    lines = ["commit types:"]
    lines += [f"  {name:<{width}}  {description}" for name, description in COMMIT_TYPES.items()]
    lines += ["", "example: git add -p && gy"]
    return '\n'.join(lines)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='gy',
        description='AI-powered git commit message generator',
        epilog=_types_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation options
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model to use for generation (default: stored model or claude-haiku-4-5-20251001)')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (diff size, tokens used, timing)')

    # Setup/config
    parser.add_argument('--setup', action='store_true', help='Store an API key and default model')
    parser.add_argument('--show-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
