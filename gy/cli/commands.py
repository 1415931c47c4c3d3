"""CLI Commands"""

import getpass
import os
import sys

from gy.config import (
    API_KEY_ENV, MODEL_ENV, DEFAULT_MODEL,
    Config, ConfigError, ConfigManager, resolve_api_key, resolve_model,
)
from gy.llm import ClaudeClient, LLMError
from gy.output import bold, dim, info, error, success, print_success, print_error, print_warning
from gy.cli.utils import mask_key


def _read_key(prompt: str) -> str | None:
    try:
        return getpass.getpass(prompt).strip()
    except (KeyboardInterrupt, EOFError):
        print()
        return None


def _check_key(api_key: str) -> bool:
    """Validate a key against the API, reporting the result inline."""
    print("Validating API key...", end='', flush=True)
    try:
        ClaudeClient(api_key=api_key).validate()
    except LLMError as e:
        print(f" {error('Invalid!')}")
        print_error(f"Error: {e}")
        return False
    print(f" {success('Valid!')}")
    return True


def _store_key(manager: ConfigManager, api_key: str, model: str | None) -> None:
    try:
        path = manager.save(Config(anthropic_api_key=api_key, model=model))
    except ConfigError as e:
        print_warning(f"Warning: {e}")
        return
    print(f"API key saved to {path}")


def prompt_for_api_key(manager: ConfigManager) -> str | None:
    """Ask until a key validates. Saves it; returns None if the user gives up."""
    while True:
        api_key = _read_key("Enter your Anthropic API key: ")
        if api_key is None:
            return None
        if not api_key:
            print_error("API key cannot be empty. Please try again.")
            continue

        if not _check_key(api_key):
            print_error("Please try again with a valid API key.")
            continue

        _store_key(manager, api_key, manager.load().model)
        return api_key


def ensure_api_key(manager: ConfigManager) -> str | None:
    """Environment, then config file, then ask."""
    api_key = resolve_api_key(manager.load())
    if api_key:
        return api_key
    return prompt_for_api_key(manager)


def display_config(manager: ConfigManager) -> int:
    """Display current configuration."""
    config = manager.load()
    config_path = manager.get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path.exists():
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {config_path.name} found)")

    env_key = os.environ.get(API_KEY_ENV, "").strip()
    if env_key:
        key_line = f"{mask_key(env_key)} {dim(f'(from {API_KEY_ENV})')}"
    elif config.anthropic_api_key:
        key_line = f"{mask_key(config.anthropic_api_key)} {dim('(from config file)')}"
    else:
        key_line = dim("not set")

    env_model = os.environ.get(MODEL_ENV)
    if env_model:
        print(f"  {dim('Environment overrides:')}")
        print(f"    {MODEL_ENV}={env_model}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    api key: {key_line}")
    print(f"    model:   {info(resolve_model(None, config))}")
    print(f"\n  {dim('Run')} gy --setup {dim('to configure')}\n")

    return 0


def run_setup(manager: ConfigManager) -> int:
    """Store a validated key and a default model."""
    display_config(manager)
    print(f"{bold('Setup Wizard')}\n")

    config = manager.load()
    while True:
        if config.anthropic_api_key:
            api_key = _read_key("Anthropic API key (Enter to keep current): ")
        else:
            api_key = _read_key("Enter your Anthropic API key: ")
        if api_key is None:
            print(dim("Cancelled."))
            return 1

        if not api_key:
            if config.anthropic_api_key:
                api_key = config.anthropic_api_key
                break
            print_error("API key cannot be empty. Please try again.")
            continue

        if _check_key(api_key):
            break
        print_error("Please try again with a valid API key.")

    current = config.model or DEFAULT_MODEL
    try:
        model = input(f"\nDefault model (Enter for {current}): ").strip() or config.model
    except (KeyboardInterrupt, EOFError):
        print(dim("\nCancelled."))
        return 1

    try:
        path = manager.save(Config(anthropic_api_key=api_key, model=model))
    except ConfigError as e:
        print_error(str(e))
        return 1

    print_success(f"Saved to {path}")
    return 0


def run_install_completion() -> int:
    """Print shell tab completion instructions."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete gy)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_name = '~/.zshrc' if 'zsh' in shell else '~/.bashrc'
        print(f"Add this line to {dim(os.path.expanduser(rc_name))}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim(f'source {rc_name}')}")
    elif sys.platform == 'win32':
        print("For PowerShell, add to your $PROFILE:\n")
        print("  register-python-argcomplete --shell powershell gy | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish gy | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
