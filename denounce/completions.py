# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Shell completion script generation.

Walks an argparse parser with one level of subcommands and emits a zsh or
bash completion script for it.
"""

from __future__ import annotations

import argparse

from .internal_types import *
from .exceptions import DenounceError

SUPPORTED_SHELLS = ('zsh', 'bash')

class CompletionCommand:
    """A subcommand, its aliases and its arguments, as seen by the completion generator."""

    name: str
    aliases: List[str]
    help: str
    parser: argparse.ArgumentParser

    def __init__(self, name: str, aliases: List[str], help: str, parser: argparse.ArgumentParser):
        self.name = name
        self.aliases = aliases
        self.help = help
        self.parser = parser

    @property
    def all_names(self) -> List[str]:
        return [self.name] + self.aliases

def _subparsers_action(parser: argparse.ArgumentParser) -> Optional[argparse._SubParsersAction]:
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return action
    return None

def get_completion_commands(parser: argparse.ArgumentParser) -> List[CompletionCommand]:
    """Returns the subcommands of a parser, in definition order, with aliases folded in."""
    subparsers = _subparsers_action(parser)
    if subparsers is None:
        return []
    helps: Dict[str, str] = {}
    for choice_action in subparsers._choices_actions:
        helps[choice_action.dest] = choice_action.help or ''
    result: List[CompletionCommand] = []
    by_parser: Dict[int, CompletionCommand] = {}
    for name, subparser in subparsers.choices.items():
        existing = by_parser.get(id(subparser))
        if existing is None:
            command = CompletionCommand(name, [], helps.get(name, ''), subparser)
            by_parser[id(subparser)] = command
            result.append(command)
        else:
            existing.aliases.append(name)
    return result

def _optional_actions(parser: argparse.ArgumentParser) -> List[argparse.Action]:
    return [
        a for a in parser._actions
        if len(a.option_strings) > 0 and a.help != argparse.SUPPRESS
    ]

def _positional_actions(parser: argparse.ArgumentParser) -> List[argparse.Action]:
    return [
        a for a in parser._actions
        if len(a.option_strings) == 0 and not isinstance(a, argparse._SubParsersAction)
    ]

def _takes_value(action: argparse.Action) -> bool:
    return action.nargs != 0

def _zsh_escape(text: str) -> str:
    """Escapes text for use inside a single-quoted zsh _arguments spec."""
    text = text.replace("'", "'\\''")
    for c in '[]:':
        text = text.replace(c, '\\' + c)
    return text

def _zsh_value_spec(action: argparse.Action) -> str:
    name = action.metavar or action.dest
    if action.choices is not None:
        return f":{_zsh_escape(str(name))}:({' '.join(str(c) for c in action.choices)})"
    return f":{_zsh_escape(str(name))}:"

def _zsh_arguments(parser: argparse.ArgumentParser) -> List[str]:
    specs: List[str] = []
    for action in _optional_actions(parser):
        help_text = _zsh_escape(action.help or '')
        value_spec = _zsh_value_spec(action) if _takes_value(action) else ''
        for option in action.option_strings:
            specs.append(f"'{option}[{help_text}]{value_spec}'")
    for position, action in enumerate(_positional_actions(parser), start=1):
        optional = ':' if action.nargs == '?' else ''
        value_spec = _zsh_value_spec(action)
        specs.append(f"'{position}:{optional}{value_spec[1:]}'")
    return specs

def generate_zsh_completions(parser: argparse.ArgumentParser, prog: str) -> str:
    commands = get_completion_commands(parser)
    func = f"_{prog.replace('-', '_')}"
    lines: List[str] = [f"#compdef {prog}", "", f"{func}() {{", "  local -a commands", "  commands=("]
    for command in commands:
        for name in command.all_names:
            lines.append(f"    '{_zsh_escape(name)}:{_zsh_escape(command.help)}'")
    lines.append("  )")
    lines.append("")
    lines.append("  _arguments -C \\")
    for spec in _zsh_arguments(parser):
        lines.append(f"    {spec} \\")
    lines.append("    '1: :->command' \\")
    lines.append("    '*:: :->args'")
    lines.append("")
    lines.append("  case $state in")
    lines.append("    command)")
    lines.append("      _describe 'command' commands")
    lines.append("      ;;")
    lines.append("    args)")
    lines.append("      case $words[1] in")
    for command in commands:
        specs = _zsh_arguments(command.parser)
        lines.append(f"        {'|'.join(command.all_names)})")
        if len(specs) == 0:
            lines.append("          _message 'no more arguments'")
        else:
            lines.append(f"          _arguments {' '.join(specs)}")
        lines.append("          ;;")
    lines.append("      esac")
    lines.append("      ;;")
    lines.append("  esac")
    lines.append("}")
    lines.append("")
    lines.append(f'{func} "$@"')
    return '\n'.join(lines) + '\n'

def _bash_words(parser: argparse.ArgumentParser) -> List[str]:
    words: List[str] = []
    for action in _optional_actions(parser):
        words.extend(action.option_strings)
    for action in _positional_actions(parser):
        if action.choices is not None:
            words.extend(str(c) for c in action.choices)
    return words

def _bash_value_options(parser: argparse.ArgumentParser) -> List[str]:
    result: List[str] = []
    for action in _optional_actions(parser):
        if _takes_value(action):
            result.extend(action.option_strings)
    return result

def generate_bash_completions(parser: argparse.ArgumentParser, prog: str) -> str:
    commands = get_completion_commands(parser)
    func = f"_{prog.replace('-', '_')}"
    command_names = [name for command in commands for name in command.all_names]
    lines: List[str] = [
        f"{func}() {{",
        '  local cur="${COMP_WORDS[COMP_CWORD]}"',
        '  local prev="${COMP_WORDS[COMP_CWORD-1]}"',
        f"  local commands=\"{' '.join(command_names)}\"",
        '  local cmd="" i',
        '  for ((i=1; i<COMP_CWORD; i++)); do',
        '    case "${COMP_WORDS[i]}" in',
        f"      {'|'.join(_bash_value_options(parser)) or '--'}) ((i++)) ;;",
        '      -*) ;;',
        '      *) cmd="${COMP_WORDS[i]}"; break ;;',
        '    esac',
        '  done',
        '  local words=""',
        '  case "$cmd" in',
        f"    \"\") words=\"$commands {' '.join(_bash_words(parser))}\" ;;",
      ]
    for command in commands:
        lines.append(f"    {'|'.join(command.all_names)}) words=\"{' '.join(_bash_words(command.parser))}\" ;;")
    lines.extend([
        '  esac',
        '  COMPREPLY=($(compgen -W "$words" -- "$cur"))',
        '}',
        '',
        f"complete -F {func} {prog}",
      ])
    return '\n'.join(lines) + '\n'

def generate_completions(parser: argparse.ArgumentParser, shell: str='zsh', prog: Optional[str]=None) -> str:
    """Returns a completion script for a parser.

    Args:
        parser: The top-level parser.
        shell: 'zsh' or 'bash'.
        prog: The command name to complete. Defaults to parser.prog.
    """
    if prog is None:
        prog = parser.prog
    if shell == 'zsh':
        return generate_zsh_completions(parser, prog)
    if shell == 'bash':
        return generate_bash_completions(parser, prog)
    raise DenounceError(f"Unsupported shell for completions: '{shell}' (expected one of {', '.join(SUPPORTED_SHELLS)})")
