#!/usr/bin/env python3

# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

import sys
import json
import asyncio
import logging
import argparse

import dotenv
import colorama # type: ignore[import]

from denounce.internal_types import *
from denounce import (
    __version__ as pkg_version,
    DEFAULT_HOST,
    InputSource,
    DenonReceiverClient,
    DenounceClientConfig,
    InteractiveShellBridge,
    describe_exception,
  )
from denounce.completions import generate_completions, SUPPORTED_SHELLS

PROG_NAME = "denounce"

class CmdExitError(RuntimeError):
    exit_code: int

    def __init__(self, exit_code: int, msg: Optional[str]=None):
        if msg is None:
            msg = f"Command exited with return code {exit_code}"
        super().__init__(msg)
        self.exit_code = exit_code

class ArgparseExitError(CmdExitError):
    pass

class NoExitArgumentParser(argparse.ArgumentParser):
    def exit(self, status=0, message=None):
        if message:
            self._print_message(message, sys.stderr)
        raise ArgparseExitError(status, message)

class CommandHandler:
    _argv: Optional[Sequence[str]]
    _parser: argparse.ArgumentParser
    _args: argparse.Namespace
    _provide_traceback: bool = True
    _colorize_stdout: bool = True
    _client_config: Optional[DenounceClientConfig] = None

    def __init__(self, argv: Optional[Sequence[str]]=None):
        self._argv = argv

    def get_client_config(self) -> DenounceClientConfig:
        if self._client_config is None:
            self._client_config = DenounceClientConfig(
                default_host=self._args.host,
              )
        return self._client_config

    def create_client(self) -> DenonReceiverClient:
        return DenonReceiverClient(config=self.get_client_config())

    def get_input_source(self) -> InputSource:
        return InputSource.from_cli_name(self._args.input)

    async def run_shell(self, client: DenonReceiverClient, heos: bool, subscribe: bool=False) -> int:
        if heos:
            session = await client.sessions.ensure_heos()
            if subscribe:
                await client.register_for_change_events()
        else:
            session = await client.sessions.ensure_text()
        bridge = InteractiveShellBridge(session, colorize=self._colorize_stdout)
        return await bridge.run()

    async def cmd_bare(self) -> int:
        print("A command is required", file=sys.stderr)
        return 1

    async def cmd_generate_completions(self) -> int:
        print(generate_completions(self._parser, shell=self._args.shell, prog=PROG_NAME), end='')
        return 0

    async def cmd_select_input(self) -> int:
        input_source = self.get_input_source()
        async with self.create_client() as client:
            await client.select_input(input_source)
        return 0

    async def cmd_video_select(self) -> int:
        input_source = self.get_input_source()
        async with self.create_client() as client:
            await client.video_select(input_source)
        return 0

    async def cmd_get_player_id(self) -> int:
        async with self.create_client() as client:
            pid = await client.get_first_player_id()
        print(pid)
        return 0

    async def cmd_get_players(self) -> int:
        async with self.create_client() as client:
            players = await client.get_players()
        print(json.dumps([x.to_jsonable() for x in players], indent=2))
        return 0

    async def cmd_play_url(self) -> int:
        pid: Optional[int] = self._args.pid
        url: str = self._args.url
        async with self.create_client() as client:
            await client.play_url(url, pid=pid)
        return 0

    async def cmd_text(self) -> int:
        command: Optional[str] = self._args.command
        async with self.create_client() as client:
            if command is None:
                return await self.run_shell(client, heos=False)
            await client.text_command(command)
        return 0

    async def cmd_heos(self) -> int:
        url: Optional[str] = self._args.url
        subscribe: bool = self._args.subscribe
        async with self.create_client() as client:
            if url is None:
                return await self.run_shell(client, heos=True, subscribe=subscribe)
            await client.heos_command(url)
        return 0

    async def cmd_version(self) -> int:
        print(pkg_version)
        return 0

    async def arun(self) -> int:
        """Run the denounce command-line tool with provided arguments

        Args:
            argv (Optional[Sequence[str]], optional):
                A list of commandline arguments (NOT including the program as argv[0]!),
                or None to use sys.argv[1:]. Defaults to None.

        Returns:
            int: The exit code that would be returned if this were run as a standalone command.
        """
        parser = NoExitArgumentParser(prog=PROG_NAME, description="Control a Denon receiver over its text and HEOS protocols.")

        input_names = InputSource.all_cli_names()

        # ======================= Main command

        self._parser = parser
        parser.add_argument('--traceback', "--tb", action='store_true', default=False,
                            help='Display detailed exception information')
        parser.add_argument('--log-level', dest='log_level', default='warning',
                            choices=['debug', 'info', 'warning', 'error', 'critical'],
                            help='''The logging level to use. Default: warning''')
        parser.add_argument('--host', metavar='IP', default=None,
                            help=f'''The receiver host address. Default: env var DENOUNCE_HOST, or {DEFAULT_HOST}.''')
        parser.add_argument('--no-color', dest='no_color', action='store_true', default=False,
                            help='Do not colorize interactive output')
        parser.set_defaults(func=self.cmd_bare)

        subparsers = parser.add_subparsers(
                            title='Commands',
                            description='Valid commands',
                            help='Additional help available with "<command-name> -h"')

        # ======================= generate-completions

        parser_completions = subparsers.add_parser('generate-completions',
                                help='Print a shell completion script',
                                description="Print a shell completion script for this command.")
        parser_completions.add_argument('--shell', default='zsh', choices=list(SUPPORTED_SHELLS),
                            help='''The shell to generate completions for. Default: zsh''')
        parser_completions.set_defaults(func=self.cmd_generate_completions)

        # ======================= select-input

        parser_select_input = subparsers.add_parser('select-input', aliases=['si'],
                                help='Select the audio input source',
                                description="Select the audio input source.")
        parser_select_input.add_argument('input', choices=input_names,
                            help='''The input source to select.''')
        parser_select_input.set_defaults(func=self.cmd_select_input)

        # ======================= video-select

        parser_video_select = subparsers.add_parser('video-select', aliases=['sv'],
                                help='Select the video input source',
                                description="Select the video input source.")
        parser_video_select.add_argument('input', choices=input_names,
                            help='''The input source to select.''')
        parser_video_select.set_defaults(func=self.cmd_video_select)

        # ======================= get-player-id

        parser_get_player_id = subparsers.add_parser('get-player-id',
                                help='Print the id of the first HEOS player',
                                description="Print the pid of the first player reported by HEOS.")
        parser_get_player_id.set_defaults(func=self.cmd_get_player_id)

        # ======================= get-players

        parser_get_players = subparsers.add_parser('get-players',
                                help='Print all HEOS players as JSON',
                                description="Print the players reported by HEOS as a JSON list.")
        parser_get_players.set_defaults(func=self.cmd_get_players)

        # ======================= play-url

        parser_play_url = subparsers.add_parser('play-url', aliases=['url'],
                                help='Play a stream URL on a HEOS player',
                                description="Play a stream URL on a HEOS player.")
        parser_play_url.add_argument('--pid', type=int, default=None,
                            help='''The player id. Default: the first player reported by HEOS.''')
        parser_play_url.add_argument('url',
                            help='''The URL of the stream to play.''')
        parser_play_url.set_defaults(func=self.cmd_play_url)

        # ======================= text

        parser_text = subparsers.add_parser('text',
                                help='Send an arbitrary text command',
                                description="Send an arbitrary text command. If no command is provided, an interactive shell is opened.")
        parser_text.add_argument('command', nargs='?', default=None,
                            help='''The command line to send, e.g. "PW?". Default: open an interactive shell.''')
        parser_text.set_defaults(func=self.cmd_text)

        # ======================= heos

        parser_heos = subparsers.add_parser('heos',
                                help='Send an arbitrary HEOS command',
                                description="Send an arbitrary HEOS command. If no command is provided, an interactive shell is opened.")
        parser_heos.add_argument('url', nargs='?', default=None,
                            help='''The heos:// command URL to send. Default: open an interactive shell.''')
        parser_heos.add_argument('--subscribe', action='store_true', default=False,
                            help='''Subscribe to change events. Only applied to the interactive shell.''')
        parser_heos.set_defaults(func=self.cmd_heos)

        # ======================= version

        parser_version = subparsers.add_parser('version',
                                help='Display version information',
                                description='''Display version information.''')
        parser_version.set_defaults(func=self.cmd_version)

        # =========================================================

        try:
            args = parser.parse_args(self._argv)
        except ArgparseExitError as ex:
            return ex.exit_code
        traceback: bool = args.traceback
        self._provide_traceback = traceback
        self._colorize_stdout = not args.no_color and sys.stdout.isatty()

        try:
            logging.basicConfig(
                level=logging.getLevelName(args.log_level.upper()),
            )
            self._args = args
            func: Callable[[], Awaitable[int]] = args.func
            logging.debug(f"Running command {func.__name__}, tb = {traceback}")
            rc = await func()
            logging.debug(f"Command {func.__name__} returned {rc}")
        except Exception as ex:
            if isinstance(ex, CmdExitError):
                rc = ex.exit_code
            else:
                rc = 1
            if rc != 0:
                if traceback:
                    raise
            print(f"{PROG_NAME}: error: {describe_exception(ex)}", file=sys.stderr)
        except BaseException as ex:
            print(f"{PROG_NAME}: Unhandled exception {ex.__class__.__name__}: {ex}", file=sys.stderr)
            raise

        return rc

    def run(self) -> int:
        return asyncio.run(self.arun())

def run(argv: Optional[Sequence[str]]=None) -> int:
    try:
        rc = CommandHandler(argv).run()
    except CmdExitError as ex:
        rc = ex.exit_code
    return rc

async def arun(argv: Optional[Sequence[str]]=None) -> int:
    try:
        rc = await CommandHandler(argv).arun()
    except CmdExitError as ex:
        rc = ex.exit_code
    return rc

def main() -> int:
    dotenv.load_dotenv()
    colorama.just_fix_windows_console()
    return run()

# allow running with "python3 -m", or as a standalone script
if __name__ == "__main__":
    sys.exit(main())
