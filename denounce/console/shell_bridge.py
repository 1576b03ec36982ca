# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Interactive pass-through console for a receiver session.

A background task tails the session and prints each message the receiver
sends, while the foreground prompts for lines and writes them to the same
session. On a terminal the prompt is a prompt_toolkit session with in-memory
history, and stdout is patched so that background output is printed above
the prompt and the prompt is redrawn.
"""

from __future__ import annotations

import sys
import asyncio
from contextlib import nullcontext

from colorama import Fore, Style
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from ..internal_types import *
from ..exceptions import ReceiverConnectionError
from ..pkg_logging import logger
from ..client import ReceiverSession

DEFAULT_PROMPT = ">>> "

InputFunc = Callable[[str], Awaitable[str]]
"""An async function that prompts for and returns one line of input. Raises
   EOFError at end of input, or KeyboardInterrupt on Ctrl-C."""

Printer = Callable[[str], None]
"""A function that prints one line to the terminal."""

def create_prompt_input() -> InputFunc:
    """Returns an input function backed by a new prompt_toolkit session with
       line editing and in-memory history."""
    session: PromptSession = PromptSession(history=InMemoryHistory())
    return session.prompt_async

class InteractiveShellBridge:
    """Bridges a terminal to a receiver session until end of input."""

    session: ReceiverSession
    delimiter: bytes
    prompt: str
    colorize: bool
    redraw_prompt: bool
    _input_func: InputFunc
    _printer: Printer
    _console_task: Optional[asyncio.Task] = None
    _receive_task: Optional[asyncio.Task] = None

    def __init__(
            self,
            session: ReceiverSession,
            delimiter: Optional[bytes]=None,
            *,
            prompt: str=DEFAULT_PROMPT,
            input_func: Optional[InputFunc]=None,
            printer: Optional[Printer]=None,
            colorize: Optional[bool]=None,
            redraw_prompt: Optional[bool]=None,
          ) -> None:
        """Creates a bridge.

        Args:
            session: The open session to bridge.
            delimiter: The byte that ends each received message. If None,
                the session protocol's delimiter is used.
            prompt: The input prompt.
            input_func: Reads one line of input. Defaults to a prompt_toolkit
                prompt with in-memory history.
            printer: Prints one line. Defaults to print().
            colorize: Whether to color output. Defaults to True if stdout is a TTY.
            redraw_prompt: Whether to patch stdout while running so printed
                lines appear above the prompt. Defaults to True if the default
                input_func is used and stdout is a TTY.
        """
        self.session = session
        self.delimiter = session.delimiter if delimiter is None else delimiter
        self.prompt = prompt
        if redraw_prompt is None:
            redraw_prompt = input_func is None and sys.stdout.isatty()
        self.redraw_prompt = redraw_prompt
        self._input_func = create_prompt_input() if input_func is None else input_func
        self._printer = print if printer is None else printer
        self.colorize = sys.stdout.isatty() if colorize is None else colorize

    def color(self, codes: str) -> str:
        return codes if self.colorize else ""

    async def handle_console_input(self) -> None:
        try:
            while True:
                try:
                    line = await self._input_func(self.prompt)
                except (EOFError, KeyboardInterrupt):
                    self._printer("")
                    return
                await self.session.write_line(line)
        except Exception as e:
            logger.debug("Exception in console input handler", exc_info=e)
            raise
        finally:
            logger.debug("Console input handler exiting")

    async def handle_received_data(self) -> None:
        try:
            while True:
                data = await self.session.read_until(self.delimiter)
                text = data.decode('utf-8', errors='replace').rstrip('\r\n')
                self._printer(f"\r{self.color(Fore.BLUE)}{text}{self.color(Style.RESET_ALL)}")
        except Exception as e:
            logger.debug("Exception in receive data handler", exc_info=e)
            raise
        finally:
            logger.debug("Receive data handler exiting")

    async def run(self) -> int:
        """Runs the console until end of input or Ctrl-C, returning exit code 0.

        Raises ReceiverConnectionError if the receiver closes the session or a
        read or write fails before end of input.
        """
        with patch_stdout(raw=True) if self.redraw_prompt else nullcontext():
            return await self._run_tasks()

    async def _run_tasks(self) -> int:
        self._receive_task = asyncio.create_task(self.handle_received_data())
        self._console_task = asyncio.create_task(self.handle_console_input())
        tasks = [self._console_task, self._receive_task]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
            if self._console_task.done():
                # end of input wins over whatever the reader is doing
                self._console_task.result()
                return 0
            exc = self._receive_task.exception()
            self._printer(
                f"\r{self.color(Fore.RED)}Receiver session ended: {exc}{self.color(Style.RESET_ALL)}")
            if isinstance(exc, ReceiverConnectionError):
                raise exc
            raise ReceiverConnectionError(f"{self.session}: Receive failed: {exc}") from exc
        finally:
            logger.debug("Interactive shell exiting")
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    def __str__(self) -> str:
        return f"InteractiveShellBridge({self.session})"

    def __repr__(self) -> str:
        return str(self)
