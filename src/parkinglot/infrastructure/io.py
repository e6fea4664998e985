# File: src/parkinglot/infrastructure/io.py
"""
Line source and line sink for the command loop

- read_lines / open_line_source: commands from a file or standard input
- load_resource_lines: text resources packaged in parkinglot.resources
- CommandSession: feeds lines to a manager and writes one response per command
"""

from contextlib import contextmanager
from importlib import resources
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional
import logging
import sys

from ..application.manager import ParkingLotManager


RESOURCE_PACKAGE = "parkinglot.resources"


def read_lines(stream: IO[str]) -> Iterator[str]:
    """Yield lines from a text stream without their line terminators"""
    for line in stream:
        yield line.rstrip("\r\n")


@contextmanager
def open_line_source(path: Optional[Path] = None) -> Iterator[Iterator[str]]:
    """
    Open a command source: the file at ``path``, or stdin when no path is given
    Raises: OSError if the file cannot be opened
    """
    if path is None:
        yield read_lines(sys.stdin)
        return

    with open(path, "r", encoding="utf-8") as stream:
        yield read_lines(stream)


def load_resource_lines(name: str) -> List[str]:
    """
    Read a packaged text resource as a list of lines
    Raises: FileNotFoundError if the resource does not exist
    """
    resource = resources.files(RESOURCE_PACKAGE).joinpath(name)
    if not resource.is_file():
        raise FileNotFoundError(f"Resource not found: {name}")
    return resource.read_text(encoding="utf-8").splitlines()


class CommandSession:
    """
    One pass of the command loop

    Reads until the source is exhausted or the exit command is seen.
    Blank lines are skipped.
    """

    def __init__(self, manager: ParkingLotManager, exit_command: str = "exit"):
        self.manager = manager
        self.exit_command = exit_command
        self.commands_processed = 0
        self.logger = logging.getLogger(self.__class__.__name__)

    def run(self, lines: Iterable[str]) -> Iterator[str]:
        """Yield one response per command line"""
        for line in lines:
            command = line.strip()
            if not command:
                continue
            if command == self.exit_command:
                self.logger.info("Exit command received")
                break

            self.commands_processed += 1
            yield self.manager.give_command(command)

        self.logger.info(f"Session finished after {self.commands_processed} commands")

    def run_to(self, lines: Iterable[str], sink: IO[str]) -> int:
        """Write every response to ``sink``; returns the number of commands"""
        for response in self.run(lines):
            sink.write(response + "\n")
            sink.flush()
        return self.commands_processed
