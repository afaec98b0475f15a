"""Selector subprocess connected through two anonymous pipes.

A SelectorSession owns one child process plus the parent's end of each
pipe. Leaving the ``with`` block always closes both ends and reaps the
child exactly once, whether the block succeeded or raised.
"""

import contextlib
import logging
import os
import subprocess
from collections.abc import Callable, Iterable
from typing import BinaryIO

from pickview.errors import PickerError, PickerErrorReason

logger = logging.getLogger(__name__)

# Candidates are sent as UTF-8; surrogateescape keeps undecodable file
# names byte-exact in both directions.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


class SelectorSession:
    """A running selector and the parent-side pipe endpoints.

    Example:
        >>> with SelectorSession.spawn(lambda r, w: ["head", "-n", "1"]) as session:
        ...     session.send(["a", "b"])
        ...     answer = session.receive()
    """

    def __init__(
        self, process: subprocess.Popen[bytes], writer: BinaryIO, reader: BinaryIO
    ) -> None:
        self._process = process
        self._writer = writer
        self._reader = reader
        self._returncode: int | None = None

    @classmethod
    def spawn(cls, build_argv: Callable[[int, int], list[str]]) -> "SelectorSession":
        """Open both pipes and start the selector.

        The child's stdin is the read end of the candidate pipe and its
        stdout the write end of the answer pipe. Both descriptors are also
        kept open in the child under their own numbers, for templates that
        hand them to a program running inside a terminal emulator.

        Args:
            build_argv: Called with (input_fd, output_fd) to produce argv.

        Returns:
            A session owning the process and parent-side endpoints.

        Raises:
            PickerError: SPAWN_FAILED if a pipe or the process cannot be created.
        """
        opened: list[int] = []
        try:
            to_read, to_write = os.pipe()
            opened += [to_read, to_write]
            from_read, from_write = os.pipe()
            opened += [from_read, from_write]

            argv = build_argv(to_read, from_write)
            logger.debug("Spawning selector: %s", argv)
            process = subprocess.Popen(
                argv,
                stdin=to_read,
                stdout=from_write,
                pass_fds=(to_read, from_write),
            )
        except OSError as e:
            _close_all(opened)
            msg = f"Cannot start selector: {e}"
            raise PickerError(PickerErrorReason.SPAWN_FAILED, msg) from e
        except PickerError:
            _close_all(opened)
            raise

        # Child-side ends belong to the child now
        os.close(to_read)
        os.close(from_write)
        return cls(process, os.fdopen(to_write, "wb"), os.fdopen(from_read, "rb"))

    @property
    def returncode(self) -> int | None:
        """Exit status once reaped, otherwise None."""
        return self._returncode

    def send(self, lines: Iterable[str]) -> int:
        """Write candidate lines, then close the candidate pipe.

        The close signals end-of-input; the selector cannot finish
        otherwise. If the selector stops reading early (it already has
        an answer), the remaining candidates are dropped.

        Args:
            lines: Candidates; each must not contain a newline.

        Returns:
            Number of lines written.
        """
        written = 0
        try:
            for line in lines:
                self._writer.write(line.encode(ENCODING, ENCODING_ERRORS) + b"\n")
                written += 1
        except BrokenPipeError:
            logger.debug("Selector closed its input after %d candidates", written)
        finally:
            self._close_writer()
        return written

    def receive(self) -> bytes:
        """Block until the selector closes its output and return all bytes."""
        self._close_writer()
        try:
            return self._reader.read()
        finally:
            self._reader.close()

    def wait(self) -> int:
        """Reap the selector once and return its exit status."""
        if self._returncode is None:
            self._returncode = self._process.wait()
            logger.debug("Selector %d exited with %d", self._process.pid, self._returncode)
        return self._returncode

    def close(self, *, abort: bool = False) -> int:
        """Release both endpoints and reap the process.

        Args:
            abort: Terminate the selector first instead of letting it finish.

        Returns:
            The selector's exit status.
        """
        self._close_writer()
        self._reader.close()
        if abort and self._process.poll() is None:
            with contextlib.suppress(ProcessLookupError):
                self._process.terminate()
        return self.wait()

    def _close_writer(self) -> None:
        if self._writer.closed:
            return
        try:
            self._writer.close()
        except BrokenPipeError:
            # Flushing buffered candidates failed; the descriptor is closed anyway
            logger.debug("Selector closed its input before the final flush")

    def __enter__(self) -> "SelectorSession":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close(abort=exc_type is not None)


def _close_all(fds: list[int]) -> None:
    for fd in fds:
        with contextlib.suppress(OSError):
            os.close(fd)
