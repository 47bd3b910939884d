"""Process identity resolution from /proc command lines.

QEMU receives the virtual machine UUID on its command line as
``-uuid <value>``. The resolver reads the NUL-separated argument vector
from ``/proc/<pid>/cmdline`` and returns the argument that follows the flag.

The process may exit between the udev notification and the read, so
every failure degrades to an empty identifier instead of raising.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Iterator

from kvm_udev.config import settings

logger = logging.getLogger(__name__)

_READ_CHUNK = 4096


@dataclass(frozen=True)
class ProcessIdentity:
    """Identity of the process behind a kvm creation."""

    pid: int
    instance_id: str = ""


def truncate_instance_id(value: str, max_length: int | None = None) -> str:
    """Bound an instance identifier to max_length characters.

    Longer values are cut, not rejected.
    """
    if max_length is None:
        max_length = settings.instance_id_max_length
    return value[:max_length]


def _iter_arguments(stream: BinaryIO) -> Iterator[bytes]:
    """Yield NUL-terminated arguments from a cmdline stream, lazily."""
    pending = b""
    while True:
        chunk = stream.read(_READ_CHUNK)
        if not chunk:
            break
        pending += chunk
        *complete, pending = pending.split(b"\0")
        yield from complete
    # Some processes rewrite their argv without a trailing NUL
    if pending:
        yield pending


class ProcessIdentityResolver:
    """Extracts the instance identifier from a process's argument vector.

    Identities are never cached: a pid can be reused between events.
    """

    def __init__(
        self,
        flag: str | None = None,
        proc_root: str | None = None,
        max_length: int | None = None,
    ):
        self.flag = (flag if flag is not None else settings.uuid_flag).encode()
        self.proc_root = proc_root if proc_root is not None else settings.proc_root
        self.max_length = max_length if max_length is not None else settings.instance_id_max_length

    def cmdline_path(self, pid: int) -> str:
        return os.path.join(self.proc_root, str(pid), "cmdline")

    def resolve(self, pid: int) -> str:
        """Return the instance identifier of pid, or "" if none is found."""
        if pid <= 0:
            return ""

        path = self.cmdline_path(pid)
        try:
            with open(path, "rb") as stream:
                value = self._scan(stream)
        except OSError as e:
            logger.debug(f"Cannot read command line of pid {pid}: {e}")
            return ""

        if value is None:
            logger.debug(f"No {self.flag.decode()} argument for pid {pid}")
            return ""

        instance_id = value.decode("utf-8", errors="replace")
        if len(instance_id) > self.max_length:
            logger.debug(
                f"Truncating instance id of pid {pid} from {len(instance_id)} "
                f"to {self.max_length} characters"
            )
        return truncate_instance_id(instance_id, self.max_length)

    def _scan(self, stream: BinaryIO) -> bytes | None:
        """Return the argument following the first flag occurrence."""
        arguments = _iter_arguments(stream)
        for argument in arguments:
            if argument == self.flag:
                return next(arguments, None)
        return None

    def resolve_identity(self, pid: int) -> ProcessIdentity:
        """Resolve pid into a fresh ProcessIdentity."""
        return ProcessIdentity(pid=pid, instance_id=self.resolve(pid))
