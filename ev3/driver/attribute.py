"""Access to single sysfs attribute files.

Each attribute file holds a snapshot of one device property. Reading returns
the current value, writing sets a value or issues a command. Files are kept
open and rewound to offset 0 before every read or write.

Several ``Attribute`` objects may wrap the same open file (see ``clone``).
They then share one file cursor; the seek+read and seek+write pairs are
guarded by a lock on the shared file.
"""
from __future__ import annotations

import io
import logging
import os
import stat
import threading
from typing import Any, List, Optional

from ..errors import InternalError
from ..models import DeviceDescriptor
from .codec import Kind, TOKENS, codec_for, codec_for_value

logger = logging.getLogger(__name__)

SYSFS_CLASS_ROOT = "/sys/class"


class _AttributeFile:
    """One open attribute file, shared by every Attribute wrapping it.

    ``readable`` and ``writable`` are taken from the owner permission bits
    when the file is opened and are not queried again.
    """

    def __init__(self, path: str):
        self.path = path

        mode = os.stat(path).st_mode
        self.readable = bool(mode & stat.S_IRUSR)
        self.writable = bool(mode & stat.S_IWUSR)

        if self.readable and self.writable:
            flags, file_mode = os.O_RDWR, "r+b"
        elif self.writable:
            flags, file_mode = os.O_WRONLY, "wb"
        else:
            flags, file_mode = os.O_RDONLY, "rb"

        # os.open so that write-only files are not truncated
        fd = os.open(path, flags)
        self._file = io.FileIO(fd, file_mode, closefd=True)
        self._lock = threading.Lock()

    def fileno(self) -> int:
        return self._file.fileno()

    def read(self) -> bytes:
        with self._lock:
            self._file.seek(0)
            return self._file.readall()

    def write(self, data: bytes) -> None:
        if not self.writable:
            raise InternalError(f"Attribute {self.path} is not writable")
        with self._lock:
            self._file.seek(0)
            self._file.write(data)
            self._file.truncate()

    def close(self) -> None:
        self._file.close()

    @property
    def closed(self) -> bool:
        return self._file.closed


class Attribute:
    """Typed read/write access to one sysfs attribute.

    Example:
        >>> speed_sp = Attribute.open("tacho-motor", "motor0", "speed_sp")
        >>> speed_sp.set(500)
        >>> speed_sp.get(int)
        500
    """

    def __init__(self, handle: _AttributeFile):
        self._handle = handle

    @classmethod
    def open(cls,
             class_name: str,
             name: str,
             attribute_name: str,
             root: str = SYSFS_CLASS_ROOT) -> Attribute:
        """Open ``{root}/{class_name}/{name}/{attribute_name}``.

        The file is opened read-only, write-only or read-write according to
        its owner permission bits.

        Raises:
            InternalError: If the file cannot be stat'ed or opened
        """
        path = DeviceDescriptor(class_name, name).attribute_path(root, attribute_name)
        try:
            handle = _AttributeFile(path)
        except OSError as e:
            raise InternalError(str(e)) from e

        logger.debug(
            f"Opened {path} (readable={handle.readable}, writable={handle.writable})"
        )
        return cls(handle)

    @property
    def path(self) -> str:
        return self._handle.path

    @property
    def readable(self) -> bool:
        return self._handle.readable

    @property
    def writable(self) -> bool:
        return self._handle.writable

    def clone(self) -> Attribute:
        """Return a new Attribute sharing this one's open file and cursor."""
        return type(self)(self._handle)

    __copy__ = clone

    def _get_str(self) -> str:
        try:
            data = self._handle.read()
        except (OSError, ValueError) as e:
            raise InternalError(str(e)) from e
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InternalError(str(e)) from e
        return text.rstrip()

    def _set_str(self, value: str) -> None:
        try:
            self._handle.write(value.encode("utf-8"))
        except (OSError, ValueError) as e:
            raise InternalError(str(e)) from e

    def get(self, kind: Kind = str) -> Any:
        """Read and parse the current value.

        Args:
            kind: Codec, or one of int, float, str, list

        Returns:
            The parsed value

        Raises:
            InternalError: On I/O, decoding or parse failure
        """
        codec = codec_for(kind)
        text = self._get_str()
        try:
            return codec.decode(text)
        except ValueError as e:
            raise InternalError(str(e)) from e

    def set(self, value: Any, kind: Optional[Kind] = None) -> None:
        """Stringify ``value`` and write it, without a trailing newline.

        Args:
            value: Value to write
            kind: Codec to stringify with; inferred from the value if None

        Raises:
            InternalError: If the value cannot be stringified, the attribute is
                not writable or the write fails
        """
        try:
            codec = codec_for(kind) if kind is not None else codec_for_value(value)
            text = codec.encode(value)
        except (TypeError, ValueError) as e:
            raise InternalError(str(e)) from e
        self._set_str(text)

    def set_raw(self, value: str) -> None:
        """Write ``value`` exactly as given (e.g. a command name)."""
        self._set_str(value)

    def get_list(self) -> List[str]:
        """Read the value as a whitespace separated token list."""
        return TOKENS.decode(self._get_str())

    def raw_descriptor(self) -> int:
        """File descriptor for event waiting. Do not close it.

        Raises:
            InternalError: If the shared file has been closed
        """
        try:
            return self._handle.fileno()
        except (OSError, ValueError) as e:
            raise InternalError(str(e)) from e

    def close(self) -> None:
        """Close the shared file for every Attribute wrapping it."""
        self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __repr__(self) -> str:
        return f"<Attribute {self.path}>"
