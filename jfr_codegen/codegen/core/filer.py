"""
Output slots for generated sources.

A filer hands out one writable slot per qualified name. The generator
never touches the file system itself; it only talks to the filer it
was given.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Set, TextIO, Union

from ...logging_config import get_logger
from .errors import EmitError

logger = get_logger(__name__)


class OutputSlot(ABC):
    """Writable destination for one artifact."""

    def __init__(self, qualified_name: str):
        self.qualified_name = qualified_name
        self.closed = False

    @abstractmethod
    def write(self, text: str) -> None:
        """Append rendered text to the slot."""
        pass

    def close(self) -> None:
        """Flush and release the slot. Closing twice is a no-op."""
        self.closed = True

    def __enter__(self) -> "OutputSlot":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Filer(ABC):
    """Creates output slots addressed by qualified name."""

    def __init__(self):
        self._created: Set[str] = set()

    def create_source_file(self, qualified_name: str) -> OutputSlot:
        """
        Open a new output slot.

        Args:
            qualified_name: Dotted name of the artifact (e.g. ``org.example.Foo``)

        Returns:
            Open output slot

        Raises:
            EmitError: If the name was already created or the slot cannot be opened
        """
        if qualified_name in self._created:
            raise EmitError(f"Attempt to recreate a file for type {qualified_name}")

        slot = self._open(qualified_name)
        self._created.add(qualified_name)
        logger.debug("Opened output slot for %s", qualified_name)
        return slot

    @property
    def created(self) -> List[str]:
        """Qualified names created so far."""
        return sorted(self._created)

    @abstractmethod
    def _open(self, qualified_name: str) -> OutputSlot:
        pass

    def describe(self) -> str:
        """Human readable destination of this filer."""
        return type(self).__name__


class _FileSlot(OutputSlot):
    def __init__(self, qualified_name: str, path: Path, stream: TextIO):
        super().__init__(qualified_name)
        self.path = path
        self._stream = stream

    def write(self, text: str) -> None:
        try:
            self._stream.write(text)
        except OSError as e:
            raise EmitError(f"Error writing {self.path}: {e}") from e

    def close(self) -> None:
        if self.closed:
            return
        super().close()
        try:
            self._stream.close()
        except OSError as e:
            raise EmitError(f"Error closing {self.path}: {e}") from e


class DirectoryFiler(Filer):
    """Writes each artifact to ``root/<package path>/<Name><extension>``."""

    def __init__(
        self,
        root: Union[str, Path],
        extension: str = ".java",
        encoding: str = "utf-8",
    ):
        super().__init__()
        self.root = Path(root)
        self.extension = extension
        self.encoding = encoding

    def path_for(self, qualified_name: str) -> Path:
        """Get the file path of a qualified name."""
        *package, name = qualified_name.split(".")
        return self.root.joinpath(*package, f"{name}{self.extension}")

    def _open(self, qualified_name: str) -> OutputSlot:
        path = self.path_for(qualified_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            stream = path.open("w", encoding=self.encoding)
        except OSError as e:
            raise EmitError(f"Cannot create source file {path}: {e}") from e
        return _FileSlot(qualified_name, path, stream)

    def describe(self) -> str:
        return str(self.root)


class _MemorySlot(OutputSlot):
    def __init__(self, qualified_name: str, sources: Dict[str, str]):
        super().__init__(qualified_name)
        self._sources = sources
        self._chunks: List[str] = []

    def write(self, text: str) -> None:
        if self.closed:
            raise EmitError(f"Output slot {self.qualified_name} is closed")
        self._chunks.append(text)

    def close(self) -> None:
        if self.closed:
            return
        super().close()
        self._sources[self.qualified_name] = "".join(self._chunks)


class MemoryFiler(Filer):
    """Keeps rendered artifacts in memory, keyed by qualified name."""

    def __init__(self):
        super().__init__()
        self.sources: Dict[str, str] = {}

    def _open(self, qualified_name: str) -> OutputSlot:
        return _MemorySlot(qualified_name, self.sources)

    def get(self, qualified_name: str) -> Optional[str]:
        """Get the rendered text of a closed slot."""
        return self.sources.get(qualified_name)

    def describe(self) -> str:
        return "memory"
