"""
Configuration source base classes and implementations.

A source resolves to an ordered list of raw documents. It only reads; it
does not parse, merge or validate.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

from credprovider.core.exceptions import ConfigNotFoundError, ConfigReadError, NoConfigFilesError
from credprovider.logger import get_credprovider_logger

SUPPORTED_EXTENSIONS = ('.yaml', '.yml', '.json')


@dataclass(frozen=True)
class RawDocument:
    """Bytes of one configuration document and where they came from."""
    source: str
    data: bytes


class ConfigSource(ABC):
    """
    Abstract base class for configuration sources.

    Defines the interface that all configuration sources must implement.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = get_credprovider_logger("credprovider.config.source")

    @abstractmethod
    def read_documents(self) -> List[RawDocument]:
        """Return every document of this source, in merge order."""
        pass


class FileConfigSource(ConfigSource):
    """
    File-system configuration source.

    A regular file is one document whatever its extension. A directory
    contributes its immediate ``.yaml``, ``.yml`` and ``.json`` entries in
    byte-wise lexicographic filename order; anything else is skipped.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__(str(path))
        self.path = Path(path)

    def read_documents(self) -> List[RawDocument]:
        if not self.path.exists():
            raise ConfigNotFoundError(str(self.path))

        if self.path.is_dir():
            files = self.list_config_files()
            if not files:
                raise NoConfigFilesError(str(self.path))
        else:
            files = [self.path]

        return [RawDocument(source=str(file), data=self._read(file)) for file in files]

    def list_config_files(self) -> List[Path]:
        """Return the eligible files of the directory in merge order."""
        try:
            entries = list(self.path.iterdir())
        except OSError as e:
            raise ConfigReadError(str(self.path), f"unable to read directory: {e}") from e

        files = []
        for entry in sorted(entries, key=lambda p: p.name.encode('utf-8', 'surrogateescape')):
            if entry.is_dir():
                continue
            if entry.suffix not in SUPPORTED_EXTENSIONS:
                self.logger.debug("Skipping file with unsupported extension", file=str(entry))
                continue
            files.append(entry)
        return files

    @staticmethod
    def _read(file: Path) -> bytes:
        try:
            with open(file, 'rb') as f:
                return f.read()
        except OSError as e:
            raise ConfigReadError(str(file), f"unable to read file: {e}") from e


class RuntimeConfigSource(ConfigSource):
    """
    In-memory configuration source, for documents that do not live on disk.
    """

    def __init__(self, documents: Sequence[Union[str, bytes]], name: str = "<runtime>"):
        super().__init__(name)
        self._documents = [
            doc.encode('utf-8') if isinstance(doc, str) else bytes(doc) for doc in documents
        ]

    def read_documents(self) -> List[RawDocument]:
        return [
            RawDocument(source=f"{self.name}[{i}]", data=data)
            for i, data in enumerate(self._documents)
        ]
