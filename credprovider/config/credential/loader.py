"""
Credential provider configuration loader.

Resolves a path to its documents, parses each as YAML or JSON, decodes it
through the schema registered for its kind/apiVersion and concatenates the
providers in file order. The loader never validates: duplicate names and
structural problems are left to ``validation.py`` so they can be reported
together.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from credprovider.config.core.source import ConfigSource, FileConfigSource, RawDocument
from credprovider.core.exceptions import ConfigSyntaxError, StrictDecodingError
from credprovider.logger import get_credprovider_logger
from .config import CredentialProviderConfig
from .schema import decode_document

logger = get_credprovider_logger("credprovider.config.loader")


class _StrictSafeLoader(yaml.SafeLoader):
    """SafeLoader that records mapping keys appearing more than once."""

    def __init__(self, stream):
        super().__init__(stream)
        self.duplicate_fields: List[str] = []

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == 'tag:yaml.org,2002:merge':
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    if key in seen:
                        self.duplicate_fields.append(str(key))
                    seen.add(key)
                except TypeError:
                    # unhashable key; SafeConstructor reports it below
                    pass
        return super().construct_mapping(node, deep=deep)


def _parse_yaml(text: str, source: Optional[str]) -> Any:
    loader = _StrictSafeLoader(text)
    try:
        document = loader.get_single_data()
    except yaml.YAMLError as e:
        raise ConfigSyntaxError(source, f"error converting YAML to JSON: {e}") from e
    finally:
        loader.dispose()

    if loader.duplicate_fields:
        raise StrictDecodingError(source, duplicate_fields=loader.duplicate_fields)
    return document


def _parse_json(text: str, source: Optional[str]) -> Any:
    duplicates: List[str] = []

    def object_pairs_hook(pairs):
        obj = {}
        for key, value in pairs:
            if key in obj:
                duplicates.append(key)
            obj[key] = value
        return obj

    try:
        document = json.loads(text, object_pairs_hook=object_pairs_hook)
    except json.JSONDecodeError as e:
        raise ConfigSyntaxError(source, f"invalid JSON: {e}") from e

    if duplicates:
        raise StrictDecodingError(source, duplicate_fields=duplicates)
    return document


def parse_document(data: bytes, source: Optional[str] = None) -> Any:
    """
    Parse one document.

    A document whose first non-whitespace character is ``{`` is parsed as
    JSON, anything else as YAML. Extensions are not consulted, so a JSON
    document stored in a ``.yaml`` file still parses.
    """
    try:
        text = data.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ConfigSyntaxError(source, f"document is not valid UTF-8: {e}") from e

    if text.lstrip().startswith('{'):
        return _parse_json(text, source)
    return _parse_yaml(text, source)


def decode_raw_document(document: RawDocument) -> CredentialProviderConfig:
    """Parse and strictly decode a single raw document."""
    config = decode_document(parse_document(document.data, document.source), document.source)
    logger.debug(
        "Decoded credential provider config document",
        file=document.source,
        providers=config.provider_names,
    )
    return config


def load_credential_provider_config(source: ConfigSource) -> CredentialProviderConfig:
    """
    Load and merge every document of ``source``.

    The first load error aborts the whole load; no partial configuration is
    ever returned.

    Parameters
    ----------
    source : ConfigSource
        Where the documents come from

    Returns
    -------
    CredentialProviderConfig
        A fresh configuration holding the providers of every document, in order
    """
    documents = source.read_documents()

    merged = CredentialProviderConfig()
    for document in documents:
        merged = merged.merge(decode_raw_document(document))

    logger.info(
        "Loaded credential provider config",
        source=source.name,
        files=len(documents),
        providers=len(merged.providers),
    )
    return merged


def read_credential_provider_config(path: Union[str, Path]) -> CredentialProviderConfig:
    """
    Read the credential provider configuration at ``path``.

    ``path`` may be a single file or a directory of ``.yaml``, ``.yml`` and
    ``.json`` files, which are merged in lexicographic filename order.

    Raises
    ------
    ConfigLoadError
        Subclasses name the failure: missing path, unreadable file, empty
        directory, malformed document, unregistered kind/apiVersion, unknown
        field or badly typed value.
    """
    return load_credential_provider_config(FileConfigSource(path))
