"""
Shared pytest configuration and fixtures for the credprovider tests.
"""

from datetime import timedelta

import pytest

from credprovider.config.credential import (
    CredentialProvider, CredentialProviderConfig, PROVIDER_API_VERSION_V1ALPHA1
)


V1_SINGLE_PROVIDER_YAML = """---
kind: CredentialProviderConfig
apiVersion: kubelet.config.k8s.io/v1
providers:
  - name: {name}
    matchImages:
    - "{image}"
    defaultCacheDuration: {duration}
    apiVersion: credentialprovider.kubelet.k8s.io/v1
"""


@pytest.fixture
def provider_yaml():
    """Render a single-provider v1 document."""
    def _render(name="test", image="registry.io/foobar", duration="10m"):
        return V1_SINGLE_PROVIDER_YAML.format(name=name, image=image, duration=duration)
    return _render


@pytest.fixture
def write_config_dir(tmp_path):
    """
    Write documents into a fresh directory and return its path.

    Accepts either a list of contents (named config-000.yaml, config-001.yaml, ...)
    or a dict mapping file names to contents.
    """
    def _write(documents):
        config_dir = tmp_path / "config-dir"
        config_dir.mkdir()
        if isinstance(documents, dict):
            items = documents.items()
        else:
            items = ((f"config-{i:03d}.yaml", data) for i, data in enumerate(documents))
        for file_name, data in items:
            (config_dir / file_name).write_text(data)
        return config_dir
    return _write


@pytest.fixture
def write_config_file(tmp_path):
    """Write a single document and return its path."""
    def _write(data, file_name="config.yaml"):
        path = tmp_path / file_name
        path.write_text(data)
        return path
    return _write


@pytest.fixture
def valid_config():
    """A configuration with one valid v1alpha1 provider."""
    return CredentialProviderConfig(providers=[
        CredentialProvider(
            name="foobar",
            match_images=["foobar.registry.io"],
            default_cache_duration=timedelta(minutes=1),
            api_version=PROVIDER_API_VERSION_V1ALPHA1,
        )
    ])
