"""
Tests for the configuration registry and hot reload.
"""

from datetime import timedelta

import pytest

from credprovider.config import ConfigRegistry, SystemConfig, get_config_registry
from credprovider.config.core import AggregateValidationError
from credprovider.core.exceptions import (
    ConfigNotFoundError, ConfigurationError, ProviderNotFoundError, SchemaNotRegisteredError
)


TOKEN_PROVIDER_YAML = """
kind: CredentialProviderConfig
apiVersion: kubelet.config.k8s.io/v1
providers:
  - name: token
    matchImages: ["registry.io/*"]
    defaultCacheDuration: 1m
    apiVersion: credentialprovider.kubelet.k8s.io/v1
    tokenAttributes:
      serviceAccountTokenAudience: audience
      requireServiceAccount: true
"""


class TestConfigRegistry:

    def setup_method(self):
        self.registry = ConfigRegistry()

    def test_initial_state(self):
        assert self.registry.config is None
        assert self.registry.path is None
        assert self.registry.list_providers() == []

    def test_load_activates_config(self, write_config_dir, provider_yaml):
        config_dir = write_config_dir([provider_yaml(name="a"), provider_yaml(name="b")])

        config = self.registry.load(config_dir)

        assert config.provider_names == ["a", "b"]
        assert self.registry.list_providers() == ["a", "b"]
        assert self.registry.path == config_dir
        assert self.registry.get_provider("b").default_cache_duration == timedelta(minutes=10)

    def test_returned_config_is_a_copy(self, write_config_file, provider_yaml):
        self.registry.load(write_config_file(provider_yaml()))

        self.registry.config.providers.clear()
        self.registry.get_provider("test").match_images.append("other.io")

        assert self.registry.list_providers() == ["test"]
        assert self.registry.get_provider("test").match_images == ["registry.io/foobar"]

    def test_unknown_provider(self, write_config_file, provider_yaml):
        self.registry.load(write_config_file(provider_yaml()))

        with pytest.raises(ProviderNotFoundError):
            self.registry.get_provider("missing")

    def test_get_provider_before_load(self):
        with pytest.raises(ProviderNotFoundError):
            self.registry.get_provider("test")

    def test_invalid_config_is_rejected(self, write_config_dir, provider_yaml):
        config_dir = write_config_dir([provider_yaml(name="dup"), provider_yaml(name="dup")])

        with pytest.raises(AggregateValidationError) as excinfo:
            self.registry.load(config_dir)

        assert str(excinfo.value) == 'providers[1].name: Duplicate value: "dup"'
        assert self.registry.config is None

    def test_reload_without_load(self):
        with pytest.raises(ConfigurationError):
            self.registry.reload()

    def test_reload_picks_up_changes(self, write_config_dir, provider_yaml):
        config_dir = write_config_dir([provider_yaml(name="a")])
        self.registry.load(config_dir)

        (config_dir / "config-001.yaml").write_text(provider_yaml(name="b"))

        assert self.registry.reload().provider_names == ["a", "b"]
        assert self.registry.list_providers() == ["a", "b"]

    def test_failed_reload_keeps_previous_config(self, write_config_dir, provider_yaml):
        config_dir = write_config_dir([provider_yaml(name="a")])
        self.registry.load(config_dir)

        (config_dir / "config-001.yaml").write_text(provider_yaml(name="a"))
        with pytest.raises(AggregateValidationError):
            self.registry.reload()
        assert self.registry.list_providers() == ["a"]

        (config_dir / "config-001.yaml").write_text(provider_yaml().replace("CredentialProviderConfig", "Other"))
        with pytest.raises(SchemaNotRegisteredError):
            self.registry.reload()
        assert self.registry.list_providers() == ["a"]

    def test_failed_load_of_new_path_keeps_previous(self, tmp_path, write_config_file, provider_yaml):
        path = write_config_file(provider_yaml())
        self.registry.load(path)

        with pytest.raises(ConfigNotFoundError):
            self.registry.load(tmp_path / "missing")

        assert self.registry.path == path
        assert self.registry.list_providers() == ["test"]

    def test_reset(self, write_config_file, provider_yaml):
        self.registry.load(write_config_file(provider_yaml()))

        self.registry.reset()

        assert self.registry.config is None
        assert self.registry.path is None


class TestRegistryFeatureGate:

    def test_token_attributes_rejected_without_gate(self, write_config_file):
        registry = ConfigRegistry()

        with pytest.raises(AggregateValidationError) as excinfo:
            registry.load(write_config_file(TOKEN_PROVIDER_YAML))

        assert "feature gate is disabled" in str(excinfo.value)

    def test_token_attributes_accepted_with_gate(self, write_config_file):
        system_config = SystemConfig(
            feature_gates={"KubeletServiceAccountTokenForCredentialProviders": True}
        )
        registry = get_config_registry(system_config)

        registry.load(write_config_file(TOKEN_PROVIDER_YAML))

        attrs = registry.get_provider("token").token_attributes
        assert attrs.service_account_token_audience == "audience"
        assert attrs.require_service_account is True

    def test_default_registry_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CREDPROVIDER_FEATURE_GATES", "KubeletServiceAccountTokenForCredentialProviders=true")

        assert get_config_registry().sa_token_for_credential_providers is True
