"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from channels_server.config import ChannelsConfig


def _config(**kwargs) -> ChannelsConfig:
    return ChannelsConfig(app_id="id", app_key="key", app_secret="secret", **kwargs)


class TestChannelsConfig:
    """Tests for the ChannelsConfig class."""

    def test_required_fields(self, monkeypatch):
        """Test that required fields are enforced."""
        for name in ("CHANNELS_APP_ID", "CHANNELS_APP_KEY", "CHANNELS_APP_SECRET"):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(ValidationError):
            ChannelsConfig(_env_file=None)

    def test_env_vars(self, monkeypatch):
        """Test loading settings from environment variables."""
        monkeypatch.setenv("CHANNELS_APP_ID", "env-id")
        monkeypatch.setenv("CHANNELS_APP_KEY", "env-key")
        monkeypatch.setenv("CHANNELS_APP_SECRET", "env-secret")
        monkeypatch.setenv("CHANNELS_BATCH_EVENT_DATA_SIZE_LIMIT", "1024")

        config = ChannelsConfig(_env_file=None)

        assert config.app_id == "env-id"
        assert config.app_secret.get_secret_value() == "env-secret"
        assert config.batch_event_data_size_limit == 1024

    def test_default_values(self, config):
        """Test default configuration values."""
        assert config.host == "api.pusherapp.com"
        assert config.cluster is None
        assert config.encrypted is False
        assert config.batch_event_data_size_limit is None
        assert config.channel_name_max_length == 164
        assert config.max_batch_size == 10

    def test_port_defaults_to_80(self, config):
        assert config.effective_port == 80

    def test_encrypted_port_is_443(self):
        assert _config(encrypted=True).effective_port == 443

    def test_explicit_port_kept_when_encrypted(self):
        assert _config(port=90, encrypted=True).effective_port == 90

    def test_base_url_defaults(self, config):
        assert config.build_base_url() == "http://api.pusherapp.com"

    def test_base_url_encrypted(self):
        assert _config(encrypted=True).build_base_url() == "https://api.pusherapp.com"

    def test_base_url_with_port(self):
        assert _config(port=100).build_base_url() == "http://api.pusherapp.com:100"
        assert _config(port=100, encrypted=True).build_base_url() == "https://api.pusherapp.com:100"

    def test_cluster_sets_host(self):
        config = _config(cluster="eu")

        assert config.host == "api-eu.pusher.com"
        assert config.build_base_url() == "http://api-eu.pusher.com"

    def test_cluster_with_encryption_and_port(self):
        config = _config(cluster="eu", encrypted=True, port=100)

        assert config.build_base_url() == "https://api-eu.pusher.com:100"

    def test_cluster_ignored_when_host_set(self):
        config = _config(host="api.my.domain.com", cluster="eu")

        assert config.build_base_url() == "http://api.my.domain.com"
        assert config.cluster is None

    @pytest.mark.parametrize(
        "host", ["https://api.pusherapp.com", "http://api.pusherapp.com", "ftp://api.pusherapp.com"]
    )
    def test_scheme_not_allowed_in_host(self, host):
        with pytest.raises(ValidationError):
            _config(host=host)

    def test_size_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            _config(batch_event_data_size_limit=0)

    def test_validation_rules(self):
        rules = _config(
            batch_event_data_size_limit=512, channel_name_max_length=50, max_batch_size=3
        ).validation_rules()

        assert rules.batch_event_data_size_limit == 512
        assert rules.channel_name_max_length == 50
        assert rules.max_batch_size == 3

    def test_secret_is_secret(self, config):
        """Test that app_secret is a SecretStr."""
        # Should not expose secret in string representation
        assert "test-app-secret" not in str(config)
        assert "test-app-secret" not in repr(config)

        # But can get the actual value when needed
        assert config.app_secret.get_secret_value() == "test-app-secret"
