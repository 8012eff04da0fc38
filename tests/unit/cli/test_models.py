import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from devport.cli.models import ServeConfiguration, ServeOptions
from devport.shared.settings import PortSettings


class TestServeOptions:
    """Tests for ServeOptions defaults and validation."""

    def test_defaults(self):
        """Test the defaults of the serve command."""
        options = ServeOptions()

        assert options.host is None
        assert options.environment == "development"
        assert options.output_path == Path("dist")
        assert options.ssl_key == Path("ssl/server.key")
        assert options.ssl_cert == Path("ssl/server.crt")
        assert options.live_reload is True

    def test_default_port_comes_from_settings(self):
        """Test the default port follows port_settings.default_port."""
        with patch("devport.cli.models.port_settings", PortSettings(PORT=4321)):
            assert ServeOptions().port == 4321

    def test_live_reload_port_range_validated(self):
        """Test an out of range live reload port is rejected."""
        with pytest.raises(ValidationError):
            ServeOptions(live_reload_port=70000)

    def test_options_are_frozen(self):
        """Test options cannot be mutated."""
        options = ServeOptions(port=4200)

        with pytest.raises(ValidationError):
            options.port = 4300


class TestServeConfiguration:
    """Tests for ServeConfiguration."""

    def test_from_options_merges_resolved_values(self):
        """Test resolved ports and base URL are merged with the command options."""
        options = ServeOptions(port=0, host="::1", proxy="http://localhost:3000", ssl=True)

        configuration = ServeConfiguration.from_options(
            options, port=4300, live_reload_port=49152, live_reload_host="::1", base_url="/app/"
        )

        assert configuration.port == 4300
        assert configuration.live_reload_port == 49152
        assert configuration.live_reload_host == "::1"
        assert configuration.base_url == "/app/"
        assert configuration.proxy == "http://localhost:3000"
        assert configuration.scheme == "https"
        assert options.port == 0

    def test_listen_host_defaults_to_all_interfaces(self):
        """Test an unset host listens on the IPv6 wildcard."""
        configuration = ServeConfiguration.from_options(
            ServeOptions(port=4200), port=4200, live_reload_port=49152, live_reload_host=None, base_url="/"
        )

        assert configuration.listen_host == "::"
        assert configuration.scheme == "http"


class TestPortSettings:
    """Tests for PortSettings."""

    def test_defaults(self):
        """Test default port, search base and range."""
        with patch.dict(os.environ, {}, clear=True):
            settings = PortSettings(_env_file=None)

        assert settings.default_port == 4200
        assert settings.base_port == 49152
        assert settings.max_port == 65535
        assert settings.max_rounds is None

    @patch.dict(os.environ, {"PORT": "8080", "DEVPORT_BASE_PORT": "50000", "DEVPORT_MAX_ROUNDS": "5"})
    def test_values_from_environment(self):
        """Test the settings can be overridden via environment variables."""
        settings = PortSettings(_env_file=None)

        assert settings.default_port == 8080
        assert settings.base_port == 50000
        assert settings.max_rounds == 5

    @patch.dict(os.environ, {"DEVPORT_BASE_PORT": "60000", "DEVPORT_MAX_PORT": "50000"})
    def test_base_above_max_rejected(self):
        """Test a search base above the last port is rejected."""
        with pytest.raises(ValueError):
            PortSettings(_env_file=None)

    @patch.dict(os.environ, {"DEVPORT_BASE_PORT": "0"})
    def test_invalid_base_port_rejected(self):
        """Test a search base outside 1-65535 is rejected."""
        with pytest.raises(ValueError):
            PortSettings(_env_file=None)
