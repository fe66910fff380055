"""Tests for the command-line interface.

This module tests:
- Argument parsing and validation
- Configuration layering from file and arguments
- The locations, dispatch and check commands
- Exit codes on errors
"""

import pytest
import yaml

from edconf.cli import (
    CLIError,
    build_config_from_args,
    load_config,
    main,
    parse_arguments,
    setup_logging,
)
from edconf.infrastructure.logger import LogLevel


class TestParseArguments:
    """Test argument parsing."""

    def test_locations_command(self):
        """Parses global options and a command."""
        args = parse_arguments(["--root", "/r", "--host", "alpha", "locations"])
        assert args.command == "locations"
        assert args.root == "/r"
        assert args.host == "alpha"
        assert not args.debug

    def test_dispatch_command(self):
        """dispatch takes a path and an optional remote marker."""
        args = parse_arguments(["dispatch", "/ssh:h:/etc/hosts", "--remote-marker", "/ssh:h:"])
        assert args.path == "/ssh:h:/etc/hosts"
        assert args.remote_marker == "/ssh:h:"

    def test_command_required(self):
        """A command must be given."""
        with pytest.raises(SystemExit):
            parse_arguments([])

    def test_missing_config_file(self, tmp_path):
        """A missing configuration file is a CLIError."""
        with pytest.raises(CLIError, match="does not exist"):
            parse_arguments(["--config", str(tmp_path / "nope.yaml"), "locations"])

    def test_config_is_directory(self, tmp_path):
        """The configuration path must be a file."""
        with pytest.raises(CLIError, match="not a file"):
            parse_arguments(["--config", str(tmp_path), "locations"])


class TestBuildConfig:
    """Test configuration assembly."""

    def test_only_given_options(self):
        """Options that were not given do not appear."""
        args = parse_arguments(["locations"])
        assert build_config_from_args(args) == {"edconf": {}}

    def test_all_options(self):
        """Given options map onto the edconf section."""
        args = parse_arguments(
            ["--root", "/r", "--host", "alpha", "--debug", "--log-file", "x.log", "locations"]
        )
        assert build_config_from_args(args) == {
            "edconf": {
                "root": "/r",
                "host": "alpha",
                "logging": {"level": "DEBUG", "file": "x.log"},
            }
        }

    def test_arguments_override_file(self, config_file):
        """Command-line options take precedence over the file."""
        args = parse_arguments(["--config", str(config_file), "--host", "beta", "locations"])
        config = load_config(args)
        assert config.get("edconf.host") == "beta"
        assert config.get("edconf.settings.history_length") == 500

    def test_setup_logging(self, config_file):
        """Logging level comes from configuration."""
        config = load_config(parse_arguments(["--config", str(config_file), "locations"]))
        assert setup_logging(config).get_level() == LogLevel.DEBUG


class TestMain:
    """Test the CLI entry point."""

    def test_locations(self, capsys):
        """locations prints every resolved location."""
        assert main(["--root", "/srv/conf", "--host", "alpha", "locations"]) == 0
        out = capsys.readouterr().out
        assert "etc_dir: /srv/conf/.local/@alpha/etc/" in out
        assert "cache_dir: /srv/conf/.local/@alpha/cache/" in out
        assert "packages: /srv/conf/.local/packages/" in out

    def test_dispatch(self, config_file, capsys):
        """dispatch reports the activated modes."""
        code = main(["--config", str(config_file), "dispatch", "/a/foo.txt.~3~"])
        assert code == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["path: /a/foo.txt", "activated: whitespace", "activated: lint"]

    def test_dispatch_remote(self, config_file, capsys):
        """dispatch strips the remote marker before matching."""
        code = main(
            [
                "--config",
                str(config_file),
                "dispatch",
                "/ssh:alpha:/etc/hosts",
                "--remote-marker",
                "/ssh:alpha:",
            ]
        )
        assert code == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["path: /etc/hosts", "activated: system-files"]

    def test_check_ok(self, config_file, capsys):
        """check lists the configured rules."""
        assert main(["--config", str(config_file), "check"]) == 0
        out = capsys.readouterr().out
        assert "rule: whitespace" in out
        assert "rule: system-files" in out
        assert f"config: {config_file.resolve()}" in out
        assert "host: alpha (user_config)" in out

    def test_check_invalid(self, temp_dir, sample_config, capsys):
        """check fails on invalid rules."""
        sample_config["edconf"]["auto_modes"].append({"pattern": "(", "mode": "lint"})
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.dump(sample_config))
        assert main(["--config", str(path), "check"]) == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_dispatch_invalid_gc_threshold(self, temp_dir, sample_config, capsys):
        """A bad GC threshold in the file gives exit code 1, not a traceback."""
        sample_config["edconf"]["gc"]["startup_threshold"] = "big"
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.dump(sample_config))
        assert main(["--config", str(path), "dispatch", "/a/foo.txt"]) == 1
        assert "startup_threshold" in capsys.readouterr().err

    def test_dispatch_invalid_gc_threshold_from_environment(self, config_file, monkeypatch, capsys):
        """Environment overrides are validated the same way."""
        monkeypatch.setenv("EDCONF_GC__STARTUP_THRESHOLD", "big")
        assert main(["--config", str(config_file), "dispatch", "/a/foo.txt"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_config(self, tmp_path, capsys):
        """Missing configuration files give exit code 1."""
        assert main(["--config", str(tmp_path / "missing.yaml"), "locations"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_host(self, capsys):
        """Invalid host names give exit code 1."""
        assert main(["--host", "a/b", "locations"]) == 1
        assert "Invalid host name" in capsys.readouterr().err
