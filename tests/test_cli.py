import json

from click.testing import CliRunner

from echo_api import cli as cli_module
from echo_api.config import Config, ConfigError


def test_show_config_json(monkeypatch):
    monkeypatch.setattr(
        cli_module, 'load_config',
        lambda: Config(log_level='DEBUG', log_json=True, port=9000),
    )

    result = CliRunner().invoke(cli_module.cli, ['show-config', '--json'])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        'log-level': 'DEBUG',
        'log-json': True,
        'host': 'localhost',
        'port': 9000,
    }


def test_show_config_text(monkeypatch):
    monkeypatch.setattr(cli_module, 'load_config', lambda: Config())

    result = CliRunner().invoke(cli_module.cli, ['show-config'])

    assert result.exit_code == 0
    assert 'log-level: INFO' in result.output
    assert 'port: 8080' in result.output


def test_invalid_config_exits_nonzero(monkeypatch):
    def broken():
        raise ConfigError("fatal error logging: not a valid log level: 'chatty'")

    monkeypatch.setattr(cli_module, 'load_config', broken)

    result = CliRunner().invoke(cli_module.cli, ['serve'])

    assert result.exit_code == 1
    assert 'not a valid log level' in result.output


def test_serve_applies_overrides(monkeypatch):
    seen = {}

    monkeypatch.setattr(cli_module, 'load_config', lambda: Config())
    monkeypatch.setattr(cli_module, 'configure_logging', lambda config: None)
    monkeypatch.setattr('echo_api.app.run_app', lambda config: seen.setdefault('config', config))

    result = CliRunner().invoke(cli_module.cli, ['serve', '--host', '0.0.0.0', '--port', '9999'])

    assert result.exit_code == 0
    assert seen['config'].address == '0.0.0.0:9999'


def test_startup_failure_exits_nonzero(monkeypatch):
    def failing(config):
        raise OSError("address already in use")

    monkeypatch.setattr(cli_module, 'load_config', lambda: Config())
    monkeypatch.setattr(cli_module, 'configure_logging', lambda config: None)
    monkeypatch.setattr('echo_api.app.run_app', failing)

    result = CliRunner().invoke(cli_module.cli, ['serve'])

    assert result.exit_code == 1
