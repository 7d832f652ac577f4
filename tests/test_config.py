"""Tests for configuration loading and the command line entry point."""
import json
import logging

import pytest
import requests
from unittest.mock import patch

from cpanel_api import cli
from cpanel_api.config import configure_logging, default_config_path, load_config, server_credentials

CONFIG = """
config:
  log_level: DEBUG
servers:
  - host: whm.example.com
    hash: abc123
  - host: whm2.example.com
    hash: def456
    user: reseller
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'servers.yml'
    path.write_text(CONFIG)
    return path


class TestConfig:

    def test_load_config(self, config_file):
        config = load_config(config_file)
        assert config['config'] == {'log_level': 'DEBUG'}
        assert len(config['servers']) == 2

    def test_load_empty_config(self, tmp_path):
        path = tmp_path / 'empty.yml'
        path.write_text('')
        assert load_config(path) == {}

    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'missing.yml')

    def test_default_config_path(self, monkeypatch):
        monkeypatch.delenv('CPANEL_API_CONFIG', raising=False)
        assert default_config_path() == 'servers.yml'
        monkeypatch.setenv('CPANEL_API_CONFIG', '/etc/cpanel.yml')
        assert default_config_path() == '/etc/cpanel.yml'

    def test_server_credentials(self, config_file):
        credentials = server_credentials(load_config(config_file))
        assert [c.host for c in credentials] == ['whm.example.com', 'whm2.example.com']
        assert credentials[1].user == 'reseller'

    def test_server_credentials_without_servers(self):
        assert server_credentials({}) == []

    def test_configure_logging(self, tmp_path):
        logfile = tmp_path / 'cpanel.log'
        with patch('logging.basicConfig') as basic_config:
            configure_logging({'logfile': str(logfile), 'log_level': 'debug'})
        kwargs = basic_config.call_args.kwargs
        assert kwargs['filename'] == str(logfile)
        assert kwargs['level'] == logging.DEBUG

    def test_configure_logging_unknown_level(self):
        with patch('logging.basicConfig') as basic_config:
            configure_logging({'log_level': 'loud'})
        assert basic_config.call_args.kwargs['level'] == logging.INFO
        assert 'filename' not in basic_config.call_args.kwargs


class TestCli:

    def test_parse_params(self):
        assert cli.parse_params(['domain=example.com', 'op=a=b']) == {
            'domain': 'example.com',
            'op': 'a=b'
        }

    def test_parse_params_invalid(self):
        with pytest.raises(ValueError):
            cli.parse_params(['nope'])

    def test_select_server(self, config_file):
        config = load_config(config_file)
        assert cli.select_server(config)['host'] == 'whm.example.com'
        assert cli.select_server(config, 'whm2.example.com')['user'] == 'reseller'
        assert cli.select_server(config, 'missing.example.com') is None

    def test_main_performs_call(self, config_file, capsys):
        with patch('cpanel_api.server.WhmServer.perform_request',
                   return_value={'data': [{'domain': 'example.com'}]}) as perform_request:
            status = cli.main([
                'AddonDomain', 'listaddondomains', 'regex=example',
                '--user', 'someuser', '--config', str(config_file)
            ])

        assert status == 0
        function, params = perform_request.call_args.args
        assert function == 'cpanel'
        assert params['cpanel_jsonapi_module'] == 'AddonDomain'
        assert params['cpanel_jsonapi_user'] == 'someuser'
        assert params['regex'] == 'example'
        assert json.loads(capsys.readouterr().out) == {'data': [{'domain': 'example.com'}]}

    def test_main_missing_config(self, tmp_path, capsys):
        status = cli.main(['Email', 'listpops', '--user', 'u', '--config', str(tmp_path / 'nope.yml')])
        assert status == 1
        assert 'not found' in capsys.readouterr().err

    def test_main_unknown_server(self, config_file, capsys):
        status = cli.main(['Email', 'listpops', '--user', 'u', '--config', str(config_file),
                           '--server', 'other.example.com'])
        assert status == 1
        assert 'no server' in capsys.readouterr().err

    def test_main_transport_failure_reported_on_stderr(self, config_file, capsys):
        with patch('cpanel_api.server.WhmServer.perform_request',
                   side_effect=requests.ConnectionError('connection refused')):
            status = cli.main(['Email', 'listpops', '--user', 'u', '--config', str(config_file)])

        assert status == 1
        assert 'connection refused' in capsys.readouterr().err
