"""Command line entry point for one-off cPanel API2 calls."""

import argparse
import json
import logging
import sys

from .base import CpanelBase
from .config import configure_logging, default_config_path, load_config
from .errors import WhmError
from .registry import ConnectionRegistry
from .server import WhmServer


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Perform a cPanel API2 call through WHM.')
    parser.add_argument('module', help='cPanel module, e.g. AddonDomain')
    parser.add_argument('function', help='module function, e.g. listaddondomains')
    parser.add_argument('params', nargs='*', metavar='name=value',
                        help='extra call parameters')
    parser.add_argument('--user', required=True, help='cPanel account to run as')
    parser.add_argument('--config', default=None,
                        help='YAML config file (default: $CPANEL_API_CONFIG or servers.yml)')
    parser.add_argument('--server', default=None, help='host of the server to use')
    parser.add_argument('--api-version', type=int, default=None)
    parser.add_argument('--key', default=None, help='result key to return')
    return parser.parse_args(argv)


def parse_params(pairs):
    """Turn name=value arguments into a dict."""
    params = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        if not sep or not name:
            raise ValueError(f"invalid parameter '{pair}', expected name=value")
        params[name] = value
    return params


def select_server(config, host=None):
    """Return the config entry for host, or the first server."""
    servers = config.get('servers') or []
    for server in servers:
        if host is None or server.get('host') == host:
            return server
    return None


def main(argv=None):
    args = parse_args(argv)
    path = args.config or default_config_path()

    try:
        config = load_config(path)
    except FileNotFoundError:
        print(f"Error: {path} not found. Please create it from servers.yml.sample", file=sys.stderr)
        return 1

    configure_logging(config.get('config', {}))
    log = logging.getLogger(__name__)

    entry = select_server(config, args.server)
    if entry is None:
        print(f"Error: no server {args.server or ''} configured in {path}", file=sys.stderr)
        return 1

    try:
        params = parse_params(args.params)
        cpanel = CpanelBase(
            server=WhmServer.from_mapping(entry),
            api_username=args.user,
            registry=ConnectionRegistry()
        )
        result = cpanel.perform_request({
            'api_module': args.module,
            'api_function': args.function,
            'api_version': args.api_version,
            'key': args.key
        }, params)
    except (WhmError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        log.error(f"host={entry.get('host')} user={args.user} error={e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0
