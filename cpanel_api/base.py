"""Base class for cPanel API2 module calls."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Optional

from .errors import ConfigurationError
from .registry import default_registry
from .server import Credentials, WhmServer

DEFAULT_API_VERSION = 2
DEFAULT_RESULT_KEY = 'cpanelresult'


@dataclass
class CallOptions:
    """Options for a single cPanel call."""

    api_module: Optional[str] = None
    api_function: Optional[str] = None
    api_username: Optional[str] = None
    api_version: Optional[int] = None
    key: Optional[str] = None

    @classmethod
    def split_mapping(cls, data):
        """Split a dict into CallOptions and the remaining call parameters.

        Returns:
            tuple: (CallOptions, dict of entries that are not option names)
        """
        names = {f.name for f in fields(cls)}
        options = {k: v for k, v in data.items() if k in names}
        extra = {k: v for k, v in data.items() if k not in names}
        return cls(**options), extra


class CpanelBase:
    """Formats cPanel API2 calls and hands them to a WHM server."""

    def __init__(self, server=None, api_username=None, registry=None):
        """Initialize cPanel module.

        Args:
            server: WhmServer (or any object with perform_request),
                Credentials, or a mapping with host and hash. When omitted
                the server cached in the registry is used.
            api_username: cPanel user the calls run as by default
            registry: ConnectionRegistry holding the shared server;
                defaults to the process wide registry

        Raises:
            ConfigurationError: If api_username is missing or no usable
                server is available
        """
        self.registry = registry if registry is not None else default_registry
        self.log = logging.getLogger(__name__)

        if not api_username:
            raise ConfigurationError('api_username')

        if server is None:
            server = self.registry.get()
            if server is None:
                raise ConfigurationError('transport/server')
        else:
            if isinstance(server, Credentials):
                server = WhmServer(server)
            elif isinstance(server, Mapping):
                server = WhmServer.from_mapping(server)
            elif not callable(getattr(server, 'perform_request', None)):
                raise ConfigurationError('transport/server')
            # Only cache once the module is fully configured
            self.registry.set(server)

        self._server = server
        self.api_username = api_username

    @property
    def server(self):
        return self._server

    def perform_request(self, options, params=None):
        """Perform a cPanel API2 call.

        Args:
            options: CallOptions or mapping with api_module, api_function and
                optionally api_username, api_version and key; any other
                entries of a mapping are sent as call parameters
            params: extra call parameters sent along unchanged

        Returns:
            Whatever the server returns for the call

        Raises:
            ConfigurationError: If api_username, api_module or
                api_function cannot be resolved
        """
        extra = {}
        if not isinstance(options, CallOptions):
            options, extra = CallOptions.split_mapping(options)

        api_username = options.api_username or self.api_username
        if not api_username:
            raise ConfigurationError('api_username')
        if not options.api_module:
            raise ConfigurationError('api_module')
        if not options.api_function:
            raise ConfigurationError('api_function')

        api_version = options.api_version
        if api_version is None:
            api_version = DEFAULT_API_VERSION
        key = options.key if options.key is not None else DEFAULT_RESULT_KEY

        request_params = dict(extra)
        request_params.update(params or {})
        request_params.update({
            'cpanel_jsonapi_module': options.api_module,
            'cpanel_jsonapi_func': options.api_function,
            'cpanel_jsonapi_user': api_username,
            'cpanel_jsonapi_apiversion': api_version,
            'key': key
        })

        self.log.debug(
            f"user={api_username} module={options.api_module} "
            f"function={options.api_function} apiversion={api_version}"
        )
        return self._server.perform_request('cpanel', request_params)
