"""WHM server connection used to perform JSON API requests."""

import logging
from dataclasses import dataclass

import requests
import urllib3

from .errors import ConfigurationError, WhmResultError


@dataclass(frozen=True)
class Credentials:
    """Host and access hash for a WHM server."""

    host: str
    hash: str
    user: str = 'root'

    def __post_init__(self):
        if not self.host:
            raise ConfigurationError('host')
        if not self.hash:
            raise ConfigurationError('hash')
        # Access hashes copied from /root/.accesshash are wrapped over many lines
        # YAML reads an unquoted all-digit hash as an int
        object.__setattr__(self, 'hash', ''.join(str(self.hash).split()))
        if not self.hash:
            raise ConfigurationError('hash')

    @classmethod
    def from_mapping(cls, data):
        """Build credentials from a dict with host, hash and optional user."""
        return cls(
            host=data.get('host'),
            hash=data.get('hash'),
            user=data.get('user') or 'root'
        )


class WhmServer:
    """Transport for the WHM JSON API."""

    def __init__(self, credentials, read_timeout=30, ssl_verify=False, port=2087):
        """Initialize WHM server connection.

        Args:
            credentials: Credentials for the server
            read_timeout: Request timeout in seconds
            ssl_verify: Verify the server TLS certificate
            port: WHM port
        """
        self.credentials = credentials
        self.host = credentials.host
        self.base_url = f"https://{credentials.host}:{port}"
        self.read_timeout = read_timeout
        self.ssl_verify = ssl_verify
        self.log = logging.getLogger(__name__)

        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'WHM {credentials.user}:{credentials.hash}'
        })

        if not ssl_verify:
            # Disable SSL warnings for self-signed certificates
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @classmethod
    def from_mapping(cls, data):
        """Build a server from a config entry.

        Args:
            data: dict with host, hash and optionally user, read_timeout,
                ssl_verify and port

        Returns:
            WhmServer: new server connection
        """
        options = {}
        for name in ('read_timeout', 'ssl_verify', 'port'):
            if data.get(name) is not None:
                options[name] = data[name]
        return cls(Credentials.from_mapping(data), **options)

    def perform_request(self, function, params=None):
        """Call a JSON API function on the server.

        Args:
            function: JSON API function name, e.g. 'cpanel' or 'listaccts'
            params: query parameters; a 'key' entry selects the part of
                the reply to return and is not sent to the server

        Returns:
            The value stored under the result key, or the whole decoded
            reply when no key was given

        Raises:
            WhmResultError: If the reply lacks the result key
            requests.RequestException: If the HTTP request fails
        """
        params = dict(params or {})
        key = params.pop('key', None)

        try:
            response = self.session.get(
                f"{self.base_url}/json-api/{function}",
                params=params,
                verify=self.ssl_verify,
                timeout=self.read_timeout
            )
            response.raise_for_status()
            result = response.json()
        except Exception as e:
            self.log.error(f"host={self.host} function={function} error={e}")
            raise

        if key is None:
            return result
        if key not in result:
            self.log.error(f"host={self.host} function={function} error=missing_key key={key}")
            raise WhmResultError(key, result)
        return result[key]
