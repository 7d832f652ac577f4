"""Exceptions raised by the cPanel/WHM API client."""


class WhmError(Exception):
    """Base class for all client errors."""


class ConfigurationError(WhmError):
    """A required parameter is missing or empty."""

    def __init__(self, param):
        self.param = param
        super().__init__(f"missing required param: {param}")


class WhmResultError(WhmError):
    """The server reply did not contain the requested result key."""

    def __init__(self, key, response):
        self.key = key
        self.response = response
        super().__init__(f"result key '{key}' not found in response")
