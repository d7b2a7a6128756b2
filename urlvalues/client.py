"""A small HTTP client that sends marshalled values as query strings."""

import logging
from typing import Any, Optional

import requests

from . import version
from .marshal import MarshalerOptions


class Client:
    """HTTP client for one API root that turns values into query strings.

    Parameters given to :py:meth:`url` and :py:meth:`get` go through
    :py:class:`MarshalerOptions`, so nested mappings and records end up as
    bracketed query keys.

    Requests share the :py:class:`requests.Session` in :py:attr:`session`;
    set headers, adapters or proxies on it directly. The last
    :py:class:`requests.Response` is kept in :py:attr:`response` until the
    next request replaces it.

    """

    def __init__(self, uri, options=None, logger=None):
        """Create a client for an API root.

        :param uri: scheme and host, optionally with a base path
        :type uri: str
        :param options: (optional) how to marshal request parameters
        :type options: MarshalerOptions
        :returns: None

        """
        self.uri = uri.rstrip("/")
        self.options = options if options is not None else MarshalerOptions()
        self.session = requests.Session()
        self.user_agent = (
            "urlvalues/" + version.__version__ + " (+" + version.__url__ + ")"
        )
        self.session.headers.update({"User-Agent": self.user_agent})
        self.response = None
        self._json_options = {}
        if logger is not None:
            self.logger = logger
        else:
            self.logger = logging.getLogger("urlvalues.client")

    def json_options(self, **kwargs):
        """Remember keyword arguments for decoding JSON responses.

        :param kwargs: forwarded to :py:meth:`requests.Response.json`
        :returns: the client itself

        """
        self._json_options = kwargs
        return self

    def close(self):
        """Release the connections held by the session."""
        self.session.close()

    def url(self, path: str, value: Any = None) -> str:
        """Return the full URL for path with value as its query string."""
        return requests.Request(
            "GET", self.uri + path, params=self._params(value)
        ).prepare().url

    def get(self, path: str, value: Any = None, timeout: Optional[float] = None):
        """GET path with value encoded as its query string.

        :param path: path below the API root
        :type path: str
        :param value: (optional) mapping, record or query string
        :param timeout: (optional) seconds to wait for the server
        :type timeout: int or float
        :returns: the decoded JSON body
        :raises: `requests.HTTPError`: for 4xx and 5xx responses

        """
        params = self._params(value)
        self.logger.debug("GET %s params=%s", path, params)

        self.response = self.session.get(
            self.uri + path,
            params=params,
            timeout=timeout,
        )
        self.response.raise_for_status()

        return self.response.json(**self._json_options)

    def _params(self, value: Any):
        values = self.options.marshal(value)
        if values is None:
            return []
        return values.pairs()
