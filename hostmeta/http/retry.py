import copy
import http.client as httplib
import logging
import socket
import time

import httplib2

from ..errors import TransportTransient, TransportPermanent, DecodeFailure
from .formats import DECODE_ERRORS

LOG = logging.getLogger(__name__)

# statuses worth asking again for, in addition to any 5xx
RETRY_STATUSES = (404, 429)


def backoff_delays(max_attempts, initial_backoff, max_backoff):
    """Yield the delay to wait after each failed attempt but the last

    Args:
        max_attempts (int): The number of attempts that will be made
        initial_backoff (float): Seconds to wait after the first failure
        max_backoff (float): The delay never grows beyond this many seconds

    Yields:
        float: Seconds to wait before the next attempt

    """
    delay = initial_backoff
    for _ in range(max_attempts - 1):
        yield min(delay, max_backoff)
        delay = delay * 2


class Client(object):
    """A GET-only HTTP client for metadata services that retries transient failures

    Clients are not mutated once created, ``return_on_404`` and ``header`` return configured copies
    which share the same transport, so one client can be safely reused for every request in a run.

    """

    def __init__(
        self,
        http=None,
        logger=None,

        max_attempts=10,
        initial_backoff=1.0,
        max_backoff=5.0,
        timeout=10,

        headers=None,
        return_on_404=False
    ):
        """
        Args:
            http (httplib2.Http): An instance of httplib2.Http (or something that acts like it) that requests will be
            made through.  You do not need to pass this unless you want to configure the http client yourself, or want
            to pass in a mock for testing.

            logger (logging.Logger): Where attempts and failures are logged, defaults to this module's logger.

            max_attempts (int): Give up after this many requests for a single URL, defaults to 10.
            initial_backoff (float): Seconds to wait after the first failed attempt, defaults to 1.
                                     The wait doubles after each further failure.
            max_backoff (float): Never wait longer than this many seconds between attempts, defaults to 5.
            timeout (float): Socket timeout in seconds, only used when ``http`` is not provided, defaults to 10.

            headers (dict): Headers sent with every request.
            return_on_404 (bool): Return None for a 404 response instead of treating it as a failure.

        Raises:
            ValueError: max_attempts is less than 1
        """

        if max_attempts < 1:
            raise ValueError('max_attempts must be at least 1, not {0}'.format(max_attempts))

        if http is None:
            http = httplib2.Http(timeout=timeout)

        self._http = http
        self._logger = logger or LOG

        self._max_attempts = max_attempts
        self._initial_backoff = initial_backoff
        self._max_backoff = max_backoff

        self._headers = dict(headers or {})
        self._return_on_404 = return_on_404

    @property
    def logger(self):
        return self._logger

    def return_on_404(self, value):
        """Return a copy of this client with a different 404 policy

        Args:
            value (bool): If True, a 404 response will be returned as None

        Returns:
            Client: The reconfigured client

        """
        clone = copy.copy(self)
        clone._return_on_404 = bool(value)
        return clone

    def header(self, name, value):
        """Return a copy of this client that sends an extra header with each request

        Args:
            name (str): The name of the header
            value (str): The value of the header

        Returns:
            Client: The reconfigured client

        """
        clone = copy.copy(self)
        clone._headers = dict(self._headers)
        clone._headers[name] = value
        return clone

    def delays(self):
        """Yield this client's backoff schedule, see ``backoff_delays``"""
        return backoff_delays(self._max_attempts, self._initial_backoff, self._max_backoff)

    def get(self, format, url):
        """Fetch ``url`` and decode its body

        Args:
            format (hostmeta.http.formats.Format): How the body of the response should be decoded
            url (str): The URL to fetch

        Returns:
            The decoded body, or None if the response was a 404 and this client returns on 404

        Raises:
            hostmeta.errors.DecodeFailure: The body could not be decoded, this is never retried
            hostmeta.errors.TransportPermanent: The service returned a status that retrying can't fix
            hostmeta.errors.TransportTransient: Every attempt failed with a retryable error

        """

        delays = self.delays()
        attempt = 0

        while True:
            attempt += 1

            self._logger.debug('fetching %s: attempt #%d', url, attempt)

            try:
                response, content = self._http.request(url, 'GET', headers=dict(self._headers))
            except (socket.error, httplib.HTTPException, httplib2.HttpLib2Error) as exc:
                cause = exc
                self._logger.info('failed to fetch %s: %s', url, exc)
            else:
                status = response.status

                if 200 <= status < 300:
                    try:
                        return format.decode(content)
                    except DECODE_ERRORS as exc:
                        raise DecodeFailure(url, format.name, exc)

                if status == 404 and self._return_on_404:
                    self._logger.debug('%s is not present', url)
                    return None

                if status not in RETRY_STATUSES and status < 500:
                    raise TransportPermanent(url, status, response)

                cause = response
                self._logger.info('failed to fetch %s: HTTP status %d', url, status)

            try:
                delay = next(delays)
            except StopIteration:
                break

            self._logger.debug('retrying %s in %s seconds', url, delay)
            time.sleep(delay)

        self._logger.error('giving up on %s after %d attempts', url, attempt)

        # a 404 that outlasted the retries is still a client error
        if getattr(cause, 'status', None) == 404:
            raise TransportPermanent(url, 404, cause)

        raise TransportTransient(url, attempt, cause)
