class MetadataError(Exception):
    """Base class for every error raised while fetching or writing metadata"""

    def __repr__(self):
        # Return a string like r'<UnknownProvider; unknown provider 'foo'>'
        return '<{0}; {1}>'.format(
            self.__class__.__name__,
            str(self)
        )


class UnknownProvider(MetadataError):
    """The requested provider is not one we know how to fetch metadata from

    Attributes:
        name (str): The provider identifier that was requested
    """
    def __init__(self, name):
        super(UnknownProvider, self).__init__(name)
        self.name = name

    def __str__(self):
        return "unknown provider '{0}'".format(self.name)


class TransportError(MetadataError):
    """Represents a failed request to a metadata service

    Attributes:
        url (str): The URL that was requested
        cause: The underlying exception, or the httplib2.Response of the last attempt
    """
    def __init__(self, url, cause):
        super(TransportError, self).__init__(url, cause)
        self.url = url
        self.cause = cause


class TransportTransient(TransportError):
    """Raised when a retryable failure persisted until the retry budget was exhausted

    Attributes:
        attempts (int): How many requests were made before giving up
    """
    def __init__(self, url, attempts, cause):
        super(TransportTransient, self).__init__(url, cause)
        self.attempts = attempts

    def __str__(self):
        return 'failed to fetch {0} after {1} attempts: {2}'.format(
            self.url,
            self.attempts,
            _describe(self.cause)
        )


class TransportPermanent(TransportError):
    """Raised for a response that retrying will not fix

    Attributes:
        code (int): The HTTP status code of the response
    """
    def __init__(self, url, code, cause=None):
        super(TransportPermanent, self).__init__(url, cause)
        self.code = code

    def __str__(self):
        return 'failed to fetch {0}: HTTP status {1}'.format(
            self.url,
            self.code
        )


class DecodeFailure(MetadataError):
    """The body of a successful response did not match the requested format

    Attributes:
        url (str): The URL the body was fetched from
        format (str): The name of the format that failed to decode it
        cause (Exception): The exception raised by the decoder
    """
    def __init__(self, url, format, cause):
        super(DecodeFailure, self).__init__(url, format, cause)
        self.url = url
        self.format = format
        self.cause = cause

    def __str__(self):
        return 'failed to decode {0} response from {1}: {2}'.format(
            self.format,
            self.url,
            _describe(self.cause)
        )


class MalformedKeyListing(MetadataError):
    """An entry of an SSH key listing could not be parsed

    Attributes:
        entry (str): The offending entry
    """
    def __init__(self, entry):
        super(MalformedKeyListing, self).__init__(entry)
        self.entry = entry

    def __str__(self):
        return "malformed public key entry '{0}'".format(self.entry)


class MissingKeyMaterial(MetadataError):
    """A key named by a key listing had no key material

    Attributes:
        key (str): The name of the key
        url (str): The URL the key material was expected at
    """
    def __init__(self, key, url):
        super(MissingKeyMaterial, self).__init__(key, url)
        self.key = key
        self.url = url

    def __str__(self):
        return "missing ssh key '{0}' at {1}".format(self.key, self.url)


class AddressUnavailable(MetadataError):
    """A network interface never received an address

    Attributes:
        interface (str): The name of the interface
    """
    def __init__(self, interface):
        super(AddressUnavailable, self).__init__(interface)
        self.interface = interface

    def __str__(self):
        return 'no IPv4 address found on {0}'.format(self.interface)


class InvalidSSHKey(MetadataError):
    """Key material is not a valid OpenSSH public key

    Attributes:
        key (str): The rejected key material
        cause (Exception): The parse error
    """
    def __init__(self, key, cause):
        super(InvalidSSHKey, self).__init__(key, cause)
        self.key = key
        self.cause = cause

    def __str__(self):
        return "invalid ssh key '{0}': {1}".format(self.key, self.cause)


def _describe(cause):
    # httplib2.Response is a dict subclass, so describe it by status instead
    status = getattr(cause, 'status', None)
    if status is not None and not isinstance(cause, Exception):
        return 'HTTP status {0}'.format(status)

    return '{0}: {1}'.format(cause.__class__.__name__, cause)
