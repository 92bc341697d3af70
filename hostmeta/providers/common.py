"""Building blocks shared by the provider adapters"""

import logging

from ..errors import MalformedKeyListing, MissingKeyMaterial
from ..http import Client, Raw


class Field(object):
    """A single optional value published by a metadata service

    Args:
        attribute (str): The name of the attribute the value is recorded under, or None to not record it
        path (str): Where the value lives, relative to the provider's base URL
        format (hostmeta.http.formats.Format): How the value is decoded, defaults to Raw
        hostname (bool): The value is also the hostname of this host

    """

    def __init__(self, attribute, path, format=Raw, hostname=False):
        self.attribute = attribute
        self.path = path
        self.format = format
        self.hostname = hostname

    def __repr__(self):
        return '<Field: {0} {1}>'.format(self.attribute, self.path)


def expect_type(value, name, kind):
    """Return a section of a JSON document, or an empty ``kind`` if it is missing

    Args:
        value: The section, None if the document does not have it
        name (str): Where the section is in the document, for the error message
        kind (type): What the section must be, eg dict or list

    Raises:
        TypeError: ``value`` is present but is not a ``kind``

    """
    if value is None:
        return kind()

    if not isinstance(value, kind):
        raise TypeError('{0} must be a {1}, not {2}'.format(name, kind.__name__, type(value).__name__))

    return value


def prepare_client(client=None, logger=None):
    """Return a client suitable for fetching optional fields

    Args:
        client (hostmeta.http.Client, optional): A client to derive from, one is created if not given
        logger (logging.Logger, optional): Used when a client has to be created

    Returns:
        hostmeta.http.Client: A client that returns None for 404 responses

    """
    if client is None:
        client = Client(logger=logger)

    return client.return_on_404(True)


def fetch_fields(client, url_for_key, fields, builder):
    """Fetch each of ``fields`` and add the ones that are present to ``builder``

    Args:
        client (hostmeta.http.Client): The client to fetch with
        url_for_key (callable): Turns a field's path into a URL
        fields (list of Field): The fields to fetch
        builder (hostmeta.objects.MetadataBuilder): Where values are recorded

    Returns:
        dict: The fetched values by path, None for fields that were absent

    Raises:
        hostmeta.errors.MetadataError: A field could not be fetched

    """
    values = {}

    for field in fields:
        value = client.get(field.format, url_for_key(field.path))
        values[field.path] = value

        if field.attribute:
            builder.add_attribute_if_exists(field.attribute, value)

        if field.hostname:
            builder.set_hostname_if_exists(value)

    return values


def parse_key_listing(listing):
    """Parse a listing of '<index>=<name>' entries separated by whitespace

    Args:
        listing (str): The body of the listing

    Returns:
        list: (index, name) tuples in the order they were listed

    Raises:
        hostmeta.errors.MalformedKeyListing: An entry was not of the form '<index>=<name>'

    """
    entries = []

    for entry in listing.split():
        tokens = entry.split('=')
        if len(tokens) != 2:
            raise MalformedKeyListing(entry)

        entries.append((tokens[0], tokens[1]))

    return entries


def fetch_listed_ssh_keys(client, url_for_key, listing_path='public-keys', logger=None):
    """Fetch the keys from an EC2 style public-keys listing

    The listing is fetched first, then the openssh-key of every entry in it.  This is all or nothing, if any entry
    is malformed or any key is missing no keys are returned.

    Args:
        client (hostmeta.http.Client): A client that returns None on 404
        url_for_key (callable): Turns a path into a URL
        listing_path (str): Path of the listing

    Returns:
        list: The keys, in the order they were listed

    Raises:
        hostmeta.errors.MalformedKeyListing: The listing contains an entry that can't be parsed
        hostmeta.errors.MissingKeyMaterial: A listed key could not be found

    """
    logger = logger or logging.getLogger(__name__)

    listing = client.get(Raw, url_for_key(listing_path))
    if listing is None:
        logger.debug('no public keys listed')
        return []

    keys = []
    for index, name in parse_key_listing(listing):
        url = url_for_key('{0}/{1}/openssh-key'.format(listing_path, index))

        key = client.get(Raw, url)
        if key is None:
            raise MissingKeyMaterial(name, url)

        logger.debug('fetched public key %s', name)
        keys.append(key)

    return keys
