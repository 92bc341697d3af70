"""Amazon EC2 instance metadata"""

import logging

from ..http import Json
from ..objects import Metadata, MetadataObject
from .common import Field, prepare_client, fetch_fields, fetch_listed_ssh_keys

LOG = logging.getLogger(__name__)

BASE_URL = 'http://169.254.169.254/2009-04-04/'


class InstanceIdentityDocument(MetadataObject):
    """The signed document describing this instance, we only need the region from it"""
    _REQUIRED = ('region',)


FIELDS = [
    Field('INSTANCE_ID', 'meta-data/instance-id'),
    Field('IPV4_PUBLIC', 'meta-data/public-ipv4'),
    Field('IPV4_LOCAL', 'meta-data/local-ipv4'),
    Field('HOSTNAME', 'meta-data/hostname', hostname=True),
    Field('AVAILABILITY_ZONE', 'meta-data/placement/availability-zone'),
]

IDENTITY_DOCUMENT = 'dynamic/instance-identity/document'


def url_for_key(key):
    return BASE_URL + key


def fetch_metadata(client=None, logger=None):
    """Fetch metadata from the EC2 instance metadata service

    Returns:
        hostmeta.objects.Metadata: The metadata of this instance

    Raises:
        hostmeta.errors.MetadataError: The metadata could not be fetched

    """
    logger = logger or LOG
    client = prepare_client(client, logger)

    builder = Metadata.builder()

    fetch_fields(client, url_for_key, FIELDS, builder)

    document = client.get(Json.into(InstanceIdentityDocument), url_for_key(IDENTITY_DOCUMENT))
    if document is not None:
        builder.add_attribute_if_exists('REGION', document.region)

    builder.add_ssh_keys(fetch_listed_ssh_keys(client, url_for_key, 'meta-data/public-keys', logger=logger))

    return builder.build()
