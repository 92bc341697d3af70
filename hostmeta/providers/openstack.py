"""OpenStack metadata, read from the EC2 compatible API of the nova metadata service"""

import logging

from ..objects import Metadata
from .common import Field, prepare_client, fetch_fields, fetch_listed_ssh_keys

LOG = logging.getLogger(__name__)

BASE_URL = 'http://169.254.169.254/latest/meta-data/'

FIELDS = [
    Field('INSTANCE_ID', 'instance-id'),
    Field('IPV4_LOCAL', 'local-ipv4'),
    Field('IPV4_PUBLIC', 'public-ipv4'),
    Field('HOSTNAME', 'hostname', hostname=True),
    Field('AVAILABILITY_ZONE', 'placement/availability-zone'),
]


def url_for_key(key):
    return BASE_URL + key


def fetch_metadata(client=None, logger=None):
    logger = logger or LOG
    client = prepare_client(client, logger)

    builder = Metadata.builder()

    fetch_fields(client, url_for_key, FIELDS, builder)

    builder.add_ssh_keys(fetch_listed_ssh_keys(client, url_for_key, 'public-keys', logger=logger))

    return builder.build()
