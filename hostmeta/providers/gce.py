"""Google Compute Engine metadata

The metadata server only answers requests that carry the Metadata-Flavor header. SSH keys are published as
'<user>:<key>' lines in the instance and project attributes; project keys are ignored when the instance sets
block-project-ssh-keys.
"""

import logging

from ..errors import MalformedKeyListing
from ..http import Raw
from ..objects import Metadata
from .common import Field, prepare_client, fetch_fields

LOG = logging.getLogger(__name__)

BASE_URL = 'http://metadata.google.internal/computeMetadata/v1/'

FIELDS = [
    Field('HOSTNAME', 'instance/hostname', hostname=True),
    Field('IP_EXTERNAL_0', 'instance/network-interfaces/0/access-configs/0/external-ip'),
    Field('IP_LOCAL_0', 'instance/network-interfaces/0/ip'),
    Field('MACHINE_TYPE', 'instance/machine-type'),
]

INSTANCE_KEYS = ['instance/attributes/ssh-keys', 'instance/attributes/sshKeys']
PROJECT_KEYS = ['project/attributes/ssh-keys', 'project/attributes/sshKeys']
BLOCK_PROJECT_KEYS = 'instance/attributes/block-project-ssh-keys'


def url_for_key(key):
    return BASE_URL + key


def parse_ssh_keys(value):
    """Parse '<user>:<key>' lines into a list of keys

    Raises:
        hostmeta.errors.MalformedKeyListing: A line has no user

    """
    keys = []

    for line in value.splitlines():
        line = line.strip()
        if not line:
            continue

        user, sep, key = line.partition(':')
        if not sep or not user or not key.strip():
            raise MalformedKeyListing(line)

        keys.append(key.strip())

    return keys


def fetch_ssh_keys(client, logger=None):
    logger = logger or LOG

    paths = list(INSTANCE_KEYS)

    blocked = client.get(Raw, url_for_key(BLOCK_PROJECT_KEYS))
    if blocked is not None and blocked.lower() == 'true':
        logger.info('project ssh keys are blocked on this instance')
    else:
        paths.extend(PROJECT_KEYS)

    keys = []
    for path in paths:
        value = client.get(Raw, url_for_key(path))
        if value is not None:
            keys.extend(parse_ssh_keys(value))

    return keys


def fetch_metadata(client=None, logger=None):
    logger = logger or LOG
    client = prepare_client(client, logger).header('Metadata-Flavor', 'Google')

    builder = Metadata.builder()

    fetch_fields(client, url_for_key, FIELDS, builder)

    builder.add_ssh_keys(fetch_ssh_keys(client, logger=logger))

    return builder.build()
