"""Microsoft Azure metadata, read from the wireserver

The wireserver publishes a goal state document for this instance, which points at a shared configuration
document describing the addresses of every instance in the deployment.  The wireserver's address is handed out as
DHCP option 245; it's read from the systemd-networkd leases when available.
"""

import glob
import ipaddress
import logging
import os

from ..http import Xml
from ..objects import Metadata, MetadataObject
from .common import prepare_client

LOG = logging.getLogger(__name__)

DEFAULT_WIRESERVER = '168.63.129.16'
LEASES_DIR = '/run/systemd/netif/leases'
LEASE_OPTION = 'OPTION_245'

MS_VERSION = '2012-11-30'


class GoalState(MetadataObject):
    """The parts of the wireserver goal state we care about

    Attributes:
        instance_id: id of the role instance this host is running as
        shared_config: URL of the SharedConfig document
    """

    _REQUIRED = ('instance_id', 'shared_config')

    @classmethod
    def from_element(cls, root):
        data = {}

        instance = root.find('./Container/RoleInstanceList/RoleInstance')
        if instance is not None:
            instance_id = instance.findtext('InstanceId')
            if instance_id:
                data['instance_id'] = instance_id.strip()

            shared_config = instance.findtext('./Configuration/SharedConfig')
            if shared_config:
                data['shared_config'] = shared_config.strip()

        return cls(data=data)


class SharedConfig(MetadataObject):
    """The instances of a deployment, as described by the wireserver

    Attributes:
        instances: list of dicts with 'id', 'address' and 'public_address' keys.
                   'public_address' is None for instances without a load balanced endpoint.
    """

    _REQUIRED = ('instances',)

    @classmethod
    def from_element(cls, root):
        instances = []

        for instance in root.findall('./Instances/Instance'):
            public_address = None

            for endpoint in instance.findall('./InputEndpoints/Endpoint'):
                value = endpoint.get('loadBalancedPublicAddress')
                if value:
                    # strip the port from '<address>:<port>'
                    public_address = value.rpartition(':')[0] or value
                    break

            instances.append({
                'id': instance.get('id'),
                'address': instance.get('address'),
                'public_address': public_address,
            })

        return cls(data={'instances': instances})

    def instance(self, instance_id):
        """Return the instance with the id ``instance_id``, or None"""
        for instance in self.instances:
            if instance['id'] == instance_id:
                return instance

        return None


def find_wireserver(leases_dir=LEASES_DIR, logger=None):
    """Look for the wireserver address in the DHCP leases

    Args:
        leases_dir (str): Directory holding systemd-networkd lease files

    Returns:
        str: The address of the wireserver, the well known address if no lease names one

    """
    logger = logger or LOG

    for path in sorted(glob.glob(os.path.join(leases_dir, '*'))):
        try:
            with open(path) as fh:
                lines = fh.readlines()
        except IOError as exc:
            logger.warning('unable to read lease %s: %s', path, exc)
            continue

        for line in lines:
            key, _, value = line.strip().partition('=')
            if key != LEASE_OPTION:
                continue

            try:
                address = str(ipaddress.IPv4Address(int(value, 16)))
            except ValueError:
                logger.warning('ignoring invalid %s in %s: %s', LEASE_OPTION, path, value)
                continue

            logger.debug('found wireserver %s in %s', address, path)
            return address

    return DEFAULT_WIRESERVER


def fetch_metadata(client=None, logger=None, leases_dir=LEASES_DIR):
    logger = logger or LOG

    # the goal state and shared config are mandatory, a 404 for either is an error
    client = prepare_client(client, logger).return_on_404(False).header('x-ms-version', MS_VERSION)

    endpoint = 'http://{0}/machine/?comp=goalstate'.format(find_wireserver(leases_dir, logger))

    goal_state = client.get(Xml.into(GoalState.from_element), endpoint)
    shared_config = client.get(Xml.into(SharedConfig.from_element), goal_state.shared_config)

    builder = Metadata.builder()

    instance = shared_config.instance(goal_state.instance_id)
    if instance is None:
        logger.warning('instance %s is not in the shared config', goal_state.instance_id)
    else:
        builder.add_attribute_if_exists('IPV4_DYNAMIC', instance['address'])
        builder.add_attribute_if_exists('IPV4_VIRTUAL', instance['public_address'])

    return builder.build()
