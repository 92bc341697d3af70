"""Packet bare metal metadata

Packet servers bond all of their physical interfaces together into bond0, which carries every address.
"""

import logging

from ..http import Json
from ..objects import Metadata, MetadataObject, NetworkInterface, NetworkDevice
from .common import prepare_client, expect_type

LOG = logging.getLogger(__name__)

METADATA_URL = 'https://metadata.packet.net/metadata'

BOND = 'bond0'
NAMESERVERS = ['147.75.207.207', '147.75.207.208']
PRIVATE_NETWORK = '10.0.0.0/8'

# Linux names for the numeric bonding modes
BONDING_MODES = {
    0: 'balance-rr',
    1: 'active-backup',
    2: 'balance-xor',
    3: 'broadcast',
    4: '802.3ad',
    5: 'balance-tlb',
    6: 'balance-alb',
}


def _parse_address(address, index):
    """Check an entry of network.addresses and return the fields used from it

    Raises:
        TypeError: The entry is not an object
        KeyError: A required field is missing
        ValueError: The address family is neither 4 nor 6

    """
    address = expect_type(address, 'network.addresses[{0}]'.format(index), dict)

    family = address['address_family']
    if family not in (4, 6):
        raise ValueError('network.addresses[{0}]: unknown address family {1!r}'.format(index, family))

    return {
        'address': address['address'],
        'cidr': address['cidr'],
        'family': family,
        'public': bool(address.get('public')),
        'gateway': address.get('gateway'),
    }


class PacketMetadata(MetadataObject):
    """The Packet metadata document, its addresses and network configuration are checked along with it"""

    def __init__(self, data=None):
        super(PacketMetadata, self).__init__(data=data)

        network = expect_type(self.get('network'), 'network', dict)
        self._update('_network', network)

        self._update('_addresses', [
            _parse_address(address, index)
            for index, address in enumerate(expect_type(network.get('addresses'), 'network.addresses', list))
        ])
        self._update('_ssh_keys', list(expect_type(self.get('ssh_keys'), 'ssh_keys', list)))

        self._update('_network_devices', self._parse_network())

    def addresses(self):
        """Return the addresses as dicts of address, cidr, family, public and gateway"""
        return [dict(address) for address in self._addresses]

    def ssh_keys(self):
        return list(self._ssh_keys)

    def network_devices(self):
        """Return the interfaces and bond device described by the metadata"""
        return list(self._network_devices)

    def _parse_network(self):
        interfaces = expect_type(self._network.get('interfaces'), 'network.interfaces', list)
        if not interfaces:
            return []

        devices = []

        for index, iface in enumerate(interfaces):
            iface = expect_type(iface, 'network.interfaces[{0}]'.format(index), dict)
            devices.append(NetworkInterface(
                name=iface['name'],
                mac_address=iface.get('mac'),
                bond=iface.get('bond') or BOND
            ))

        mode = expect_type(self._network.get('bonding'), 'network.bonding', dict).get('mode')
        options = [
            ('MIIMonitorSec', '.1'),
            ('UpDelaySec', '.2'),
            ('DownDelaySec', '.2'),
        ]
        if mode is not None:
            options.insert(0, ('Mode', BONDING_MODES[int(mode)]))

        devices.append(NetworkDevice(
            name=BOND,
            kind='bond',
            mac_address=interfaces[0].get('mac'),
            priority=5,
            sections=[('Bond', options)]
        ))

        addresses = []
        routes = []

        for address in self._addresses:
            addresses.append('{0}/{1}'.format(address['address'], address['cidr']))

            gateway = address['gateway']
            if not gateway:
                continue

            if address['public']:
                default = '0.0.0.0/0' if address['family'] == 4 else '::/0'
                routes.append({'destination': default, 'gateway': gateway})
            elif address['family'] == 4:
                routes.append({'destination': PRIVATE_NETWORK, 'gateway': gateway})

        devices.append(NetworkInterface(
            name=BOND,
            priority=5,
            nameservers=NAMESERVERS,
            ip_addresses=addresses,
            routes=routes
        ))

        return devices


def fetch_metadata(client=None, logger=None):
    logger = logger or LOG
    client = prepare_client(client, logger)

    builder = Metadata.builder()

    metadata = client.get(Json.into(PacketMetadata), METADATA_URL)
    if metadata is None:
        logger.warning('%s is not present, no metadata available', METADATA_URL)
        return builder.build()

    builder.add_attribute_if_exists('HOSTNAME', metadata.get('hostname'))
    builder.add_attribute_if_exists('PLAN', metadata.get('plan'))
    builder.add_attribute_if_exists('FACILITY', metadata.get('facility'))
    builder.set_hostname_if_exists(metadata.get('hostname'))

    counters = {}
    for address in metadata.addresses():
        family = 'IPV4' if address['family'] == 4 else 'IPV6'
        scope = 'PUBLIC' if address['public'] else 'PRIVATE'

        index = counters.get((family, scope), 0)
        counters[(family, scope)] = index + 1

        builder.add_attribute_if_exists('{0}_{1}_{2}'.format(family, scope, index), address['address'])
        builder.add_attribute_if_exists('{0}_{1}_GATEWAY_{2}'.format(family, scope, index), address['gateway'])

    builder.add_ssh_keys(metadata.ssh_keys())
    builder.add_network_devices(metadata.network_devices())

    return builder.build()
