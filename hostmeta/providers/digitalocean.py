"""DigitalOcean droplet metadata

Everything is published as a single JSON document, including the droplet's network interfaces.
"""

import logging

from ..http import Json
from ..objects import Metadata, MetadataObject, NetworkInterface
from .common import prepare_client, expect_type

LOG = logging.getLogger(__name__)

METADATA_URL = 'http://169.254.169.254/metadata/v1.json'


class Droplet(MetadataObject):
    """The droplet metadata document

    The network interfaces are parsed when the document is, so a document with invalid addresses or sections of the
    wrong type fails to decode.

    """

    def __init__(self, data=None):
        super(Droplet, self).__init__(data=data)

        dns = expect_type(self.get('dns'), 'dns', dict)
        self._update('_nameservers', list(expect_type(dns.get('nameservers'), 'dns.nameservers', list)))

        interfaces = expect_type(self.get('interfaces'), 'interfaces', dict)
        self._update('_interfaces', dict(
            (kind, [
                expect_type(iface, 'interfaces.{0}[{1}]'.format(kind, index), dict)
                for index, iface in enumerate(expect_type(interfaces.get(kind), 'interfaces.' + kind, list))
            ])
            for kind in ('public', 'private')
        ))

        self._update('_public_keys', list(expect_type(self.get('public_keys'), 'public_keys', list)))
        self._update('_network_interfaces', self._parse_interfaces())

    def interfaces(self, kind):
        """Return the raw interface dicts of ``kind`` ('public' or 'private')"""
        return list(self._interfaces[kind])

    def public_keys(self):
        return list(self._public_keys)

    def network_interfaces(self):
        """Return a NetworkInterface for every interface of the droplet"""
        return list(self._network_interfaces)

    def _parse_interfaces(self):
        result = []

        for kind in ('public', 'private'):
            for iface in self.interfaces(kind):
                addresses = []
                routes = []

                ipv4 = expect_type(iface.get('ipv4'), 'ipv4', dict)
                if ipv4:
                    addresses.append('{0}/{1}'.format(ipv4['ip_address'], ipv4['netmask']))
                    if kind == 'public' and ipv4.get('gateway'):
                        routes.append({'destination': '0.0.0.0/0', 'gateway': ipv4['gateway']})

                ipv6 = expect_type(iface.get('ipv6'), 'ipv6', dict)
                if ipv6:
                    addresses.append('{0}/{1}'.format(ipv6['ip_address'], ipv6['cidr']))
                    if kind == 'public' and ipv6.get('gateway'):
                        routes.append({'destination': '::/0', 'gateway': ipv6['gateway']})

                anchor = expect_type(iface.get('anchor_ipv4'), 'anchor_ipv4', dict)
                if anchor:
                    addresses.append('{0}/{1}'.format(anchor['ip_address'], anchor['netmask']))

                result.append(NetworkInterface(
                    mac_address=iface['mac'],
                    nameservers=self._nameservers,
                    ip_addresses=addresses,
                    routes=routes
                ))

        return result


def _address(iface, key):
    return (iface.get(key) or {}).get('ip_address')


def fetch_metadata(client=None, logger=None):
    logger = logger or LOG
    client = prepare_client(client, logger)

    builder = Metadata.builder()

    droplet = client.get(Json.into(Droplet), METADATA_URL)
    if droplet is None:
        logger.warning('%s is not present, no metadata available', METADATA_URL)
        return builder.build()

    droplet_id = droplet.get('droplet_id')

    builder.add_attribute_if_exists('HOSTNAME', droplet.get('hostname'))
    builder.add_attribute_if_exists('REGION', droplet.get('region'))
    builder.add_attribute_if_exists('DROPLET_ID', str(droplet_id) if droplet_id is not None else None)
    builder.set_hostname_if_exists(droplet.get('hostname'))

    for index, iface in enumerate(droplet.interfaces('public')):
        builder.add_attribute_if_exists('IPV4_PUBLIC_{0}'.format(index), _address(iface, 'ipv4'))
        builder.add_attribute_if_exists('IPV6_PUBLIC_{0}'.format(index), _address(iface, 'ipv6'))
        builder.add_attribute_if_exists('IPV4_ANCHOR_{0}'.format(index), _address(iface, 'anchor_ipv4'))

    for index, iface in enumerate(droplet.interfaces('private')):
        builder.add_attribute_if_exists('IPV4_PRIVATE_{0}'.format(index), _address(iface, 'ipv4'))
        builder.add_attribute_if_exists('IPV6_PRIVATE_{0}'.format(index), _address(iface, 'ipv6'))

    builder.add_ssh_keys(droplet.public_keys())
    builder.add_network_devices(droplet.network_interfaces())

    return builder.build()
