import ipaddress

from .metadata_object import MetadataObject


class NetworkInterface(MetadataObject):
    """A network interface, and how it should be configured

    Interfaces are matched either by name or by MAC address, and are rendered as systemd-networkd .network units.

    Attributes (all are readonly):
        name: name of the interface to match, or None
        mac_address: MAC address of the interface to match, or None
        priority: ordering of the unit relative to other units, lower sorts first
        nameservers: list of DNS servers
        ip_addresses: list of addresses in CIDR notation, eg '192.0.2.10/24'
        routes: list of dicts with 'destination' (CIDR) and 'gateway' keys
        bond: name of the bond this interface is enslaved to, or None
    """

    def __init__(self, name=None, mac_address=None, priority=10, nameservers=None, ip_addresses=None, routes=None,
                 bond=None):
        """
        Raises:
            ValueError: Neither name nor mac_address was given, or an address is invalid

        """
        if not name and not mac_address:
            raise ValueError('An interface requires a name or a mac_address')

        super(NetworkInterface, self).__init__(data={
            'name': name,
            'mac_address': mac_address.lower() if mac_address else None,
            'priority': int(priority),
            'nameservers': tuple(str(ipaddress.ip_address(ns)) for ns in nameservers or []),
            'ip_addresses': tuple(str(ipaddress.ip_interface(addr)) for addr in ip_addresses or []),
            'routes': tuple(
                {
                    'destination': str(ipaddress.ip_network(route['destination'], strict=False)),
                    'gateway': str(ipaddress.ip_address(route['gateway'])),
                }
                for route in routes or []
            ),
            'bond': bond,
        })

    def unit_name(self):
        """Return the file name of the .network unit for this interface"""
        return '{0:02d}-{1}.network'.format(
            self.priority,
            self.name or self.mac_address.replace(':', '')
        )

    def unit_contents(self):
        """Render this interface as a systemd-networkd .network unit"""
        lines = ['[Match]']

        if self.name:
            lines.append('Name={0}'.format(self.name))
        else:
            lines.append('MACAddress={0}'.format(self.mac_address))

        lines.append('')
        lines.append('[Network]')

        for nameserver in self.nameservers:
            lines.append('DNS={0}'.format(nameserver))

        if self.bond:
            lines.append('Bond={0}'.format(self.bond))

        for address in self.ip_addresses:
            lines.append('Address={0}'.format(address))

        for route in self.routes:
            lines.append('')
            lines.append('[Route]')
            lines.append('Destination={0}'.format(route['destination']))
            lines.append('Gateway={0}'.format(route['gateway']))

        return '\n'.join(lines) + '\n'


class NetworkDevice(MetadataObject):
    """A virtual network device, such as a bond, rendered as a systemd-networkd .netdev unit

    Attributes (all are readonly):
        name: name of the device to create
        kind: kind of the device, eg 'bond'
        mac_address: MAC address to assign to the device, or None
        priority: ordering of the unit relative to other units, lower sorts first
        sections: list of (section, [(key, value), ...]) pairs written after the [NetDev] section
    """

    def __init__(self, name, kind, mac_address=None, priority=10, sections=None):
        super(NetworkDevice, self).__init__(data={
            'name': name,
            'kind': kind,
            'mac_address': mac_address.lower() if mac_address else None,
            'priority': int(priority),
            'sections': tuple(
                (section, tuple((key, str(value)) for key, value in options))
                for section, options in sections or []
            ),
        })

    def unit_name(self):
        """Return the file name of the .netdev unit for this device"""
        return '{0:02d}-{1}.netdev'.format(self.priority, self.name)

    def unit_contents(self):
        """Render this device as a systemd-networkd .netdev unit"""
        lines = [
            '[NetDev]',
            'Name={0}'.format(self.name),
            'Kind={0}'.format(self.kind),
        ]

        if self.mac_address:
            lines.append('MACAddress={0}'.format(self.mac_address))

        for section, options in self.sections:
            lines.append('')
            lines.append('[{0}]'.format(section))
            for key, value in options:
                lines.append('{0}={1}'.format(key, value))

        return '\n'.join(lines) + '\n'
