from collections import OrderedDict
from types import MappingProxyType

from .metadata_object import MetadataObject


class Metadata(MetadataObject):
    """The provider independent result of querying a metadata service

    Metadata is assembled with a MetadataBuilder and can not be changed once it is built.

        >>> metadata = (Metadata.builder()
        ...     .add_attribute_if_exists('INSTANCE_ID', 'i-1234')
        ...     .set_hostname_if_exists(None)
        ...     .build())
        >>> metadata.attributes['INSTANCE_ID']
        'i-1234'
        >>> metadata.hostname is None
        True

    Attributes (all are readonly):
        hostname: the hostname assigned to this host, or None
        attributes: mapping of attribute name to value, in the order they were added
        ssh_keys: tuple of OpenSSH public keys
        network_devices: tuple of NetworkInterface and NetworkDevice objects
    """

    def __init__(self, hostname=None, attributes=None, ssh_keys=None, network_devices=None):
        super(Metadata, self).__init__(data={
            'hostname': hostname,
            'attributes': MappingProxyType(OrderedDict(attributes or ())),
            'ssh_keys': tuple(ssh_keys or ()),
            'network_devices': tuple(network_devices or ()),
        })

    @staticmethod
    def builder():
        """Return an empty MetadataBuilder"""
        return MetadataBuilder()

    def as_dict(self):
        return {
            'hostname': self.hostname,
            'attributes': dict(self.attributes),
            'ssh_keys': list(self.ssh_keys),
            'network_devices': [device.as_dict() for device in self.network_devices],
        }


class MetadataBuilder(object):
    """Accumulates the fields fetched from a provider into a Metadata

    Every method returns the builder so calls can be chained, ``build`` ends the chain. Values that are None
    are skipped, so optional fields can be passed straight through from ``Client.get``.

    """

    def __init__(self):
        self._hostname = None
        self._attributes = OrderedDict()
        self._ssh_keys = []
        self._network_devices = []
        self._built = False

    def _check(self):
        if self._built:
            raise RuntimeError('This builder has already been built, start a new one with Metadata.builder()')

    def add_attribute_if_exists(self, name, value):
        """Record the attribute ``name`` unless ``value`` is None

        A later value for the same name replaces the earlier one.

        """
        self._check()
        if value is not None:
            self._attributes[name] = value
        return self

    def set_hostname_if_exists(self, value):
        """Set the hostname unless ``value`` is None"""
        self._check()
        if value is not None:
            self._hostname = value
        return self

    def add_ssh_keys(self, keys):
        self._check()
        self._ssh_keys.extend(keys)
        return self

    def add_network_devices(self, devices):
        self._check()
        self._network_devices.extend(devices)
        return self

    def build(self):
        """Freeze everything added so far into a Metadata

        Returns:
            Metadata: The metadata

        Raises:
            RuntimeError: The builder was already built

        """
        self._check()
        self._built = True

        return Metadata(
            hostname=self._hostname,
            attributes=self._attributes,
            ssh_keys=self._ssh_keys,
            network_devices=self._network_devices
        )
