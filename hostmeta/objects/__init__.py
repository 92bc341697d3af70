from .metadata_object import MetadataObject  # NOQA
from .metadata import Metadata, MetadataBuilder  # NOQA
from .network import NetworkInterface, NetworkDevice  # NOQA
