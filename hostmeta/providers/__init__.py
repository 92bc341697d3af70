from ..errors import UnknownProvider
from . import azure, digitalocean, ec2, gce, openstack, packet, vagrant_virtualbox

PROVIDERS = {
    'azure': azure.fetch_metadata,
    'digitalocean': digitalocean.fetch_metadata,
    'ec2': ec2.fetch_metadata,
    'gce': gce.fetch_metadata,
    'openstack': openstack.fetch_metadata,
    'packet': packet.fetch_metadata,
    'vagrant_virtualbox': vagrant_virtualbox.fetch_metadata,
}


def fetch_metadata(provider, client=None, logger=None):
    """Fetch metadata from ``provider``

    Args:
        provider (str): One of the keys of PROVIDERS
        client (hostmeta.http.Client, optional): The client requests are made with, one is created if not given
        logger (logging.Logger, optional): Where the provider logs to

    Returns:
        hostmeta.objects.Metadata: The metadata of this host

    Raises:
        hostmeta.errors.UnknownProvider: ``provider`` is not supported
        hostmeta.errors.MetadataError: The metadata could not be fetched

    """
    try:
        fetch = PROVIDERS[provider]
    except KeyError:
        raise UnknownProvider(provider)

    return fetch(client=client, logger=logger)
