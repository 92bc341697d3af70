"""Command line entry point: fetch metadata once, and write it where it's needed"""

import argparse
import logging
import sys

from . import __version__
from .cmdline import read_provider, CMDLINE_FLAG
from .errors import MetadataError
from .http import Client
from .log import configure_logging, LEVELS
from .providers import fetch_metadata, PROVIDERS
from .writers import write_attributes, write_ssh_keys, write_hostname, write_network_units

LOG = logging.getLogger('hostmeta')


def build_parser():
    parser = argparse.ArgumentParser(
        prog='hostmeta',
        description='Fetch the metadata of this host from its cloud provider'
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--provider', choices=sorted(PROVIDERS), help='The provider to fetch metadata from')
    source.add_argument('--cmdline', action='store_true',
                        help='Read the provider from {0} on the kernel command line'.format(CMDLINE_FLAG))

    parser.add_argument('--attributes', metavar='FILE', help='Write the attributes to this environment file')
    parser.add_argument('--attributes-prefix', metavar='PREFIX',
                        help='Prepended to attribute names, defaults to the provider name, eg EC2_')
    parser.add_argument('--ssh-keys', metavar='USER', help='Authorize the ssh keys for this user')
    parser.add_argument('--hostname', metavar='FILE', help='Write the hostname to this file')
    parser.add_argument('--network-units', metavar='DIR', help='Write systemd-networkd units to this directory')

    parser.add_argument('--retries', type=int, default=10, metavar='N',
                        help='Attempts per request before giving up, defaults to 10')
    parser.add_argument('--timeout', type=float, default=10, metavar='SECONDS',
                        help='Socket timeout per request, defaults to 10')
    parser.add_argument('--log-level', default='INFO', type=str.upper, choices=LEVELS,
                        help='Log level, defaults to INFO')

    parser.add_argument('--version', action='version', version='%(prog)s ' + __version__)

    return parser


def run(args):
    """Fetch and write metadata as requested by ``args``

    Raises:
        hostmeta.errors.MetadataError: The metadata could not be fetched or written
        ValueError: No provider could be determined

    """
    provider = args.provider
    if args.cmdline:
        provider = read_provider()
        if provider is None:
            raise ValueError('{0} is not set on the kernel command line'.format(CMDLINE_FLAG))

    LOG.info('fetching metadata from %s', provider)

    client = Client(logger=LOG, max_attempts=args.retries, timeout=args.timeout)
    metadata = fetch_metadata(provider, client=client, logger=LOG)

    if args.attributes:
        prefix = args.attributes_prefix
        if prefix is None:
            prefix = provider.upper() + '_'

        write_attributes(metadata, args.attributes, prefix=prefix)

    if args.ssh_keys:
        write_ssh_keys(metadata, args.ssh_keys)

    if args.hostname:
        write_hostname(metadata, args.hostname)

    if args.network_units:
        write_network_units(metadata, args.network_units)

    return metadata


def main(argv=None):
    args = build_parser().parse_args(argv)

    configure_logging(args.log_level)

    try:
        run(args)
    except (MetadataError, ValueError, KeyError, IOError) as exc:
        LOG.debug('fetch failed', exc_info=True)
        sys.stderr.write('error: {0}\n'.format(exc))
        return 1

    return 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
