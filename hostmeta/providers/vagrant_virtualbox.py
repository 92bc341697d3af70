"""Vagrant boxes running on VirtualBox

There is no metadata service; the only thing worth knowing is the address of the host-only interface, which
may not have been configured yet when we run, so it's polled with the client's backoff schedule.
"""

import logging
import socket
import time

import psutil

from ..errors import AddressUnavailable
from ..objects import Metadata
from .common import prepare_client

LOG = logging.getLogger(__name__)

INTERFACE = 'eth1'


def interface_ipv4(name):
    """Return the first IPv4 address of the interface ``name``, or None"""
    for address in psutil.net_if_addrs().get(name, []):
        if address.family == socket.AF_INET:
            return address.address

    return None


def fetch_metadata(client=None, logger=None, interface=INTERFACE):
    logger = logger or LOG
    client = prepare_client(client, logger)

    delays = client.delays()

    while True:
        address = interface_ipv4(interface)
        if address is not None:
            break

        try:
            delay = next(delays)
        except StopIteration:
            raise AddressUnavailable(interface)

        logger.info('%s has no IPv4 address yet, checking again in %s seconds', interface, delay)
        time.sleep(delay)

    return (Metadata.builder()
            .add_attribute_if_exists('IPV4_PRIVATE', address)
            .build())
