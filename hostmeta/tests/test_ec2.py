import unittest

from ..errors import MalformedKeyListing, MissingKeyMaterial, DecodeFailure, TransportTransient
from ..providers import ec2
from .helpers import make_client

BASE = 'http://169.254.169.254/2009-04-04/'


class TestEC2(unittest.TestCase):

    def test_instance_id_and_region(self):
        """Only the fields that are present become attributes"""
        client, _ = make_client({
            BASE + 'meta-data/instance-id': (200, 'i-1234'),
            BASE + 'dynamic/instance-identity/document': (200, '{"region":"us-east-1"}'),
        })

        m = ec2.fetch_metadata(client=client)

        assert dict(m.attributes) == {'INSTANCE_ID': 'i-1234', 'REGION': 'us-east-1'}
        assert m.hostname is None
        assert m.ssh_keys == ()

    def test_everything(self):
        client, _ = make_client({
            BASE + 'meta-data/instance-id': (200, 'i-1234'),
            BASE + 'meta-data/public-ipv4': (200, '203.0.113.7'),
            BASE + 'meta-data/local-ipv4': (200, '10.0.0.7'),
            BASE + 'meta-data/hostname': (200, 'ip-10-0-0-7.ec2.internal'),
            BASE + 'meta-data/placement/availability-zone': (200, 'us-east-1a'),
            BASE + 'dynamic/instance-identity/document': (200, '{"region":"us-east-1","instanceId":"i-1234"}'),
            BASE + 'meta-data/public-keys': (200, '0=keyA 1=keyB'),
            BASE + 'meta-data/public-keys/0/openssh-key': (200, 'ssh-rsa AAAA keyA'),
            BASE + 'meta-data/public-keys/1/openssh-key': (200, 'ssh-rsa BBBB keyB'),
        })

        m = ec2.fetch_metadata(client=client)

        assert dict(m.attributes) == {
            'INSTANCE_ID': 'i-1234',
            'IPV4_PUBLIC': '203.0.113.7',
            'IPV4_LOCAL': '10.0.0.7',
            'HOSTNAME': 'ip-10-0-0-7.ec2.internal',
            'AVAILABILITY_ZONE': 'us-east-1a',
            'REGION': 'us-east-1',
        }
        assert m.hostname == 'ip-10-0-0-7.ec2.internal'
        assert m.ssh_keys == ('ssh-rsa AAAA keyA', 'ssh-rsa BBBB keyB')

    def test_nothing(self):
        """A metadata service with nothing in it is not an error"""
        client, _ = make_client()

        m = ec2.fetch_metadata(client=client)

        assert dict(m.attributes) == {}
        assert m.hostname is None

    def test_malformed_key_listing(self):
        """A malformed key listing fails the whole fetch"""
        client, _ = make_client({
            BASE + 'meta-data/instance-id': (200, 'i-1234'),
            BASE + 'meta-data/public-keys': (200, 'badtoken'),
        })

        def test():
            ec2.fetch_metadata(client=client)

        self.assertRaises(MalformedKeyListing, test)

    def test_missing_key_material(self):
        client, _ = make_client({
            BASE + 'meta-data/public-keys': (200, '0=keyA'),
        })

        def test():
            ec2.fetch_metadata(client=client)

        self.assertRaises(MissingKeyMaterial, test)

    def test_bad_identity_document(self):
        """An identity document without a region fails to decode"""
        client, _ = make_client({
            BASE + 'dynamic/instance-identity/document': (200, '{"instanceId":"i-1234"}'),
        })

        def test():
            ec2.fetch_metadata(client=client)

        self.assertRaises(DecodeFailure, test)

    def test_server_error(self):
        """A field that keeps failing fails the whole fetch"""
        client, _ = make_client({
            BASE + 'meta-data/local-ipv4': (500, ''),
        })

        def test():
            ec2.fetch_metadata(client=client)

        self.assertRaises(TransportTransient, test)
