import unittest
import uuid, random

import httplib2

from ..errors import (
    MetadataError, UnknownProvider, TransportTransient, TransportPermanent, DecodeFailure,
    MalformedKeyListing, MissingKeyMaterial, AddressUnavailable, InvalidSSHKey
)


class TestErrors(unittest.TestCase):

    def test_unknown_provider(self):
        """The message names the provider exactly"""
        name = uuid.uuid4().hex

        e = UnknownProvider(name)

        assert isinstance(e, MetadataError)
        assert e.name == name
        assert str(e) == "unknown provider '{0}'".format(name)
        assert 'UnknownProvider' in repr(e)
        assert name in repr(e)

    def test_transient_with_exception(self):
        """The last cause is included in the message"""
        url = 'http://198.51.100.23/' + uuid.uuid4().hex
        attempts = random.randint(1, 10)
        cause = IOError('connection refused')

        e = TransportTransient(url, attempts, cause)

        assert e.url == url
        assert e.attempts == attempts
        assert id(e.cause) == id(cause)

        assert url in str(e)
        assert str(attempts) in str(e)
        assert 'connection refused' in str(e)

    def test_transient_with_response(self):
        """A response as the last cause is described by its status"""
        e = TransportTransient('http://198.51.100.23/', 3, httplib2.Response({'status': '503'}))

        assert 'HTTP status 503' in str(e)

    def test_permanent(self):
        """Test constructor"""
        test_code = random.randint(400, 499)
        url = 'http://198.51.100.23/' + uuid.uuid4().hex

        e = TransportPermanent(url, test_code)

        assert e.code == test_code
        assert e.cause is None
        assert str(test_code) in str(e)
        assert url in str(e)
        assert str(test_code) in repr(e)

    def test_decode_failure(self):
        cause = ValueError('Expecting value')

        e = DecodeFailure('http://198.51.100.23/doc', 'json', cause)

        assert e.format == 'json'
        assert id(e.cause) == id(cause)
        assert 'json' in str(e)
        assert 'Expecting value' in str(e)

    def test_key_errors(self):
        """Key errors name the offending entry"""
        assert 'badtoken' in str(MalformedKeyListing('badtoken'))
        assert MalformedKeyListing('badtoken').entry == 'badtoken'

        e = MissingKeyMaterial('my-key', 'http://198.51.100.23/0/openssh-key')

        assert e.key == 'my-key'
        assert 'my-key' in str(e)
        assert 'openssh-key' in str(e)

    def test_other_errors(self):
        assert 'eth1' in str(AddressUnavailable('eth1'))

        e = InvalidSSHKey('not-a-key', ValueError('Not enough fields'))

        assert 'not-a-key' in str(e)
        assert 'Not enough fields' in str(e)
        assert isinstance(e, MetadataError)
