import unittest
import mock

import os, shutil, tempfile  # NOQA

from ..cli import build_parser, main
from ..errors import TransportTransient
from ..objects import Metadata


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmpdir)

        self.metadata = (Metadata.builder()
                         .add_attribute_if_exists('INSTANCE_ID', 'i-1234')
                         .set_hostname_if_exists('host-1')
                         .build())

        patcher = mock.patch('hostmeta.cli.configure_logging')
        patcher.start()
        self.addCleanup(patcher.stop)

    def path(self, name):
        return os.path.join(self.tmpdir, name)

    def test_provider_required(self):
        """One of --provider or --cmdline is required"""

        def test():
            build_parser().parse_args([])

        self.assertRaises(SystemExit, test)

    def test_unknown_provider_rejected(self):

        def test():
            build_parser().parse_args(['--provider', 'foo'])

        self.assertRaises(SystemExit, test)

    def test_writes(self):
        """Attributes are prefixed with the provider by default"""
        with mock.patch('hostmeta.cli.fetch_metadata', return_value=self.metadata) as fetch:
            status = main([
                '--provider', 'ec2',
                '--attributes', self.path('attributes'),
                '--hostname', self.path('hostname'),
                '--retries', '3',
            ])

        assert status == 0
        assert fetch.call_args[0] == ('ec2',)
        assert fetch.call_args[1]['client']._max_attempts == 3

        with open(self.path('attributes')) as fh:
            assert fh.read() == 'EC2_INSTANCE_ID=i-1234\n'

        with open(self.path('hostname')) as fh:
            assert fh.read() == 'host-1\n'

    def test_attributes_prefix(self):
        with mock.patch('hostmeta.cli.fetch_metadata', return_value=self.metadata):
            main([
                '--provider', 'vagrant_virtualbox',
                '--attributes', self.path('attributes'),
                '--attributes-prefix', 'COREOS_',
            ])

        with open(self.path('attributes')) as fh:
            assert fh.read() == 'COREOS_INSTANCE_ID=i-1234\n'

    def test_cmdline(self):
        with mock.patch('hostmeta.cli.read_provider', return_value='gce'):
            with mock.patch('hostmeta.cli.fetch_metadata', return_value=self.metadata) as fetch:
                assert main(['--cmdline']) == 0

        assert fetch.call_args[0] == ('gce',)

    def test_cmdline_unset(self):
        """An unset provider on the command line is an error"""
        with mock.patch('hostmeta.cli.read_provider', return_value=None):
            with mock.patch('sys.stderr') as stderr:
                assert main(['--cmdline']) == 1

        assert 'coreos.oem.id' in stderr.write.call_args[0][0]

    def test_cmdline_unknown_provider(self):
        with mock.patch('hostmeta.cli.read_provider', return_value='hyperv'):
            with mock.patch('sys.stderr') as stderr:
                assert main(['--cmdline']) == 1

        assert "unknown provider 'hyperv'" in stderr.write.call_args[0][0]

    def test_fetch_error(self):
        """Errors are printed and the exit status is non-zero"""
        error = TransportTransient('http://169.254.169.254/', 10, IOError('connection refused'))

        with mock.patch('hostmeta.cli.fetch_metadata', side_effect=error):
            with mock.patch('sys.stderr') as stderr:
                status = main(['--provider', 'ec2', '--attributes', self.path('attributes')])

        assert status == 1
        assert 'connection refused' in stderr.write.call_args[0][0]
        assert not os.path.exists(self.path('attributes'))

    def test_log_level_rejected(self):

        def test():
            build_parser().parse_args(['--provider', 'ec2', '--log-level', 'loud'])

        self.assertRaises(SystemExit, test)

    def test_log_level_case_insensitive(self):
        args = build_parser().parse_args(['--provider', 'ec2', '--log-level', 'debug'])

        assert args.log_level == 'DEBUG'
