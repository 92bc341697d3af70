"""Write fetched metadata out to where the rest of the system expects it

All files are written atomically, a reader sees either the old file or the complete new one.
"""

import base64
import hashlib
import logging
import os
import pwd
import tempfile

from paramiko.pkey import PublicBlob

from .errors import InvalidSSHKey

LOG = logging.getLogger(__name__)

SSH_KEYS_NAME = 'hostmeta'


def write_file(path, contents, mode=0o644, uid=None, gid=None):
    """Atomically replace ``path`` with ``contents``

    Args:
        path (str): The file to write
        contents (str): What to write to it
        mode (int): Permissions of the file
        uid (int, optional): Owner of the file
        gid (int, optional): Group of the file

    """
    directory = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(directory):
        os.makedirs(directory)

    fd, tmp = tempfile.mkstemp(dir=directory, prefix='.' + os.path.basename(path))
    try:
        fh = os.fdopen(fd, 'w')
    except BaseException:
        os.close(fd)
        os.unlink(tmp)
        raise

    try:
        with fh:
            fh.write(contents)

        os.chmod(tmp, mode)
        if uid is not None:
            os.chown(tmp, uid, gid if gid is not None else -1)

        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise


def write_attributes(metadata, path, prefix=''):
    """Write the attributes as an environment file of NAME=VALUE lines

    Args:
        metadata (hostmeta.objects.Metadata): The metadata to write
        path (str): The file to write
        prefix (str): Prepended to every attribute name

    """
    lines = ['{0}{1}={2}\n'.format(prefix, name, value) for name, value in metadata.attributes.items()]

    write_file(path, ''.join(lines))
    LOG.info('wrote %d attributes to %s', len(lines), path)


def fingerprint(blob):
    """Return the SHA256 fingerprint of a key, the way ssh-keygen -l shows it"""
    digest = hashlib.sha256(blob.key_blob).digest()
    return 'SHA256:' + base64.b64encode(digest).decode('ascii').rstrip('=')


def validate_ssh_keys(keys):
    """Parse every key, returning the parsed keys

    Raises:
        hostmeta.errors.InvalidSSHKey: A key is not an OpenSSH public key

    """
    blobs = []

    for key in keys:
        try:
            blobs.append(PublicBlob.from_string(key))
        except ValueError as exc:
            raise InvalidSSHKey(key, exc)

    return blobs


def write_ssh_keys(metadata, user, path=None):
    """Write the ssh keys into an authorized_keys fragment for ``user``

    Keys are validated before anything is written, so an invalid key leaves the existing file untouched.

    Args:
        metadata (hostmeta.objects.Metadata): The metadata to write
        user (str): The user the keys authorize logins for
        path (str, optional): The file to write, defaults to ~user/.ssh/authorized_keys.d/hostmeta

    Raises:
        KeyError: ``user`` does not exist
        hostmeta.errors.InvalidSSHKey: A key is not an OpenSSH public key

    """
    entry = pwd.getpwnam(user)

    if path is None:
        path = os.path.join(entry.pw_dir, '.ssh', 'authorized_keys.d', SSH_KEYS_NAME)

    for blob in validate_ssh_keys(metadata.ssh_keys):
        LOG.info('authorizing %s key %s for %s', blob.key_type, fingerprint(blob), user)

    contents = ''.join('{0}\n'.format(key) for key in metadata.ssh_keys)

    uid = gid = None
    if os.geteuid() == 0:
        uid, gid = entry.pw_uid, entry.pw_gid

    write_file(path, contents, mode=0o600, uid=uid, gid=gid)
    LOG.info('wrote %d ssh keys to %s', len(metadata.ssh_keys), path)


def write_hostname(metadata, path):
    """Write the hostname to ``path``, nothing is written when there is no hostname

    Returns:
        bool: True if the file was written

    """
    if metadata.hostname is None:
        LOG.info('no hostname available, not writing %s', path)
        return False

    write_file(path, metadata.hostname + '\n')
    LOG.info('wrote hostname %s to %s', metadata.hostname, path)
    return True


def write_network_units(metadata, directory):
    """Write a systemd-networkd unit for each network device

    Returns:
        list: The paths that were written

    """
    written = []

    for device in metadata.network_devices:
        path = os.path.join(directory, device.unit_name())
        write_file(path, device.unit_contents())
        written.append(path)

    LOG.info('wrote %d network units to %s', len(written), directory)
    return written
