"""Find the provider on the kernel command line"""

CMDLINE_PATH = '/proc/cmdline'
CMDLINE_FLAG = 'coreos.oem.id'


def parse_provider(cmdline, flag=CMDLINE_FLAG):
    """Return the value of ``flag`` in a kernel command line, or None

    When the flag is given more than once, the last one wins, like it does for the kernel.

    """
    provider = None

    for arg in cmdline.split():
        key, sep, value = arg.partition('=')
        if key == flag and sep:
            provider = value

    return provider


def read_provider(path=CMDLINE_PATH, flag=CMDLINE_FLAG):
    """Read the provider from the kernel command line

    Returns:
        str: The provider, or None if it isn't set

    Raises:
        IOError: The command line could not be read

    """
    with open(path) as fh:
        return parse_provider(fh.read(), flag)
