import json

import xml.etree.ElementTree as ET


class Format(object):
    """A way of turning the body of a metadata response into a value

    Formats are selected per request, and may be bound to a type that the decoded value is passed to:

        >>> client.get(Json.into(InstanceIdentityDocument), url)

    Anything the type raises (ValueError, KeyError, TypeError) is treated as the body not matching the format.

    """

    name = None

    def __init__(self, into=None):
        """
        Args:
            into (callable, optional): Called with the decoded value, its result is returned instead

        """
        self._into = into

    def into(self, factory):
        """Return a copy of this format that passes decoded values to ``factory``"""
        return self.__class__(into=factory)

    def decode(self, content):
        """Decode a response body

        Args:
            content (bytes or str): The body of the response

        Returns:
            The decoded value

        Raises:
            ValueError, KeyError, TypeError, xml.etree.ElementTree.ParseError: The body could not be decoded

        """
        value = self._parse(_text(content))

        if self._into is None:
            return value

        return self._into(value)

    def _parse(self, text):  # pragma: no cover
        raise NotImplementedError

    def __repr__(self):
        return '<{0}>'.format(self.name)


class RawFormat(Format):
    name = 'raw'

    def _parse(self, text):
        return text.strip()


class JsonFormat(Format):
    name = 'json'

    def _parse(self, text):
        return json.loads(text)


class XmlFormat(Format):
    name = 'xml'

    def _parse(self, text):
        return ET.fromstring(text)  # nosec B314


def _text(content):
    if content is None:
        return ''

    if isinstance(content, bytes):
        return content.decode('utf-8')

    return content


Raw = RawFormat()
Json = JsonFormat()
Xml = XmlFormat()

DECODE_ERRORS = (ValueError, KeyError, TypeError, ET.ParseError)
