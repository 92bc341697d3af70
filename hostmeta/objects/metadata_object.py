import json


class MetadataObject(object):
    """A base class for the read-only values built from metadata service responses

    Raises:
        AttributeError: You attempted to write to a read only property / key
        ValueError: The data is missing a key listed in ``_REQUIRED``

    This class stores a dict in self._data and provides access to it via keys and properties.

        >>> mo = MetadataObject(data={'foo': 'bar'})
        >>> mo.foo
        'bar'
        >>> mo['foo']
        'bar'

    Once the data is set in the constructor, it cannot be overwritten.

    >>> mo.foo = 'baz'
    AttributeError: MetadataObject.foo can not be modified

    Subclasses list the keys they can't do without in ``_REQUIRED``, which lets them be used as the target
    of a Json or Xml format: a response that lacks one of them fails to decode.

    """

    _REQUIRED = ()

    def __init__(self, data=None):
        """
        Args:
            data (dict, optional): Initialize this object with this data

        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise TypeError('{0} must be built from a dict, not {1}'.format(
                self.__class__.__name__,
                data.__class__.__name__
            ))

        for key in self._REQUIRED:
            if key not in data:
                raise ValueError('{0} requires a value for {1}'.format(
                    self.__class__.__name__,
                    key
                ))

        self._update('_data', data)

    def _update(self, name, value):
        """Uses the parent object's method to bypass our write protection and update ourselves

        Args:
            name (str): The attribute to set/update
            value: The value to assign to the attribute

        """
        return object.__setattr__(self, name, value)

    # Ensure we can be accessed via property or keys
    def __contains__(self, name):
        return name in self._data

    def __getitem__(self, name):
        return self._data[name]

    def __getattr__(self, name):
        # _data is looked up here while unpickling or copying, before it exists
        if name.startswith('__') or name == '_data':
            raise AttributeError(name)

        try:
            return self._data[name]
        except KeyError:
            raise AttributeError('{0} has no attribute {1}'.format(
                self.__class__.__name__,
                name
            ))

    def get(self, name, default=None):
        return self._data.get(name, default)

    # Ensure our properties cannot be written to directly
    def __setitem__(self, name, value):
        return self.__setattr__(name, value)

    def __setattr__(self, name, value):
        raise AttributeError('{0}.{1} can not be modified'.format(
            self.__class__.__name__,
            name
        ))

    def __delattr__(self, name):
        return self.__setattr__(name, None)

    def __eq__(self, other):
        return type(self) is type(other) and self.as_dict() == other.as_dict()

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __str__(self):
        return json.dumps(self.as_dict())

    def __repr__(self):
        return '<{0}: {1}>'.format(
            self.__class__.__name__,
            str(self)
        )

    def as_dict(self):
        """Return a copy of the internal data structure backing this object"""
        return dict(self._data)
