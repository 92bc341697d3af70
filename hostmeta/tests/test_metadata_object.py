import unittest

import uuid, json

from ..objects import MetadataObject


class Required(MetadataObject):
    _REQUIRED = ('id',)


class TestMetadataObject(unittest.TestCase):
    """Basic tests for the MetadataObject.

    This class isn't used directly, but is the parent class for Metadata, the network objects and the provider
    documents

    """

    def test_init(self):
        """Test constructor"""
        test_data = {
            uuid.uuid4().hex: uuid.uuid4().hex
        }

        mo = MetadataObject(data=test_data)

        assert mo._data == test_data

    def test_init_not_a_dict(self):
        """Only dicts can back an object"""

        def test():
            MetadataObject(data=['foo'])

        self.assertRaises(TypeError, test)

    def test_required(self):
        """Missing required keys raise ValueError"""

        def test():
            Required(data={'name': 'foo'})

        self.assertRaises(ValueError, test)

        assert Required(data={'id': 'foo'}).id == 'foo'

    def test_update(self):
        """_update sets attributes"""
        mo = MetadataObject()

        test_key = uuid.uuid4().hex
        test_val = uuid.uuid4().hex

        mo._update(test_key, test_val)

        assert getattr(mo, test_key) == test_val

    def test_contains_get_item_get_attr(self):
        """__contains__ works"""

        test_key = uuid.uuid4().hex
        test_val = uuid.uuid4().hex

        mo = MetadataObject(data={test_key: test_val})

        assert test_key in mo
        assert mo[test_key] == test_val
        assert getattr(mo, test_key) == test_val
        assert mo.get(test_key) == test_val
        assert mo.get('missing', 'default') == 'default'

    def test_missing_attribute(self):
        """Unknown attributes raise AttributeError, so hasattr works"""
        mo = MetadataObject(data={})

        assert not hasattr(mo, 'foo')

    def test_setitem_setattr(self):
        """Setting items and attributes is not allowed"""
        test_key = uuid.uuid4().hex
        test_val = uuid.uuid4().hex

        mo = MetadataObject()

        def test():
            mo[test_key] = test_val

        def test2():
            setattr(mo, test_key, test_val)

        self.assertRaises(AttributeError, test)
        self.assertRaises(AttributeError, test2)

    def test_str_repr(self):
        """str returns json"""

        test_key = uuid.uuid4().hex
        test_val = uuid.uuid4().hex

        test_data = {
            test_key: test_val
        }

        mo = MetadataObject(data=test_data)

        assert test_data == json.loads(str(mo))

        assert test_key in repr(mo)
        assert test_val in repr(mo)

    def test_as_dict(self):
        """as_dict returns a copy"""
        test_data = {'foo': 'bar'}

        mo = MetadataObject(data=test_data)

        result = mo.as_dict()
        result['foo'] = 'baz'

        assert mo.foo == 'bar'

    def test_equality(self):
        assert MetadataObject(data={'a': 1}) == MetadataObject(data={'a': 1})
        assert MetadataObject(data={'a': 1}) != MetadataObject(data={'a': 2})
        assert Required(data={'id': 1}) != MetadataObject(data={'id': 1})
