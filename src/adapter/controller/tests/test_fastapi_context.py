"""Unit tests for FastAPIContext bind/query/json."""

import json
import unittest
from unittest.mock import MagicMock

from adapter.controller.fastapi_context import FastAPIContext
from domain.model.errors import BindError
from port.user_requests import UserCreateRequest


def _context(body: bytes = b'', query: dict | None = None) -> FastAPIContext:
    request = MagicMock()
    request.query_params = query or {}
    return FastAPIContext(request, body)


class TestBind(unittest.TestCase):

    def test_bind_populates_known_fields(self):
        ctx = _context(json.dumps({
            'lastname': 'Doe',
            'firstname': 'John',
            'email': 'john@test.com',
            'password': '00000000',
            'role': 'admin',
        }).encode())
        req = UserCreateRequest()

        ctx.bind(req)

        self.assertEqual(req.lastname, 'Doe')
        self.assertEqual(req.email, 'john@test.com')
        self.assertEqual(req.password, '00000000')
        self.assertFalse(hasattr(req, 'role'))

    def test_missing_and_null_fields_keep_defaults(self):
        ctx = _context(b'{"lastname": "Doe", "email": null}')
        req = UserCreateRequest()

        ctx.bind(req)

        self.assertEqual(req.lastname, 'Doe')
        self.assertEqual(req.email, '')
        self.assertEqual(req.firstname, '')

    def test_empty_body(self):
        with self.assertRaises(BindError):
            _context(b'').bind(UserCreateRequest())

    def test_invalid_json(self):
        with self.assertRaises(BindError):
            _context(b'{not json').bind(UserCreateRequest())

    def test_non_object_payload(self):
        with self.assertRaises(BindError):
            _context(b'["Doe"]').bind(UserCreateRequest())

    def test_wrong_field_type(self):
        with self.assertRaises(BindError):
            _context(b'{"password": 12345678}').bind(UserCreateRequest())

    def test_non_dataclass_target(self):
        with self.assertRaises(TypeError):
            _context(b'{}').bind({})


class TestQueryAndJson(unittest.TestCase):

    def test_query(self):
        ctx = _context(query={'id': 'abc'})
        self.assertEqual(ctx.query('id'), 'abc')
        self.assertEqual(ctx.query('missing'), '')
        self.assertEqual(ctx.query('missing', 'fallback'), 'fallback')

    def test_json_sets_response(self):
        ctx = _context()
        ctx.json({'ok': True}, status_code=201)

        self.assertEqual(ctx.response.status_code, 201)
        self.assertEqual(json.loads(ctx.response.body), {'ok': True})


if __name__ == '__main__':
    unittest.main()
