"""Tests for Settings validation and the health route."""

import unittest

from pydantic import ValidationError
from sqlalchemy.engine import make_url

from shop.core.config import Settings, settings
from tests.support import ApiTestCase


class TestSettings(unittest.TestCase):

    def test_host_api_trailing_slash_stripped(self) -> None:
        self.assertEqual(Settings(HOST_API="http://h:3000/api/").HOST_API, "http://h:3000/api")

    def test_non_postgres_database_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://root@localhost/shop")

    def test_api_prefix_must_be_absolute(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(API_PREFIX="api")
        self.assertEqual(Settings(API_PREFIX="/api/").API_PREFIX, "/api")

    def test_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=0)

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="   ")

    def test_default_database_url_names_psycopg2_driver(self) -> None:
        default = Settings.model_fields["DATABASE_URL"].default
        self.assertTrue(default.startswith("postgresql+psycopg2://"))
        self.assertEqual(make_url(default).get_driver_name(), "psycopg2")


class TestHealth(ApiTestCase):

    def test_reports_database(self) -> None:
        r = self.client.get(f"{settings.API_PREFIX}/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["status"], "ok")
        self.assertEqual(r.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()
