"""HTTP tests for /api/files product image routes."""

import tempfile
import unittest
from pathlib import Path

from shop.core.config import Settings, get_settings, settings
from shop.main import app
from tests.support import ApiTestCase

FILES = f"{settings.API_PREFIX}/files"


class FilesApiTestCase(ApiTestCase):

    def setUp(self) -> None:
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.test_settings = Settings(
            STATIC_PRODUCTS_DIR=str(self.dir),
            HOST_API="https://shop.example.com/api",
            MAX_UPLOAD_FILE_BYTES=64,
        )
        app.dependency_overrides[get_settings] = lambda: self.test_settings

    def tearDown(self) -> None:
        super().tearDown()
        self._tmp.cleanup()


class TestUpload(FilesApiTestCase):

    def test_upload_then_fetch(self) -> None:
        r = self.client.post(
            f"{FILES}/product",
            files={"file": ("shirt.jpg", b"jpeg-bytes", "image/jpeg")},
        )
        self.assertEqual(r.status_code, 201, r.text)
        url = r.json()["secureUrl"]
        self.assertTrue(url.startswith("https://shop.example.com/api/files/product/"))

        name = url.rsplit("/", 1)[1]
        r = self.client.get(f"{FILES}/product/{name}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.content, b"jpeg-bytes")

    def test_non_image_rejected(self) -> None:
        r = self.client.post(
            f"{FILES}/product",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["detail"], "Make sure that the file is an image")

    def test_missing_file_field(self) -> None:
        r = self.client.post(f"{FILES}/product")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["detail"], "Make sure that the file is an image")

    def test_oversized_file_rejected(self) -> None:
        r = self.client.post(
            f"{FILES}/product",
            files={"file": ("big.png", b"x" * 65, "image/png")},
        )
        self.assertEqual(r.status_code, 400)


class TestFetch(FilesApiTestCase):

    def test_unknown_image(self) -> None:
        r = self.client.get(f"{FILES}/product/missing.png")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["detail"], "No product found with image missing.png")


if __name__ == "__main__":
    unittest.main()
