import unittest
from dataclasses import replace

from core.config import Settings
from core.errors import ApiError, ErrorKind
from core.paging import PageRequest, validate_paging

SETTINGS = Settings()


class PagingTests(unittest.TestCase):
    def assertKind(self, page, page_size, kind):
        with self.assertRaises(ApiError) as ctx:
            validate_paging(page, page_size, settings=SETTINGS)
        self.assertEqual(ctx.exception.kind, kind)

    def test_defaults(self):
        self.assertEqual(validate_paging(None, None, settings=SETTINGS), PageRequest(page=1, page_size=10))

    def test_partial_defaults(self):
        self.assertEqual(validate_paging("3", None, settings=SETTINGS), PageRequest(page=3, page_size=10))
        self.assertEqual(validate_paging(None, "5", settings=SETTINGS), PageRequest(page=1, page_size=5))

    def test_page_size_boundaries(self):
        self.assertEqual(validate_paging("1", "5", settings=SETTINGS).page_size, 5)
        self.assertEqual(validate_paging("1", "10", settings=SETTINGS).page_size, 10)
        self.assertKind("1", "4", ErrorKind.OUT_OF_RANGE)
        self.assertKind("1", "11", ErrorKind.OUT_OF_RANGE)

    def test_page_below_minimum(self):
        self.assertKind("0", "5", ErrorKind.OUT_OF_RANGE)
        self.assertKind("-2", "5", ErrorKind.OUT_OF_RANGE)

    def test_non_numeric_is_400(self):
        self.assertKind("abc", "5", ErrorKind.NOT_NUMERIC)
        self.assertKind("1", "abc", ErrorKind.NOT_NUMERIC)
        self.assertKind("1.5", "5", ErrorKind.NOT_NUMERIC)
        self.assertEqual(ErrorKind.NOT_NUMERIC.status_code, 400)
        self.assertEqual(ErrorKind.OUT_OF_RANGE.status_code, 422)

    def test_offset_and_limit(self):
        request = PageRequest(page=3, page_size=5)
        self.assertEqual(request.offset, 10)
        self.assertEqual(request.limit, 5)

    def test_bounds_come_from_settings(self):
        settings = replace(SETTINGS, page_size_max=50, default_page_size=25)
        self.assertEqual(validate_paging(None, None, settings=settings).page_size, 25)
        self.assertEqual(validate_paging("1", "50", settings=settings).page_size, 50)
