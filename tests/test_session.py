"""
Tests for the requests-backed transport.
"""

import unittest
from unittest.mock import MagicMock

import requests

from dir_crawler.errors import FetchError
from dir_crawler.session import HttpTransport, build_session

URL = "http://ex.com/d/"


def _response(status=200, url=URL, headers=None, chunks=(b"",)):
    resp = MagicMock()
    resp.status_code = status
    resp.url = url
    resp.headers = headers or {"Content-Type": "text/html"}
    resp.iter_content.return_value = iter(chunks)
    return resp


class TestBuildSession(unittest.TestCase):
    def test_no_retries_and_verify_flag(self):
        session = build_session(verify_ssl=False)
        self.assertFalse(session.verify)
        adapter = session.get_adapter("https://ex.com/")
        self.assertEqual(adapter.max_retries.total, 0)
        self.assertIn("dir-crawler", session.headers["User-Agent"])


class TestHttpTransport(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.transport = HttpTransport(session=self.session, timeout=7)

    def test_head_follows_redirects_and_reports_final_url(self):
        self.session.head.return_value = _response(url=URL + "moved/")
        result = self.transport.fetch_head(URL)
        self.session.head.assert_called_once_with(URL, timeout=7, allow_redirects=True)
        self.assertTrue(result.ok)
        self.assertEqual(result.final_url, URL + "moved/")

    def test_head_non_success(self):
        self.session.head.return_value = _response(status=404)
        self.assertFalse(self.transport.fetch_head(URL).ok)

    def test_head_transport_error(self):
        self.session.head.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(FetchError):
            self.transport.fetch_head(URL)

    def test_full_fetch_streams_body(self):
        resp = _response(chunks=(b"ab", b"", b"cd"))
        self.session.get.return_value = resp
        with self.transport.fetch_full(URL) as result:
            self.assertEqual(b"".join(result.body), b"abcd")
        self.session.get.assert_called_once_with(
            URL, timeout=7, allow_redirects=True, stream=True
        )
        resp.close.assert_called_once()

    def test_full_fetch_transport_error(self):
        self.session.get.side_effect = requests.Timeout("slow")
        with self.assertRaises(FetchError):
            self.transport.fetch_full(URL)

    def test_body_error_becomes_fetch_error(self):
        resp = _response()
        resp.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("cut")
        self.session.get.return_value = resp
        result = self.transport.fetch_full(URL)
        with self.assertRaises(FetchError):
            list(result.body)


if __name__ == "__main__":
    unittest.main()
