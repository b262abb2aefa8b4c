"""
Tests for configuration loading from the environment and .env files.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from dir_crawler.config import (
    DEFAULT_OUTPUT,
    REQUEST_TIMEOUT,
    CrawlConfig,
    load_config,
)
from dir_crawler.errors import ConfigError

URL = "http://ex.com/pub/"


class TestLoadConfig(unittest.TestCase):
    def test_reads_all_variables(self):
        config = load_config(environ={
            "BASE_URL": URL,
            "DOWNLOADS_FOLDERS": "mirror",
            "AVOID_INITIAL_LINKS": "1",
        })
        self.assertEqual(config.base_url, URL)
        self.assertEqual(config.output_dir, Path("mirror"))
        self.assertEqual(config.avoid_initial_links, 1)
        self.assertEqual(config.timeout, REQUEST_TIMEOUT)

    def test_defaults(self):
        config = load_config(environ={"BASE_URL": URL})
        self.assertEqual(config.output_dir, Path(DEFAULT_OUTPUT))
        self.assertEqual(config.avoid_initial_links, 0)

    def test_keyword_arguments_override_environment(self):
        config = load_config(
            environ={"BASE_URL": URL, "AVOID_INITIAL_LINKS": "3"},
            base_url="https://other.example/",
            output_dir="elsewhere",
            avoid_initial_links=0,
        )
        self.assertEqual(config.base_url, "https://other.example/")
        self.assertEqual(config.output_dir, Path("elsewhere"))
        self.assertEqual(config.avoid_initial_links, 0)

    def test_missing_base_url(self):
        with self.assertRaises(ConfigError):
            load_config(environ={})

    def test_non_integer_skip_count(self):
        with self.assertRaises(ConfigError):
            load_config(environ={"BASE_URL": URL, "AVOID_INITIAL_LINKS": "two"})

    def test_negative_skip_count(self):
        with self.assertRaises(ConfigError):
            load_config(environ={"BASE_URL": URL, "AVOID_INITIAL_LINKS": "-1"})

    def test_non_http_base_url(self):
        with self.assertRaises(ConfigError):
            load_config(environ={"BASE_URL": "ftp://ex.com/pub/"})

    def test_dotenv_file_is_loaded(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text(
                f"BASE_URL={URL}\nDOWNLOADS_FOLDERS=from_dotenv\nAVOID_INITIAL_LINKS=2\n",
                encoding="utf-8",
            )
            with patch.dict(os.environ, {}, clear=True):
                config = load_config(env_file=str(env_file))
        self.assertEqual(config.base_url, URL)
        self.assertEqual(config.output_dir, Path("from_dotenv"))
        self.assertEqual(config.avoid_initial_links, 2)

    def test_process_environment_wins_over_dotenv(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("BASE_URL=http://dotenv.example/\n", encoding="utf-8")
            with patch.dict(os.environ, {"BASE_URL": URL}, clear=True):
                config = load_config(env_file=str(env_file))
        self.assertEqual(config.base_url, URL)


class TestCrawlConfig(unittest.TestCase):
    def test_is_immutable(self):
        config = CrawlConfig(base_url=URL)
        with self.assertRaises(AttributeError):
            config.base_url = "http://elsewhere/"

    def test_rejects_non_positive_timeout(self):
        with self.assertRaises(ConfigError):
            CrawlConfig(base_url=URL, timeout=0)

    def test_scheme_is_case_insensitive(self):
        config = CrawlConfig(base_url="HTTP://ex.com/d/")
        self.assertEqual(config.base_url, "HTTP://ex.com/d/")

    def test_unparseable_base_url(self):
        with self.assertRaises(ConfigError):
            CrawlConfig(base_url="http://[ex.com/d/")


if __name__ == "__main__":
    unittest.main()
