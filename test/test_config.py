"""Tests for layered config parsing and validation."""

import os
import sys
import tempfile
import unittest
from copy import deepcopy
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CrossrefQuery.config import load_config, load_config_with_defaults, parse_config_dict
from CrossrefQuery.core import filters
from CrossrefQuery.core.dates import CalendarDate
from CrossrefQuery.core.errors import InvalidPaginationError, UnknownComponentError, UnknownFilterError
from CrossrefQuery.core.options import Order, Rows, RowsOffset, Sample, Sort
from CrossrefQuery.core.route import Combined, Single
from CrossrefQuery.core.types import Component, WorkType


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

api:
  base_url: https://api.crossref.org/
  timeout: 30
  mailto_env: CROSSREF_MAILTO

query:
  resource: works
  topics: ["graph neural networks"]
  filters: ["type:journal-article"]
  rows: 20
  sample: false
"""


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "api": {"base_url": "https://api.crossref.org", "timeout": 10, "mailto_env": "CROSSREF_MAILTO"},
        "query": {
            "resource": "works",
            "topics": ["deep learning"],
            "fields": {"author": "Josiah Carberry"},
            "filters": ["from-pub-date:2020-01", "has-funder"],
            "facets": ["type-name:*"],
            "sort": "published",
            "order": "desc",
            "rows": 5,
            "offset": None,
            "sample": False,
            "cursor": None,
        },
    }


class TestParseConfigDict(unittest.TestCase):
    def test_full_query_section(self) -> None:
        cfg = parse_config_dict(_base_raw_config())

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.api.timeout, 10.0)
        self.assertEqual(cfg.query.resource, Single(Component.WORKS))
        self.assertEqual(cfg.query.topics, ("deep learning",))
        self.assertEqual(
            cfg.query.filters,
            (filters.FromPubDate(CalendarDate(2020, 1)), filters.HasFunder()),
        )
        self.assertIs(cfg.query.sort, Sort.PUBLISHED)
        self.assertIs(cfg.query.order, Order.DESC)
        self.assertEqual(cfg.query.result_control, Rows(5))
        self.assertEqual(
            cfg.query.route(),
            "/works?query=deep+learning&query.author=Josiah+Carberry"
            "&filter=from-pub-date:2020-01,has-funder:true&facet=type-name:*"
            "&sort=published&order=desc&rows=5",
        )

    def test_missing_sections_use_defaults(self) -> None:
        cfg = parse_config_dict({})
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.api.base_url, "https://api.crossref.org")
        self.assertEqual(cfg.query.route(), "/works")

    def test_combined_resource_uses_work_filters(self) -> None:
        raw = _base_raw_config()
        raw["query"].update(resource="funders", identifier="10.13039/100000001", filters=["type:book"])
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.query.resource, Combined(Component.FUNDERS, "10.13039/100000001"))
        self.assertEqual(cfg.query.filters, (filters.Type(WorkType.BOOK),))

    def test_funder_list_rejects_work_filters(self) -> None:
        raw = _base_raw_config()
        raw["query"].update(resource="funders", filters=["has-funder"])
        with self.assertRaises(UnknownFilterError):
            parse_config_dict(raw)

    def test_rows_and_offset_combine(self) -> None:
        raw = _base_raw_config()
        raw["query"].update(rows=20, offset=40)
        self.assertEqual(parse_config_dict(raw).query.result_control, RowsOffset(20, 40))

    def test_sample_with_rows_is_rejected(self) -> None:
        raw = _base_raw_config()
        raw["query"]["sample"] = True
        with self.assertRaises(InvalidPaginationError):
            parse_config_dict(raw)

    def test_sample_alone(self) -> None:
        raw = _base_raw_config()
        raw["query"].update(sample=True, rows=None)
        self.assertEqual(parse_config_dict(raw).query.result_control, Sample())

    def test_invalid_values(self) -> None:
        cases = [
            ("resource", "authors", UnknownComponentError),
            ("rows", "10", TypeError),
            ("topics", [1], TypeError),
            ("sample", "yes", TypeError),
        ]
        for key, value, error in cases:
            with self.subTest(key=key):
                raw = deepcopy(_base_raw_config())
                raw["query"][key] = value
                with self.assertRaises(error):
                    parse_config_dict(raw)

    def test_unknown_query_key(self) -> None:
        raw = _base_raw_config()
        raw["query"]["max_results"] = 3
        with self.assertRaisesRegex(ValueError, "unknown keys"):
            parse_config_dict(raw)

    def test_invalid_runtime_and_api(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "LOUD"
        with self.assertRaises(ValueError):
            parse_config_dict(raw)

        raw = _base_raw_config()
        raw["api"]["base_url"] = "ftp://api.crossref.org"
        with self.assertRaises(ValueError):
            parse_config_dict(raw)

        raw = _base_raw_config()
        raw["api"]["timeout"] = 0
        with self.assertRaises(ValueError):
            parse_config_dict(raw)

    def test_mailto_is_read_from_env(self) -> None:
        with patch.dict(os.environ, {"CROSSREF_MAILTO": " someone@example.org "}):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.api.mailto, "someone@example.org")

        with patch.dict(os.environ, {}, clear=True):
            cfg = parse_config_dict(_base_raw_config())
        self.assertIsNone(cfg.api.mailto)


class TestConfigFiles(unittest.TestCase):
    def test_override_merges_with_defaults(self) -> None:
        override_yaml = """
log:
  level: debug

query:
  rows: 50
  sort: is-referenced-by-count
"""
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text(override_yaml, encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.api.base_url, "https://api.crossref.org")
        self.assertEqual(
            cfg.query.to_url(cfg.api.base_url),
            "https://api.crossref.org/works?query=graph+neural+networks"
            "&filter=type:journal-article&sort=is-referenced-by-count&rows=50",
        )

    def test_load_config_applies_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yml"
            path.write_text(_BASE_YAML, encoding="utf-8")

            cfg = load_config(path, overrides={"query": {"rows": None, "sample": True}})

        self.assertEqual(cfg.query.result_control, Sample())
        self.assertEqual(cfg.query.topics, ("graph neural networks",))

    def test_missing_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "absent.yml")
        self.assertEqual(cfg.query.route(), "/works")

    def test_non_mapping_root_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
