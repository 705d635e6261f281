"""Tests for fragment/parameter rendering and topic folding."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CrossrefQuery.core.params import (
    FragmentSet,
    KeyValue,
    format_queries,
    format_query,
    fragment,
    param,
    render_pair,
)


class _Fragment:
    def __init__(self, key: str, value: str | None) -> None:
        self._key = key
        self._value = value

    def key(self) -> str:
        return self._key

    def value(self) -> str | None:
        return self._value


class TestRenderPair(unittest.TestCase):
    def test_bare_key_without_value(self) -> None:
        self.assertEqual(render_pair("sample", None, sep="="), "sample")

    def test_key_and_value(self) -> None:
        self.assertEqual(render_pair("rows", "5", sep="="), "rows=5")
        self.assertEqual(render_pair("issn", "1234-5678", sep=":"), "issn:1234-5678")

    def test_empty_value_is_still_rendered(self) -> None:
        self.assertEqual(render_pair("key", "", sep=":"), "key:")


class TestFragmentAndParam(unittest.TestCase):
    def test_fragment_uses_colon(self) -> None:
        self.assertEqual(fragment(_Fragment("funder", "100000001")), "funder:100000001")

    def test_fragment_without_value_is_key(self) -> None:
        self.assertEqual(fragment(_Fragment("has-orcid", None)), "has-orcid")

    def test_param_uses_equals(self) -> None:
        self.assertEqual(param(KeyValue("cursor", "*")), "cursor=*")


class TestFragmentSet(unittest.TestCase):
    def test_joins_fragments_in_insertion_order(self) -> None:
        items = [_Fragment("b", "2"), _Fragment("a", None), _Fragment("c", "3")]
        self.assertEqual(param(FragmentSet("filter", items)), "filter=b:2,a,c:3")

    def test_empty_set_is_falsy(self) -> None:
        self.assertFalse(FragmentSet("filter", []))
        self.assertTrue(FragmentSet("filter", [_Fragment("a", None)]))

    def test_items_are_frozen(self) -> None:
        items = [_Fragment("a", "1")]
        fragments = FragmentSet("facet", items)
        items.append(_Fragment("b", "2"))
        self.assertEqual(len(fragments), 1)


class TestFormatQuery(unittest.TestCase):
    def test_whitespace_runs_collapse_to_plus(self) -> None:
        self.assertEqual(format_query("hello   world"), "hello+world")
        self.assertEqual(format_query("  tabs\tand\nnewlines "), "tabs+and+newlines")

    def test_topics_are_joined_with_plus(self) -> None:
        self.assertEqual(format_queries(["hello   world", "foo"]), "hello+world+foo")

    def test_blank_topics_are_dropped(self) -> None:
        self.assertEqual(format_queries(["a", "   ", "b"]), "a+b")
        self.assertEqual(format_queries([]), "")


if __name__ == "__main__":
    unittest.main()
