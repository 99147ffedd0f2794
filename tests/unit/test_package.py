"""Tests for the projfind package root."""

import projfind


class TestPublicApi:
    """Tests for names re-exported from the package root."""

    def test_version(self):
        assert projfind.__version__ == "0.1.0"

    def test_all_names_resolve(self):
        for name in projfind.__all__:
            assert hasattr(projfind, name), name

    def test_rank_from_root(self):
        assert projfind.rank(["Door.js", "random.txt"], "door") == ["Door.js"]

    def test_match_from_root(self):
        assert projfind.match("abc", "d") == (False, 0)
