"""Tests for version cleaning."""

from build_agent.versions import cache_key, clean_version


class TestCleanVersion:
    def test_plain(self):
        assert clean_version("1.2.3") == "1.2.3"

    def test_prefix_and_whitespace(self):
        assert clean_version("  v1.2.3  ") == "1.2.3"
        assert clean_version("=v2.0.0") == "2.0.0"

    def test_prerelease_kept(self):
        assert clean_version("6.0.0-beta.2") == "6.0.0-beta.2"

    def test_build_metadata_dropped(self):
        assert clean_version("1.2.3+build.7") == "1.2.3"

    def test_invalid(self):
        assert clean_version("latest") is None
        assert clean_version("1.2") is None


class TestCacheKey:
    def test_falls_back_to_raw(self):
        assert cache_key("latest") == "latest"

    def test_uses_cleaned(self):
        assert cache_key("v5.12.0") == "5.12.0"
