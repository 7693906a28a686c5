"""Tests for the tool cache."""

import os

import pytest

from build_agent.cache import ToolCache
from build_agent.errors import InvalidParameterError


class _Recorder:
    def __init__(self):
        self.messages = []

    def debug(self, message):
        self.messages.append(("debug", message))

    def info(self, message):
        self.messages.append(("info", message))

    def warn(self, message):
        self.messages.append(("warn", message))

    def error(self, message):
        self.messages.append(("error", message))


@pytest.fixture
def source(tmp_path):
    src = tmp_path / "src"
    (src / "bin").mkdir(parents=True)
    (src / "bin" / "tool").write_text("v1")
    (src / "README").write_text("readme")
    return src


@pytest.fixture
def cache(tmp_path):
    return ToolCache(str(tmp_path / "cache"), _Recorder(), remove_retry_delay=0)


def _tree(root):
    files = {}
    for dirpath, _dirs, names in os.walk(root):
        for name in names:
            full = os.path.join(dirpath, name)
            with open(full) as f:
                files[os.path.relpath(full, root)] = f.read()
    return files


class TestCacheToolDirectory:
    async def test_round_trip(self, cache, source, tmp_path):
        dest = await cache.cache_tool_directory(str(source), "tool", "1.2.3")
        assert dest == os.path.join(str(tmp_path / "cache"), "tool", "1.2.3")
        assert await cache.find_local_tool("tool", "1.2.3") == dest
        assert _tree(dest) == _tree(source)

    async def test_recache_replaces_previous_copy(self, cache, source, tmp_path):
        await cache.cache_tool_directory(str(source), "tool", "1.2.3")
        other = tmp_path / "other"
        other.mkdir()
        (other / "fresh.txt").write_text("new")
        dest = await cache.cache_tool_directory(str(other), "tool", "1.2.3")
        assert _tree(dest) == {"fresh.txt": "new"}

    async def test_version_is_cleaned(self, cache, source):
        dest = await cache.cache_tool_directory(str(source), "tool", "v1.2.3")
        assert os.path.basename(dest) == "1.2.3"
        assert await cache.find_local_tool("tool", "=1.2.3") == dest

    async def test_non_semver_used_verbatim(self, cache, source):
        dest = await cache.cache_tool_directory(str(source), "tool", "nightly")
        assert os.path.basename(dest) == "nightly"

    async def test_no_cache_root(self, source):
        recorder = _Recorder()
        cache = ToolCache("", recorder)
        assert await cache.cache_tool_directory(str(source), "tool", "1.0.0") == ""
        assert ("debug", "cache root not set") in recorder.messages

    @pytest.mark.parametrize(
        "args,parameter",
        [
            (("src", "", "1.0.0"), "tool"),
            (("src", "tool", ""), "version"),
            (("", "tool", "1.0.0"), "source_dir"),
        ],
    )
    async def test_required_parameters(self, cache, args, parameter):
        with pytest.raises(InvalidParameterError) as exc:
            await cache.cache_tool_directory(*args)
        assert exc.value.parameter == parameter

    async def test_missing_source_propagates(self, cache, tmp_path):
        with pytest.raises(OSError):
            await cache.cache_tool_directory(str(tmp_path / "missing"), "tool", "1.0.0")


class TestFindLocalTool:
    async def test_absent(self, cache):
        assert await cache.find_local_tool("tool", "9.9.9") is None

    async def test_no_partial_version_match(self, cache, source):
        await cache.cache_tool_directory(str(source), "tool", "1.2.3")
        assert await cache.find_local_tool("tool", "1.2") is None

    async def test_no_cache_root(self):
        assert await ToolCache("", _Recorder()).find_local_tool("tool", "1.0.0") is None

    async def test_required_parameters(self, cache):
        with pytest.raises(InvalidParameterError, match="tool_name"):
            await cache.find_local_tool("", "1.0.0")
        with pytest.raises(InvalidParameterError, match="version_spec"):
            await cache.find_local_tool("tool", "")

    async def test_logs_lookup(self, source, tmp_path):
        recorder = _Recorder()
        cache = ToolCache(str(tmp_path / "cache"), recorder)
        await cache.find_local_tool("tool", "1.0.0")
        assert ("info", "Looking for local tool tool@1.0.0") in recorder.messages
