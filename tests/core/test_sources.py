import logging

from shaderforge.paths import normalize
from shaderforge.sources import ShaderSourceIndex


def test_discover_finds_nested_and_skips_hidden(tmp_path):
    (tmp_path / "deferred").mkdir()
    (tmp_path / ".git").mkdir()
    (tmp_path / "basic.shd").write_text("")
    (tmp_path / "deferred" / "mesh.shd").write_text("")
    (tmp_path / ".git" / "ghost.shd").write_text("")
    (tmp_path / "basic_vs.sc").write_text("")

    index = ShaderSourceIndex()
    found = index.discover(tmp_path)

    assert found == sorted(
        [normalize(tmp_path / "basic.shd"), normalize(tmp_path / "deferred" / "mesh.shd")]
    )
    assert len(index) == 2
    assert str(tmp_path / "basic.shd") in index


def test_discover_is_idempotent(tmp_path):
    (tmp_path / "a.shd").write_text("")
    (tmp_path / "b.shd").write_text("")

    index = ShaderSourceIndex()
    first = index.discover(tmp_path)
    second = index.discover(tmp_path)

    assert first == second == index.paths


def test_discover_missing_root_is_empty(tmp_path):
    assert ShaderSourceIndex().discover(tmp_path / "nope") == []


def test_source_from_binary_basename(tmp_path):
    (tmp_path / "basic.shd").write_text("")
    index = ShaderSourceIndex()
    index.discover(tmp_path)

    assert index.source_from_binary_basename("basic_MAIN1_vs") == normalize(tmp_path / "basic.shd")


def test_source_lookup_miss_is_informational(tmp_path, caplog):
    index = ShaderSourceIndex()
    index.discover(tmp_path)

    with caplog.at_level(logging.INFO):
        assert index.source_from_binary_basename("orphan_MAIN0_fs") is None

    assert [r.levelno for r in caplog.records] == [logging.INFO]
    assert "orphan_MAIN0_fs" in caplog.text


def test_ambiguous_lookup_first_match_wins(tmp_path, caplog):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "a" / "mesh.shd").write_text("")
    (tmp_path / "b" / "mesh.shd").write_text("")
    index = ShaderSourceIndex()
    index.discover(tmp_path)

    with caplog.at_level(logging.WARNING):
        src = index.source_from_binary_basename("mesh_MAIN0_vs")

    assert src == normalize(tmp_path / "a" / "mesh.shd")
    assert "several sources" in caplog.text


def test_add_new_descriptor(tmp_path):
    index = ShaderSourceIndex()
    assert index.add(tmp_path / "late.shd")
    assert not index.add(tmp_path / "late.shd")
    assert len(index) == 1
