import logging

from shaderforge.dependencies import DependencyGraph
from shaderforge.paths import normalize
from shaderforge.sources import ShaderSourceIndex


def _write_depfile(compiled, variant_name, *deps):
    variant = normalize(compiled / variant_name)
    lines = [f"{variant} : {deps[0] if deps else ''} \\"]
    lines += [f"    {d} \\" for d in deps]
    (compiled / f"{variant_name}.d").write_text("\n".join(lines) + "\n")
    return variant


def _graph(root):
    index = ShaderSourceIndex()
    index.discover(root)
    return DependencyGraph(index)


def test_rebuild_records_includes_and_descriptor(tmp_path):
    compiled = tmp_path / "compiled_gl"
    compiled.mkdir()
    (tmp_path / "basic.shd").write_text("")
    common = normalize(tmp_path / "common.sh")
    variant = _write_depfile(compiled, "basic_MAIN0_vs.shb", normalize(tmp_path / "basic_vs.sc"), common)

    graph = _graph(tmp_path)
    graph.rebuild(compiled)

    assert graph.variants_of(common) == {variant}
    assert graph.variants_of(tmp_path / "basic_vs.sc") == {variant}
    assert graph.variants_of(tmp_path / "basic.shd") == {variant}
    assert str(tmp_path / "basic.shd") in graph


def test_rebuild_drops_previous_edges(tmp_path):
    compiled = tmp_path / "compiled_gl"
    compiled.mkdir()
    (tmp_path / "basic.shd").write_text("")
    old = normalize(tmp_path / "old.sh")
    _write_depfile(compiled, "basic_MAIN0_vs.shb", old)

    graph = _graph(tmp_path)
    graph.rebuild(compiled)
    assert old in graph

    new = normalize(tmp_path / "new.sh")
    _write_depfile(compiled, "basic_MAIN0_vs.shb", new)
    graph.rebuild(compiled)

    assert old not in graph
    assert new in graph


def test_unreadable_depfile_is_logged_and_skipped(tmp_path, caplog):
    compiled = tmp_path / "compiled_gl"
    compiled.mkdir()
    (tmp_path / "basic.shd").write_text("")
    (compiled / "broken.d").mkdir()  # cannot be opened as a file
    variant = _write_depfile(compiled, "basic_MAIN0_fs.shb", normalize(tmp_path / "basic_fs.sc"))

    graph = _graph(tmp_path)
    with caplog.at_level(logging.ERROR):
        graph.rebuild(compiled)

    assert "broken.d" in caplog.text
    assert graph.variants_of(tmp_path / "basic.shd") == {variant}


def test_missing_compiled_dir_gives_empty_graph(tmp_path):
    graph = _graph(tmp_path)
    graph.rebuild(tmp_path / "compiled_gl")
    assert len(graph) == 0


def test_descriptors_for_fans_out_once_per_descriptor(tmp_path):
    compiled = tmp_path / "compiled_gl"
    compiled.mkdir()
    (tmp_path / "a.shd").write_text("")
    (tmp_path / "b.shd").write_text("")
    common = normalize(tmp_path / "common.sh")
    for name in ("a_MAIN0_vs.shb", "a_MAIN0_fs.shb", "b_MAIN0_vs.shb", "orphan_MAIN0_vs.shb"):
        _write_depfile(compiled, name, common)

    graph = _graph(tmp_path)
    graph.rebuild(compiled)

    assert graph.descriptors_for(common) == [
        normalize(tmp_path / "a.shd"),
        normalize(tmp_path / "b.shd"),
    ]
