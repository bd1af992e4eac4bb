from shaderforge.paths import FileInfo, extension, has_extension, join, last_modified, normalize


def test_normalize_collapses_redundant_segments():
    assert normalize("pipelines//./common/../basic.shd") == "pipelines/basic.shd"
    assert normalize("pipelines\\shaders\\basic.shd") == "pipelines/shaders/basic.shd"
    assert normalize("/abs/./x/") == "/abs/x"


def test_join_keeps_absolute_parts():
    assert join("/root/pipelines", "common.sh") == "/root/pipelines/common.sh"
    assert join("/root/pipelines", "/elsewhere/common.sh") == "/elsewhere/common.sh"


def test_file_info_split():
    info = FileInfo.of("pipelines/deferred/basic.shd")
    assert info.dir == "pipelines/deferred/"
    assert info.basename == "basic"
    assert info.extension == "shd"

    bare = FileInfo.of("basic_MAIN1_vs.shb")
    assert bare.dir == ""
    assert bare.basename == "basic_MAIN1_vs"


def test_extension_ignores_hidden_files():
    assert extension("a/b/common.sh") == "sh"
    assert extension("a/.hidden") == ""
    assert has_extension("x_vs.sc", "sc")
    assert not has_extension("x.shd", "sh")


def test_last_modified_missing_file(tmp_path):
    assert last_modified(tmp_path / "nope.shd") is None
    f = tmp_path / "yes.shd"
    f.write_text("")
    assert last_modified(f) is not None
