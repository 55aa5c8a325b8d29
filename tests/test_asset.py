import hashlib
import json
import time

import pytest

from assetpipe.errors import AssetWriteError

from tests.infrastructure import JS_ROOT, js, make_manager, touch, write


def _sha1(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def test_body_is_built_once(manager, tmpproj, monkeypatch):
    js(tmpproj, "app.js", "run();\n")
    calls = []
    original = manager.fs.read_text

    def counting(path, encoding="utf-8"):
        calls.append(path.name)
        return original(path, encoding)

    monkeypatch.setattr(manager.fs, "read_text", counting)
    asset = manager.get("app.js")
    assert asset.get_body() == asset.get_body() == "run();\n"
    assert calls == ["app.js"]
    assert str(asset) == "run();\n"


def test_digest_is_sha1_of_body(manager, tmpproj):
    js(tmpproj, "app.js", "run();\n")
    asset = manager.get("app.js")
    assert asset.get_digest() == _sha1("run();\n")
    asset.set_body("other")
    assert asset.get_digest() == _sha1("other")


def test_same_content_same_digest(manager, tmpproj):
    js(tmpproj, "a.js", "same();\n")
    js(tmpproj, "b.js", "same();\n")
    assert manager.get("a.js").get_digest() == manager.get("b.js").get_digest()


def test_names(manager, tmpproj):
    js(tmpproj, "lib/app.min.js", "x();\n")
    asset = manager.get("lib/app.min.js")
    digest = asset.get_digest()
    assert asset.get_basename() == "app.min.js"
    assert asset.get_basename(include_extensions=False) == "app"
    assert asset.get_extensions() == [".min", ".js"]
    assert asset.get_format_extension() == ".js"
    assert asset.get_content_type() == "application/javascript"
    assert asset.get_target_name(include_hash=False) == "app.js"
    assert asset.get_target_name() == f"app-{digest}.js"
    assert asset.get_digest_name() == f"lib/app-{digest}.js"
    assert asset.get_dirname().name == "lib"


def test_lookup(manager, tmpproj):
    js(tmpproj, "app.js", "")
    assert manager.find("ghost") is None
    assert manager["app"].path.name == "app.js"


def test_development_write(manager, tmpproj):
    js(tmpproj, "app.js", "run();\n")
    result = manager.get("app.js").write()
    target = tmpproj / "public" / "assets" / "app.js"
    assert result.path == target
    assert result.url == "/assets/app.js"
    assert result.written
    assert target.read_text(encoding="utf-8") == "run();\n"
    assert len(manager.manifest) == 0


def test_development_write_skips_fresh_target(manager, tmpproj):
    src = js(tmpproj, "app.js", "run();\n")
    asset = manager.get("app.js")
    assert asset.write().written
    assert not asset.write().written

    touch(src, time.time() + 100)
    assert asset.write().written


def test_production_write_is_fingerprinted(prod_manager, tmpproj):
    js(tmpproj, "app.js", "run();\n")
    asset = prod_manager.get("app.js")
    result = asset.write()
    name = f"app-{asset.get_digest()}.js"
    assert result.filename == name
    assert result.url == f"/assets/{name}"
    assert (tmpproj / "public" / "assets" / name).read_text(encoding="utf-8") == asset.get_body()

    manifest = json.loads((tmpproj / "public" / "assets" / ".manifest.json").read_text(encoding="utf-8"))
    assert manifest == {"app.js": name}


def test_manifest_hit_short_circuits(prod_manager, tmpproj, monkeypatch):
    js(tmpproj, "app.js", "run();\n")
    prod_manager.manifest.add("app.js", "app-cached.js")
    asset = prod_manager.get("app.js")

    def boom():
        raise AssertionError("body must not be built")

    monkeypatch.setattr(asset, "get_body", boom)
    result = asset.write()
    assert result.from_manifest
    assert not result.written
    assert result.url == "/assets/app-cached.js"


def test_manifest_ignored_in_development(manager, tmpproj):
    js(tmpproj, "app.js", "run();\n")
    manager.manifest.add("app.js", "app-cached.js")
    asset = manager.get("app.js")
    assert asset.in_manifest() is None
    assert asset.write().url == "/assets/app.js"


def test_last_modified_includes_dependencies(manager, tmpproj):
    a = js(tmpproj, "a.js", "//= require b\nA();\n")
    b = js(tmpproj, "b.js", "B();\n")
    touch(a, 1_000_000_000)
    touch(b, 2_000_000_000)
    assert manager.get("a.js").get_last_modified() == 2_000_000_000


def test_write_failure(manager, tmpproj):
    js(tmpproj, "app.js", "run();\n")
    write(tmpproj / "public", "not a directory")
    with pytest.raises(AssetWriteError) as ei:
        manager.get("app.js").write()
    assert "app.js" in str(ei.value)


def _tree_bundle(tmpproj):
    js(tmpproj, "lib/a.js", "A();\n")
    js(tmpproj, "lib/b.js", "B();\n")
    js(tmpproj, "main.js", "//= require_tree ./lib\nmain();\n")


def test_rewrite_after_tree_entry_removed(tmpproj):
    _tree_bundle(tmpproj)
    target = tmpproj / "public" / "assets" / "main.js"
    assert make_manager(tmpproj).get("main.js").write().written
    assert target.read_text(encoding="utf-8") == "A();\n\nB();\n\nmain();\n"

    (tmpproj / JS_ROOT / "lib" / "b.js").unlink()
    result = make_manager(tmpproj).get("main.js").write()
    assert result.written
    assert target.read_text(encoding="utf-8") == "A();\n\nmain();\n"


def test_rewrite_after_tree_entry_added_with_old_mtime(tmpproj):
    _tree_bundle(tmpproj)
    target = tmpproj / "public" / "assets" / "main.js"
    make_manager(tmpproj).get("main.js").write()

    touch(js(tmpproj, "lib/c.js", "C();\n"), 1_000_000_000)
    result = make_manager(tmpproj).get("main.js").write()
    assert result.written
    assert target.read_text(encoding="utf-8") == "A();\n\nB();\n\nC();\n\nmain();\n"


def test_rewrite_when_target_content_differs(manager, tmpproj):
    js(tmpproj, "app.js", "run();\n")
    target = tmpproj / "public" / "assets" / "app.js"
    write(target, "stale();\n")
    touch(target, time.time() + 100)
    assert manager.get("app.js").write().written
    assert target.read_text(encoding="utf-8") == "run();\n"


def test_tree_directory_is_a_dependency(manager, tmpproj):
    _tree_bundle(tmpproj)
    asset = manager.get("main.js")
    asset.get_body()
    assert (tmpproj / JS_ROOT / "lib").resolve() in asset.dependencies
