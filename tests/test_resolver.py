from pathlib import Path

from assetpipe.resolver import PathResolver

from tests.infrastructure import write


def _resolver(tmp_path: Path) -> PathResolver:
    return PathResolver([tmp_path / "one", tmp_path / "two"], [".js", ".css"])


def test_first_root_wins(tmp_path: Path):
    write(tmp_path / "one" / "app.js", "1")
    write(tmp_path / "two" / "app.js", "2")
    assert _resolver(tmp_path).resolve("app.js") == (tmp_path / "one" / "app.js").resolve()


def test_extension_appended_in_configured_order(tmp_path: Path):
    write(tmp_path / "one" / "app.css", "")
    write(tmp_path / "one" / "app.js", "")
    assert _resolver(tmp_path).resolve("app").name == "app.js"


def test_root_order_beats_extension_order(tmp_path: Path):
    write(tmp_path / "one" / "app.css", "")
    write(tmp_path / "two" / "app.js", "")
    assert _resolver(tmp_path).resolve("app") == (tmp_path / "one" / "app.css").resolve()


def test_preferred_extension(tmp_path: Path):
    write(tmp_path / "one" / "app.css", "")
    write(tmp_path / "one" / "app.js", "")
    assert _resolver(tmp_path).resolve("app", [".css"]).name == "app.css"


def test_directory_resolves_to_index(tmp_path: Path):
    write(tmp_path / "two" / "widgets" / "index.js", "")
    found = _resolver(tmp_path).resolve("widgets")
    assert found == (tmp_path / "two" / "widgets" / "index.js").resolve()


def test_directory_without_index_returns_directory(tmp_path: Path):
    write(tmp_path / "one" / "lib" / "a.js", "")
    assert _resolver(tmp_path).resolve("lib") == (tmp_path / "one" / "lib").resolve()


def test_directory_index_rule_can_be_disabled(tmp_path: Path):
    write(tmp_path / "one" / "lib" / "index.js", "")
    assert _resolver(tmp_path).resolve("lib", index=False) == (tmp_path / "one" / "lib").resolve()


def test_absolute_path_is_not_checked(tmp_path: Path):
    missing = tmp_path / "nowhere" / "x.js"
    assert _resolver(tmp_path).resolve(str(missing)) == missing.resolve()


def test_not_found(tmp_path: Path):
    assert _resolver(tmp_path).resolve("ghost") is None


def test_resolution_is_idempotent(tmp_path: Path):
    write(tmp_path / "two" / "deep" / "x.js", "")
    resolver = _resolver(tmp_path)
    first = resolver.resolve("deep/x")
    assert first is not None
    assert all(resolver.resolve("deep/x") == first for _ in range(3))
