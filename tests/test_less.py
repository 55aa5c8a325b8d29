from pathlib import Path

from assetpipe.processors import LessProcessor

from tests.infrastructure import css


def _compact(text: str) -> str:
    return "".join(text.split())


THEME = """\
@main: red;
.bordered { border: 1px solid @main; }
.rounded(@radius) { border-radius: @radius; }
.box {
  .bordered;
  .rounded(4px);
  color: @main;
}
"""


def test_variables_and_mixins_are_compiled():
    out = _compact(LessProcessor(THEME, source=Path("theme.less")).render())
    assert "@main" not in out
    assert "color:red" in out
    assert "border:1pxsolidred" in out
    assert "border-radius:4px" in out


def test_plain_css_passes_through():
    data = "a { color: @not-a-variable; }\n"
    assert LessProcessor(data, source=Path("site.css")).render() == data
    assert LessProcessor(data).render() == data


def test_less_asset_publishes_as_css(manager, tmpproj):
    css(tmpproj, "theme.less", THEME)
    tag = manager.render("theme.less")
    assert tag == '<link rel="stylesheet" type="text/css" href="/assets/theme.css">'

    published = tmpproj / "public" / "assets" / "theme.css"
    assert "border-radius:4px" in _compact(published.read_text(encoding="utf-8"))
    assert not (tmpproj / "public" / "assets" / "theme.less").exists()


def test_less_asset_production_name(prod_manager, tmpproj):
    css(tmpproj, "theme.less", THEME)
    asset = prod_manager.get("theme")
    result = asset.write()
    assert result.filename == f"theme-{asset.get_digest()}.css"
    assert prod_manager.manifest.get("theme.less") == result.filename


def test_required_less_is_compiled_into_css_bundle(manager, tmpproj):
    css(tmpproj, "theme.less", THEME)
    css(tmpproj, "site.css", "/*\n *= require theme.less\n */\nbody { margin: 0; }\n")
    body = _compact(manager.get("site.css").get_body())
    assert "@main" not in body
    assert body.index("color:red") < body.index("body{margin:0;}")
