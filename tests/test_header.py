import textwrap

import pytest

from assetpipe.processors.header import split_header


@pytest.mark.parametrize("text", [
    "//= require foo\ncode();\n",
    "/* a\n * b\n */\n\nbody {}\n",
    "###\n#= require x\n###\nx = 1\n",
    "no header here\n",
    "",
])
def test_split_is_lossless(text):
    header, body = split_header(text)
    assert header + body == text


def test_line_comments_with_blank_lines_between():
    header, body = split_header("# a\n\n# b\n\ncode\n")
    assert header == "# a\n\n# b\n"
    assert body == "\ncode\n"


def test_block_comment_header():
    text = textwrap.dedent("""\
        /*
         *= require reset
         */
        body { margin: 0; }
    """)
    header, body = split_header(text)
    assert header.endswith(" */\n")
    assert body == "body { margin: 0; }\n"


def test_triple_hash_block():
    header, body = split_header("###\nBanner\n###\n#= require x\nx = 1\n")
    assert header == "###\nBanner\n###\n#= require x\n"
    assert body == "x = 1\n"


def test_single_line_block_comment():
    header, body = split_header("/* license */\n//= require a\nrun();\n")
    assert header == "/* license */\n//= require a\n"
    assert body == "run();\n"


def test_unterminated_block_is_not_header():
    text = "/* never closed\n//= require a\n"
    assert split_header(text) == ("", text)


def test_code_first_means_no_header():
    text = "code();\n//= require a\n"
    assert split_header(text) == ("", text)
