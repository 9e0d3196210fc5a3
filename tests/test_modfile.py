from __future__ import annotations

import pytest

from corpus.application.modfile import module_path


@pytest.mark.parametrize("go_mod, expected", [
    ("module github.com/foo/bar\n\ngo 1.21\n", "github.com/foo/bar"),
    ("// a comment\nmodule example.com/x // trailing\n", "example.com/x"),
    ("\tmodule   example.com/tabs\r\n", "example.com/tabs"),
    ('module "example.com/quoted"\n', "example.com/quoted"),
    ("module `example.com/raw`\n", "example.com/raw"),
    ("go 1.20\nrequire golang.org/x/mod v0.14.0\nmodule late.example/m\n", "late.example/m"),
])
def test_module_path(go_mod, expected):
    assert module_path(go_mod) == expected


@pytest.mark.parametrize("go_mod", [
    "",
    "go 1.21\n",
    "module\n",
    "modulefoo bar\n",
    "// module example.com/commented\n",
    'module "unterminated\n',
    'module "example.com/x" extra\n',
    "module `bad`tick`\n",
])
def test_no_module_path(go_mod):
    assert module_path(go_mod) == ""


@pytest.mark.parametrize("go_mod, expected", [
    ('module "example.com/\\x41"\n', "example.com/A"),
    ('module "example.com/\\101"\n', "example.com/A"),
    ('module "example.com/caf\\u00e9"\n', "example.com/café"),
    ('module "example.com/\\U0001F600"\n', "example.com/\U0001F600"),
    ('module "example.com/tab\\tsep"\n', "example.com/tab\tsep"),
])
def test_go_string_escapes(go_mod, expected):
    assert module_path(go_mod) == expected


@pytest.mark.parametrize("go_mod", [
    'module "example.com\\/x"\n',
    'module "example.com/\\\'x"\n',
    'module "example.com/\\x4"\n',
    'module "example.com/\\400"\n',
    'module "example.com/\\uD800"\n',
    'module "example.com/\\xff"\n',
    'module "example.com/"x"\n',
])
def test_invalid_go_string_escapes(go_mod):
    assert module_path(go_mod) == ""
