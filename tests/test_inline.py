"""Tests for mdocs.inline."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdocs.errors import UsageError
from mdocs.inline import InlineExpander, strip_hide_marker, substitute_arguments
from mdocs.models import PackageInfo, RepoContext
from mdocs.paths import PathResolver
from tests._fixtures.repo_builder import RepoBuilder


def _expander(root: Path) -> InlineExpander:
    context = RepoContext(repo_root=root, repo_base=root, package_info=None, monorepo_info=None)
    return InlineExpander(PathResolver(context))


def _package(root: Path, *, private: bool = False) -> PackageInfo:
    return PackageInfo(name="my-lib", private=private, absolute_path=root)


def test_substitute_arguments_is_zero_indexed() -> None:
    text = "!ARGUMENT-0|!ARGUMENT-1|!ARGUMENT-2|!ARGUMENTS|!ARGUMENT-7"
    result = substitute_arguments(text, ["util.md", "foo", "bar"])
    assert result == "util.md|foo|bar|foo bar|!ARGUMENT-7"


def test_substitute_arguments_does_not_confuse_multi_digit_indexes() -> None:
    inputs = [f"a{i}" for i in range(11)]
    assert substitute_arguments("!ARGUMENT-10 !ARGUMENT-1", inputs) == "a10 a1"


def test_strip_hide_marker_reports_presence() -> None:
    assert strip_hide_marker("a\n!HIDE-SOURCE-PATH\nb") == ("a\nb", True)
    assert strip_hide_marker("a\n  !HIDE-SOURCE-PATH\nb") == ("a\n  !HIDE-SOURCE-PATH\nb", False)


def test_expand_leaves_plain_content_untouched(tmp_path: Path) -> None:
    content = "# Title\n\nNo directives here.\n"
    assert _expander(tmp_path).expand(content, tmp_path / "a.template.md", None) == content


def test_expand_inlines_file_with_source_comment_and_arguments(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write({"snippets/util.md": "print(!ARGUMENT-1)\n!ARGUMENT-0 !ARGUMENTS\n\n\n"})
    content = "Intro\n!INLINE util.md foo bar\nOutro"

    result = _expander(root).expand(content, root / "readme.template.md", None)

    assert result == "Intro\n// util.md\n\nprint(foo)\nutil.md foo bar\nOutro"


def test_expand_hide_source_path_flag(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write({"snippets/code.js": "run();\n"})
    content = "!INLINE ./snippets/code.js --hide-source-path\nDone"

    result = _expander(root).expand(content, root / "readme.template.md", None)

    assert result == "run();\nDone"


def test_expand_hide_source_path_marker_overrides_missing_flag(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write({"snippets/code.js": "!HIDE-SOURCE-PATH\nrun();\n"})
    content = "!INLINE ./snippets/code.js\nDone"

    result = _expander(root).expand(content, root / "readme.template.md", None)

    assert result == "run();\nDone"
    assert "!HIDE-SOURCE-PATH" not in result
    assert "// ./snippets/code.js" not in result


def test_expand_resolves_nested_inlines_relative_to_their_file(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write(
        {
            "docs/a.md": "A start\n!INLINE ./sub/b.md\nA end\n",
            "docs/sub/b.md": "!INLINE ./c.md --hide-source-path\n",
            "docs/sub/c.md": "deep\n",
        }
    )

    result = _expander(root).expand("!INLINE ./docs/a.md", root / "readme.template.md", None)

    assert result.startswith("// ./docs/a.md\n\nA start\n// ./sub/b.md\n\ndeep\n")
    assert result.index("deep") < result.index("A end")


def test_expand_substitutes_arguments_before_nested_expansion(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write(
        {
            "docs/wrapper.md": "!INLINE ./!ARGUMENT-1.md --hide-source-path\n",
            "docs/target.md": "target body\n",
        }
    )

    result = _expander(root).expand(
        "!INLINE ./docs/wrapper.md target --hide-source-path", root / "readme.template.md", None
    )

    assert result == "target body\n\n"


def test_expand_rejects_self_inclusion(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write({"readme.template.md": "!INLINE ./readme.template.md\n"})
    template = root / "readme.template.md"

    with pytest.raises(UsageError, match="Inline cycle"):
        _expander(root).expand(template.read_text(encoding="utf-8"), template, None)


def test_expand_rejects_transitive_cycles(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write(
        {
            "docs/a.md": "!INLINE ./b.md\n",
            "docs/b.md": "!INLINE ./a.md\n",
        }
    )

    with pytest.raises(UsageError) as excinfo:
        _expander(root).expand("!INLINE ./docs/a.md", root / "readme.template.md", None)
    assert "a.md -> " in str(excinfo.value)


def test_expand_allows_repeated_sibling_inlines(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write({"docs/note.md": "note\n"})
    content = "!INLINE ./docs/note.md --hide-source-path\n!INLINE ./docs/note.md --hide-source-path"

    result = _expander(root).expand(content, root / "readme.template.md", None)

    assert result == "note\nnote\n"


def test_expand_requires_a_path(tmp_path: Path) -> None:
    with pytest.raises(UsageError, match="requires a file path"):
        _expander(tmp_path).expand("!INLINE\n", tmp_path / "readme.template.md", None)


def test_expand_rewrites_package_imports(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write(
        {
            "examples/usage.js": (
                "const lib = require('..');\n"
                "import { helper } from '..';\n"
                "import other from '../other';\n"
            ),
        }
    )

    result = _expander(root).expand(
        "!INLINE /examples/usage.js", root / "readme.template.md", _package(root)
    )

    assert "require('my-lib')" in result
    assert "import { helper } from 'my-lib';" in result
    assert "import other from '../other';" in result
    assert result.startswith("// /examples/usage.js\n\n")


def test_expand_skips_import_rewrite_for_private_packages(repo_builder: RepoBuilder) -> None:
    root = repo_builder.path()
    repo_builder.write({"examples/usage.js": "const lib = require('..');\n"})

    result = _expander(root).expand(
        "!INLINE /examples/usage.js", root / "readme.template.md", _package(root, private=True)
    )

    assert "require('..')" in result
