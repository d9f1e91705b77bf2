"""Tests for mdocs.menu."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdocs.errors import InternalError
from mdocs.menu import MenuBuilder, titlize
from mdocs.models import PackageInfo, Template

_PACKAGE = PackageInfo(name="demo", private=False, absolute_path=Path("/repo"))


def _template(name: str, **overrides: object) -> Template:
    fields: dict[str, object] = {
        "template_path": Path(f"/repo/docs/{name}.template.md"),
        "content": "",
        "dist_path": Path(f"/repo/docs/{name}.md"),
        "dist_path_md_relative": f"/docs/{name}.md",
        "template_path_md_relative": f"/docs/{name}.template.md",
        "filename_base": name,
        "menu_title": titlize(name),
        "package_info": _PACKAGE,
    }
    fields.update(overrides)
    return Template(**fields)  # type: ignore[arg-type]


def _link(name: str, title: str, *, bold: bool = False) -> str:
    label = f"<b>{title}</b>" if bold else title
    return f'<a href="/docs/{name}.md#readme">{label}</a>'


def test_titlize_capitalises_long_words_only() -> None:
    assert titlize("getting-started-with-api") == "Getting Started With api"
    assert titlize("faq") == "faq"


def test_menu_orders_by_numeric_key_with_stable_ties() -> None:
    zero = _template("zero", menu_order=2)
    one = _template("one")
    two = _template("two", menu_order=1)
    three = _template("three")

    menu = MenuBuilder().build(one, [zero, one, two, three])

    assert menu == (
        "<p align='center'>"
        + " &nbsp; | &nbsp; ".join(
            [
                _link("one", "one", bold=True),
                _link("three", "Three"),
                _link("two", "two"),
                _link("zero", "Zero"),
            ]
        )
        + "</p>"
    )


def test_menu_omits_skipped_templates() -> None:
    intro = _template("intro")
    hidden = _template("hidden", menu_skip=True)

    menu = MenuBuilder().build(intro, [intro, hidden])

    assert "hidden" not in menu.lower()


def test_menu_groups_contiguous_sections() -> None:
    intro = _template("intro")
    setup = _template("setup", menu_order=1, menu_section="Guides")
    usage = _template("usage", menu_order=2, menu_section="Guides")
    api = _template("api", menu_order=3)

    menu = MenuBuilder().build(intro, [intro, setup, usage, api])

    guides = f"Guides: {_link('setup', 'Setup')} | {_link('usage', 'Usage')}"
    assert menu == (
        "<p align='center'>"
        + " &nbsp; | &nbsp; ".join([_link("intro", "Intro", bold=True), guides, _link("api", "api")])
        + "</p>"
    )


def test_menu_skipped_member_does_not_split_group() -> None:
    setup = _template("setup", menu_section="Guides")
    draft = _template("draft", menu_section="Guides", menu_skip=True)
    usage = _template("usage", menu_section="Guides")

    menu = MenuBuilder().build(setup, [setup, draft, usage])

    assert menu.count("Guides:") == 1
    assert f"{_link('setup', 'Setup', bold=True)} | {_link('usage', 'Usage')}" in menu


def test_menu_section_change_starts_new_line() -> None:
    setup = _template("setup", menu_section="Guides")
    recipes = _template("recipes", menu_section="Cookbook")
    usage = _template("usage", menu_section="Guides")

    menu = MenuBuilder().build(setup, [setup, recipes, usage])

    assert menu.count("Guides:") == 2
    assert "Cookbook: " in menu


def test_menu_uses_explicit_link_and_title() -> None:
    intro = _template("intro")
    external = _template(
        "external", menu_link="https://example.com/docs", menu_title="Website"
    )

    menu = MenuBuilder(link_suffix="").build(intro, [intro, external])

    assert '<a href="https://example.com/docs">Website</a>' in menu


def test_menu_indent_prefixes_entries() -> None:
    intro = _template("intro", menu_indent=2)
    menu = MenuBuilder().build(intro, [intro])
    assert menu.startswith("<p align='center'>&nbsp; &nbsp; <a ")


def test_apply_replaces_menu_line() -> None:
    intro = _template("intro", content="# Intro\n!MENU\nBody")
    MenuBuilder().apply(intro, [intro])
    assert intro.content.startswith("# Intro\n<p align='center'>")
    assert intro.content.endswith("</p>\nBody")


def test_apply_rejects_menu_line_with_argument() -> None:
    intro = _template("intro", content="# Intro\n!MENU extra\nBody")
    with pytest.raises(InternalError):
        MenuBuilder().apply(intro, [intro])


def test_apply_is_noop_without_menu_line() -> None:
    content = "# Intro\n\nBody\n"
    intro = _template("intro", content=content)
    MenuBuilder().apply(intro, [intro, _template("other")])
    assert intro.content == content
