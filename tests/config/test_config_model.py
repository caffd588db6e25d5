# topmark:header:start
#
#   project      : mdfx
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Tests for config validation, merging and freezing."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from mdfx.compiler.parser import ParseMode
from mdfx.compiler.pipeline import process_text
from mdfx.config.model import Config, MutableConfig
from mdfx.registry.model import ComponentDef, Namespace
from mdfx.rendering.targets import Backend, Target
from tests.conftest import make_config, make_mutable_config, parametrize

if TYPE_CHECKING:
    from mdfx.registry.registry import Registry


def _messages(draft: MutableConfig) -> list[str]:
    return [d.message for d in draft.diagnostics]


def test_valid_table() -> None:
    """Every recognised key is read."""
    draft = MutableConfig.from_toml_dict(
        {
            "target": "local",
            "backend": "svg",
            "assets_dir": "img",
            "strict": True,
            "max_nesting_depth": 8,
            "max_expansion_depth": 4,
            "palette": {"brand": "#FF6600"},
            "partials": {"hero": {"template": "# $1", "args": ["title"], "self_closing": True}},
        }
    )
    assert not draft.diagnostics
    assert draft.target is Target.LOCAL
    assert draft.backend is Backend.SVG
    assert draft.assets_dir == "img"
    assert draft.strict is True
    assert (draft.max_nesting_depth, draft.max_expansion_depth) == (8, 4)
    assert draft.palette == {"brand": "ff6600"}
    assert draft.partials["hero"]["args"] == ["title"]


@parametrize(
    "data, fragment",
    [
        ({"colour": "red"}, "unknown config key 'colour' ignored"),
        ({"target": "myspace"}, "invalid target 'myspace'"),
        ({"backend": "png"}, "invalid backend 'png'"),
        ({"assets_dir": ""}, "'assets_dir' must be a non-empty string"),
        ({"strict": "yes"}, "'strict' must be a boolean"),
        ({"max_nesting_depth": 0}, "'max_nesting_depth' must be a positive integer"),
        ({"max_expansion_depth": True}, "'max_expansion_depth' must be a positive integer"),
        ({"palette": "red"}, "[palette] must be a table"),
        ({"palette": {"brand": "orange"}}, "palette colour 'brand' is not a hex value"),
        ({"partials": {"x": {"args": []}}}, "partial 'x' ignored: 'template' must be a string"),
        ({"partials": {"-x": {"template": "t"}}}, "invalid component id"),
        ({"partials": {"x": {"template": "t", "color": 1}}}, "unknown keys: color"),
        ({"partials": {"x": {"template": "t", "args": "a"}}}, "'args' must be a list of strings"),
        ({"partials": {"x": {"template": "t", "post_process": "shout"}}}, "unknown post_process 'shout'"),
        ({"partials": {"x": {"template": "t", "self_closing": "no"}}}, "'self_closing' must be a boolean"),
    ],
)
def test_invalid_values_become_warnings(data: dict[str, Any], fragment: str) -> None:
    """Bad values never abort loading; each is one warning."""
    draft = MutableConfig.from_toml_dict(data, source="cfg.toml")
    messages = _messages(draft)
    assert len(messages) == 1
    assert messages[0].startswith("cfg.toml: ")
    assert fragment in messages[0]
    assert draft.diagnostics.stats().n_warning
    assert not draft.diagnostics.has_error()


def test_invalid_values_keep_lower_layers() -> None:
    """An invalid value leaves the field unset, so lower layers still apply."""
    base = make_mutable_config(target=Target.NPM)
    merged = base.merge_with(MutableConfig.from_toml_dict({"target": "myspace"}))
    assert merged.target is Target.NPM
    assert len(merged.diagnostics) == 1


def test_merge_scalars_and_tables() -> None:
    """Later layers win per key; tables merge key by key."""
    low = MutableConfig.from_toml_dict(
        {"target": "gitlab", "strict": True, "palette": {"a": "111111", "b": "222222"}}
    )
    high = MutableConfig.from_toml_dict({"palette": {"b": "333333"}, "assets_dir": "img"})
    merged = low.merge_with(high)

    assert merged.target is Target.GITLAB
    assert merged.strict is True
    assert merged.assets_dir == "img"
    assert merged.palette == {"a": "111111", "b": "333333"}


def test_empty_backend_clears_lower_layer() -> None:
    """``backend = ""`` resets an inherited backend to the target's default."""
    low = MutableConfig.from_toml_dict({"backend": "svg"})
    assert low.merge_with(MutableConfig.from_toml_dict({})).backend is Backend.SVG
    assert low.merge_with(MutableConfig.from_toml_dict({"backend": ""})).backend is None


def test_freeze_fills_fallbacks() -> None:
    """A bare draft freezes to the built-in values."""
    config = MutableConfig().freeze()
    assert isinstance(config, Config)
    assert config.target is Target.GITHUB
    assert config.assets_dir == Path("assets/mdfx")
    assert config.strict is False
    assert config.max_nesting_depth == 64
    assert config.max_expansion_depth == 16


def test_frozen_config_is_immutable() -> None:
    """Frozen tables cannot be changed."""
    config = make_config(palette={"brand": "ff6600"})
    with pytest.raises(TypeError):
        config.palette["brand"] = "000000"  # type: ignore[index]


def test_apply_cli_args() -> None:
    """CLI values override; None means not given."""
    draft = make_mutable_config(strict=False).apply_cli_args(
        {"target": "pypi", "backend": None, "assets_dir": Path("out/img"), "strict": True}
    )
    assert draft.target is Target.PYPI
    assert draft.backend is None
    assert draft.assets_dir == "out/img"
    assert draft.strict is True

    unchanged = make_mutable_config(strict=True).apply_cli_args({"strict": False})
    assert unchanged.strict is True


def test_compile_options() -> None:
    """Strictness and limits are passed to the compiler."""
    options = make_config(strict=True, max_nesting_depth=5).compile_options()
    assert options.mode is ParseMode.STRICT
    assert options.max_nesting_depth == 5


def test_build_registry(registry: Registry) -> None:
    """Palette entries and partials are layered onto the base registry."""
    config = MutableConfig.from_toml_dict(
        {
            "palette": {"brand": "ff6600"},
            "partials": {
                "hero": {
                    "template": "{{frame:star}}$1{{/frame}}",
                    "args": ["title"],
                    "self_closing": True,
                }
            },
        }
    ).freeze()

    custom = config.build_registry(registry)
    hero = custom.lookup(Namespace.COMPONENT, "hero")
    assert isinstance(hero, ComponentDef)
    assert custom.resolve_color("brand") == "ff6600"
    assert registry.lookup(Namespace.COMPONENT, "hero") is None

    assert process_text("{{ui:hero:Hi/}}", custom) == "★ Hi ★"
    assert make_config().build_registry(registry) is registry


def test_to_toml_dict_roundtrip() -> None:
    """``dump-config`` output reloads to the same settings."""
    config = make_config(target=Target.LOCAL, backend=Backend.SVG, palette={"brand": "ff6600"})
    again = MutableConfig.from_toml_dict(config.to_toml_dict()).freeze()
    assert again.target is Target.LOCAL
    assert again.backend is Backend.SVG
    assert dict(again.palette) == {"brand": "ff6600"}
    assert not again.diagnostics
