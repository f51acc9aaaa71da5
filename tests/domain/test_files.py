"""Tests for AssetFile and the rename rules."""

import pytest

from assetctl.domain.errors import TransformError
from assetctl.domain.files import AssetFile, append_min, is_partial, replace_suffix


def _asset(relative: str = "pages/home.css", contents: bytes = b"a{}") -> AssetFile:
    return AssetFile(source=f"src/{relative}", relative=relative, contents=contents)


class TestAssetFile:
    def test_properties(self) -> None:
        asset = _asset()
        assert asset.name == "home.css"
        assert asset.suffix == ".css"
        assert asset.text == "a{}"

    def test_with_contents_accepts_text(self) -> None:
        updated = _asset().with_contents("b{}")
        assert updated.contents == b"b{}"

    def test_copies_leave_original_untouched(self) -> None:
        asset = _asset()
        renamed = asset.with_relative("x.css").with_source_map({"version": 3})
        assert asset.relative == "pages/home.css"
        assert asset.source_map is None
        assert renamed.source_map == {"version": 3}

    def test_text_rejects_invalid_utf8(self) -> None:
        asset = AssetFile(source="src/js/a.js", relative="a.js", contents=b"\xff\xfe")
        with pytest.raises(TransformError, match="Not valid UTF-8") as exc_info:
            _ = asset.text
        assert exc_info.value.path == "src/js/a.js"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            _asset().relative = "other.css"  # type: ignore[misc]


class TestAppendMin:
    @pytest.mark.parametrize(
        ("relative", "expected"),
        [
            ("main.css", "main.min.css"),
            ("pages/home.css", "pages/home.min.css"),
            ("project.js", "project.min.js"),
        ],
    )
    def test_inserts_before_extension(self, relative: str, expected: str) -> None:
        assert append_min(relative) == expected

    @pytest.mark.parametrize("relative", ["main.css.map", "pages/home.css.map", "x.map"])
    def test_never_renames_maps(self, relative: str) -> None:
        assert append_min(relative) == relative


class TestHelpers:
    def test_replace_suffix(self) -> None:
        assert replace_suffix("blog/post.kit", ".html") == "blog/post.html"

    def test_is_partial(self) -> None:
        assert is_partial("components/_buttons.scss")
        assert not is_partial("components/buttons.scss")


class TestTransformError:
    def test_str_includes_path(self) -> None:
        err = TransformError("unexpected }", path="src/sass/main.scss")
        assert str(err) == "src/sass/main.scss: unexpected }"
        assert err.message == "unexpected }"

    def test_str_without_path(self) -> None:
        assert str(TransformError("boom")) == "boom"
