"""Unit tests for theme management."""

from pathlib import Path

import pytest
from rich.theme import Theme

from saferm.core.theme import ThemeColors, get_rich_theme, load_theme


class TestThemeColors:
    """Tests for ThemeColors validation."""

    def test_defaults_valid(self) -> None:
        """Default colors pass validation."""
        assert ThemeColors().trashed.startswith("#")

    @pytest.mark.parametrize("value", ["red", "#12", "#zzzzzz"])
    def test_invalid_colors(self, value: str) -> None:
        """Non-hex colors are rejected."""
        with pytest.raises(ValueError):
            ThemeColors(info=value)

    def test_short_hex_accepted(self) -> None:
        """#RGB is accepted."""
        assert ThemeColors(info="#abc").info == "#abc"


class TestLoadTheme:
    """Tests for load_theme."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """No override file gives defaults."""
        assert load_theme(tmp_path / "theme.toml") == ThemeColors()

    def test_partial_override(self, tmp_path: Path) -> None:
        """Overrides replace only the given colors."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nerror = "#ff0000"\n')
        theme = load_theme(path)
        assert theme.error == "#ff0000"
        assert theme.info == ThemeColors().info

    def test_invalid_override_falls_back(self, tmp_path: Path) -> None:
        """Invalid colors fall back to defaults."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nerror = "crimson"\n')
        assert load_theme(path) == ThemeColors()

    def test_broken_toml_falls_back(self, tmp_path: Path) -> None:
        """Unparseable files fall back to defaults."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")
        assert load_theme(path) == ThemeColors()


class TestRichTheme:
    """Tests for get_rich_theme."""

    def test_styles_present(self) -> None:
        """Every style used by the CLI is defined."""
        theme = get_rich_theme(ThemeColors())
        assert isinstance(theme, Theme)
        for name in ("info", "success", "warning", "error", "muted", "trashed", "bold_header"):
            assert name in theme.styles
