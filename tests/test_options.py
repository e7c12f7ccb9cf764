"""Tests for the process wide options"""

import pytest

from charvec import OPTIONS, CharVec, Options
from charvec.options import DEFAULTS


class TestOptions:
    """Test reading and writing options."""

    def test_defaults(self):
        """A new Options holds the defaults."""
        opts = Options()
        assert opts["normal_form"] == "NFC"
        assert opts["check_views"] is True
        assert set(opts.keys()) == set(DEFAULTS)

    def test_init_overrides(self):
        """Options passed in replace the defaults."""
        opts = Options({"normal_form": "NFD"})
        assert opts["normal_form"] == "NFD"
        assert opts["check_views"] is True

    def test_contains_and_get(self):
        """Mapping style access."""
        opts = Options()
        assert "normal_form" in opts
        assert "missing" not in opts
        assert opts.get("missing", 5) == 5

    def test_setitem(self):
        """Setting a known option."""
        opts = Options()
        opts["check_views"] = False
        assert opts["check_views"] is False

    def test_unknown_key(self):
        """Unknown options are rejected."""
        with pytest.raises(KeyError):
            Options()["colour"] = "red"
        with pytest.raises(KeyError):
            Options({"colour": "red"})

    @pytest.mark.parametrize(
        "key, value",
        [("normal_form", "NFX"), ("normal_form", 3), ("check_views", "yes")],
    )
    def test_bad_values(self, key, value):
        """Invalid values are rejected."""
        with pytest.raises(ValueError):
            Options()[key] = value

    def test_update_is_all_or_nothing(self):
        """A bad update changes nothing."""
        opts = Options()
        with pytest.raises(ValueError):
            opts.update({"check_views": False, "normal_form": "bad"})
        assert opts["check_views"] is True

    def test_override(self):
        """override restores the previous values."""
        with OPTIONS.override(normal_form="NFD") as opts:
            assert opts is OPTIONS
            assert len(CharVec("\u00e9")) == 2
        assert OPTIONS["normal_form"] == "NFC"
        assert len(CharVec("\u00e9")) == 1

    def test_override_restores_on_error(self):
        """override restores the values when the block raises."""
        with pytest.raises(RuntimeError):
            with OPTIONS.override(check_views=False):
                raise RuntimeError("boom")
        assert OPTIONS["check_views"] is True

    def test_reset(self):
        """reset goes back to the defaults."""
        opts = Options({"normal_form": None})
        opts.reset()
        assert opts["normal_form"] == "NFC"
