"""Tests for layer options and their environment overrides."""

from dynamic_segmentation import LayerOptions


class TestLayerOptions:
    def test_defaults(self):
        options = LayerOptions()
        assert (options.id_attribute, options.start_attribute, options.end_attribute, options.style_attribute) == (
            "id",
            "start",
            "end",
            "value",
        )
        assert options.weight == 4
        assert options.fallback_color == "grey"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DYNSEG_ID_ATTRIBUTE", "road_id")
        monkeypatch.setenv("DYNSEG_STYLE_ATTRIBUTE", "condition")
        monkeypatch.setenv("DYNSEG_WEIGHT", "6")
        options = LayerOptions.from_env()
        assert options.id_attribute == "road_id"
        assert options.style_attribute == "condition"
        assert options.weight == 6
        assert options.start_attribute == "start"

    def test_bad_env_values_keep_defaults(self, monkeypatch):
        monkeypatch.setenv("DYNSEG_WEIGHT", "thick")
        monkeypatch.setenv("DYNSEG_FALLBACK_COLOR", "   ")
        options = LayerOptions.from_env()
        assert options.weight == 4
        assert options.fallback_color == "grey"
