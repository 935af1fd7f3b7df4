"""
Tests for configuration loading.
"""

from argparse import Namespace

from config import AppConfig, load_config


class TestDefaults:

    def test_defaults(self):
        config = AppConfig()
        assert config.source_mode == "tool"
        assert config.source.tool_timeout == 30.0
        assert config.cache.enabled is False
        assert config.playback.poll_interval == 0.1
        assert config.playback.repeat_mark_span == 10.0

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.yaml")
        assert config == AppConfig()


class TestLoadYaml:

    def test_values_and_unknown_keys(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "source:\n"
            "  mode: page\n"
            "  language: de\n"
            "  bogus: 1\n"
            "cache:\n"
            "  enabled: true\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.source.mode == "page"
        assert config.source.language == "de"
        assert config.cache.enabled is True
        assert config.asr.model == "base.en"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == AppConfig()

    def test_unknown_mode_falls_back(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("source:\n  mode: carrier-pigeon\n", encoding="utf-8")
        assert load_config(path).source.mode == "tool"

    def test_shipped_config_loads(self):
        config = load_config()
        assert config.source.mode in ("page", "tool")


class TestUpdateFromArgs:

    def test_overrides(self, tmp_path):
        config = AppConfig()
        args = Namespace(mode="page", subtitles_dir=tmp_path, cache=True, model="small.en")
        config.update_from_args(args)
        assert config.source.mode == "page"
        assert config.source.subtitles_dir == str(tmp_path)
        assert config.cache.enabled is True
        assert config.asr.model == "small.en"

    def test_unset_args_keep_values(self):
        config = AppConfig()
        config.update_from_args(Namespace(mode=None, subtitles_dir=None, cache=False, model=None))
        assert config == AppConfig()
