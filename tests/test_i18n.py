"""Tests for clip_pop.i18n."""

import pytest

from clip_pop.errors import LocaleIOError, LocaleNotFoundError, LocaleParseError
from clip_pop.i18n import LocaleResolver, Translator, locale_candidates


@pytest.fixture
def locale_dirs(tmp_path):
    user = tmp_path / "user"
    bundled = tmp_path / "bundled"
    user.mkdir()
    bundled.mkdir()
    return user, bundled


def write_locale(directory, tag, body):
    path = directory / f"{tag}.yaml"
    path.write_text(body, encoding="utf-8")
    return path


class TestLocaleCandidates:

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("ja-JP", ["ja_jp", "ja", "en"]),
            ("en", ["en"]),
            ("EN-us", ["en_us", "en"]),
            ("de", ["de", "en"]),
            ("zh_Hant-TW", ["zh_hant_tw", "zh_hant", "zh", "en"]),
            ("pt_BR", ["pt_br", "pt", "en"]),
            ("", ["en"]),
            ("ja--JP", ["ja_jp", "ja", "en"]),
        ],
    )
    def test_fallback_chain(self, raw, expected):
        assert locale_candidates(raw) == expected

    def test_en_never_duplicated(self):
        for raw in ("en", "EN", "en-GB", "en_us_posix"):
            assert locale_candidates(raw).count("en") == 1


class TestLocaleResolver:

    def test_user_override_wins_for_same_tag(self, locale_dirs):
        user, bundled = locale_dirs
        write_locale(user, "ja", 'copied: "user"\n')
        write_locale(bundled, "ja", 'copied: "bundled"\n')

        messages = LocaleResolver(user, bundled).resolve("ja-JP")
        assert messages == {"copied": "user"}

    def test_more_specific_bundled_beats_less_specific_user(self, locale_dirs):
        user, bundled = locale_dirs
        write_locale(user, "ja", 'copied: "user ja"\n')
        write_locale(bundled, "ja_jp", 'copied: "bundled ja_jp"\n')

        assert LocaleResolver(user, bundled).resolve("ja-JP") == {"copied": "bundled ja_jp"}

    def test_unsupported_locale_falls_back_to_english(self, locale_dirs):
        user, bundled = locale_dirs
        write_locale(bundled, "en", 'copied: "Copied!"\n')

        assert LocaleResolver(user, bundled).resolve("sw-KE") == {"copied": "Copied!"}

    def test_empty_file_counts_as_found(self, locale_dirs):
        user, bundled = locale_dirs
        write_locale(user, "fr", "")
        write_locale(bundled, "en", 'copied: "Copied!"\n')

        assert LocaleResolver(user, bundled).resolve("fr-CA") == {}

    def test_corrupt_file_does_not_fall_through(self, locale_dirs):
        user, bundled = locale_dirs
        write_locale(user, "fr", "copied: [oops\n")
        write_locale(bundled, "fr", 'copied: "Copié !"\n')
        write_locale(bundled, "en", 'copied: "Copied!"\n')

        with pytest.raises(LocaleParseError, match="failed to parse locale"):
            LocaleResolver(user, bundled).resolve("fr")

    @pytest.mark.parametrize("body", ["- a\n- b\n", "count: 3\n", "nested:\n  key: value\n"])
    def test_non_flat_string_mapping_rejected(self, locale_dirs, body):
        user, bundled = locale_dirs
        write_locale(bundled, "en", body)
        with pytest.raises(LocaleParseError):
            LocaleResolver(user, bundled).resolve("en")

    def test_unreadable_entry_does_not_fall_through(self, locale_dirs):
        user, bundled = locale_dirs
        (user / "en.yaml").mkdir()
        write_locale(bundled, "en", 'copied: "Copied!"\n')

        with pytest.raises(LocaleIOError, match="failed to read locale"):
            LocaleResolver(user, bundled).resolve("en")

    def test_nothing_found(self, locale_dirs):
        user, bundled = locale_dirs
        with pytest.raises(LocaleNotFoundError, match="no locale resources found"):
            LocaleResolver(user, bundled).resolve("ja-JP")

    def test_every_call_rereads_disk(self, locale_dirs):
        user, bundled = locale_dirs
        resolver = LocaleResolver(user, bundled)
        write_locale(bundled, "en", 'copied: "one"\n')
        assert resolver.resolve("en") == {"copied": "one"}
        write_locale(user, "en", 'copied: "two"\n')
        assert resolver.resolve("en") == {"copied": "two"}

    def test_locate_returns_path(self, locale_dirs):
        user, bundled = locale_dirs
        expected = write_locale(bundled, "de", 'copied: "Kopiert!"\n')
        assert LocaleResolver(user, bundled).locate("de-AT") == expected

    def test_user_dir_defaults_to_config_dir(self, config_dir, tmp_path):
        locales = config_dir / "locales"
        locales.mkdir(parents=True)
        write_locale(locales, "en", 'copied: "from config dir"\n')

        resolver = LocaleResolver(bundled_dir=tmp_path / "empty")
        assert resolver.resolve("en-US") == {"copied": "from config dir"}

    def test_bundled_resources_cover_english_fallback(self, tmp_path):
        resolver = LocaleResolver(user_dir=tmp_path)
        assert resolver.resolve("pt-BR")["copied"] == "Copied!"
        assert resolver.resolve("ja-JP")["copied"] == "コピーしました"


class TestTranslator:

    def test_lookup_with_fallback(self):
        tr = Translator({"copied": "Kopiert!", "cleared": ""})
        assert tr.t("copied", "Copied!") == "Kopiert!"
        assert tr.t("cleared", "Cleared") == "Cleared"
        assert tr.t("quit", "Quit") == "Quit"
