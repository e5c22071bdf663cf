import pytest

from interface.constants import LANG_PACK
from interface.i18n import CATALOG, available_languages, effective_lang, translate


@pytest.fixture(autouse=True)
def no_lang_env(monkeypatch):
    monkeypatch.delenv("ADDAE_LANG", raising=False)


def test_tests_default_to_english():
    assert effective_lang("ru") == "en"
    assert translate("TAB_TASKS") == "Tasks"


def test_env_override_wins(monkeypatch):
    monkeypatch.setenv("ADDAE_LANG", "ru")
    assert effective_lang() == "ru"
    assert translate("TAB_TASKS") == "Задачи"


def test_unknown_env_lang_is_ignored(monkeypatch):
    monkeypatch.setenv("ADDAE_LANG", "xx")
    assert effective_lang() == "en"


def test_every_language_has_every_english_key():
    for lang, values in CATALOG.items():
        assert set(LANG_PACK["en"]) <= set(values), lang


def test_catalog_leaves_source_pack_alone():
    missing = set(LANG_PACK["en"]) - set(LANG_PACK["ru"])
    assert missing
    key = sorted(missing)[0]
    assert CATALOG["ru"][key] == LANG_PACK["en"][key]
    assert CATALOG["ru"]["TAB_TASKS"] == "Задачи"


def test_available_languages():
    assert available_languages() == ["en", "ru"]


def test_stored_lang_used_outside_pytest(monkeypatch, tmp_path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("lang: ru\n", encoding="utf-8")
    monkeypatch.setenv("ADDAE_CONFIG", str(cfg))
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    assert effective_lang() == "ru"
    assert effective_lang("en") == "en"


def test_formatting_and_missing_placeholders():
    assert translate("COMPLETED_HIDDEN", count=2).startswith("2 ")
    assert translate("ERROR_PREFIX") == "Error: {message}"


def test_unknown_key_returns_key():
    assert translate("NO_SUCH_KEY") == "NO_SUCH_KEY"
