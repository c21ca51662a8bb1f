"""TextCatalog 테스트"""

from restraint_bond.core.text import TextCatalog, TextKeys, supported_language_code


class TestTextCatalog:
    def test_substitution(self, texts):
        text = texts.get(TextKeys.NO_CUT, RestraintName="Spot")
        assert text == "Your Spot refuses to be cut."

    def test_missing_param_left_as_is(self, texts):
        assert "${RestraintName}" in texts.get(TextKeys.NO_CUT)

    def test_missing_key_returns_key(self):
        catalog = TextCatalog()
        assert catalog.get("BWB_Unknown") == "BWB_Unknown"

    def test_add_and_contains(self):
        catalog = TextCatalog()
        catalog.add("k", "hello ${who}")
        assert "k" in catalog
        assert catalog.get("k", who="you") == "hello you"

    def test_all_keys_present(self, texts):
        keys = [v for k, v in vars(TextKeys).items() if not k.startswith("_")]
        assert all(key in texts for key in keys)


class TestLanguageCode:
    def test_supported(self):
        assert supported_language_code("jp") == "JP"
        assert supported_language_code("EN") == "EN"

    def test_fallback(self):
        assert supported_language_code("DE") == "EN"
        assert TextCatalog("CN").language == "EN"
