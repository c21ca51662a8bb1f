"""제거 거부 판정 테스트"""

import pytest

from restraint_bond.core.host import StruggleAction
from restraint_bond.core.removal import magic_unlock_refusal, struggle_refusal
from restraint_bond.core.text import TextKeys


class TestStruggleRefusal:
    @pytest.mark.parametrize(
        "action, key",
        [
            (StruggleAction.REMOVE, TextKeys.NO_REMOVE),
            (StruggleAction.UNLOCK, TextKeys.NO_REMOVE),
            (StruggleAction.CUT, TextKeys.NO_CUT),
            (StruggleAction.STRUGGLE, TextKeys.NO_STRUGGLE),
            (StruggleAction.PICK, None),
        ],
    )
    def test_level_eight(self, config, action, key):
        assert struggle_refusal(8, action, config) == key

    def test_thresholds_are_exclusive(self, config):
        assert struggle_refusal(5, StruggleAction.CUT, config) is None
        assert struggle_refusal(6, StruggleAction.CUT, config) == TextKeys.NO_CUT
        assert struggle_refusal(6, StruggleAction.STRUGGLE, config) is None
        assert struggle_refusal(7, StruggleAction.STRUGGLE, config) == TextKeys.NO_STRUGGLE
        assert struggle_refusal(7, StruggleAction.REMOVE, config) is None

    def test_unbonded(self, config):
        assert struggle_refusal(None, StruggleAction.REMOVE, config) is None


class TestMagicUnlockRefusal:
    def test_refused_above_stop_remove(self, config):
        assert magic_unlock_refusal(8, config) == TextKeys.NO_UNLOCK

    def test_allowed(self, config):
        assert magic_unlock_refusal(7, config) is None
        assert magic_unlock_refusal(None, config) is None
