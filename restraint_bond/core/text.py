"""알림 문자열 카탈로그 — 키 → 번역 문자열, ${RestraintName} 치환"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from string import Template

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("EN", "JP")


class TextKeys:
    """모드가 쓰는 문자열 키"""

    POWERUP_GENERIC = "BWB_Powerup_Generic"
    POWERUP_1ST = "BWB_Powerup_1st"
    POWERUP_LOW = "BWB_Powerup_Low"
    POWERUP_MEDIUM = "BWB_Powerup_Medium"
    POWERUP_HIGH = "BWB_Powerup_High"
    POWERUP_XHIGH = "BWB_Powerup_XHigh"
    POWERUP_TOO_HIGH = "BWB_Powerup_TooHigh"
    LOCK_URGE = "BWB_LockUrge"
    SELF_LOCK_MEDIUM = "BWB_SelfLock_Medium"
    SELF_LOCK_HIGH = "BWB_SelfLock_High"
    SELF_LOCK_XHIGH = "BWB_SelfLock_XHigh"
    NO_CUT = "BWB_NoCut"
    NO_STRUGGLE = "BWB_NoStruggle"
    NO_UNLOCK = "BWB_NoUnlock"
    NO_REMOVE = "BWB_NoRemove"
    INVENTORY_ACTION_RENAME = "BWB_InventoryAction_Rename"


def supported_language_code(language: str) -> str:
    """아이콘 등 언어별 리소스가 있는 언어 코드. 없으면 EN."""
    language = language.upper()
    return language if language in SUPPORTED_LANGUAGES else "EN"


class TextCatalog:
    """언어별 문자열 저장소"""

    def __init__(self, language: str = "EN") -> None:
        self.language = supported_language_code(language)
        self._texts: dict[str, str] = {}

    def load_from_json(self, path: str | Path) -> int:
        """{"KEY": "text"} 형식 JSON 로드. 반환: 로드된 수량."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw: dict[str, str] = json.load(f)
        self._texts.update(raw)
        logger.info("Loaded %d text keys from %s", len(raw), path)
        return len(raw)

    def add(self, key: str, text: str) -> None:
        self._texts[key] = text

    def get(self, key: str, **params: str) -> str:
        """키 조회 + 파라미터 치환. 키가 없으면 키 자체를 돌려준다."""
        text = self._texts.get(key)
        if text is None:
            logger.warning("Missing text key: %s", key)
            return key
        return Template(text).safe_substitute(params)

    def __contains__(self, key: str) -> bool:
        return key in self._texts
