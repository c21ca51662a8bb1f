"""API request/response schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from restraint_bond.core.host import StruggleAction


# === Request Schemas ===


class EquipRequest(BaseModel):
    """구속구 장착 요청"""

    variant_id: str = Field(..., min_length=1, description="variant ID")


class GroupRequest(BaseModel):
    """착용 부위 지정 요청"""

    group: str = Field(..., min_length=1, description="착용 부위 (ItemArms 등)")


class LockRequestBody(BaseModel):
    """인벤토리 Lock 클릭 요청"""

    group: str = Field(..., min_length=1)
    lock_type: str = Field("Red", min_length=1, description="자물쇠 종류")


class AdvanceRequest(BaseModel):
    """층 이동 요청. target_floor 생략 시 다음 층."""

    target_floor: Optional[int] = Field(None, ge=0)


class StruggleRequestBody(BaseModel):
    """몸부림/제거 요청"""

    group: str = Field(..., min_length=1)
    action: StruggleAction
    query: bool = Field(False, description="가능 여부만 조회 (부작용 없음)")


class RenameRequest(BaseModel):
    """이름 변경 단계 요청"""

    group: str = Field(..., min_length=1)
    step: Literal["begin", "input", "commit", "cancel"]
    text: str = Field("", max_length=60)


# === Response Schemas ===


class EffectInfo(BaseModel):
    """효과 수치"""

    original: str
    trigger: str
    power: float
    base_power: Optional[float] = None


class BondInfo(BaseModel):
    """모드 소유 필드"""

    is_new_restraint: bool
    bond_level: Optional[int] = None
    lock_level: int = 0
    has_new_lock: bool = False
    true_name: Optional[str] = None


class WornItemInfo(BaseModel):
    """착용 중인 구속구"""

    group: str
    name: str
    variant_id: Optional[str] = None
    display_name: str
    lock: Optional[str] = None
    bond: BondInfo
    effects: list[EffectInfo] = []
    actions: list[str] = []


class NotificationInfo(BaseModel):
    """호스트 알림"""

    text: str
    color: str
    priority: int
    duration: int


class GameStateResponse(BaseModel):
    """게임 상태 응답"""

    current_floor: int
    highest_floor: int
    worn: list[WornItemInfo] = []
    inventory: list[str] = []
    notifications: list[NotificationInfo] = []


class AdvanceResponse(BaseModel):
    """층 이동 응답"""

    success: bool
    current_floor: int
    highest_floor: int
    bonded: list[dict[str, Optional[int | str]]] = []


class StruggleResponse(BaseModel):
    """몸부림 응답"""

    group: str
    action: StruggleAction
    result: str
    query: bool


class RenameResponse(BaseModel):
    """이름 변경 응답"""

    step: str
    editing: bool
    draft: str = ""
    display_name: str


class SaveResponse(BaseModel):
    """저장 응답"""

    success: bool
    saved: int
