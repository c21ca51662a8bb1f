"""Game API endpoints — 레퍼런스 호스트 샌드박스 조작"""

from fastapi import APIRouter, Depends, HTTPException, Request

from restraint_bond.api.schemas import (
    AdvanceRequest,
    AdvanceResponse,
    BondInfo,
    EffectInfo,
    EquipRequest,
    GameStateResponse,
    GroupRequest,
    LockRequestBody,
    NotificationInfo,
    RenameRequest,
    RenameResponse,
    SaveResponse,
    StruggleRequestBody,
    StruggleResponse,
    WornItemInfo,
)
from restraint_bond.core.errors import ConsistencyFault
from restraint_bond.core.item.models import Wearable
from restraint_bond.core.logging import get_logger
from restraint_bond.modules.bonding.module import BondingModule
from restraint_bond.services.dungeon_host import DRAW_STATE_INVENTORY, DungeonHost
from restraint_bond.services.save_service import SaveService

logger = get_logger(__name__)

router = APIRouter(prefix="/game", tags=["game"])


def get_host(request: Request) -> DungeonHost:
    """DungeonHost 인스턴스 반환 (의존성 주입)"""
    host: DungeonHost = request.app.state.host
    return host


def get_bonding_module(request: Request) -> BondingModule:
    """BondingModule 인스턴스 반환 (의존성 주입)"""
    module: BondingModule = request.app.state.bonding_module
    return module


def get_save_service(request: Request) -> SaveService:
    """SaveService 인스턴스 반환 (의존성 주입)"""
    service: SaveService = request.app.state.save_service
    return service


def _require_item(host: DungeonHost, group: str) -> Wearable:
    item = host.get_restraint_item(group)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Nothing worn on {group}")
    return item


def _build_worn_info(host: DungeonHost, group: str, item: Wearable) -> WornItemInfo:
    """Wearable을 WornItemInfo로 변환"""
    bond = item.bond
    return WornItemInfo(
        group=group,
        name=item.name,
        variant_id=item.inventory_variant,
        display_name=host.display_name(item),
        lock=item.lock,
        bond=BondInfo(
            is_new_restraint=bond.is_new_restraint,
            bond_level=bond.bond_level,
            lock_level=bond.lock_level,
            has_new_lock=bond.has_new_lock,
            true_name=bond.true_name,
        ),
        effects=[
            EffectInfo(
                original=e.original,
                trigger=e.trigger,
                power=e.power,
                base_power=e.base_power,
            )
            for e in item.events
        ],
        actions=host.restraint_actions(item),
    )


def _build_state(host: DungeonHost) -> GameStateResponse:
    worn = []
    for group in host.worn_groups():
        item = host.get_restraint_item(group)
        if item is not None:
            worn.append(_build_worn_info(host, group, item))
    return GameStateResponse(
        current_floor=host.current_floor,
        highest_floor=host.highest_floor,
        worn=worn,
        inventory=[i.inventory_variant or i.name for i in host.inventory],
        notifications=[
            NotificationInfo(
                text=n.text, color=n.color, priority=n.priority, duration=n.duration
            )
            for n in host.notifications
        ],
    )


@router.get("/state", response_model=GameStateResponse)
def get_state(host: DungeonHost = Depends(get_host)) -> GameStateResponse:
    """현재 층, 착용 아이템, 알림 조회"""
    return _build_state(host)


@router.post("/equip", response_model=GameStateResponse)
def equip(
    request: EquipRequest, host: DungeonHost = Depends(get_host)
) -> GameStateResponse:
    """variant 장착. 이번 층 동안은 '새 장착'으로 표시된다."""
    try:
        host.add_restraint(request.variant_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _build_state(host)


@router.post("/unequip", response_model=GameStateResponse)
def unequip(
    request: GroupRequest, host: DungeonHost = Depends(get_host)
) -> GameStateResponse:
    """맨 위 아이템을 벗겨 인벤토리로 (거부 판정 없음)"""
    try:
        host.remove_restraint(request.group)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _build_state(host)


@router.post("/lock", response_model=GameStateResponse)
def lock(
    request: LockRequestBody, host: DungeonHost = Depends(get_host)
) -> GameStateResponse:
    """인벤토리 Lock 클릭"""
    try:
        host.click_lock(request.group, request.lock_type)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _build_state(host)


@router.post("/advance", response_model=AdvanceResponse)
def advance(
    request: AdvanceRequest,
    host: DungeonHost = Depends(get_host),
    module: BondingModule = Depends(get_bonding_module),
) -> AdvanceResponse:
    """
    층 이동

    새 최고 층에 도달했을 때만 유대 패스가 돈다.
    """
    module.last_results = []
    success = host.advance_level(request.target_floor)
    return AdvanceResponse(
        success=bool(success),
        current_floor=host.current_floor,
        highest_floor=host.highest_floor,
        bonded=[
            {
                "variant_id": r.variant_id,
                "bond_level": r.bond_level,
                "lock_level": r.lock_level,
                "text_key": r.text_key,
            }
            for r in module.last_results
        ],
    )


@router.post("/struggle", response_model=StruggleResponse)
def struggle(
    request: StruggleRequestBody, host: DungeonHost = Depends(get_host)
) -> StruggleResponse:
    """몸부림/자르기/벗기/열기. 유대가 높으면 거부될 수 있다."""
    _require_item(host, request.group)
    result = host.struggle(request.group, request.action, query=request.query)
    logger.info(
        "Struggle %s on %s → %s", request.action.value, request.group, result.value
    )
    return StruggleResponse(
        group=request.group,
        action=request.action,
        result=result.value,
        query=request.query,
    )


@router.post("/rename", response_model=RenameResponse)
def rename(
    request: RenameRequest,
    host: DungeonHost = Depends(get_host),
    module: BondingModule = Depends(get_bonding_module),
) -> RenameResponse:
    """
    이름 변경 단계 진행

    begin → (input)* → commit | cancel
    """
    item = _require_item(host, request.group)
    session = module.rename_session

    if request.step == "begin":
        host.run_frame(DRAW_STATE_INVENTORY)
        if not module.begin_rename(item):
            raise HTTPException(
                status_code=400,
                detail=f"Renaming not allowed for {host.display_name(item)}",
            )
        if request.text:
            module.set_rename_text(request.text)
    elif request.step == "input":
        if not session.editing:
            raise HTTPException(status_code=400, detail="No rename in progress")
        module.type_rename(request.text)
    elif request.step == "commit":
        try:
            module.commit_rename(item)
        except ConsistencyFault as e:
            raise HTTPException(status_code=409, detail=str(e))
    else:
        module.cancel_rename()

    return RenameResponse(
        step=request.step,
        editing=session.editing,
        draft=session.draft,
        display_name=host.display_name(item),
    )


@router.post("/save", response_model=SaveResponse)
def save_game(service: SaveService = Depends(get_save_service)) -> SaveResponse:
    """variant 템플릿(유대 필드 포함)과 층 카운터 저장"""
    saved = service.save_all()
    return SaveResponse(success=True, saved=saved)
