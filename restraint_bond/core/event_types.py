"""이벤트 유형 상수

BondingModule이 EventBus로 발행하는 도메인 이벤트.
데이터에는 variant_id 등 식별자만 담는다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # event capture
    RESTRAINT_MARKED_NEW = "restraint_marked_new"

    # floor / bonding
    FLOOR_GAINED = "floor_gained"
    RESTRAINT_SETTLED = "restraint_settled"  # 새 장착/새 잠금 표시 해제
    BOND_LEVEL_UP = "bond_level_up"

    # lock tracking
    LOCK_APPLIED = "lock_applied"

    # naming
    ITEM_RENAMED = "item_renamed"

    # removal gate
    REMOVAL_REFUSED = "removal_refused"
