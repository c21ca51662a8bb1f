"""본드 시스템 예외"""


class ConsistencyFault(RuntimeError):
    """불변식 위반 (이름 변경 대상 불일치, 레벨 미설정 등).

    정상 플레이 중에는 발생하지 않아야 한다.
    훅 경계에서 잡아서 로그만 남기고, 호스트 연산 결과는 그대로 반환한다.
    """
