"""
Voice Response Messages.

Every sentence the voice pipeline says to a customer, in one place.
"""

GREETING = "안녕하세요! 음성으로 주문을 도와드리겠습니다."
ACTIVATED = "음성 주문 모드가 활성화되었습니다. 시작 버튼을 누르고 원하는 메뉴를 말씀해주세요."
UNSUPPORTED = "죄송합니다. 이 브라우저는 음성 인식을 지원하지 않습니다."
CAPTURE_ERROR = "음성 인식을 사용할 수 없습니다. 마이크 권한을 확인해주세요."
PLEASE_REPEAT = "다시 말씀해주세요."
ANALYSIS_FAILED = "음성 분석 중 오류가 발생했습니다. 다시 시도해주세요."

HELP = "치킨버거 추가, 콜라 2개 주문, 감자튀김 빼기, 메뉴 보여줘, 결제하기 등의 명령을 사용할 수 있습니다."
UNKNOWN_COMMAND = '죄송합니다. 명령을 이해하지 못했습니다. "도움말"이라고 말씀해보세요.'
EMPTY_CART = "장바구니가 비어있습니다. 먼저 메뉴를 선택해주세요."


def format_won(amount: int) -> str:
    return f"{amount:,}원"


def added(fragments: list[str]) -> str:
    """fragments look like "치킨버거 2개"."""
    return f"{', '.join(fragments)}를 장바구니에 담았습니다."


def sold_out(names: list[str]) -> str:
    return f"죄송합니다. {', '.join(names)}은(는) 현재 품절입니다."


def not_found(names: list[str]) -> str:
    return f'죄송합니다. "{", ".join(names)}" 메뉴를 찾을 수 없습니다.'


def removed(name: str) -> str:
    return f"{name}을(를) 장바구니에서 제거했습니다."


def not_in_cart(entity: str) -> str:
    return f'장바구니에서 "{entity}" 메뉴를 찾을 수 없습니다.'


def menu_listing(names: list[str]) -> str:
    return f"현재 주문 가능한 메뉴는 {', '.join(names)} 입니다."


def checkout_summary(line_count: int, total: int) -> str:
    return f"총 {line_count}개 상품, {format_won(total)}입니다. 주문하기 버튼을 눌러주세요."


def choose_candidate(entity: str, candidates: list[str]) -> str:
    return f"어떤 {entity}를 주문하시겠습니까? {', '.join(candidates)} 중에서 선택해주세요."


def family_candidates(keyword: str, candidates: list[str]) -> str:
    return f"{keyword} 메뉴로는 {', '.join(candidates)}가 있습니다. 어떤 메뉴를 주문하시겠습니까?"


def choose_again(candidates: list[str]) -> str:
    return f"아래 메뉴 중에서 말씀해 주세요: {', '.join(candidates)}"


def confirm_order(entity: str, quantity: int) -> str:
    return f'혹시 "{entity}"를 {quantity}개 주문하시겠습니까? 예 또는 아니오로 답해주세요.'
