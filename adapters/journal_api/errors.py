"""
저널 저장소 API 에러
"""


class JournalApiError(Exception):
    """저널 저장소 API 에러

    HTTP 4xx/5xx 응답, {ok: false} 응답, 또는 필수 필드가 없는 생성 응답에서 발생.

    Attributes:
        status: HTTP 상태 코드 (응답 본문 오류는 요청의 상태 코드, 알 수 없으면 0)
        message: 서버 또는 클라이언트 에러 메시지
    """

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"Journal API Error [{status}]: {message}")
