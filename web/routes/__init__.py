"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- stats: KPI / 차원별 통계 / 계좌 잔고
- entries: 인라인 수정
"""
