"""택배사 배송 이력 조회 서비스"""

__version__ = "1.0.0"
