"""Courier Check 테스트 패키지."""
