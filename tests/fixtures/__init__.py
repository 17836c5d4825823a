"""테스트 자산 패키지."""
