"""테스트 공용 스텁 모음."""
