"""Restraint Bond — 층 단위 착용 유대(bond) 추적 모드"""

__version__ = "0.1.0"
