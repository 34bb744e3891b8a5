"""
Паспортные данные: серия (4 цифры) и номер (6 цифр)
"""
from typing import Tuple

SERIE_DIGITS = 4
NUMBER_DIGITS = 6
MAX_SERIE = 10 ** SERIE_DIGITS - 1
MAX_NUMBER = 10 ** NUMBER_DIGITS - 1


def parse_passport(value: str) -> Tuple[int, int]:
    """Разобрать строку вида 'SERIE NUMBER'

    Raises:
        ValueError: с текстом, пригодным для ответа клиенту
    """
    parts = value.split(" ")
    if len(parts) != 2:
        raise ValueError("invalid passport data: expected 'SERIE NUMBER'")

    serie, number = parts
    if not serie.isdigit() or not serie.isascii():
        raise ValueError("invalid passport serie: not a number")
    if not number.isdigit() or not number.isascii():
        raise ValueError("invalid passport number: not a number")
    if len(serie) != SERIE_DIGITS:
        raise ValueError(f"invalid passport serie: must be {SERIE_DIGITS} digits")
    if len(number) != NUMBER_DIGITS:
        raise ValueError(f"invalid passport number: must be {NUMBER_DIGITS} digits")

    return int(serie), int(number)


def check_passport_serie(value: int) -> int:
    if not 0 <= value <= MAX_SERIE:
        raise ValueError(f"must be a non-negative number of at most {SERIE_DIGITS} digits")
    return value


def check_passport_number(value: int) -> int:
    if not 0 <= value <= MAX_NUMBER:
        raise ValueError(f"must be a non-negative number of at most {NUMBER_DIGITS} digits")
    return value


def format_passport(serie: int, number: int) -> str:
    return f"{serie:0{SERIE_DIGITS}d} {number:0{NUMBER_DIGITS}d}"
