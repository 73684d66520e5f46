from math import log2
from typing import Any, List, Mapping

# -------------------------------------------------------------------------------------------------
# Битовые буферы
# -------------------------------------------------------------------------------------------------

def byte_to_bits(bits: List[int], byte: int, length: int):
    """Добавляет в битовый буфер двоичное представление числа фиксированной длины.

    Args:
        bits (List[int]): Целевой буфер битов.
        byte (int): Число, из которого извлекаются биты.
        length (int): Количество записываемых бит (старшие первыми).
    """
    for i in range(length - 1, -1, -1):
        bits.append((byte >> i)&1)        # захват i-того бита

def bits_to_bytes(bits: List[int]) -> bytes:
    """Преобразует массив битов в массив байтов (big-endian внутри байта).

    Args:
        bits (List[int]): Список битов 0/1.

    Returns:
        bytes: Упакованные байты, хвост последнего байта заполнен нулями.
    """
    out = bytearray((len(bits)+7)//8)       # буфер с целым числом байт в большую сторону
    for i, bit in enumerate(bits):
        if bit:
            byte_id = i // 8                # счетчик байтов
            bit_id = 7 - (i % 8)            # счетчик битов
            out[byte_id] |= (1 << bit_id)

    return bytes(out)

def bytes_to_bits(b: bytes) -> List[int]:
    """Преобразует байты в последовательность битов.

    Args:
        b (bytes): Входные данные.

    Returns:
        List[int]: Список битов (0/1).
    """
    bits = []
    for byte in b:
        byte_to_bits(bits, byte, 8)
    return bits

def bitstring_to_bits(s: str) -> List[int]:
    """'0110' -> [0, 1, 1, 0]"""
    bits = []
    for ch in s:
        if ch not in "01":
            raise ValueError(f"Недопустимый символ {ch!r} в битовой строке")
        bits.append(1 if ch == "1" else 0)
    return bits

def bits_to_bitstring(bits: List[int]) -> str:
    return "".join("1" if bit else "0" for bit in bits)

def padding_bits(n_bits: int) -> int:
    """Количество нулей, дописываемых до границы байта (0..7)."""
    return -n_bits % 8

# -------------------------------------------------------------------------------------------------
# Статистика кода
# -------------------------------------------------------------------------------------------------

def weighted_length(freqs: Mapping[Any, int], codes: Mapping[Any, str]) -> int:
    """Суммарная длина закодированного сообщения в битах: sum(freq * len(code)).

    Пример:
        Вход: {'a': 2, 'b': 2, 'c': 1}, {'a': '11', 'b': '0', 'c': '10'}
        Выход: 8
    """
    return sum(freq * len(codes[sym]) for sym, freq in freqs.items())

def average_length(freqs: Mapping[Any, int], codes: Mapping[Any, str]) -> float:
    """Средняя длина кода на символ сообщения (0.0 для пустого сообщения)."""
    total = sum(freqs.values())
    if total == 0:
        return 0.0
    return weighted_length(freqs, codes) / total

def entropy(freqs: Mapping[Any, int]) -> float:
    """Энтропия Шеннона распределения частот, бит/символ.

    Нижняя граница средней длины любого префиксного кода.
    """
    total = sum(freqs.values())
    if total == 0:
        return 0.0

    h = 0.0
    for freq in freqs.values():
        p = freq / total
        h -= p * log2(p)
    return h

def is_prefix_free(codes: Mapping[Any, str]) -> bool:
    """Проверяет, что ни один код не является префиксом другого.

    После сортировки строк префикс всегда стоит непосредственно перед
    одним из своих продолжений, поэтому достаточно сравнить соседей.
    Пустой код недопустим.
    """
    words = sorted(codes.values())
    if any(not w for w in words):
        return False

    for prev, cur in zip(words, words[1:]):
        if cur.startswith(prev):
            return False
    return True
