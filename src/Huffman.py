"""Построение дерева Хаффмана и таблицы префиксных кодов.

Конвейер из четырёх стадий, каждая является чистой функцией над результатом предыдущей:
    - count_frequencies: частоты символов во входной последовательности
    - init_forest: куча листьев, упорядоченная по весу
    - build_tree: жадное слияние двух лёгких узлов до одного корня
    - assign_codes: обход дерева, левое ребро '0', правое '1'

Правило разрешения равенства весов (фиксировано):
    элемент кучи: кортеж (вес, порядковый_номер, узел). Листья вставляются
    в порядке сортировки символов с номерами 0..n-1, каждый новый
    внутренний узел получает следующий номер. При равных весах первым
    извлекается узел с меньшим номером, т.е. листья раньше внутренних узлов,
    а листья между собой по возрастанию символа. Сами узлы не сравниваются.

API:
    - build_coding_tree(data) -> CodingTree(freqs, root, codes)
    - Huffman(): класс с методами build/pack/unpack.
    - encode/decode: упаковщик сообщения по таблице кодов и обратный обход дерева.
"""

from heapq import heappush, heappop, heapify
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from utils import *

# -------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Leaf:
    """Лист дерева: символ и его частота."""
    symbol: Any
    weight: int


@dataclass(frozen=True)
class Internal:
    """Внутренний узел: ровно два потомка, вес равен сумме их весов."""
    weight: int
    left: "Node"
    right: "Node"

    def __post_init__(self):
        if self.weight != self.left.weight + self.right.weight:
            raise ValueError("Вес внутреннего узла должен равняться сумме весов потомков")

    @classmethod
    def join(cls, left: "Node", right: "Node") -> "Internal":
        return cls(left.weight + right.weight, left, right)


Node = Union[Leaf, Internal]

# (вес, порядковый_номер, узел)
HeapEntry = Tuple[int, int, Node]

EMPTY = MappingProxyType({})


@dataclass(frozen=True)
class CodingTree:
    """Результат конвейера.

    Attributes:
        freqs (Mapping[Any, int]): Частоты символов, по возрастанию символа.
        root (Optional[Node]): Корень дерева, None для пустого входа.
        codes (Mapping[Any, str]): Коды символов ('0'/'1'), по возрастанию символа.
    """
    freqs: Mapping[Any, int]
    root: Optional[Node]
    codes: Mapping[Any, str]


class UnknownSymbolError(KeyError):
    """Символ сообщения отсутствует в таблице кодов."""

    def __init__(self, symbol):
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self):
        return f"Символ {self.symbol!r} отсутствует в таблице кодов"

# -------------------------------------------------------------------------------------------------

def count_frequencies(data: Iterable) -> Mapping[Any, int]:
    """Подсчитывает частоты символов за один проход.

    Args:
        data (Iterable): Последовательность символов (str, bytes, список токенов).
            Символы должны быть хешируемы и попарно сравнимы.

    Returns:
        Mapping[Any, int]: Неизменяемая таблица {символ: частота}, упорядоченная по символу.
    """
    counts = Counter(data)
    return MappingProxyType(dict(sorted(counts.items())))


def init_forest(freqs: Mapping[Any, int]) -> List[HeapEntry]:
    """Формирует кучу листьев по таблице частот.

    Листья вставляются в порядке сортировки символов, порядковый номер
    вставки используется для разрешения равенства весов.

    Args:
        freqs (Mapping[Any, int]): Таблица частот.

    Returns:
        List[HeapEntry]: Куча (heapq) элементов (вес, номер, лист).
    """
    forest: List[HeapEntry] = []
    for order, sym in enumerate(sorted(freqs)):
        weight = freqs[sym]
        heappush(forest, (weight, order, Leaf(sym, weight)))
    return forest


def build_tree(forest: List[HeapEntry]) -> Optional[Node]:
    """Строит дерево Хаффмана слиянием двух самых лёгких узлов.

    Первый извлечённый узел становится левым потомком, второй правым.
    Переданная куча не изменяется.

    Args:
        forest (List[HeapEntry]): Куча, полученная из init_forest.

    Returns:
        Optional[Node]: Корень дерева; None, если куча пуста; сам лист, если символ один.
    """
    heap = list(forest)
    heapify(heap)

    # следующий свободный номер после всех уже вставленных
    order = max((entry[1] for entry in heap), default=-1) + 1

    while len(heap) > 1:
        _, _, left = heappop(heap)
        _, _, right = heappop(heap)

        node = Internal.join(left, right)
        heappush(heap, (node.weight, order, node))
        order += 1

    if not heap:
        return None

    _, _, root = heap[0]
    return root


def walk(root: Optional[Node]) -> Iterator[Tuple[Leaf, str]]:
    """Обход дерева в глубину явным стеком, слева направо.

    Yields:
        Tuple[Leaf, str]: Лист и путь до него от корня ('0' влево, '1' вправо).
    """
    if root is None:
        return

    stack: List[Tuple[Node, str]] = [(root, "")]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Leaf):
            yield node, path
        else:
            # правый кладём первым, чтобы левый был снят раньше
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))


def assign_codes(root: Optional[Node]) -> Mapping[Any, str]:
    """Назначает каждому листу код по пути от корня.

    Дерево из одного листа не имеет рёбер, такой символ получает код "0".

    Args:
        root (Optional[Node]): Корень дерева или None.

    Returns:
        Mapping[Any, str]: Неизменяемая таблица {символ: код}, упорядоченная по символу.
    """
    if root is None:
        return EMPTY

    if isinstance(root, Leaf):
        return MappingProxyType({root.symbol: "0"})

    codes = {leaf.symbol: path for leaf, path in walk(root)}
    return MappingProxyType(dict(sorted(codes.items())))


def height(root: Optional[Node]) -> int:
    """Длина самого длинного пути от корня до листа (0 для пустого дерева и одного листа)."""
    return max((len(path) for _, path in walk(root)), default=0)


def build_coding_tree(data: Iterable) -> CodingTree:
    """Полный конвейер: частоты -> куча -> дерево -> коды."""
    freqs = count_frequencies(data)
    root = build_tree(init_forest(freqs))
    return CodingTree(freqs, root, assign_codes(root))

# -------------------------------------------------------------------------------------------------

def encode(data: Iterable, codes: Mapping[Any, str]) -> str:
    """Заменяет каждый символ сообщения его кодом.

    Args:
        data (Iterable): Сообщение.
        codes (Mapping[Any, str]): Таблица кодов.

    Raises:
        UnknownSymbolError: если символа нет в таблице.

    Returns:
        str: Битовая строка из '0' и '1'.
    """
    out = []
    for sym in data:
        try:
            out.append(codes[sym])
        except KeyError:
            raise UnknownSymbolError(sym) from None
    return "".join(out)


def decode(bits: str, root: Optional[Node]) -> list:
    """Декодирует битовую строку спуском по дереву от корня.

    Args:
        bits (str): Битовая строка.
        root (Optional[Node]): Корень дерева, которым кодировалось сообщение.

    Raises:
        ValueError: посторонний символ, незавершённый последний код
            или непустой поток при пустом дереве.

    Returns:
        list: Раскодированные символы.
    """
    if root is None:
        if bits:
            raise ValueError("Пустое дерево не может декодировать непустой поток")
        return []

    out = []

    # Единственный символ кодируется одним битом '0'
    if isinstance(root, Leaf):
        for bit in bits:
            if bit != "0":
                raise ValueError(f"Недопустимый бит {bit!r} для дерева из одного листа")
            out.append(root.symbol)
        return out

    node = root
    for bit in bits:
        if bit == "0":
            node = node.left
        elif bit == "1":
            node = node.right
        else:
            raise ValueError(f"Недопустимый символ {bit!r} в битовом потоке")

        if isinstance(node, Leaf):
            out.append(node.symbol)
            node = root

    if node is not root:
        raise ValueError("Битовый поток обрывается посреди кода")

    return out


def join_symbols(symbols: list, like):
    """Собирает раскодированные символы обратно в тип исходного сообщения."""
    if isinstance(like, str):
        return "".join(symbols)
    if isinstance(like, (bytes, bytearray)):
        return bytes(symbols)
    return list(symbols)

# -------------------------------------------------------------------------------------------------

class Huffman:
    """Кодек Хаффмана над деревом, построенным по частотам сообщения.

    Атрибуты заполняются при каждом вызове build/pack и описывают последнее сообщение:
        freqs (Mapping[Any, int]): Частоты символов.
        root (Optional[Node]): Корень дерева.
        codes (Mapping[Any, str]): Коды символов.
    """

    def __init__(self):
        """Инициализирует пустое состояние."""
        self.freqs: Mapping[Any, int] = EMPTY
        self.root: Optional[Node] = None
        self.codes: Mapping[Any, str] = EMPTY
        self._built = False

# -------------------------------------------------------------------------------------------------

    def build(self, data: Iterable) -> CodingTree:
        """Строит дерево и таблицу кодов для сообщения."""
        tree = build_coding_tree(data)

        self.freqs = tree.freqs
        self.root = tree.root
        self.codes = tree.codes
        self._built = True

        return tree

    def pack(self, data: Iterable) -> Tuple[bytes, int]:
        """Кодирует сообщение деревом, построенным по нему же.

        Args:
            data (Iterable): Входное сообщение.

        Returns:
            tuple:
            - packed (bytes): Упакованные биты, старшие первыми.
            - padding (int): Количество незначимых бит в последнем байте.
        """
        # генератор нельзя пройти дважды
        if not isinstance(data, Sequence):
            data = list(data)

        self.build(data)

        bits = bitstring_to_bits(encode(data, self.codes))
        return bits_to_bytes(bits), padding_bits(len(bits))

    def unpack(self, packed: bytes, padding: int) -> list:
        """Декодирует данные, упакованные последним вызовом pack.

        Args:
            packed (bytes): Упакованные биты.
            padding (int): Количество незначимых бит в последнем байте.

        Returns:
            list: Раскодированные символы.
        """
        if not self._built:
            raise RuntimeError("Дерево не построено: вызовите build или pack")

        bits = bytes_to_bits(packed)
        if not 0 <= padding <= 7 or padding > len(bits):
            raise ValueError(f"Некорректное выравнивание: {padding}")

        bits = bits[:len(bits) - padding]
        return decode(bits_to_bitstring(bits), self.root)
