
import argparse
import codecs

from Huffman import *
from utils import *

# =================================================================================================================

def init() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="huffman-tree",
        description="Huffman coding tree and prefix code table builder"
    )
    sub = parser.add_subparsers(dest="cmd")

    # ------------------------------------------------------------
    # codes
    # ------------------------------------------------------------
    c = sub.add_parser("codes", help="Показать таблицу частот и кодов")
    _add_input_args(c)
    c.set_defaults(func=codes_mode)

    # ------------------------------------------------------------
    # stats
    # ------------------------------------------------------------
    s = sub.add_parser("stats", help="Показать статистику кода")
    _add_input_args(s)
    s.set_defaults(func=stats_mode)

    # ------------------------------------------------------------
    # encode
    # ------------------------------------------------------------
    e = sub.add_parser("encode", help="Закодировать сообщение")
    _add_input_args(e)
    e.add_argument("--hex", action="store_true", help="Вывести упакованные байты вместо битовой строки")
    e.set_defaults(func=encode_mode)

    # ------------------------------------------------------------
    # verify
    # ------------------------------------------------------------
    v = sub.add_parser("verify", help="Проверить кодирование/декодирование")
    _add_input_args(v)
    v.set_defaults(func=verify_mode)

    # ------------------------------------------------------------
    # cli
    # ------------------------------------------------------------
    d = sub.add_parser("cli", help="Интерактивный режим")
    d.add_argument("--verbose", action="store_true")
    d.set_defaults(func=cli_mode)

    return parser

def _add_input_args(p: argparse.ArgumentParser):
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("-t", "--text", help="Сообщение в командной строке")
    src.add_argument("-i", "--input", help="Файл с сообщением")
    p.add_argument("--binary", action="store_true", help="Читать файл как байты")
    p.add_argument("--encoding", default="utf-8", type=encoding_name)
    p.add_argument("--verbose", action="store_true")

def encoding_name(value: str) -> str:
    """Проверяет имя кодировки при разборе аргументов."""
    try:
        return codecs.lookup(value).name
    except LookupError:
        raise argparse.ArgumentTypeError(f"unknown encoding: {value}") from None

# =================================================================================================================

def load_input(args):
    """Возвращает сообщение: строку из -t, текст или байты файла из -i."""
    if args.text is not None:
        return args.text.encode(args.encoding) if args.binary else args.text

    if args.verbose:
        print(f"[{args.cmd}] reading:", args.input)

    if args.binary:
        with open(args.input, "rb") as f:
            return f.read()

    with open(args.input, "r", encoding=args.encoding) as f:
        return f.read()

def format_symbol(sym) -> str:
    """Символы печатаются через repr, байты в hex."""
    if isinstance(sym, int):
        return f"0x{sym:02x}"
    return repr(sym)

def print_table(tree: CodingTree):
    print("Symbol      Freq  Code")
    for sym, code in tree.codes.items():
        print(f" {format_symbol(sym):<8} {tree.freqs[sym]:>6}  {code}")

# =================================================================================================================

def codes_mode(args) -> int:
    """Печатает таблицу частот и кодов."""
    data = load_input(args)
    tree = Huffman().build(data)

    if args.verbose:
        print(f"[codes] {len(data)} symbols, {len(tree.freqs)} distinct")

    if tree.root is None:
        print("Empty input: no tree, no codes")
        return 0

    print_table(tree)
    return 0

def stats_mode(args) -> int:
    """Печатает длину кода, энтропию и сжатие относительно 8 бит на символ."""
    data = load_input(args)
    tree = Huffman().build(data)

    total = sum(tree.freqs.values())
    bits = weighted_length(tree.freqs, tree.codes)
    baseline = total * 8

    print("=== Statistics ===")
    print(f"Symbols:         {total}")
    print(f"Distinct:        {len(tree.freqs)}")
    print(f"Tree height:     {height(tree.root)}")
    print(f"Encoded bits:    {bits}")
    print(f"Average length:  {average_length(tree.freqs, tree.codes):.4f} bits/symbol")
    print(f"Entropy:         {entropy(tree.freqs):.4f} bits/symbol")
    if baseline:
        print(f"Ratio vs 8-bit:  {bits / baseline:.4f}")
    return 0

def encode_mode(args) -> int:
    """Печатает закодированное сообщение."""
    data = load_input(args)
    huffman = Huffman()

    if args.hex:
        packed, padding = huffman.pack(data)
        if args.verbose:
            print(f"[encode] {len(packed)} bytes, padding {padding}")
        print(packed.hex())
        print("padding:", padding)
        return 0

    huffman.build(data)
    print(encode(data, huffman.codes))
    return 0

def verify_mode(args) -> int:
    """Кодирует и декодирует сообщение, сравнивает с исходным."""
    data = load_input(args)
    huffman = Huffman()

    packed, padding = huffman.pack(data)
    restored = join_symbols(huffman.unpack(packed, padding), data)

    if args.verbose:
        print(f"[verify] {len(data)} symbols -> {len(packed)} bytes (padding {padding})")

    ok = restored == data
    print("Round-trip ok:", ok)
    return 0 if ok else 1

# =================================================================================================================

def cli_mode(args) -> int:
    """Консольный режим."""
    print("=== Huffman Interactive Mode ===")

    try:
        text = input("Введите сообщение: ")
    except EOFError:
        print("\nNo input")
        return 0

    tree = Huffman().build(text)

    if args.verbose:
        print(f"[cli] {len(text)} symbols, {len(tree.freqs)} distinct")

    if tree.root is None:
        print("Empty input: no tree, no codes")
        return 0

    print_table(tree)
    print("Encoded:", encode(text, tree.codes))
    return 0
