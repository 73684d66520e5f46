"""
CLI entry point:
Usage example:
  py src/main.py codes -t "aabbc"
  py src/main.py stats -i book.txt
  py src/main.py encode -i image.bin --binary --hex
  py src/main.py verify -i book.txt --verbose
  py src/main.py cli

Input comes from -t/--text or -i/--input; --binary reads the file as bytes.
"""

# =================================================================================================================

import sys

import cli

# =================================================================================================================

def main(argv=None) -> int:

    parser = cli.init()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except OSError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    except UnicodeError as e:
        print(f"[ERROR] {args.input or '--text'}: {e}", file=sys.stderr)
        return 2

# =================================================================================================================

if __name__ == "__main__":
    sys.exit(main())
