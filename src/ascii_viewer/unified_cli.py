# unified_cli.py
import sys
import importlib
from typing import Sequence, List, Optional

PROG = "ascii-viewer"

COMMANDS = {
    "image": "ascii_viewer.image_to_ascii",
    "viewer": "ascii_viewer.viewer",
}


def usage() -> None:
    cmds = ", ".join(sorted(COMMANDS))
    print(f"Usage: {PROG} <command> [args...]")
    print(f"Commands: {cmds}")


def _call_entry(entry, argv: List[str]) -> int:
    try:
        rc = entry(argv)
    except SystemExit as se:
        code = se.code
        return code if isinstance(code, int) else 0
    except Exception as e:
        print(f"Error running command: {e}", file=sys.stderr)
        return 1
    return rc if isinstance(rc, int) else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv or argv[0] in ("-h", "--help"):
        usage()
        return 0

    cmd, *args = argv
    module_path = COMMANDS.get(cmd)
    if not module_path:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        usage()
        return 2

    try:
        module = importlib.import_module(module_path)
    except Exception as e:
        print(f"Failed to import command '{cmd}' ({module_path}): {e}", file=sys.stderr)
        return 3

    entry = getattr(module, "main", None)
    if not callable(entry):
        print(f"Command module '{module_path}' has no callable 'main'", file=sys.stderr)
        return 4

    return _call_entry(entry, args)


if __name__ == "__main__":
    raise SystemExit(main())
