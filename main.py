import os
import sys

from log_setup import configure_logging
from table_errors import ToolkitFatal
from table_host import TableHost

try:
    from _version import __version__
except Exception:
    __version__ = "0.0.0"


USAGE = (
    "termgrid - browse a table in the terminal\n\n"
    "Shows the process environment as a table.\n\n"
    "Usage:\n  termgrid [--log FILE]\n  termgrid -v\n  termgrid -h\n"
)


def parse_args(args):
    """Return (options, error). options keys: version, help, log."""
    opts = {"version": False, "help": False, "log": None}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("-v", "-V"):
            opts["version"] = True
        elif arg == "-h":
            opts["help"] = True
        elif arg == "--log":
            if i + 1 >= len(args):
                return opts, "--log requires a file path"
            i += 1
            opts["log"] = args[i]
        else:
            return opts, f"unknown argument: {arg}"
        i += 1
    return opts, None


def environment_rows(environ):
    return [[name, value] for name, value in sorted(environ.items())]


def _show(text, out, wait):
    print(text, file=out)
    wait("Press Enter to return to the table…")


def build_environment_view(host, environ, out=None, wait=input):
    out = out if out is not None else sys.stdout
    view = host.new_view()
    view.set_columns_and_rows(["Name", "Value"], environment_rows(environ))
    view.set_expansion(1, 1)

    def print_value(row):
        value = view.store.cell(row, 1)
        view.suspend(lambda: _show(value, out, wait))

    def upper_value(row):
        view.set_cell(row, 1, view.store.cell(row, 1).upper())

    def print_assignment(row):
        name, value = view.store.row(row)
        view.suspend(lambda: _show(f"{name}={value}", out, wait))

    view.new_command("p", "print", print_value)
    view.new_command("u", "upper", upper_value)
    view.set_selected_func(print_assignment)
    return view


def main():
    opts, error = parse_args(sys.argv[1:])
    if error:
        print(error, file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    if opts["version"]:
        print(__version__)
        return

    if opts["help"]:
        print(USAGE)
        return

    if opts["log"]:
        configure_logging(opts["log"])

    host = TableHost()
    build_environment_view(host, dict(os.environ))
    try:
        host.run()
    except ToolkitFatal as e:
        print(f"termgrid: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
