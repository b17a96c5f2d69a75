"""
Runs a boxknife unit by name, for example:

    python -m boxknife unhex -s 4142

Without a unit name, the available units are listed.
"""
from __future__ import annotations

import sys

import boxknife


def main(argv=None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in ('-h', '--help'):
        print('usage: boxknife UNIT [options] [value]', file=sys.stderr)
        print(F'available units: {", ".join(boxknife.registry.names())}', file=sys.stderr)
        sys.exit(0 if argv else 2)
    name, *argv = argv
    unit = boxknife.load(name)
    if unit is None:
        print(F'boxknife: unknown unit "{name}"', file=sys.stderr)
        sys.exit(2)
    unit.run(argv)


if __name__ == '__main__':
    main()
