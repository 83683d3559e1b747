"""
toylang/__main__.py
===================

``python -m toylang <command> [options] <source-file>``

See :mod:`toylang.main` for the commands and exit codes.
"""

import sys

from toylang.main import main

if __name__ == "__main__":
    sys.exit(main())
