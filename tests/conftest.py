# tests/conftest.py
"""
Shared fixtures and sample programs for the toyflow / toylang test suite.
"""

from typing import Iterable, List

import pytest

from toyflow.ast_nodes import Program, Statement
from toylang.printer import format_statement


# ── Sample programs ──────────────────────────────────────────────

OVERWRITE_SRC = """\
a = 1
b = a
a = 2
"""

CHAIN_SRC = """\
x = 0
y = x + 1
"""

NEVER_IF_SRC = """\
a = 5
if a > 10
  b = 1
end
"""

NEVER_WHILE_SRC = """\
a = 1
while a < 1
  a = a + 1
end
"""

ALWAYS_IF_SRC = """\
a = 1
if a < 10
  a = 2
end
b = a
"""

CONSTANT_IF_SRC = """\
a = 1
if 1 < 10
  a = 2
end
b = a
"""

COUNTING_LOOP_SRC = """\
i = 0
while i < 3
  i = i + 1
end
"""

LONG_LOOP_SRC = """\
i = 0
while i < 40
  i = i + 1
end
"""

SUM_LOOP_SRC = """\
s = 0
i = 0
while i < 5
  s = s + i
  i = i + 1
end
t = s
"""

LOOP_COPY_SRC = """\
a = 0
while a < 10
  b = a
  a = a + 1
end
"""

UNKNOWN_BRANCH_SRC = """\
a = 0
if u
  a = 2
end
b = 4 / a
"""

FLIPPING_IF_SRC = """\
i = 0
while i < 3
  if i > 1
    b = 1
  end
  i = i + 1
end
"""

NESTED_DEAD_SRC = """\
a = 0
if a > 5
  b = 1
  if b > 0
    c = 2
  end
  while b < 3
    d = 3
  end
end
e = b + c + d
"""

UNROLL_LIMIT_SRC = """\
i = 0
while i < 40
  if i > 35
    b = 1
  end
  i = i + 1
end
c = b
"""


# ── Helpers ──────────────────────────────────────────────────────

def texts(statements: Iterable[Statement]) -> List[str]:
    """Render statements the way diagnostics show them."""
    return [format_statement(stmt, header_only=True) for stmt in statements]


def find(program: Program, header: str) -> Statement:
    """First statement (pre-order) whose header renders as *header*."""
    for stmt in program.walk():
        if format_statement(stmt, header_only=True) == header:
            return stmt
    raise LookupError(header)


# ── Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def source_file(tmp_path):
    """Write a program to a temporary ``.toy`` file and return its path."""
    def _write(text: str, name: str = "program.toy"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
