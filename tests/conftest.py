import os
import sys

import pytest


# Ensure the repository root is on sys.path for `from src...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


START_DIAGRAM = """\
    a  b  c  d  e  f  g  h
8: {R}{N}{B}{Q}{K}{B}{N}{R}
7: {P}{P}{P}{P}{P}{P}{P}{P}
6:  ·  -  ·  -  ·  -  ·  -
5:  -  ·  -  ·  -  ·  -  ·
4:  ·  -  ·  -  ·  -  ·  -
3:  -  ·  -  ·  -  ·  -  ·
2:  P  P  P  P  P  P  P  P
1:  R  N  B  Q  K  B  N  R"""

# Black queen on e6 can take the White bishop on c4
MIDGAME_DIAGRAM = """\
    a  b  c  d  e  f  g  h
8: {R}{N} ·  -  ·  - {N}{R}
7: {P} · {P} ·  - {P}{P}{P}
6: {P} -  ·  - {Q} -  ·  -
5:  -  ·  -  ·  -  ·  -  ·
4:  ·  -  B  - {P} -  ·  P
3:  K  · {K} ·  -  ·  -  ·
2:  ·  -  ·  -  ·  -  ·  -
1:  -  ·  -  ·  -  ·  N  R"""

# Black queen on h4 attacks the White king on e1 along the open diagonal
CHECK_DIAGRAM = """\
    a  b  c  d  e  f  g  h
8:  ·  -  ·  - {K} -  ·  -
7: {P}{P}{P}{P} - {P}{P}{P}
6:  ·  -  ·  -  ·  -  ·  -
5:  -  ·  -  ·  -  ·  -  ·
4:  ·  -  ·  -  P  -  · {Q}
3:  -  ·  -  ·  -  ·  -  ·
2:  P  P  P  P  ·  -  P  P
1:  R  N  B  Q  K  B  N  R"""

# Back-rank mate: Ra8-a1 leaves the White king on h1 nowhere to go
MATE_DIAGRAM = """\
    a  b  c  d  e  f  g  h
8: {R} -  ·  -  ·  - {K} -
7:  -  ·  -  ·  - {P}{P}{P}
6:  ·  -  ·  -  ·  -  ·  -
5:  -  ·  -  ·  -  ·  -  ·
4:  ·  -  ·  -  ·  -  ·  -
3:  -  ·  -  ·  -  ·  -  ·
2:  ·  -  P  -  ·  -  P  P
1:  -  ·  -  ·  -  ·  -  K"""


@pytest.fixture
def start_diagram() -> str:
    return START_DIAGRAM


@pytest.fixture
def midgame_diagram() -> str:
    return MIDGAME_DIAGRAM


@pytest.fixture
def check_diagram() -> str:
    return CHECK_DIAGRAM


@pytest.fixture
def mate_diagram() -> str:
    return MATE_DIAGRAM
