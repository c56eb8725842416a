from pathlib import Path

import pytest

from assetnorm.config import CONFIG_ENV

MODEL_OBJ = "v 1 2 3\nv -1 0 1\n"

# Box spanning x [0, 4], y [-1, 1], z [2, 3].
CUBE_OBJ = """# stretched box
o box
v 0 -1 2
v 4 -1 2
v 4 1 2
v 0 1 2
v 0 -1 3
v 4 -1 3
v 4 1 3
v 0 1 3
g sides
f 1 3 2
f 1 4 3
f 5 6 7
f 5 7 8
f 1 2 6
f 1 6 5
f 4 7 3
f 4 8 7
f 1 5 8
f 1 8 4
f 2 3 7
f 2 7 6
"""

DRESSED_OBJ = """# exported by hand
mtllib scene.mtl
o thing
v 0.5 -2.25 10
vt 0.0 1.0
vn 0.0 0.0 1.0
v -3 4 0.125 1.0

g body
usemtl steel
s off
f 1/1/1 2/1/1 1/1/1
l 1 2
   # indented comment
"""

HOUSE_GRS = """house.grs
a simple house outline
*
10 20 30 40
2
3
  0.0  0.0
  1.0  2.0
  2.0  0.0
2
  -1.5  4.0
  3.0  -1.0
"""


@pytest.fixture(autouse=True)
def _no_user_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)


@pytest.fixture
def workdir(tmp_path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write(path: Path, text: str) -> str:
    path.write_text(text)
    return path.name


@pytest.fixture
def model_obj(workdir) -> str:
    return _write(workdir / "model.obj", MODEL_OBJ)


@pytest.fixture
def cube_obj(workdir) -> str:
    return _write(workdir / "cube.obj", CUBE_OBJ)


@pytest.fixture
def dressed_obj(workdir) -> str:
    return _write(workdir / "dressed.obj", DRESSED_OBJ)


@pytest.fixture
def house_grs(workdir) -> str:
    return _write(workdir / "house.grs", HOUSE_GRS)
