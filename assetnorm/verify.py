"""Independent check of a rewritten mesh, loaded back through trimesh."""

import logging
from pathlib import Path
from typing import Any, Dict

import trimesh

_LOG = logging.getLogger(__name__)


def summarize_mesh(mesh_path: Path) -> Dict[str, Any]:
    mesh = trimesh.load(str(mesh_path), file_type="obj", force="mesh", process=False)
    n_verts = int(len(mesh.vertices))
    n_faces = int(len(mesh.faces))
    summary: Dict[str, Any] = {
        "path": str(mesh_path),
        "valid": bool(n_verts > 0),
        "n_verts": n_verts,
        "n_faces": n_faces,
    }
    if n_verts:
        lo, hi = mesh.bounds
        summary["bounds_min"] = [float(v) for v in lo]
        summary["bounds_max"] = [float(v) for v in hi]
    else:
        _LOG.warning("trimesh found no vertices in %s", mesh_path)
    return summary
