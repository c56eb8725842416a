import json
import logging
from pathlib import Path

import pytest

from assetnorm.cli import build_parser, job_from_args, main, parse_values
from assetnorm.config import load_config
from assetnorm.errors import InvalidArguments
from assetnorm.policy import Mode


def coords(path):
    rows = []
    for line in Path(path).read_text().splitlines():
        parts = line.split()
        if parts and parts[0] == "v":
            rows.append([float(p) for p in parts[1:4]])
    return rows


def test_report_only(model_obj, workdir, capsys):
    assert main(["transform", model_obj]) == 0
    err = capsys.readouterr().err
    assert "max  1.0000   2.0000   3.0000" in err
    assert "min -1.0000   0.0000   1.0000" in err
    assert not (workdir / "model_.obj").exists()


def test_scale(model_obj, capsys):
    assert main(["transform", model_obj, "2"]) == 0
    assert "Created file model_.obj" in capsys.readouterr().err
    assert coords("model_.obj") == [[2.0, 4.0, 6.0], [-2.0, 0.0, 2.0]]


def test_line_strip_translate_with_negative_offset(house_grs):
    assert main(["transform", house_grs, "5", "-5"]) == 0
    assert Path("house_.grs").read_text().splitlines()[6] == "   5.0000  -5.0000"


def test_mode_override_goes_before_the_input(model_obj):
    assert main(["transform", "--mode", "translate", model_obj, "1", "1", "1"]) == 0
    assert coords("model_.obj") == [[2.0, 3.0, 4.0], [0.0, 1.0, 2.0]]


def test_unitize(model_obj):
    assert main(["unitize", model_obj]) == 0
    assert coords("model_.obj") == [[1.0, 1.0, 1.0], [-1.0, -1.0, -1.0]]


def test_out_dir(model_obj, workdir):
    (workdir / "normalized").mkdir()
    assert main(["unitize", "--out-dir", "normalized", model_obj]) == 0
    assert (workdir / "normalized" / "model_.obj").exists()
    assert not (workdir / "model_.obj").exists()


def test_check_prints_trimesh_summary(cube_obj, capsys):
    assert main(["unitize", "--check", cube_obj]) == 0
    summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert summary["path"] == "cube_.obj"
    assert summary["valid"]
    assert summary["n_faces"] == 12
    assert summary["bounds_min"] == pytest.approx([-1.0, -0.5, -0.25])
    assert summary["bounds_max"] == pytest.approx([1.0, 0.5, 0.25])


def test_check_skips_line_strips(house_grs, capsys):
    assert main(["unitize", "--check", house_grs]) == 0
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize(
    "argv",
    [
        ["transform", "model.obj", "0"],
        ["transform", "model.obj", "1", "2"],
        ["transform", "model.obj", "two"],
        ["transform", "--mode", "scale", "model.obj"],
        ["transform", "model.txt", "2"],
        ["transform", "model.obj", "inf"],
        ["transform", "--mode", "translate", "model.obj", "nan"],
        ["transform", "model.obj", "1_0"],
    ],
)
def test_invalid_arguments(model_obj, argv, caplog):
    with caplog.at_level(logging.ERROR, logger="assetnorm.cli"):
        assert main(argv) == 2
    assert "ERROR!" in caplog.text


def test_explicit_format_for_unknown_extension(workdir):
    (workdir / "model.txt").write_text("v 1 2 3\nv -1 0 1\n")
    assert main(["transform", "--format", "mesh", "model.txt", "2"]) == 0
    assert coords("model_.txt") == [[2.0, 4.0, 6.0], [-2.0, 0.0, 2.0]]


def test_missing_input(workdir):
    assert main(["transform", "nothing.obj", "2"]) == 3


def test_malformed_input(workdir):
    (workdir / "bad.obj").write_text("v 1 2\n")
    assert main(["transform", "bad.obj", "2"]) == 4
    assert not (workdir / "bad_.obj").exists()


def test_output_exists(model_obj, workdir):
    (workdir / "model_.obj").write_text("earlier run\n")
    assert main(["transform", model_obj, "2"]) == 5
    assert (workdir / "model_.obj").read_text() == "earlier run\n"


def test_output_directory_missing(model_obj):
    assert main(["transform", "--out-dir", "no/such/dir", model_obj, "2"]) == 6


def test_empty_geometry(workdir):
    (workdir / "faces.obj").write_text("f 1 2 3\n")
    assert main(["unitize", "faces.obj"]) == 8
    assert not (workdir / "faces_.obj").exists()


def test_config_option(model_obj, workdir):
    (workdir / "c.yaml").write_text("output_suffix: _big\n")
    assert main(["transform", "--config", "c.yaml", model_obj, "10"]) == 0
    assert coords("model_big.obj") == [[10.0, 20.0, 30.0], [-10.0, 0.0, 10.0]]


def test_missing_subcommand_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_job_from_args():
    args = build_parser().parse_args(["transform", "--format", "line_strip", "fig.dat", "3", "-1"])
    job = job_from_args(args, load_config())
    assert job.mode is None
    assert job.values == (3.0, -1.0)
    assert job.fmt.value == "line_strip"
    args = build_parser().parse_args(["unitize", "fig.grs"])
    assert job_from_args(args, load_config()).mode is Mode.UNITIZE


def test_parse_values():
    assert parse_values(["1", "-2.5", "1e3"]) == (1.0, -2.5, 1000.0)
    for bad in ("x", "nan", "-inf", "1_000"):
        with pytest.raises(InvalidArguments):
            parse_values(["1", bad])


def test_non_finite_arguments_write_nothing(model_obj, workdir):
    assert main(["transform", model_obj, "inf"]) == 2
    assert not (workdir / "model_.obj").exists()
