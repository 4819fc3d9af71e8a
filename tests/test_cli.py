import io

import pytest

from conftest import make_ppm
from ppm_tone.cli import main, parse_args
from ppm_tone.errors import ParamError


def _run(argv, data=b""):
    out = io.BytesIO()
    status = main(argv, stdin=io.BytesIO(data), stdout=out)
    return status, out.getvalue()


def test_greyscale(sample_ppm):
    status, out = _run(["1"], sample_ppm)
    assert status == 0
    assert out == b"P5 2 1 255\n" + bytes([18, 124])


def test_sepia(sample_ppm):
    status, out = _run(["2"], sample_ppm)
    assert status == 0
    assert out.startswith(b"P6 2 1 255\n")
    assert len(out) == len(b"P6 2 1 255\n") + 6


@pytest.mark.parametrize("argv", [[], ["1", "2"], ["0"], ["3"], ["abc"], ["--bogus", "1"]])
def test_usage_errors_exit_with_param_status(argv, sample_ppm):
    status, out = _run(argv, sample_ppm)
    assert status == 3
    assert out == b""


def test_usage_error_is_not_argparse_exit_code():
    with pytest.raises(ParamError):
        parse_args([])


def test_version_header_and_corrupt_statuses(sample_ppm):
    assert _run(["1"], make_ppm(2, 1, [0] * 6, magic="P5"))[0] == 2
    assert _run(["1"], b"P6 x 1 255\n")[0] == 1
    assert _run(["2"], sample_ppm[:-1])[0] == 4


def test_verbose_logs_to_stderr_not_stdout(sample_ppm, capsys):
    status, out = _run(["1", "--verbose"], sample_ppm)
    assert status == 0
    assert out == b"P5 2 1 255\n" + bytes([18, 124])
    captured = capsys.readouterr()
    assert "[OK]" in captured.err
    assert captured.out == ""


def test_quiet_run_writes_nothing_to_stderr(sample_ppm, capsys):
    assert _run(["1"], sample_ppm)[0] == 0
    assert capsys.readouterr().err == ""


@pytest.mark.parametrize("argv", [["-h"], ["--help"], ["1", "-h"], ["--help", "2"]])
def test_help_flags_are_usage_errors(argv, sample_ppm, capsys):
    status, out = _run(argv, sample_ppm)
    assert status == 3
    assert out == b""
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "usage" in captured.err.lower()


def test_preview_is_written(sample_ppm, tmp_path):
    target = tmp_path / "previews" / "before_after.png"
    status, _ = _run(["2", "--preview", str(target)], sample_ppm)
    assert status == 0
    assert target.is_file()
    assert target.stat().st_size > 0


def test_unwritable_preview_still_exits_zero(sample_ppm, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")
    status, out = _run(["2", "--preview", str(blocker / "cmp.png")], sample_ppm)
    assert status == 0
    assert len(out) == len(b"P6 2 1 255\n") + 6
    assert "preview not saved" in capsys.readouterr().err
