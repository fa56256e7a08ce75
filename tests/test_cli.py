"""Tests for the sizegen command-line interface."""

from pathlib import Path

import pytest

from sizegen.cli import main


def _values(out: str) -> list[int]:
    return [int(tok) for line in out.splitlines() for tok in line.split()]


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0
    assert "sizegen" in capsys.readouterr().out


def test_histogram_command(capsys: pytest.CaptureFixture[str]) -> None:
    main(["histogram", "--csv", "0:1,1:1,2:1", "--count", "45", "--seed", "1"])
    values = _values(capsys.readouterr().out)
    assert len(values) == 45
    assert set(values) <= {0, 1}


def test_histogram_custom_separator(capsys: pytest.CaptureFixture[str]) -> None:
    main(["histogram", "--csv", "5=1", "--separator", "=", "--count", "3", "--seed", "1"])
    assert all(0 <= v < 5 for v in _values(capsys.readouterr().out))


def test_histogram_bad_csv_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["histogram", "--csv", "abc:1"])
    assert exc.value.code == 1
    assert "Error:" in capsys.readouterr().out


def test_poisson_command_is_seeded(capsys: pytest.CaptureFixture[str]) -> None:
    main(["poisson", "--lambda", "6", "--count", "20", "--seed", "11"])
    first = capsys.readouterr().out
    main(["poisson", "--lambda", "6", "--count", "20", "--seed", "11"])
    assert capsys.readouterr().out == first
    assert len(_values(first)) == 20


def test_poisson_zero_lambda(capsys: pytest.CaptureFixture[str]) -> None:
    main(["poisson", "--lambda", "0", "--count", "5"])
    assert _values(capsys.readouterr().out) == [0, 0, 0, 0, 0]


def test_poisson_negative_lambda_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["poisson", "--lambda", "-3"])
    assert exc.value.code == 1
    assert "Error:" in capsys.readouterr().out


def test_poisson_scale(capsys: pytest.CaptureFixture[str]) -> None:
    main(["poisson", "--lambda", "0", "--scale", "2500", "1000", "--count", "2"])
    assert _values(capsys.readouterr().out) == [0, 0]


def test_poisson_scale_zero_slice_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["poisson", "--lambda", "3", "--scale", "100", "0"])
    assert exc.value.code == 1


def test_table_command(capsys: pytest.CaptureFixture[str]) -> None:
    main(["table", "--lambda", "3"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("lambda=3 ")
    last = lines[-1].split()
    assert float(last[2]) == pytest.approx(1.0, abs=1e-6)


def test_config_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "samplers.yaml"
    path.write_text(
        "samplers:\n"
        "  sizes: {distribution: histogram, csv: '10:1'}\n"
        "  counts: {distribution: poisson, lambda: 0}\n",
        encoding="utf-8",
    )
    main(["config", "--config", str(path), "--name", "counts", "--count", "4"])
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "counts (poisson):"
    assert out.splitlines()[1] == "0 0 0 0"


def test_config_unknown_sampler_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "samplers.yaml"
    path.write_text("samplers:\n  sizes: {csv: '10:1'}\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["config", "--config", str(path), "--name", "nope"])
    assert exc.value.code == 1
    assert "Available samplers: sizes" in capsys.readouterr().out


def test_output_file_records_metrics(tmp_path: Path) -> None:
    output = tmp_path / "draws.jsonl"
    main(["--output-file", str(output), "poisson", "--lambda", "4", "--count", "3", "--seed", "2"])
    assert output.exists()
    assert "sizegen.draw.count" in output.read_text(encoding="utf-8")
