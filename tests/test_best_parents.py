import pytest

from best_parents import main

CSV = "a,b,c\n1,1,1\n2,2,1\n1,1,2\n2,2,2\n"


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "small.csv"
    path.write_text(CSV)
    return path


def test_writes_gph_and_dot(csv_file, tmp_path, capsys):
    out = tmp_path / "small.gph"
    dot = tmp_path / "small.dot"
    assert main([str(csv_file), str(out), "--dot", str(dot), "--check-cycles"]) == 0
    assert out.read_text() == "a, b\n"
    assert '"a" -> "b";' in dot.read_text()
    printed = capsys.readouterr().out
    assert "a -> b" in printed
    assert "Bayesian score" in printed


def test_options_override_preset(csv_file, tmp_path):
    out = tmp_path / "small.gph"
    args = [str(csv_file), str(out), "--preset", "small", "--max-degree", "1",
            "--bounded", "children", "--no-gain-filter"]
    assert main(args) == 0
    assert out.read_text().splitlines() == ["a, b", "b, c"]


def test_plot(csv_file, tmp_path):
    out = tmp_path / "small.gph"
    assert main([str(csv_file), str(out), "--plot"]) == 0
    assert (tmp_path / "small.png").exists()


def test_bad_data_exits_nonzero(tmp_path, capsys):
    path = tmp_path / "bad.csv"
    path.write_text("a,b\n0,1\n1,2\n")
    assert main([str(path), str(tmp_path / "bad.gph")]) == 1
    assert "error:" in capsys.readouterr().err


def test_negative_cap_exits_nonzero(csv_file, tmp_path):
    assert main([str(csv_file), str(tmp_path / "x.gph"), "--max-degree", "-2"]) == 1


def test_labelled_csv(tmp_path):
    path = tmp_path / "labels.csv"
    path.write_text("sky,road\nsun,dry\nrain,wet\nsun,dry\nrain,wet\n")
    out = tmp_path / "labels.gph"
    assert main([str(path), str(out)]) == 0
    assert out.read_text() == "sky, road\n"


def test_missing_value_exits_nonzero(tmp_path, capsys):
    path = tmp_path / "gaps.csv"
    path.write_text("a,b\n1,1\n,2\n")
    assert main([str(path), str(tmp_path / "gaps.gph")]) == 1
    assert "error:" in capsys.readouterr().err


def test_header_only_csv(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("a,b\n")
    out = tmp_path / "empty.gph"
    assert main([str(path), str(out)]) == 0
    assert out.read_text() == ""
