# tests/test_cli.py

import logging
from types import SimpleNamespace
from unittest import mock

import pytest

from astrocore import cli
from astrocore.core.errors import InvalidParameterError
from astrocore.core.time import make_time


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2019-03-20", make_time(2019, 3, 20)),
        ("2019-03-20T21:58", make_time(2019, 3, 20, 21, 58)),
        ("2019-03-20 21:58:30", make_time(2019, 3, 20, 21, 58, 30.0)),
        ("2019-03-20T21:58:30.5Z", make_time(2019, 3, 20, 21, 58, 30.5)),
        ("-0100-03-01", make_time(-100, 3, 1)),
    ],
)
def test_parse_time(text, expected):
    assert cli._parse_time(text).ut == pytest.approx(expected.ut, abs=1e-9)


@pytest.mark.parametrize("text", ["2019/03/20", "20190320", "2019-03-20T21", "yesterday"])
def test_parse_time_rejects(text):
    with pytest.raises(InvalidParameterError):
        cli._parse_time(text)


def test_parse_time_defaults_to_now():
    fixed = make_time(2020, 1, 1)
    with mock.patch.object(cli, "current_time", return_value=fixed):
        assert cli._parse_time(None) is fixed


def test_seasons_command(capsys):
    assert cli.main(["seasons", "2019"]) == 0
    out = capsys.readouterr().out
    assert "March equinox" in out
    assert "2019-03-20T21:5" in out
    assert "2019-12-22T04:1" in out


def test_moon_quarters_command(capsys):
    assert cli.main(["moon-quarters", "--date", "2019-01-01", "--count", "2"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("2019-01-06") and lines[0].endswith("New Moon")
    assert lines[1].startswith("2019-01-14")


def test_apsis_command(capsys):
    assert cli.main(["apsis", "--date", "2019-01-01"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert "apogee" in lines[0] and "km" in lines[0]
    assert "perigee" in lines[1]


def test_position_command(capsys):
    rc = cli.main(["position", "Mars", "--date", "2020-10-13T23:00", "--lat", "51.48", "--lon", "0"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Heliocentric" in out
    assert "Topocentric equatorial (j2000)" in out
    assert "azimuth" in out


def test_riseset_command(capsys):
    rc = cli.main(["riseset", "Sun", "--lat", "51.4769", "--lon", "0", "--date", "2019-06-21"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Rise    : 2019-06-21T03:4" in out
    assert "Set     : 2019-06-21T20:2" in out


def test_elongation_command(capsys):
    assert cli.main(["elongation", "Venus", "--date", "2020-01-01"]) == 0
    out = capsys.readouterr().out
    assert "Venus: elongation" in out
    assert "Next greatest elongation: 2020-03-2" in out


def test_errors_are_reported(capsys):
    assert cli.main(["moon-quarters", "--date", "not-a-date"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error:")


def test_earth_elongation_is_an_error(capsys):
    assert cli.main(["elongation", "Earth", "--date", "2020-01-01"]) == 1
    assert "Earth" in capsys.readouterr().err


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        cli.main(["nonsense"])


def test_logging_level_from_environment(monkeypatch):
    monkeypatch.setenv("ASTROCORE_LOG", "info")
    with mock.patch.object(cli.logging, "basicConfig") as basic:
        cli._configure_logging(verbose=False)
    assert basic.call_args.kwargs["level"] == logging.INFO


def test_verbose_flag_enables_debug(monkeypatch):
    monkeypatch.delenv("ASTROCORE_LOG", raising=False)
    with mock.patch.object(cli.logging, "basicConfig") as basic:
        cli._configure_logging(verbose=True)
    assert basic.call_args.kwargs["level"] == logging.DEBUG


def test_diag_forwards_remaining_arguments():
    tool = SimpleNamespace(main=mock.Mock(return_value=None))
    with mock.patch.object(cli.importlib, "import_module", return_value=tool) as imp:
        rc = cli.main(["diag", "plot-deltat", "--y0", "1900", "--y1", "1950"])
    assert rc == 0
    imp.assert_called_once_with("astrocore.diagnostics.plot_deltat")
    tool.main.assert_called_once_with(["--y0", "1900", "--y1", "1950"])


def test_diag_exit_status_is_propagated():
    tool = SimpleNamespace(main=mock.Mock(return_value=3))
    with mock.patch.object(cli.importlib, "import_module", return_value=tool):
        assert cli.cmd_diag("validate-helio", []) == 3


def test_diag_rejects_unknown_tool():
    with pytest.raises(SystemExit):
        cli.main(["diag", "nope"])
