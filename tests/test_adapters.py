# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the IERS finals CSV and NAIF leap-seconds kernel adapters."""

import logging
import math

import pytest

FINALS_HEADER = (
    "MJD;Year;Month;Day;Type;x_pole;sigma_x_pole;y_pole;sigma_y_pole;Type;UT1-UTC;"
    "sigma_UT1-UTC;LOD;sigma_LOD;Type;dPsi;sigma_dPsi;dEpsilon;sigma_dEpsilon;Type;"
    "dX;sigma_dX;dY;sigma_dY"
)

FINALS_ROWS = [
    "60494;2024;07;04;final;0.213438;0.000029;0.475221;0.000026;final;-0.0039125;0.0000080;"
    "0.6210;0.0037;final;-113.722;0.351;-7.895;0.095;final;0.286;0.073;-0.168;0.095",
    "60495;2024;07;05;final;0.215088;0.000029;0.474426;0.000025;final;-0.0046230;0.0000082;"
    "0.7716;0.0044;final;-113.695;0.351;-7.899;0.095;final;0.280;0.073;-0.170;0.095",
    "60496;2024;07;06;prediction;0.216700;0.000500;0.473600;0.000500;prediction;-0.0054500;"
    "0.0000900;;;prediction;;;;;prediction;;;;",
    "60900;2025;08;14;;;;;;;;;;;;;;;;;;;;",
]


def _write_finals(tmp_path, rows=FINALS_ROWS, header=FINALS_HEADER):
    path = tmp_path / "finals2000A.all.csv"
    path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
    return path


LSK = r"""KPL/LSK

\begintext

Leap seconds kernel excerpt.

\begindata

DELTET/DELTA_T_A       =   32.184
DELTET/K               =    1.657D-3
DELTET/DELTA_AT        = ( 10,   @1972-JAN-1
                           11,   @1972-JUL-1
                           12,   @1973-JAN-1
                           36,   @2015-JUL-1
                           37,   @2017-JAN-1 )

\begintext
"""


class TestFinalsCsv:
    """Parsing, unit conversion and row filtering."""

    def test_reads_entries(self, tmp_path):
        from almagest.adapters.iers_csv import read_finals_csv
        entries = read_finals_csv(_write_finals(tmp_path))
        assert [e.mjd for e in entries] == [60494, 60495, 60496]
        first = entries[0]
        assert first.xp == 0.213438
        assert first.yp == 0.475221
        assert first.dut1 == -0.0039125

    def test_corrections_are_converted_from_mas(self, tmp_path):
        from almagest.adapters.iers_csv import read_finals_csv
        first = read_finals_csv(_write_finals(tmp_path))[0]
        assert first.dpsi == pytest.approx(-0.113722)
        assert first.deps == pytest.approx(-0.007895)
        assert first.dx == pytest.approx(0.000286)
        assert first.dy == pytest.approx(-0.000168)

    def test_missing_corrections_default_to_zero(self, tmp_path):
        from almagest.adapters.iers_csv import read_finals_csv
        prediction = read_finals_csv(_write_finals(tmp_path))[2]
        assert (prediction.dpsi, prediction.deps, prediction.dx, prediction.dy) == (0.0, 0.0, 0.0, 0.0)

    def test_load_builds_series(self, tmp_path, caplog):
        from almagest.adapters.iers_csv import load_finals_csv
        from almagest.domain.utc import Utc
        with caplog.at_level(logging.INFO, logger="almagest.adapters.iers_csv"):
            series = load_finals_csv(_write_finals(tmp_path))
        assert len(series) == 3
        assert "Read 3 EOP samples" in caplog.text
        tai = Utc.from_iso("2024-07-05T00:00:00").to_tai().to_delta()
        # UT1-TAI = UT1-UTC - 37 s on a sample day
        assert series.delta_ut1_tai(tai).to_decimal_seconds() == pytest.approx(-0.0046230 - 37.0, abs=1e-9)
        xp, yp = series.polar_motion(tai)
        arcsec = math.pi / 648000.0
        assert xp == pytest.approx(0.215088 * arcsec, rel=1e-12)
        assert yp == pytest.approx(0.474426 * arcsec, rel=1e-12)

    def test_strict_flag_is_forwarded(self, tmp_path):
        from almagest.adapters.iers_csv import load_finals_csv
        assert load_finals_csv(_write_finals(tmp_path), strict=True).strict

    def test_missing_columns(self, tmp_path):
        from almagest.adapters.iers_csv import FinalsCsvError, read_finals_csv
        path = _write_finals(tmp_path, rows=[], header="MJD;Year;x_pole")
        with pytest.raises(FinalsCsvError, match="lacks columns y_pole, UT1-UTC"):
            read_finals_csv(path)

    def test_invalid_number(self, tmp_path):
        from almagest.adapters.iers_csv import FinalsCsvError, read_finals_csv
        bad = FINALS_ROWS[0].replace("0.475221", "0.47x")
        with pytest.raises(FinalsCsvError, match="invalid y_pole value in row 1"):
            read_finals_csv(_write_finals(tmp_path, rows=[bad]))

    def test_row_without_ut1(self, tmp_path):
        from almagest.adapters.iers_csv import FinalsCsvError, read_finals_csv
        bad = FINALS_ROWS[0].replace("-0.0039125", "")
        with pytest.raises(FinalsCsvError, match="missing data from row 1"):
            read_finals_csv(_write_finals(tmp_path, rows=[bad]))

    def test_missing_file(self, tmp_path):
        from almagest.adapters.iers_csv import read_finals_csv
        with pytest.raises(FileNotFoundError):
            read_finals_csv(tmp_path / "nope.csv")


class TestLeapSecondsKernel:
    """DELTET/DELTA_AT extraction."""

    def test_parse(self):
        from almagest.adapters.lsk import parse_lsk
        from almagest.domain.calendar_dates import Date
        table = parse_lsk(LSK)
        assert len(table) == 5
        assert table.first_date == Date(1972, 1, 1)
        assert [e.tai_utc for e in table.entries] == [10, 11, 12, 36, 37]
        assert table.is_leap_second_date(Date(2016, 12, 31))

    def test_matches_bundled_table(self):
        from almagest.adapters.lsk import parse_lsk
        from almagest.domain.leap_seconds import load_leap_seconds
        from almagest.domain.time_scales import TimeScale
        from almagest.domain.time_systems import Time
        tai = Time.from_iso("2020-01-01T00:00:00", TimeScale.TAI).to_delta()
        assert parse_lsk(LSK).delta_tai_utc(tai) == load_leap_seconds().delta_tai_utc(tai)

    def test_text_outside_data_blocks_is_ignored(self):
        from almagest.adapters.lsk import LeapSecondsKernelError, parse_lsk
        text = "\\begintext\nDELTET/DELTA_AT = ( 10, @1972-JAN-1 )\n"
        with pytest.raises(LeapSecondsKernelError, match="DELTET/DELTA_AT"):
            parse_lsk(text)

    def test_missing_key(self):
        from almagest.adapters.lsk import LeapSecondsKernelError, parse_lsk
        with pytest.raises(LeapSecondsKernelError, match="no leap seconds found"):
            parse_lsk("\\begindata\nDELTET/K = 1.657D-3\n")

    def test_unknown_month(self):
        from almagest.adapters.lsk import LeapSecondsKernelError, parse_lsk
        with pytest.raises(LeapSecondsKernelError, match="unknown month `FOO`"):
            parse_lsk("\\begindata\nDELTET/DELTA_AT = ( 10, @1972-FOO-1 )\n")

    def test_duplicates_are_ignored(self, caplog):
        from almagest.adapters.lsk import parse_lsk
        text = "\\begindata\nDELTET/DELTA_AT = ( 10, @1972-JAN-1\n 10, @1972-JAN-1\n 11, @1972-JUL-1 )\n"
        with caplog.at_level(logging.WARNING, logger="almagest.adapters.lsk"):
            table = parse_lsk(text)
        assert len(table) == 2
        assert "duplicate leap-second entry" in caplog.text

    def test_load_from_file(self, tmp_path):
        from almagest.adapters.lsk import load_lsk
        path = tmp_path / "naif0012.tls"
        path.write_text(LSK, encoding="utf-8")
        assert len(load_lsk(path)) == 5
