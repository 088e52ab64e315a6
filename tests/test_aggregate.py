from __future__ import annotations

import logging
import random

import pytest

from debt_ledger import (
    SourceNotFound,
    SourceUnreadable,
    TransactionRecord,
    aggregate_file,
    aggregate_lines,
    debt_key,
    iter_lines,
    parse_line,
)


def test_scenario_sums_per_ordered_pair_in_first_seen_order(write_ledger):
    path = write_ledger("Alice,Bob,20\nAlice,Bob,30\nBob,Alice,10\n")

    result = aggregate_file(path)

    assert list(result.table.items()) == [("Alice,Bob", 50.0), ("Bob,Alice", 10.0)]
    assert result.skipped == ()
    assert result.lines_read == 3


def test_crlf_line_endings_leave_no_carriage_return_in_keys(write_ledger):
    path = write_ledger("Alice,Bob,20\r\nAlice,Bob,5\r\n")

    result = aggregate_file(path)

    assert result.table == {"Alice,Bob": 25.0}
    assert all("\r" not in key for key in result.table)


def test_iter_lines_strips_terminators_only(write_ledger):
    path = write_ledger("a\r\nb\nx\ry\nlast")

    assert list(iter_lines(path)) == ["a", "b", "x\ry", "last"]


def test_empty_source_gives_empty_table(write_ledger):
    path = write_ledger("")

    result = aggregate_file(path)

    assert result.table == {}
    assert result.skipped == ()
    assert result.lines_read == 0


def test_missing_source_is_fatal(tmp_path):
    missing = tmp_path / "non-existent-file.csv"

    with pytest.raises(SourceNotFound) as excinfo:
        aggregate_file(missing)

    assert str(excinfo.value) == f"File not found: {missing}"
    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_directory_source_is_unreadable(tmp_path):
    with pytest.raises(SourceUnreadable):
        aggregate_file(tmp_path)


def test_non_utf8_source_is_unreadable(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"Alice,Bob,10\nJos\xe9,Bob,5\n")

    with pytest.raises(SourceUnreadable) as excinfo:
        aggregate_file(path)

    assert "utf-8" in excinfo.value.reason


@pytest.mark.parametrize(
    "bad_line",
    [
        "Alice,,5",
        ",Bob,5",
        "Alice,Bob,notanumber",
        "Alice,Bob,",
        "Alice,Bob",
        "Alice,Bob,nan",
        "Alice,Bob,inf",
        "Alice,Bob,1e999",
        "Alice,Bob,1_000",
        "Alice,Bob,١٢",
        "Alice,Bob,0x10",
        "Alice,Bob,12abc",
        "",
    ],
)
def test_invalid_line_is_skipped_and_rest_aggregated(bad_line):
    lines = ["Alice,Bob,20", bad_line, "Alice,Bob,30", "Carol,Bob,1.5"]

    result = aggregate_lines(lines)

    assert result.table == {"Alice,Bob": 50.0, "Carol,Bob": 1.5}
    assert len(result.skipped) == 1
    skipped = result.skipped[0]
    assert skipped.line_number == 2
    assert skipped.content == bad_line
    assert skipped.reason


def test_invalid_line_is_logged_with_content(caplog):
    with caplog.at_level(logging.WARNING, logger="debt_ledger"):
        aggregate_lines(["Alice,Bob,20", "Alice,Bob,notanumber"])

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(messages) == 1
    assert "line 2" in messages[0]
    assert "Alice,Bob,notanumber" in messages[0]


def test_parse_line_ignores_fields_after_the_third():
    record = parse_line("Alice,Bob,20,memo,more")

    assert record == TransactionRecord(payer="Alice", payee="Bob", amount=20.0)
    assert record.key == "Alice,Bob"


def test_parse_line_keeps_names_verbatim_and_tolerates_padded_amount():
    record = parse_line(" Alice,Bob , 7.25 ")

    assert record.payer == " Alice"
    assert record.payee == "Bob "
    assert record.amount == 7.25


def test_parse_line_reports_which_field_failed():
    with pytest.raises(ValueError, match="payee"):
        parse_line("Alice,,5")
    with pytest.raises(ValueError, match="expected 3 fields"):
        parse_line("Alice")


def test_reverse_pairs_are_not_netted():
    result = aggregate_lines(["A,B,10", "B,A,10"])

    assert result.table == {debt_key("A", "B"): 10.0, debt_key("B", "A"): 10.0}


def test_summation_matches_naive_reference():
    rng = random.Random(20240607)
    names = ["Alice", "Bob", "Carol", "Dave"]
    lines = []
    for _ in range(500):
        payer, payee = rng.sample(names, 2)
        lines.append(f"{payer},{payee},{rng.uniform(-250, 250):.2f}")

    result = aggregate_lines(lines)

    reference: dict[str, float] = {}
    for line in lines:
        payer, payee, amount = line.split(",")
        reference[f"{payer},{payee}"] = reference.get(f"{payer},{payee}", 0.0) + float(amount)

    assert result.table.keys() == reference.keys()
    for key, total in reference.items():
        assert result.table[key] == pytest.approx(total)


@pytest.mark.parametrize(
    ("token", "expected"),
    [("1e3", 1000.0), (".5", 0.5), ("+2.", 2.0), ("-0.25", -0.25), ("1E-2", 0.01)],
)
def test_parse_line_accepts_plain_decimal_forms(token, expected):
    assert parse_line(f"Alice,Bob,{token}").amount == expected


def test_overflowing_running_total_skips_the_line_and_keeps_prior_total():
    result = aggregate_lines(["A,B,1e308", "A,B,1e308", "A,B,1", "C,D,5"])

    assert result.table == {"A,B": 1e308 + 1.0, "C,D": 5.0}
    assert [s.line_number for s in result.skipped] == [2]
    assert "overflows" in result.skipped[0].reason
