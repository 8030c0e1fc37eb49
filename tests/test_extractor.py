"""Tests for candidate extraction and the candidate table loader."""

from pathlib import Path

import pytest

from core.domain.errors import ExtractionError
from core.domain.models import REJECTION_MESSAGE, CandidateLabel
from core.services.extractor import (
    VALID_PATTERN,
    classify,
    extract_candidates,
    load_candidates,
)


def _write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


class TestClassify:
    def test_valid_shape_is_labeled_valid(self):
        candidates = classify(["My car is AB12 CDE, not yours."])

        valid = [c.token for c in candidates if c.label is CandidateLabel.VALID]
        assert valid == ["AB12 CDE"]

    def test_valid_precedes_invalid_in_first_occurrence_order(self):
        candidates = classify(["Reg XY34 ZZZ then B4 and AB12 CDE plus Q7"])

        assert [(c.token, c.label) for c in candidates] == [
            ("XY34 ZZZ", CandidateLabel.VALID),
            ("AB12 CDE", CandidateLabel.VALID),
            ("ZZZ", CandidateLabel.INVALID),
            ("B4", CandidateLabel.INVALID),
            ("CDE", CandidateLabel.INVALID),
            ("Q7", CandidateLabel.INVALID),
        ]

    def test_long_alphanumeric_runs_are_not_candidates(self):
        assert classify(["INVALID123 is too long"]) == []

    def test_lowercase_words_are_ignored(self):
        assert classify(["just some ordinary words"]) == []

    def test_label_sets_are_disjoint(self):
        texts = [
            "AB12 CDE AB12 CDE X1 X1 ZZ99 ZZZ",
            "ZZZ AB12 CDE 7 QQ11 QQQ",
        ]
        candidates = classify(texts)

        valid = {c.token for c in candidates if c.label is CandidateLabel.VALID}
        invalid = {c.token for c in candidates if c.label is CandidateLabel.INVALID}
        assert valid
        assert invalid
        assert valid.isdisjoint(invalid)
        assert len(candidates) == len({c.token for c in candidates})

    @pytest.mark.parametrize("token", ["AA00 AAA", "ZZ99 ZZZ", "MK21 XYZ"])
    def test_every_valid_shape_matches_anywhere(self, token):
        for text in (token, f"start {token}", f"{token} end", f"line one\nx {token} y"):
            assert VALID_PATTERN.search(text)
            labels = {c.token: c.label for c in classify([text])}
            assert labels[token] is CandidateLabel.VALID


class TestExtractCandidates:
    def test_writes_header_and_labeled_rows(self, corpus_dir, tmp_path):
        _write(corpus_dir, "car_input.txt", "Check AB12 CDE and B4 please")
        output = tmp_path / "out" / "cleaned.txt"

        result = extract_candidates(input_dir=corpus_dir, output_path=output)

        assert output.read_text(encoding="utf-8") == (
            "VARIANT_REG,STATUS\n"
            "AB12 CDE,VALID\n"
            f"CDE,{REJECTION_MESSAGE}\n"
            f"B4,{REJECTION_MESSAGE}\n"
        )
        assert [p.name for p in result.files] == ["car_input.txt"]
        assert [c.token for c in result.valid] == ["AB12 CDE"]

    def test_token_in_two_files_yields_one_row(self, corpus_dir, tmp_path):
        _write(corpus_dir, "a_input.txt", "AB12 CDE")
        _write(corpus_dir, "b_input.txt", "seen again: AB12 CDE")
        output = tmp_path / "cleaned.txt"

        extract_candidates(input_dir=corpus_dir, output_path=output)

        rows = output.read_text(encoding="utf-8").splitlines()
        assert rows.count("AB12 CDE,VALID") == 1

    def test_files_are_scanned_in_name_order(self, corpus_dir, tmp_path):
        _write(corpus_dir, "b_input.txt", "AA11 AAA")
        _write(corpus_dir, "a_input.txt", "ZZ99 ZZZ")
        output = tmp_path / "cleaned.txt"

        result = extract_candidates(input_dir=corpus_dir, output_path=output)

        assert [c.token for c in result.valid] == ["ZZ99 ZZZ", "AA11 AAA"]

    def test_running_twice_is_byte_identical(self, corpus_dir, tmp_path):
        _write(corpus_dir, "one_input.txt", "AB12 CDE X9 QW12 ERT")
        _write(corpus_dir, "two_input.txt", "K1 AB12 CDE")
        output = tmp_path / "cleaned.txt"

        extract_candidates(input_dir=corpus_dir, output_path=output)
        first = output.read_bytes()
        extract_candidates(input_dir=corpus_dir, output_path=output)

        assert output.read_bytes() == first

    def test_ignores_files_without_marker_or_extension(self, corpus_dir, tmp_path):
        _write(corpus_dir, "notes.txt", "AA11 AAA")
        _write(corpus_dir, "data_input.csv", "BB22 BBB")
        (corpus_dir / "nested_input.txt").mkdir()
        _write(corpus_dir, "real_input.txt", "CC33 CCC")
        output = tmp_path / "cleaned.txt"

        result = extract_candidates(input_dir=corpus_dir, output_path=output)

        assert [p.name for p in result.files] == ["real_input.txt"]
        assert [c.token for c in result.valid] == ["CC33 CCC"]

    def test_overwrites_previous_table(self, corpus_dir, tmp_path):
        _write(corpus_dir, "car_input.txt", "AB12 CDE")
        output = tmp_path / "cleaned.txt"
        output.write_text("stale content\n" * 10, encoding="utf-8")

        extract_candidates(input_dir=corpus_dir, output_path=output)

        assert "stale" not in output.read_text(encoding="utf-8")

    def test_missing_directory_is_fatal(self, tmp_path):
        with pytest.raises(ExtractionError, match="Input directory not found"):
            extract_candidates(input_dir=tmp_path / "missing", output_path=tmp_path / "out.txt")

    def test_unreadable_file_aborts_without_writing(self, corpus_dir, tmp_path):
        _write(corpus_dir, "a_input.txt", "AB12 CDE")
        (corpus_dir / "b_input.txt").write_bytes(b"\xff\xfe\xfa broken")
        output = tmp_path / "cleaned.txt"

        with pytest.raises(ExtractionError, match="b_input.txt"):
            extract_candidates(input_dir=corpus_dir, output_path=output)

        assert not output.exists()


class TestLoadCandidates:
    def test_reads_table_back(self, corpus_dir, tmp_path):
        _write(corpus_dir, "car_input.txt", "AB12 CDE B4")
        output = tmp_path / "cleaned.txt"
        result = extract_candidates(input_dir=corpus_dir, output_path=output)

        assert load_candidates(output) == result.candidates

    def test_skips_header_and_blank_lines(self, tmp_path):
        table = tmp_path / "table.txt"
        table.write_text(
            "VARIANT_REG,STATUS\n\nAB12 CDE,VALID\n   \nX1,The license plate number is not recognised\n",
            encoding="utf-8",
        )

        candidates = load_candidates(table)

        assert [(c.token, c.label) for c in candidates] == [
            ("AB12 CDE", CandidateLabel.VALID),
            ("X1", CandidateLabel.INVALID),
        ]

    def test_missing_table_is_fatal(self, tmp_path):
        with pytest.raises(ExtractionError):
            load_candidates(tmp_path / "nope.txt")
