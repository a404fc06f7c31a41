from __future__ import annotations

import unittest

from ncaa_ingest.errors import ValidationError
from ncaa_ingest.ingestion.schema import GameRecord
from ncaa_ingest.ingestion.validator import GameRecordValidator

from support import duke_unc


class GameRecordValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = GameRecordValidator()

    def assertRejected(self, record, expected_message: str) -> ValidationError:
        with self.assertRaises(ValidationError) as ctx:
            self.validator.validate(record)
        self.assertEqual(expected_message, str(ctx.exception))
        return ctx.exception

    def test_valid_record_is_parsed(self) -> None:
        record = self.validator.validate(
            duke_unc(gender="Men", home_conference="ACC", away_conference="ACC", status="Final")
        )

        self.assertIsInstance(record, GameRecord)
        self.assertEqual("men", record.gender)
        self.assertEqual("final", record.status)
        self.assertEqual("ACC", record.home_conference)

    def test_rejects_non_mapping(self) -> None:
        self.assertRejected(None, "NCAA game data is required")
        self.assertRejected(["Duke"], "NCAA game data must be an object")

    def test_missing_required_field(self) -> None:
        record = duke_unc()
        del record["sport"]

        error = self.assertRejected(record, "sport is required")
        self.assertEqual("sport", error.field)

    def test_blank_team_name(self) -> None:
        self.assertRejected(duke_unc(home_team="   "), "home_team is required")

    def test_unknown_sport(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.validator.validate(duke_unc(sport="quidditch"))

        self.assertTrue(str(ctx.exception).startswith("sport must be one of: soccer"))

    def test_unknown_division(self) -> None:
        self.assertRejected(
            duke_unc(division="d9"),
            "division must be one of: d1, d2, d3, naia, njcaa",
        )

    def test_unknown_gender(self) -> None:
        self.assertRejected(
            duke_unc(gender="robots"),
            "gender must be one of: men, women, mixed, coed",
        )

    def test_malformed_and_impossible_dates(self) -> None:
        self.assertRejected(duke_unc(date="01/15/2024"), "date must match the format: YYYY-MM-DD")
        self.assertRejected(duke_unc(date="2024-02-30"), "date must match the format: YYYY-MM-DD")

    def test_same_team_on_both_sides(self) -> None:
        self.assertRejected(
            duke_unc(away_team="duke "),
            "home_team and away_team must be different",
        )

    def test_negative_score(self) -> None:
        self.assertRejected(duke_unc(home_score=-1), "home_score must be a non-negative number")

    def test_non_string_sport(self) -> None:
        self.assertRejected(duke_unc(sport=7), "sport must be a string")

    def test_blank_conference_is_dropped(self) -> None:
        record = self.validator.validate(duke_unc(home_conference=""))

        self.assertIsNone(record.home_conference)


if __name__ == "__main__":
    unittest.main()
