from __future__ import annotations

import unittest

from ncaa_ingest.ingestion.identifiers import derive_identifier, normalize_team_name
from ncaa_ingest.ingestion.schema import GameRecord


def _record(**overrides) -> GameRecord:
    data = {
        "home_team": "Duke",
        "away_team": "UNC",
        "sport": "basketball",
        "division": "d1",
        "date": "2024-01-15",
    }
    data.update(overrides)
    return GameRecord.model_validate(data)


class NormalizeTeamNameTests(unittest.TestCase):
    def test_collapses_punctuation_runs_and_trims(self) -> None:
        self.assertEqual("texas-a-m", normalize_team_name("Texas A&M"))
        self.assertEqual("st-john-s", normalize_team_name("  St. John's!! "))
        self.assertEqual("north-carolina", normalize_team_name("North---Carolina"))


class DeriveIdentifierTests(unittest.TestCase):
    def test_builds_identifier_from_matchup(self) -> None:
        self.assertEqual(
            "ncaa-basketball-d1-20240115-duke-vs-unc",
            derive_identifier(_record()),
        )

    def test_external_identifier_wins(self) -> None:
        record = _record(gameId="5551234")

        self.assertEqual("ncaa-5551234", derive_identifier(record))

    def test_numeric_external_identifier_is_accepted(self) -> None:
        record = _record(gameId=987)

        self.assertEqual("ncaa-987", derive_identifier(record))

    def test_equivalent_spellings_share_an_identifier(self) -> None:
        first = _record(home_team="Saint Mary's", away_team="Gonzaga")
        second = _record(home_team="  SAINT MARY'S ", away_team="gonzaga", sport="Basketball")

        self.assertEqual(derive_identifier(first), derive_identifier(second))

    def test_home_and_away_order_matters(self) -> None:
        swapped = _record(home_team="UNC", away_team="Duke")

        self.assertNotEqual(derive_identifier(_record()), derive_identifier(swapped))


if __name__ == "__main__":
    unittest.main()
