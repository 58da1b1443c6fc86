"""Generate an anonymized start list and standing for tests.

Names are generated with faker using a fixed seed, so the output is stable.
Each competitor gets 0-3 stars. The standing assigns every competitor a
total for the rounds already wrestled, drawn from the result vocabulary.

Usage:
    python scripts/generate_festival.py
    python scripts/generate_festival.py --competitors 40 --after-round 4
    python scripts/generate_festival.py -o /tmp/fixtures
"""

import argparse
import random
from pathlib import Path

from faker import Faker

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "test_parsers" / "fixtures"

SEED = 20260101

ROUND_SCORES = [8.50, 8.75, 9.00, 9.75, 10.00]
# Wins are more common than draws among the field that stays in the festival
ROUND_WEIGHTS = [3, 2, 2, 3, 4]


def generate_names(count: int, seed: int) -> list[str]:
    """Generate ``count`` unique "Lastname Firstname" names."""
    fake = Faker(["de_CH", "de_DE", "fr_CH"])
    Faker.seed(seed)
    names: list[str] = []
    seen: set[str] = set()
    while len(names) < count:
        name = f"{fake.last_name_male()} {fake.first_name_male()}"
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


def generate_festival(count: int, after_round: int, seed: int) -> tuple[str, str]:
    """Return (start list text, standing text)."""
    rng = random.Random(seed)
    names = generate_names(count, seed)
    stars = ["*" * rng.choice([0, 0, 0, 1, 1, 2, 3]) for _ in names]

    roster_lines = [
        f"{number}, {name} {star}".rstrip()
        for number, (name, star) in enumerate(zip(names, stars), start=1)
    ]

    totals = [
        sum(rng.choices(ROUND_SCORES, weights=ROUND_WEIGHTS, k=after_round))
        for _ in names
    ]
    standing = sorted(zip(totals, names, stars), key=lambda entry: entry[0], reverse=True)
    standing_lines = [f"{total:.2f}, {name} {star}".rstrip() for total, name, star in standing]

    return "\n".join(roster_lines) + "\n", "\n".join(standing_lines) + "\n"


def main():
    parser = argparse.ArgumentParser(description="Generate anonymized festival fixtures")
    parser.add_argument("--competitors", type=int, default=24, help="Number of competitors")
    parser.add_argument("--after-round", type=int, default=4, help="Rounds in the standing")
    parser.add_argument("--seed", type=int, default=SEED)
    parser.add_argument("-o", "--output-dir", type=Path, default=FIXTURES_DIR)
    args = parser.parse_args()

    roster, standing = generate_festival(args.competitors, args.after_round, args.seed)

    args.output_dir.mkdir(parents=True, exist_ok=True)
    roster_path = args.output_dir / "startliste.txt"
    standing_path = args.output_dir / f"rangliste-gang{args.after_round}.txt"
    roster_path.write_text(roster, encoding="utf-8")
    standing_path.write_text(standing, encoding="utf-8")
    print(f"Wrote {roster_path}")
    print(f"Wrote {standing_path}")


if __name__ == "__main__":
    main()
