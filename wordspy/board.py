from __future__ import annotations

import random
from pathlib import Path

from wordspy.core.types import Word, WordKind

_DEFAULT_WORDS_PATH = Path(__file__).resolve().parent / "assets" / "words.txt"


def load_word_list(path: Path | None = None) -> list[str]:
    """Read one word per line; blank lines and `#` comments are skipped.

    Duplicates are dropped (first occurrence wins) since board lookups
    match on the first word with a given text.
    """

    src = path or _DEFAULT_WORDS_PATH
    seen: set[str] = set()
    words: list[str] = []
    for line in src.read_text(encoding="utf-8").splitlines():
        w = line.strip()
        if not w or w.startswith("#") or w in seen:
            continue
        seen.add(w)
        words.append(w)
    return words


def board_size(*, words_per_team: int, neutral_count: int, assassin_count: int = 1) -> int:
    return 2 * words_per_team + neutral_count + assassin_count


def deal_board(
    words: list[str],
    *,
    rng: random.Random,
    words_per_team: int = 9,
    neutral_count: int = 6,
    assassin_count: int = 1,
) -> list[Word]:
    """Sample a board from `words` and assign each entry a kind.

    Layout: `words_per_team` words per team, `assassin_count` assassins,
    `neutral_count` neutrals, shuffled with `rng` for reproducibility.
    """

    unique = list(dict.fromkeys(words))
    size = board_size(words_per_team=words_per_team, neutral_count=neutral_count, assassin_count=assassin_count)
    if len(unique) < size:
        raise ValueError(f"Need at least {size} unique words for a board (got {len(unique)})")

    picked = rng.sample(unique, size)
    kinds = (
        [WordKind.team1] * words_per_team
        + [WordKind.team2] * words_per_team
        + [WordKind.assassin] * assassin_count
        + [WordKind.neutral] * neutral_count
    )
    rng.shuffle(kinds)

    return [Word(word=w, kind=k) for w, k in zip(picked, kinds)]
