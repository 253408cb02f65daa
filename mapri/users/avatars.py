from __future__ import annotations

import random

AVATAR_OPTIONS: list[str] = [
    f"https://api.dicebear.com/7.x/bottts/svg?seed={i}" for i in range(1, 11)
]


def random_avatar_url() -> str:
    return random.choice(AVATAR_OPTIONS)
