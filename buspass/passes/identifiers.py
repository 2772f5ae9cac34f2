import random

PASS_ID_MIN = 10000000
PASS_ID_MAX = 99999999

_rng = random.SystemRandom()

def generate_pass_id(prefix: str = "TSRTC") -> str:
    """Return a new pass identifier such as ``TSRTC-48213377``.

    Each call is independent; uniqueness is enforced by the store, not here.
    """
    return f"{prefix}-{_rng.randint(PASS_ID_MIN, PASS_ID_MAX)}"
