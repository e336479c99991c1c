"""Account list cache: key layout and TTL policy.

One Redis entry per customer holds that customer's full account list:
  - Cache key: f"accounts:{customer_id}"
  - Read: cache-aside (check cache → DB on miss → populate cache)
  - Write: DB first, then mutate the cached list in place (append /
    replace balance / remove) if an entry exists; never create a partial
    entry, never evict.
"""

import re
from datetime import timedelta

CACHE_KEY_PREFIX = "accounts:"

_TTL_RE = re.compile(r"^(\d+)([sm])$")


def cache_key(customer_id: str) -> str:
    return f"{CACHE_KEY_PREFIX}{customer_id}"


def parse_ttl(ttl: str | None) -> timedelta:
    """Parse "45s" / "15m" into a timedelta.

    Anything else (missing, other unit, non-integer) resolves to zero,
    which means entries are not cached at all.
    """
    if ttl is None:
        return timedelta(0)
    match = _TTL_RE.match(ttl.strip())
    if match is None:
        return timedelta(0)
    amount, unit = int(match.group(1)), match.group(2)
    if unit == "m":
        return timedelta(minutes=amount)
    return timedelta(seconds=amount)
