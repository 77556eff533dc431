from __future__ import annotations

import re

DATABASE_URL = "DATABASE_URL"
PHX_HOST = "PHX_HOST"

_HEADER_NAMES = {"NAME"}


def parse_secrets_payload(raw: str | None) -> dict[str, str]:
    """
    Parse a bulk secrets payload of whitespace-separated `KEY=VALUE` items.

    If the same key is provided multiple times, the last value wins.
    """
    out: dict[str, str] = {}
    for idx, item in enumerate((raw or "").split(), start=1):
        # Values are never echoed back; report the position instead.
        if "=" not in item:
            raise ValueError(f"Invalid secret #{idx} (expected KEY=VALUE)")
        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid secret #{idx} (empty KEY)")
        out[key] = value
    return out


def secret_names(listing: str) -> set[str]:
    """Names from the table printed by `flyctl secrets list` (first column)."""
    names: set[str] = set()
    for line in listing.splitlines():
        parts = line.split()
        if not parts or parts[0].upper() in _HEADER_NAMES:
            continue
        names.add(parts[0])
    return names


_PG_FORBIDDEN = re.compile(r"[^A-Za-z0-9_]")


def postgres_user_for_app(app: str) -> str:
    """Postgres role name for an app: anything outside `[A-Za-z0-9_]` becomes `_`."""
    return _PG_FORBIDDEN.sub("_", app)


def drop_user_sql(user: str, database: str) -> str:
    """psql script that removes a stale role before the app is re-attached.

    Owned objects are reassigned to `postgres` first so the drop does not
    fail on dependencies.
    """
    return (
        f"\\c {database};\n"
        f"REASSIGN OWNED BY {user} TO postgres;\n"
        f"DROP OWNED BY {user};\n"
        f"DROP USER {user};\n"
        "\\q\n"
    )
