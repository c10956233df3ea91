from typing import Dict, Set

# Fields that differ on every run
VOLATILE_CLIENT_KEYS = {"id", "created_at", "updated_at"}


def exclude_keys(data: Dict, keys: Set[str]) -> Dict:
    return {k: v for k, v in data.items() if k not in keys}
