import copy
import json
from pathlib import Path
from typing import Any, Dict


class TestDataLoader:
    __test__ = False

    _data: Dict[str, Any] = None

    @classmethod
    def load(cls) -> Dict[str, Any]:
        if cls._data is None:
            with open(Path(__file__).parent / "test_data.json") as f:
                cls._data = json.load(f)
        return cls._data

    @classmethod
    def get(cls, key: str) -> Any:
        return cls.load().get(key)

    @classmethod
    def get_copy(cls, key: str) -> Any:
        return copy.deepcopy(cls.get(key))

    @classmethod
    def client_payload(cls, key: str, email: str = None, **overrides: Any) -> Dict[str, Any]:
        """Fresh copy of a client payload, optionally with another email"""
        payload = cls.get_copy(key)
        if email is not None:
            payload["contact_info"]["email"] = email
        payload.update(overrides)
        return payload
