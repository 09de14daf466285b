"""Test doubles for the Cache protocol."""


class FakeCache:
    """In-memory Cache; set `error` to make every get() raise it."""

    def __init__(self, values: dict[str, str] | None = None):
        self.values = dict(values or {})
        self.error: Exception | None = None
        self.calls: list[str] = []

    async def get(self, key: str) -> str | None:
        self.calls.append(key)
        if self.error is not None:
            raise self.error
        return self.values.get(key)
