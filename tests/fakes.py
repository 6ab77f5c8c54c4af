"""Test doubles and sample data shared across the test suite."""
import json

RESUME_LINES = [
    "Jane Doe",
    "Senior Software Engineer",
    "jane.doe@example.com | +1 555 123 4567",
    "42 Main Street, Springfield, IL 62701",
    "Experience: ten years building data pipelines and web services in Python.",
]

VALID_REPLY = json.dumps({
    "name": "Jane Doe",
    "email": "jane.doe@example.com",
    "phone": "+1 555 123 4567",
    "address": "42 Main Street, Springfield, IL 62701",
})


class FakeCompletionClient:
    """
    Stand-in for ``CompletionClient``.

    Each call pops the next scripted reply; an Exception instance is raised
    instead of returned. When the script runs out, ``default`` is used.
    """

    def __init__(self, replies=None, default=VALID_REPLY):
        self.replies = list(replies or [])
        self.default = default
        self.calls = []

    async def complete(self, system: str, user: str) -> str:
        self.calls.append((system, user))
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None
