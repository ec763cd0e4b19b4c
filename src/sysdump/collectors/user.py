"""User collector."""

from __future__ import annotations

from typing import Any

from ..categories import Category
from ..providers.records import RawUser
from ..utils import lossy_text
from .base import BaseCollector, keyed


def normalize_user(user: RawUser) -> tuple[str, dict[str, Any]]:
    groups = {lossy_text(name) or "": gid for name, gid in user.groups}
    return lossy_text(user.name) or "", {"groups": dict(sorted(groups.items()))}


class UserCollector(BaseCollector):
    @property
    def name(self) -> str:
        return Category.USER.value

    def collect(self) -> dict[str, Any]:
        return keyed(self.provider.users(), normalize_user)
