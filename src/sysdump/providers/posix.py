"""Provider for POSIX systems: adds the user/group database and session ids."""

from __future__ import annotations

import grp
import os
import pwd

from .psutil_provider import PsutilProvider
from .records import RawUser


class PosixProvider(PsutilProvider):
    def users(self) -> list[RawUser]:
        group_names = {g.gr_gid: g.gr_name for g in grp.getgrall()}

        records: list[RawUser] = []
        for entry in pwd.getpwall():
            try:
                gids = os.getgrouplist(entry.pw_name, entry.pw_gid)
            except OSError:
                gids = [entry.pw_gid]
            groups = tuple(
                (group_names[gid], gid) for gid in dict.fromkeys(gids) if gid in group_names
            )
            records.append(RawUser(name=entry.pw_name, groups=groups))
        return records

    def session_id(self, pid: int) -> int | None:
        try:
            return os.getsid(pid)
        except OSError:
            return None
