"""Bounded store of analysis sessions, keyed by token.

A client opens a session over a project (receiving the file list), feeds the
files one at a time for progress reporting, then fetches the finalized graph
and cycles. Each session owns its own graph. When more than ``max_sessions``
are open, the oldest is evicted.
"""

from __future__ import annotations

import logging
import os
from collections import OrderedDict
from pathlib import Path

from react_cycles.analyzer.models import AnalysisResult, FileProgress
from react_cycles.analyzer.service import AnalysisSession
from react_cycles.config import AnalyzerConfig
from react_cycles.errors import SessionNotFoundError
from react_cycles.utils import discover_files

log = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 10


class SessionStore:
    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, AnalysisSession] = OrderedDict()

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> SessionStore:
        return cls(max_sessions=config.max_sessions)

    def open(
        self,
        entry: str | os.PathLike | None,
        ignore: list[str] | tuple[str, ...] = (),
    ) -> AnalysisSession:
        """Discover files under *entry* and start a session over them.

        Raises:
            InputPathError: *entry* is missing or does not exist.
        """
        files = discover_files(entry, ignore)
        session = AnalysisSession(files, entry=str(entry))
        self.add(session)
        log.info("Session %s opened with %d files", session.token, len(files))
        return session

    def add(self, session: AnalysisSession) -> None:
        self._sessions[session.token] = session
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            log.info("Session %s evicted (limit %d)", evicted, self.max_sessions)

    def get(self, token: str) -> AnalysisSession:
        try:
            return self._sessions[token]
        except KeyError:
            raise SessionNotFoundError(token) from None

    def analyze_file(self, token: str, fpath: str | os.PathLike) -> FileProgress:
        return self.get(token).analyze_file(Path(fpath))

    def finish(self, token: str) -> AnalysisResult:
        """Finalize a session and discard it."""
        result = self.get(token).finalize()
        del self._sessions[token]
        return result

    def discard(self, token: str) -> None:
        self._sessions.pop(token, None)

    def __contains__(self, token: object) -> bool:
        return token in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
