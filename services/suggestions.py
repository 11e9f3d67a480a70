"""
Per-field bookkeeping for phrasing suggestions.

Each "site" is one Suggest button (e.g. `projects:<entry id>:description`).
Starting a request issues a ticket; a result is only kept if its ticket is
still the newest for that site, so a slow stale response never overwrites a
newer one.
"""

import asyncio
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from agents.phrasing_agent import SectionType, SuggestionResult, suggest_phrasing


@dataclass
class SiteState:
    ticket: int = 0
    pending: bool = False
    result: Optional[SuggestionResult] = None


class SuggestionBoard:
    def __init__(self):
        self._sites: Dict[str, SiteState] = {}
        self._lock = threading.Lock()

    def start(self, site: str) -> int:
        with self._lock:
            state = self._sites.setdefault(site, SiteState())
            state.ticket += 1
            state.pending = True
            state.result = None
            return state.ticket

    def resolve(self, site: str, ticket: int, result: SuggestionResult) -> bool:
        """Stores `result` unless a newer request for `site` has started. Returns whether it was kept."""
        with self._lock:
            state = self._sites.get(site)
            if state is None or state.ticket != ticket:
                return False
            state.pending = False
            state.result = result
            return True

    def get(self, site: str) -> SiteState:
        with self._lock:
            state = self._sites.get(site, SiteState())
            return SiteState(state.ticket, state.pending, state.result)

    def clear(self, site: str) -> None:
        with self._lock:
            self._sites.pop(site, None)


def site_key(field_path: str, entry_id: Optional[str] = None) -> str:
    return f"{field_path}:{entry_id}" if entry_id else field_path


async def _fetch(board, site, ticket, section, information, llm_settings, suggest):
    result = await asyncio.to_thread(suggest, section, information, llm_settings)
    if board.resolve(site, ticket, result):
        return result
    return None


async def request_suggestion(
    board: SuggestionBoard,
    site: str,
    section_type,
    information: str,
    llm_settings: Optional[dict] = None,
    suggest=suggest_phrasing,
) -> Optional[SuggestionResult]:
    """
    Runs one suggestion call off the event loop and records it on `board`.
    Returns the result if it was still current when it arrived, else None.
    """
    # Reject bad section types before a ticket is issued or anything is sent
    section = SectionType(section_type)
    ticket = board.start(site)
    return await _fetch(board, site, ticket, section, information, llm_settings, suggest)


def start_suggestion(
    board: SuggestionBoard,
    site: str,
    section_type,
    information: str,
    llm_settings: Optional[dict] = None,
    suggest=suggest_phrasing,
) -> threading.Thread:
    """
    Issues a ticket, runs the call on a daemon thread and returns at once.
    The site is already pending on return; the page polls `board` for the
    answer. Bad section types raise here, before anything starts.
    """
    section = SectionType(section_type)
    ticket = board.start(site)
    worker = threading.Thread(
        target=asyncio.run,
        args=(_fetch(board, site, ticket, section, information, llm_settings, suggest),),
        daemon=True,
    )
    worker.start()
    return worker
