"""Conversation state machine.

Drives the quote dialog for each user:

    <price command> <domain>  -> federated search
    language code?            -> AwaitingLanguageCode
    copywriting included?     -> AwaitingCopyDecision
    how many words?           -> AwaitingWordCount
    Final price = ...€        -> session deleted

Every inbound message gets at most one reply, produced before `handle`
returns. Invalid answers reprompt without changing the session. Any
unexpected failure abandons the sender's session instead of propagating.
"""

from __future__ import annotations

import re

from core.domain.errors import UserInputError
from core.domain.language import normalize_language_code
from core.domain.models import (
    AwaitingCopyDecision,
    AwaitingLanguageCode,
    AwaitingWordCount,
    ChatMessage,
    Match,
)
from core.domain.tables import MAX_WORD_COUNT
from core.logger import get_logger
from core.services.domain_search import FederatedDomainSearch
from core.services.pricing import build_quote, format_price
from core.services.session_store import SessionStore

log = get_logger("conversation")

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


def parse_language_code(text: str, valid_codes: list[str]) -> str:
    code = normalize_language_code(text)
    if code not in valid_codes:
        raise UserInputError(f"unknown language code {text!r}")
    return code


def parse_yes_no(text: str) -> bool:
    answer = text.strip().lower()
    if answer == "yes":
        return True
    if answer == "no":
        return False
    raise UserInputError(f"expected yes/no, got {text!r}")


def parse_word_count(text: str) -> int:
    """Leading integer of `text` (`"250 words"` -> 250); must be in 1..MAX_WORD_COUNT."""

    found = _LEADING_INT_RE.match(text.strip())
    if not found:
        raise UserInputError(f"not a number: {text!r}")
    words = int(found.group(0))
    if words <= 0:
        raise UserInputError(f"word count must be positive, got {words}")
    if words > MAX_WORD_COUNT:
        raise UserInputError(f"word count above {MAX_WORD_COUNT}: {words}")
    return words


class ConversationStateMachine:
    """Consumes chat messages and answers them."""

    def __init__(
        self,
        *,
        search: FederatedDomainSearch,
        sessions: SessionStore,
        price_command: str = "/price",
        cancel_command: str | None = "/cancel",
    ) -> None:
        self._search = search
        self._sessions = sessions
        self._price_command = price_command
        self._cancel_command = cancel_command

    async def handle(self, message: ChatMessage) -> str | None:
        """Process one inbound message; return the reply text, if any."""

        user_id = message.sender_id
        try:
            return await self._dispatch(user_id, message.text or "")
        except Exception:
            log.exception("Abandoning session for user %s after an unexpected error", user_id)
            self._sessions.delete(user_id)
            return None

    async def _dispatch(self, user_id: str, text: str) -> str | None:
        stripped = text.strip()

        if self._cancel_command and stripped.lower() == self._cancel_command.lower():
            if self._sessions.delete(user_id):
                log.info("Session cancelled by user %s", user_id)
                return "Quote cancelled."
            return None

        if stripped.lower().startswith(self._price_command.lower()):
            return await self._start_quote(user_id, stripped)

        session = self._sessions.get(user_id)
        if session is None:
            return None

        if isinstance(session, AwaitingLanguageCode):
            return self._on_language_code(user_id, session, stripped)
        if isinstance(session, AwaitingCopyDecision):
            return self._on_copy_decision(user_id, session, stripped)
        if isinstance(session, AwaitingWordCount):
            return self._on_word_count(user_id, session, stripped)

        log.warning("Unknown session state %r for user %s; discarding", getattr(session, "state", None), user_id)
        self._sessions.delete(user_id)
        return None

    async def _start_quote(self, user_id: str, text: str) -> str:
        parts = text.split()
        if len(parts) < 2:
            return f"Usage: {self._price_command} <domainName>"

        if self._sessions.delete(user_id):
            log.info("User %s started a new quote; previous session discarded", user_id)

        domain_name = parts[1].strip()
        matches = await self._search.search(domain_name)
        if not matches:
            return f'Domain "{domain_name}" was not found in any board.'

        self._sessions.put(
            user_id,
            AwaitingLanguageCode(domain_name=domain_name, matches=tuple(matches)),
        )
        log.info("Session created for user %s: domain=%r matches=%d", user_id, domain_name, len(matches))

        if len(matches) == 1:
            return (
                f"Found domain: {domain_name}\n"
                f"Publisher Cost: {matches[0].publisher_cost} €\n"
                "Please enter the language code of the article (e.g., IT, EN, DE, etc.)."
            )
        return (
            f"Found domain: {domain_name} in multiple boards.\n"
            "Please enter the language code of the article from the following options: "
            f"{', '.join(m.language_code for m in matches)}"
        )

    def _on_language_code(self, user_id: str, session: AwaitingLanguageCode, text: str) -> str:
        valid_codes = session.language_codes()
        try:
            code = parse_language_code(text, valid_codes)
        except UserInputError:
            return f"Invalid language code. Please enter one of the following: {', '.join(valid_codes)}"

        selected = _first_match(session.matches, code)
        self._sessions.put(
            user_id,
            AwaitingCopyDecision(
                domain_name=session.domain_name,
                matches=session.matches,
                language_code=code,
                publisher_cost=selected.publisher_cost,
            ),
        )
        return (
            f"Selected Language Code: {code}\n"
            f"Publisher Cost: {selected.publisher_cost} €\n"
            "Is copywriting included? (yes/no)"
        )

    def _on_copy_decision(self, user_id: str, session: AwaitingCopyDecision, text: str) -> str:
        try:
            copy_included = parse_yes_no(text)
        except UserInputError:
            return 'Please type "yes" or "no".'

        if copy_included:
            self._sessions.put(
                user_id,
                AwaitingWordCount(
                    domain_name=session.domain_name,
                    matches=session.matches,
                    language_code=session.language_code,
                    publisher_cost=session.publisher_cost,
                ),
            )
            return "How many words is the article? (Please enter a number)"

        return self._finish(user_id, session, 0)

    def _on_word_count(self, user_id: str, session: AwaitingWordCount, text: str) -> str:
        try:
            words = parse_word_count(text)
        except UserInputError:
            return "Please enter a valid number for word count."
        return self._finish(user_id, session, words)

    def _finish(self, user_id: str, session: AwaitingCopyDecision | AwaitingWordCount, words: int) -> str:
        quote = build_quote(
            domain_name=session.domain_name,
            language_code=session.language_code,
            publisher_cost=session.publisher_cost,
            word_count=words,
        )
        self._sessions.delete(user_id)
        log.info(
            "Quote for user %s: domain=%r lang=%s cost=%s words=%d final=%s",
            user_id,
            quote.domain_name,
            quote.language_code,
            quote.publisher_cost,
            quote.word_count,
            quote.final_price,
        )
        return f"Final price = {format_price(quote.final_price)}€"


def _first_match(matches: tuple[Match, ...], language_code: str) -> Match:
    for match in matches:
        if match.language_code == language_code:
            return match
    raise UserInputError(f"no match for {language_code}")


def select_match(matches: list[Match], language_code: str) -> Match:
    """Pick the match for `language_code` (case-insensitive)."""

    return _first_match(tuple(matches), normalize_language_code(language_code))

