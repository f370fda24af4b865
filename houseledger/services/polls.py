"""
Poll voting sub-ledger.

Votes are rows, one per (user, option) pair. Tallies and winners are
derived from the rows on every read, the same way balances are derived
from contributions.
"""

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from houseledger.core.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    WriteResult,
)
from houseledger.core.logging_config import get_logger
from houseledger.models.base import utcnow
from houseledger.models.poll import Poll, PollOption, PollVote
from houseledger.repositories.poll_repo import PollRepository

logger = get_logger(__name__)


class PollResults(BaseModel):
    poll_id: str | None
    question: str
    multiple_choice: bool
    is_expired: bool
    total_votes: int
    tallies: Dict[str, int]
    winners: List[PollOption]


def _aware(value: datetime) -> datetime:
    # Naive datetimes from the store are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_expired(poll: Poll, now: Optional[datetime] = None) -> bool:
    now = _aware(now or utcnow())
    return now >= _aware(poll.expires_at)


def tally_votes(options: Iterable[PollOption], votes: Iterable[PollVote]) -> Dict[str, int]:
    """Vote count per option id. Every option appears, unvoted ones at 0."""
    tallies = {option.id: 0 for option in options}
    for vote in votes:
        if vote.option_id in tallies:
            tallies[vote.option_id] += 1
    return tallies


def poll_winners(
    poll: Poll,
    options: Iterable[PollOption],
    votes: Iterable[PollVote],
    now: Optional[datetime] = None
) -> List[PollOption]:
    """
    Options sharing the highest vote count, once the poll has expired.

    Ties return every tied option. No votes, or a poll still open,
    returns an empty list.
    """
    if not is_expired(poll, now):
        return []

    options = list(options)
    tallies = tally_votes(options, votes)
    top = max(tallies.values(), default=0)
    if top == 0:
        return []
    return [option for option in options if tallies[option.id] == top]


def poll_results(
    poll: Poll,
    options: Iterable[PollOption],
    votes: Iterable[PollVote],
    now: Optional[datetime] = None
) -> PollResults:
    options = list(options)
    votes = list(votes)
    tallies = tally_votes(options, votes)
    return PollResults(
        poll_id=poll.id,
        question=poll.question,
        multiple_choice=poll.multiple_choice,
        is_expired=is_expired(poll, now),
        total_votes=sum(tallies.values()),
        tallies=tallies,
        winners=poll_winners(poll, options, votes, now),
    )


def _selected_options(
    poll: Poll,
    option_id: Optional[str],
    option_ids: Optional[List[str]]
) -> List[str]:
    if option_id is None and not option_ids:
        raise ValidationError("Missing both option_id and option_ids")
    if option_id is not None and option_ids:
        raise ValidationError("Use either option_id or option_ids, not both")
    if option_ids and not poll.multiple_choice:
        raise ValidationError("Single choice polls take one option_id")
    if option_id is not None:
        return [option_id]
    if len(set(option_ids)) != len(option_ids):
        raise ValidationError("Duplicate options in option_ids")
    return list(option_ids)


class PollService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.polls = PollRepository(db)

    async def cast_vote(
        self,
        poll_id: str,
        user_id: str,
        option_id: Optional[str] = None,
        option_ids: Optional[List[str]] = None
    ) -> WriteResult[List[PollVote]]:
        """Write one vote row per selected option."""
        log = logger.bind(poll_id=poll_id, user_id=user_id)

        try:
            poll = await self.polls.get_poll(poll_id)
            if poll is None:
                error = NotFoundError(f"Poll {poll_id} not found")
                log.warning("vote_rejected", reason=error.message)
                return WriteResult.fail(error)

            if is_expired(poll):
                raise ValidationError("Poll has expired")

            selected = _selected_options(poll, option_id, option_ids)
            known = {option.id for option in await self.polls.list_options(poll.id)}
            unknown = [oid for oid in selected if oid not in known]
            if unknown:
                raise ValidationError(f"Options not on this poll: {', '.join(unknown)}")

            existing = await self.polls.list_votes(poll.id)
            already = {v.option_id for v in existing if v.user_id == user_id}
            if not poll.multiple_choice and already:
                raise ValidationError("User has already voted on this poll")
            repeated = [oid for oid in selected if oid in already]
            if repeated:
                raise ValidationError(f"Already voted for: {', '.join(repeated)}")

            votes = await self.polls.insert_votes([
                PollVote(poll_id=poll.id, user_id=user_id, option_id=oid)
                for oid in selected
            ])
        except ValidationError as exc:
            log.warning("vote_rejected", reason=exc.message)
            return WriteResult.fail(exc)
        except PyMongoError as exc:
            log.error("vote_insert_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        log.info("vote_cast", option_ids=[v.option_id for v in votes])
        return WriteResult.ok(votes)

    async def remove_vote(
        self,
        poll_id: str,
        user_id: str,
        option_id: Optional[str] = None,
        option_ids: Optional[List[str]] = None
    ) -> WriteResult[int]:
        """Delete the user's votes on one option or a batch of options."""
        log = logger.bind(poll_id=poll_id, user_id=user_id)

        try:
            poll = await self.polls.get_poll(poll_id)
            if poll is None:
                error = NotFoundError(f"Poll {poll_id} not found")
                log.warning("vote_removal_rejected", reason=error.message)
                return WriteResult.fail(error)

            selected = _selected_options(poll, option_id, option_ids)
            removed = await self.polls.delete_votes(poll.id, user_id, selected)
        except ValidationError as exc:
            log.warning("vote_removal_rejected", reason=exc.message)
            return WriteResult.fail(exc)
        except PyMongoError as exc:
            log.error("vote_removal_failed", error=str(exc))
            return WriteResult.fail(PersistenceError(str(exc)))

        log.info("vote_removed", removed=removed)
        return WriteResult.ok(removed)
