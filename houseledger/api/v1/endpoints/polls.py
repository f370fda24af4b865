from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from houseledger.api.deps import get_current_member, unwrap
from houseledger.db.mongo import get_db
from houseledger.models.house import Member
from houseledger.repositories.poll_repo import PollRepository
from houseledger.schemas.poll import VoteRemovedResponse, VoteRequest, VoteResponse
from houseledger.services.polls import PollResults, PollService, poll_results

router = APIRouter()


async def _house_poll(poll_id: str, member: Member, repo: PollRepository):
    poll = await repo.get_poll(poll_id)
    if poll is None or poll.house_id != member.house_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Poll not found"
        )
    return poll


@router.get("", response_model=List[PollResults])
async def list_poll_results(
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    """Results for every poll in the caller's house, newest first."""
    repo = PollRepository(db)
    results = []
    for poll in await repo.list_polls(member.house_id):
        options = await repo.list_options(poll.id)
        votes = await repo.list_votes(poll.id)
        results.append(poll_results(poll, options, votes))
    return results


@router.get("/{poll_id}", response_model=PollResults)
async def get_poll_results(
    poll_id: str,
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    """Tallies, plus winners once the poll has expired."""
    repo = PollRepository(db)
    poll = await _house_poll(poll_id, member, repo)
    options = await repo.list_options(poll.id)
    votes = await repo.list_votes(poll.id)
    return poll_results(poll, options, votes)


@router.post("/{poll_id}/votes", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    poll_id: str,
    payload: VoteRequest,
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    await _house_poll(poll_id, member, PollRepository(db))
    votes = unwrap(await PollService(db).cast_vote(
        poll_id,
        member.user_id,
        option_id=payload.option_id,
        option_ids=payload.option_ids
    ))
    return VoteResponse(poll_id=poll_id, option_ids=[v.option_id for v in votes])


@router.delete("/{poll_id}/votes", response_model=VoteRemovedResponse)
async def remove_vote(
    poll_id: str,
    payload: VoteRequest,
    member: Member = Depends(get_current_member),
    db = Depends(get_db)
):
    await _house_poll(poll_id, member, PollRepository(db))
    removed = unwrap(await PollService(db).remove_vote(
        poll_id,
        member.user_id,
        option_id=payload.option_id,
        option_ids=payload.option_ids
    ))
    return VoteRemovedResponse(poll_id=poll_id, removed=removed)
