from fastapi import APIRouter
from houseledger.api.v1.endpoints import houses, expenses, balances, polls

api_router = APIRouter()

api_router.include_router(houses.router, prefix="/houses", tags=["houses"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
api_router.include_router(balances.router, prefix="/balances", tags=["balances"])
api_router.include_router(polls.router, prefix="/polls", tags=["polls"])
