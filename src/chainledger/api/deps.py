from typing import AsyncGenerator

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chainledger.config import Settings
from chainledger.container import Container
from chainledger.parser.symbols import SymbolResolver


@inject
async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(Provide[Container.session_factory]),
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@inject
def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
def get_symbol_resolver(
    resolver: SymbolResolver = Depends(Provide[Container.symbol_resolver]),
) -> SymbolResolver:
    return resolver
