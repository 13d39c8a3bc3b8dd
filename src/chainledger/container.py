from dependency_injector import containers, providers

from chainledger.config import Settings
from chainledger.db.session import build_engine, build_session_factory
from chainledger.parser.symbols import SymbolOverrides, SymbolResolver


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["chainledger.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    symbol_overrides = providers.Singleton(
        SymbolOverrides.load,
        path=settings.provided.symbol_overrides_path,
    )

    symbol_resolver = providers.Singleton(
        SymbolResolver,
        overrides=symbol_overrides,
    )
